# MIT License (see LICENSE)
"""
Single-trajectory simulation driver.

A trajectory starts at rest at a given position and is advanced with RK4
until one of the terminal conditions is met:

    MAX_STEPS_REACHED  no decision within config.max_steps steps.
    ENERGY_TRAP        inside a magnet's basin radius with total energy
                       below that magnet's escape threshold.
    OUT_OF_BOUNDS      left twice the planned bounding box, or the state
                       became non-finite.
    PHYSICAL_CAPTURE   reserved; no decision path produces it.

Each loop iteration:
    1. One RK4 step.
    2. RIGOROUS only: rescale (position - suspension) to the initial rod length.
    3. Every check_interval steps: divergence check, nearest-magnet scan,
       energy capture check.

The checks are periodic rather than per-step because they cost
O(magnet count) and would dominate at small time steps.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Sequence, TYPE_CHECKING

from .constants import ROPE_LENGTH_FLOOR
from .core.integrators import RungeKuttaSolver
from .core.invariants import total_energy
from .core.thresholds import Bounds
from .types import Approximation, Vector3D, ZERO

if TYPE_CHECKING:
    from .system import PhysicalSystem

logger = logging.getLogger(__name__)


class EndReason(Enum):
    """Terminal classification of a trajectory."""
    MAX_STEPS_REACHED = 0
    PHYSICAL_CAPTURE = 1
    ENERGY_TRAP = 2
    OUT_OF_BOUNDS = 3


@dataclass(frozen=True)
class SimulationConfig:
    """
    Per-trajectory integration and termination parameters.

    Attributes:
        time_step: RK4 step size h (> 0).
        max_steps: Step budget before giving up (> 0).
        capture_radius: Contact radius for PHYSICAL_CAPTURE (reserved, > 0).
        basin_radius: Distance to the nearest magnet below which the
                      energy criterion is evaluated (>= capture_radius).
        check_interval: Number of steps between termination checks (>= 1).
    """
    time_step: float = 0.01
    max_steps: int = 5000
    capture_radius: float = 0.15
    basin_radius: float = 2.0
    check_interval: int = 5

    def __post_init__(self) -> None:
        if self.time_step <= 0:
            raise ValueError(f"time_step must be positive, got {self.time_step}")
        if self.max_steps <= 0:
            raise ValueError(f"max_steps must be positive, got {self.max_steps}")
        if self.capture_radius <= 0:
            raise ValueError(f"capture_radius must be positive, got {self.capture_radius}")
        if self.basin_radius < self.capture_radius:
            raise ValueError(
                f"basin_radius ({self.basin_radius}) must be >= capture_radius ({self.capture_radius})"
            )
        if self.check_interval < 1:
            raise ValueError(f"check_interval must be >= 1, got {self.check_interval}")


@dataclass(frozen=True)
class SimulationResult:
    """
    Outcome of one trajectory.

    Attributes:
        captured_magnet_index: Index into system.magnets, or None.
        final_position: Bob position when the run ended.
        steps_taken: Step index at which the run was decided
                     (max_steps when the budget ran out).
        end_reason: Terminal classification.
    """
    captured_magnet_index: int | None
    final_position: Vector3D
    steps_taken: int
    end_reason: EndReason

    @property
    def captured(self) -> bool:
        return self.captured_magnet_index is not None


class PendulumRun:
    """
    Mutable state of one trajectory.

    The system, thresholds and bounds are shared read-only; only the
    solver state belongs to this run.

    Usage:
        run = PendulumRun(system, start, config, thresholds, bounds)
        result = run.run()

    Or drive it manually:
        run.step()
        result = run.check(step_index)
    """

    def __init__(
        self,
        system: "PhysicalSystem",
        start_position: Vector3D,
        config: SimulationConfig,
        escape_thresholds: Sequence[float],
        bounds: Bounds,
    ) -> None:
        if len(escape_thresholds) != len(system.magnets):
            raise ValueError(
                f"Expected {len(system.magnets)} escape thresholds, got {len(escape_thresholds)}"
            )
        self.system = system
        self.config = config
        self.escape_thresholds = escape_thresholds
        self.bounds = bounds
        self.solver = RungeKuttaSolver(0.0, (start_position, ZERO))

        self._rigorous = system.pendulum.approximation is Approximation.RIGOROUS
        self.rod_length = (
            (start_position - system.pendulum.suspension_point).length()
            if self._rigorous else 0.0
        )
        self._basin_r_sq = config.basin_radius * config.basin_radius

    @property
    def position(self) -> Vector3D:
        return self.solver.state[0]

    @property
    def velocity(self) -> Vector3D:
        return self.solver.state[1]

    def step(self) -> None:
        """Advance one RK4 step, then re-impose the rod length if RIGOROUS."""
        self.solver.step(self.system, self.config.time_step)
        if self._rigorous:
            self._constrain()

    def _constrain(self) -> None:
        position, velocity = self.solver.state
        suspension = self.system.pendulum.suspension_point
        rel = position - suspension
        length = rel.length()
        if length <= ROPE_LENGTH_FLOOR or self.rod_length <= ROPE_LENGTH_FLOOR:
            return
        self.solver.state = (suspension + rel.scale(self.rod_length / length), velocity)

    def _result(self, step: int, reason: EndReason, index: int | None = None) -> SimulationResult:
        return SimulationResult(
            captured_magnet_index=index,
            final_position=self.position,
            steps_taken=step,
            end_reason=reason,
        )

    def check(self, step: int) -> SimulationResult | None:
        """
        Run the termination checks for the current state.

        Returns:
            A SimulationResult if the trajectory is decided, else None.
        """
        position, velocity = self.solver.state

        if not (position.is_finite() and velocity.is_finite()):
            logger.debug("Non-finite state at step %d; classified out of bounds", step)
            return self._result(step, EndReason.OUT_OF_BOUNDS)

        min_x, max_x, min_y, max_y = self.bounds
        if (position.x < 2.0 * min_x or position.x > 2.0 * max_x
                or position.y < 2.0 * min_y or position.y > 2.0 * max_y):
            return self._result(step, EndReason.OUT_OF_BOUNDS)

        nearest = None
        min_dist_sq = float("inf")
        for i, magnet in enumerate(self.system.magnets):
            dist_sq = (position - magnet.position).length_squared()
            if dist_sq < min_dist_sq:
                min_dist_sq = dist_sq
                nearest = i

        # No proximity rule for PHYSICAL_CAPTURE: the energy criterion alone decides.
        if nearest is not None and min_dist_sq < self._basin_r_sq:
            energy = total_energy(self.system, position, velocity)
            if energy < self.escape_thresholds[nearest]:
                return self._result(step, EndReason.ENERGY_TRAP, nearest)

        return None

    def run(self) -> SimulationResult:
        """Integrate until a terminal condition or the step budget is reached."""
        interval = self.config.check_interval
        for step in range(self.config.max_steps):
            try:
                self.step()
            except ArithmeticError:
                logger.debug("Arithmetic fault at step %d; classified out of bounds", step)
                return self._result(step, EndReason.OUT_OF_BOUNDS)

            if step % interval == 0:
                result = self.check(step)
                if result is not None:
                    return result

        return self._result(self.config.max_steps, EndReason.MAX_STEPS_REACHED)


def run_simulation(
    system: "PhysicalSystem",
    start_position: Vector3D,
    config: SimulationConfig,
    escape_thresholds: Sequence[float],
    bounds: Bounds,
) -> SimulationResult:
    """
    Classify one starting position.

    The bob is released at rest from start_position. Safe to call
    concurrently: every argument is read-only.

    Args:
        system: Physical model.
        start_position: Initial bob position.
        config: Integration and termination parameters.
        escape_thresholds: One energy per magnet (compute_escape_thresholds()).
        bounds: (min_x, max_x, min_y, max_y) from suggest_simulation_bounds().

    Returns:
        The SimulationResult for this trajectory.
    """
    return PendulumRun(system, start_position, config, escape_thresholds, bounds).run()
