# MIT License (see LICENSE)
"""
The physical system: magnets, pendulum and global constants.

PhysicalSystem is built once per run and then shared read-only by every
trajectory evaluation. It is the ODE right-hand side handed to the
integrator: its derivatives() method delegates to core/forces.py.

Structure:
    - Build Magnet and PendulumInfo values.
    - Create a PhysicalSystem.
    - Pass it to compute_escape_thresholds(), suggest_simulation_bounds()
      and run_simulation().
"""
from __future__ import annotations
from dataclasses import dataclass

from .constants import DEFAULT_FRICTION, DEFAULT_GRAVITY
from .core.forces import derivatives as _derivatives
from .types import Magnet, PendulumInfo, State


@dataclass(frozen=True)
class PhysicalSystem:
    """
    Immutable description of the magnetic pendulum.

    Attributes:
        magnets: Ordered magnets. Index positions are stable for the whole
                 run; escape thresholds and capture indices refer to them.
        pendulum: Suspension point, bob mass and approximation mode.
        friction_coefficient: Linear damping c in F = -c·v (>= 0).
        gravity_accel: Gravitational acceleration g (> 0).
    """
    magnets: tuple[Magnet, ...]
    pendulum: PendulumInfo
    friction_coefficient: float = DEFAULT_FRICTION
    gravity_accel: float = DEFAULT_GRAVITY

    def __post_init__(self) -> None:
        # Freeze the magnet order even if a list was supplied.
        object.__setattr__(self, "magnets", tuple(self.magnets))
        if self.friction_coefficient < 0:
            raise ValueError(
                f"Friction coefficient must be non-negative, got {self.friction_coefficient}"
            )
        if self.gravity_accel <= 0:
            raise ValueError(f"Gravity must be positive, got {self.gravity_accel}")

    def derivatives(self, time: float, state: State) -> State:
        """Return (velocity, acceleration) for the given (position, velocity)."""
        return _derivatives(self, state)
