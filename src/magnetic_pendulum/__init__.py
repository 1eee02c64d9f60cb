# MIT License (see LICENSE)
"""
magnetic_pendulum - basins of attraction of a damped magnetic pendulum.

A pendulum bob released from rest above a set of magnets eventually
settles over one of them. Colouring every release point by the magnet
that captures it yields the magnetic-pendulum fractal. This package
computes that classification.

Main entry points:
    - PhysicalSystem: magnets, pendulum, friction and gravity.
    - compute_escape_thresholds: per-magnet capture energies.
    - suggest_simulation_bounds: sampling / divergence box.
    - run_simulation: classify a single start position.
    - compute_basin_map: classify a whole pixel grid.

Submodules:
    - core: Forces, RK4 integrator, energy functions, thresholds.
    - io: JSON configuration loading and saving.
    - renderer: Color mapping and PPM output.

Example:
    from magnetic_pendulum import (
        Magnet, PendulumInfo, PhysicalSystem, SimulationConfig, Vector3D,
        compute_escape_thresholds, suggest_simulation_bounds, run_simulation,
    )

    system = PhysicalSystem(
        magnets=[Magnet(Vector3D(1, 0, 0), strength=0.5)],
        pendulum=PendulumInfo(Vector3D(0, 0, 1)),
    )
    thresholds = compute_escape_thresholds(system)
    bounds = suggest_simulation_bounds(system, 0.5, 0.5)
    result = run_simulation(system, Vector3D(0.3, 0.4, 0.1), SimulationConfig(),
                            thresholds, bounds)
"""
from .types import Vector3D, Magnet, MagnetDirection, PendulumInfo, Approximation
from .system import PhysicalSystem
from .core.thresholds import compute_escape_thresholds, suggest_simulation_bounds
from .simulation import (
    SimulationConfig,
    SimulationResult,
    EndReason,
    PendulumRun,
    run_simulation,
)
from .basin import BasinMap, RenderConfig, compute_basin_map, start_position

__all__ = [
    # Types
    "Vector3D",
    "Magnet",
    "MagnetDirection",
    "PendulumInfo",
    "Approximation",
    "PhysicalSystem",
    # Precomputation
    "compute_escape_thresholds",
    "suggest_simulation_bounds",
    # Simulation
    "SimulationConfig",
    "SimulationResult",
    "EndReason",
    "PendulumRun",
    "run_simulation",
    # Basin map
    "BasinMap",
    "RenderConfig",
    "compute_basin_map",
    "start_position",
]
