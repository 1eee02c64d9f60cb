# MIT License (see LICENSE)
"""
Core physics components.

This subpackage provides:
    - Force generators: restoring, magnetic, damping forces and the rod constraint.
    - Integrators: fixed-step RK4 over any OdeSystem.
    - Invariants: potential, kinetic and total energy.
    - Thresholds: escape energies and the simulation bounding box.

Typical usage:
    from magnetic_pendulum.core import compute_escape_thresholds, rk4_step

    thresholds = compute_escape_thresholds(system)
    state = rk4_step(system, 0.0, (position, velocity), dt=0.01)
"""
from .forces import (
    derivatives,
    restoring_force,
    magnetic_force,
    damping_force,
    rod_constraint,
)
from .integrators import OdeSystem, RungeKuttaSolver, rk4_step
from .invariants import kinetic_energy, potential_energy, total_energy
from .thresholds import compute_escape_thresholds, suggest_simulation_bounds

__all__ = [
    # Forces
    "derivatives",
    "restoring_force",
    "magnetic_force",
    "damping_force",
    "rod_constraint",
    # Integrators
    "OdeSystem",
    "RungeKuttaSolver",
    "rk4_step",
    # Energy
    "kinetic_energy",
    "potential_energy",
    "total_energy",
    # Precomputation
    "compute_escape_thresholds",
    "suggest_simulation_bounds",
]
