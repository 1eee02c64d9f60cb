# MIT License (see LICENSE)
"""
Energy functions of the magnetic pendulum.

Total mechanical energy E = T + V acts as a Lyapunov function for the
damped system: friction only ever removes energy, so once E falls below
the lowest barrier around a well the bob can never leave it.
"""
from __future__ import annotations
from typing import TYPE_CHECKING

from ..constants import POTENTIAL_DISTANCE_FLOOR, ROPE_LENGTH_FLOOR
from ..types import Approximation, MagnetDirection, Vector3D

if TYPE_CHECKING:
    from ..system import PhysicalSystem


def gravitational_potential(system: "PhysicalSystem", position: Vector3D) -> float:
    """
    Gravity term of the potential.

    RIGOROUS:    V = m·g·z (z = 0 is the reference level).
    SMALL_ANGLE: V = ½·k·(x² + y²) with k = m·g/L, L = |suspension.z|.
    """
    pendulum = system.pendulum
    mode = pendulum.approximation
    if mode is Approximation.RIGOROUS:
        return pendulum.mass * system.gravity_accel * position.z
    if mode is Approximation.SMALL_ANGLE:
        length = max(abs(pendulum.suspension_point.z), ROPE_LENGTH_FLOOR)
        k = pendulum.mass * system.gravity_accel / length
        return 0.5 * k * (position.x * position.x + position.y * position.y)
    raise TypeError(f"Unknown approximation: {mode!r}")


def magnetic_potential(system: "PhysicalSystem", position: Vector3D) -> float:
    """Σ ∓s/|r|: a well for attracting magnets, a barrier for repelling ones."""
    pe = 0.0
    for magnet in system.magnets:
        dist = max((position - magnet.position).length(), POTENTIAL_DISTANCE_FLOOR)
        term = magnet.strength / dist
        direction = magnet.direction
        if direction is MagnetDirection.ATTRACT:
            pe -= term
        elif direction is MagnetDirection.REPEL:
            pe += term
        else:
            raise TypeError(f"Unknown magnet direction: {direction!r}")
    return pe


def potential_energy(system: "PhysicalSystem", position: Vector3D) -> float:
    """Total potential V(r) = gravity term + magnetic term."""
    return gravitational_potential(system, position) + magnetic_potential(system, position)


def kinetic_energy(system: "PhysicalSystem", velocity: Vector3D) -> float:
    """T = ½·m·|v|²."""
    return 0.5 * system.pendulum.mass * velocity.length_squared()


def total_energy(system: "PhysicalSystem", position: Vector3D, velocity: Vector3D) -> float:
    """E = T + V."""
    return kinetic_energy(system, velocity) + potential_energy(system, position)
