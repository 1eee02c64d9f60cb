# MIT License (see LICENSE)
"""
Force generators for the magnetic pendulum.

Each function returns a force vector for the bob at a given state; they
are summed in derivatives(), which forms the right-hand side of the ODE
system consumed by the integrator:

    dx/dt = v
    dv/dt = (F_restore + Σ F_magnet - c·v) / m

Key concepts:
- SMALL_ANGLE mode replaces gravity and the rod by a linear spring toward
  the suspension point.
- RIGOROUS mode applies full gravity and projects the acceleration onto
  the sphere of the rod, adding the centripetal term.
- Magnet forces follow an inverse-square monopole law with the distance
  clamped to FORCE_DISTANCE_FLOOR.
"""
from __future__ import annotations
from typing import TYPE_CHECKING

from ..constants import FORCE_DISTANCE_FLOOR, ROPE_LENGTH_FLOOR, SMALL_ANGLE_HEIGHT_OFFSET
from ..types import Approximation, MagnetDirection, State, Vector3D

if TYPE_CHECKING:
    from ..system import PhysicalSystem


def small_angle_stiffness(system: "PhysicalSystem") -> float:
    """Spring constant k = m·g / (|suspension.z| + 0.1) of the small-angle model."""
    pendulum = system.pendulum
    return pendulum.mass * system.gravity_accel / (
        abs(pendulum.suspension_point.z) + SMALL_ANGLE_HEIGHT_OFFSET
    )


def restoring_force(system: "PhysicalSystem", position: Vector3D) -> Vector3D:
    """
    Gravity-like restoring force for the configured approximation.

    SMALL_ANGLE: F = k·(suspension - position).
    RIGOROUS:    F = (0, 0, -m·g); the rod is handled by rod_constraint().
    """
    pendulum = system.pendulum
    mode = pendulum.approximation
    if mode is Approximation.SMALL_ANGLE:
        return (pendulum.suspension_point - position) * small_angle_stiffness(system)
    if mode is Approximation.RIGOROUS:
        return Vector3D(0.0, 0.0, -pendulum.mass * system.gravity_accel)
    raise TypeError(f"Unknown approximation: {mode!r}")


def magnetic_force(system: "PhysicalSystem", position: Vector3D) -> Vector3D:
    """
    Sum of magnet forces on the bob.

    For each magnet: r = magnet.position - position,
    F = s·r / max(|r|, 1e-4)³, negated for repelling magnets.
    """
    fx = fy = fz = 0.0
    for magnet in system.magnets:
        r = magnet.position - position
        dist = max(r.length(), FORCE_DISTANCE_FLOOR)
        magnitude = magnet.strength / (dist * dist * dist)
        direction = magnet.direction
        if direction is MagnetDirection.REPEL:
            magnitude = -magnitude
        elif direction is not MagnetDirection.ATTRACT:
            raise TypeError(f"Unknown magnet direction: {direction!r}")
        fx += r.x * magnitude
        fy += r.y * magnitude
        fz += r.z * magnitude
    return Vector3D(fx, fy, fz)


def damping_force(system: "PhysicalSystem", velocity: Vector3D) -> Vector3D:
    """Linear drag F = -c·v."""
    return velocity * -system.friction_coefficient


def rod_constraint(
    system: "PhysicalSystem",
    position: Vector3D,
    velocity: Vector3D,
    acceleration: Vector3D,
) -> Vector3D:
    """
    Emulate a rigid rod by constraining the acceleration to the sphere.

    With n = (position - suspension)/L:
        a_t = a - (a·n)·n            (remove the radial component)
        a'  = a_t - (|v|²/L)·n       (centripetal correction)

    This does not conserve the rod length exactly; the simulation driver
    renormalizes the position after every step.
    """
    rope = position - system.pendulum.suspension_point
    length = rope.length()
    if length <= ROPE_LENGTH_FLOOR:
        return acceleration
    n = rope / length
    tangential = acceleration - n * acceleration.dot(n)
    return tangential - n * (velocity.length_squared() / length)


def derivatives(system: "PhysicalSystem", state: State) -> State:
    """
    Compute (dx/dt, dv/dt) for the state (position, velocity).

    Args:
        system: The physical model (read-only).
        state: Pair (position, velocity).

    Returns:
        Pair (velocity, acceleration).
    """
    position, velocity = state

    total = (
        restoring_force(system, position)
        + magnetic_force(system, position)
        + damping_force(system, velocity)
    )
    acceleration = total / system.pendulum.mass

    if system.pendulum.approximation is Approximation.RIGOROUS:
        acceleration = rod_constraint(system, position, velocity, acceleration)

    return velocity, acceleration
