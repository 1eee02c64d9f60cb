# MIT License (see LICENSE)
"""
Core type definitions for the magnetic pendulum simulation.

Defines the fundamental data structures:
- Vector3D: immutable 3D vector with arithmetic operators.
- MagnetDirection / Approximation: closed variant sets for the force model.
- Magnet: a fixed attractor or repeller.
- PendulumInfo: suspension geometry, bob mass and dynamics mode.

The pendulum bob obeys Newtonian mechanics:
  dx/dt = v
  dv/dt = F/m
where F sums the restoring, magnetic and damping forces (see core/forces.py).
"""
from __future__ import annotations
import math
from dataclasses import dataclass, field
from enum import Enum


# =============================================================================
# Vector algebra
# =============================================================================

@dataclass(frozen=True)
class Vector3D:
    """
    Immutable 3D vector with value semantics.

    Supports +, -, unary -, multiplication and division by a scalar
    (or componentwise by another Vector3D), dot and cross products.

    Attributes:
        x, y, z: Cartesian components.
    """
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vector3D) -> Vector3D:
        return Vector3D(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3D) -> Vector3D:
        return Vector3D(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vector3D:
        return Vector3D(-self.x, -self.y, -self.z)

    def __mul__(self, other: float | Vector3D) -> Vector3D:
        if isinstance(other, Vector3D):
            return Vector3D(self.x * other.x, self.y * other.y, self.z * other.z)
        return Vector3D(self.x * other, self.y * other, self.z * other)

    __rmul__ = __mul__

    def __truediv__(self, other: float | Vector3D) -> Vector3D:
        if isinstance(other, Vector3D):
            return Vector3D(self.x / other.x, self.y / other.y, self.z / other.z)
        return Vector3D(self.x / other, self.y / other, self.z / other)

    def scale(self, scalar: float) -> Vector3D:
        """Return the vector multiplied by a scalar."""
        return Vector3D(self.x * scalar, self.y * scalar, self.z * scalar)

    def dot(self, other: Vector3D) -> float:
        """Scalar product a·b."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector3D) -> Vector3D:
        """
        Vector product a × b.

        The result is orthogonal to both operands (right-hand rule).
        """
        return Vector3D(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length_squared(self) -> float:
        """Squared magnitude. Avoids sqrt for distance comparisons."""
        return self.x * self.x + self.y * self.y + self.z * self.z

    def length(self) -> float:
        """Magnitude (Euclidean norm)."""
        return math.sqrt(self.length_squared())

    def is_finite(self) -> bool:
        """True if no component is NaN or infinite."""
        return math.isfinite(self.x) and math.isfinite(self.y) and math.isfinite(self.z)

    def to_list(self) -> list[float]:
        return [self.x, self.y, self.z]


ZERO = Vector3D(0.0, 0.0, 0.0)


# =============================================================================
# Closed variant sets
# =============================================================================

class MagnetDirection(Enum):
    """Whether a magnet pulls the bob in (a well) or pushes it away (a barrier)."""
    ATTRACT = "attract"
    REPEL = "repel"


class Approximation(Enum):
    """
    Dynamics mode of the pendulum.

    SMALL_ANGLE: planar linear spring toward the suspension point.
    RIGOROUS: full gravity with the bob constrained to a sphere about
              the suspension point (rigid rod).
    """
    SMALL_ANGLE = "small_angle"
    RIGOROUS = "rigorous"


# =============================================================================
# Magnets and pendulum
# =============================================================================

@dataclass(frozen=True)
class Magnet:
    """
    A point magnet acting on the pendulum bob.

    Attributes:
        position: Location of the magnet.
        direction: ATTRACT or REPEL.
        strength: Force constant s in F = s·r/|r|³. Must be positive.
        velocity: Stored for configuration round-trips; magnets are static
                  in the dynamics.
    """
    position: Vector3D
    direction: MagnetDirection = MagnetDirection.ATTRACT
    strength: float = 1.0
    velocity: Vector3D = field(default=ZERO)

    def __post_init__(self) -> None:
        if not isinstance(self.direction, MagnetDirection):
            raise TypeError(f"Unknown magnet direction: {self.direction!r}")
        if self.strength <= 0:
            raise ValueError(f"Magnet strength must be positive, got {self.strength}")

    @property
    def attracts(self) -> bool:
        return self.direction is MagnetDirection.ATTRACT


@dataclass(frozen=True)
class PendulumInfo:
    """
    Pendulum geometry and dynamics mode.

    Attributes:
        suspension_point: Pivot of the rod. Its height is used as the
                          nominal pendulum length.
        mass: Bob mass in kg. Must be positive.
        approximation: SMALL_ANGLE or RIGOROUS.
    """
    suspension_point: Vector3D
    mass: float = 1.0
    approximation: Approximation = Approximation.SMALL_ANGLE

    def __post_init__(self) -> None:
        if not isinstance(self.approximation, Approximation):
            raise TypeError(f"Unknown approximation: {self.approximation!r}")
        if self.mass <= 0:
            raise ValueError(f"Pendulum mass must be positive, got {self.mass}")

    @property
    def rigorous(self) -> bool:
        return self.approximation is Approximation.RIGOROUS


# A trajectory state is the ordered pair (position, velocity).
State = tuple[Vector3D, Vector3D]
