# MIT License (see LICENSE)
"""
Physical defaults and numerical floors used throughout the simulation.

The floors regularize the force and energy expressions near their
singularities so that every integration step produces a finite state.
"""
from __future__ import annotations

# Gravitational acceleration used by the reference fractal run (m/s²).
DEFAULT_GRAVITY: float = 9.8

# Linear damping coefficient. Smaller values produce more chaotic basins.
DEFAULT_FRICTION: float = 0.01

# Minimum pendulum-to-magnet distance in the force law F = s·r/|r|³.
FORCE_DISTANCE_FLOOR: float = 1e-4

# Minimum pendulum-to-magnet distance in the potential V = ±s/|r|.
POTENTIAL_DISTANCE_FLOOR: float = 1e-6

# Minimum rope length before the rigid-rod projection is skipped.
ROPE_LENGTH_FLOOR: float = 1e-6

# Added to |suspension.z| in the small-angle spring constant k = m·g/(L + offset),
# keeping the swing plane a little below the suspension height.
SMALL_ANGLE_HEIGHT_OFFSET: float = 0.1

# Number of segments used when sampling the potential between two magnets.
SADDLE_SAMPLES: int = 50
