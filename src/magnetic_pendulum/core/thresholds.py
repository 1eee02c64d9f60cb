# MIT License (see LICENSE)
"""
Per-system precomputation: escape-energy thresholds and simulation bounds.

Both are computed once per PhysicalSystem and then shared read-only by
every trajectory.

Escape thresholds
-----------------
For an attracting magnet A, the potential along the straight segment to
each other magnet B has a maximum (a 1-D saddle approximation). The
lowest of those maxima is the cheapest way out of A's well:

    E_escape(A) = min_B max_{t∈(0,1)} V(A·(1-t) + B·t)

A bob near A whose total energy is below E_escape(A) is trapped there.
This is a heuristic: only straight segments are sampled and the vertical
axis of the RIGOROUS mode is ignored, so the bound is not exact.
"""
from __future__ import annotations
import logging
import math
from typing import TYPE_CHECKING

from ..constants import SADDLE_SAMPLES
from ..types import Approximation, MagnetDirection
from ..util import lerp
from .invariants import potential_energy

if TYPE_CHECKING:
    from ..system import PhysicalSystem

logger = logging.getLogger(__name__)

Bounds = tuple[float, float, float, float]


def barrier_height(system: "PhysicalSystem", i: int, j: int, samples: int = SADDLE_SAMPLES) -> float:
    """
    Maximum potential on the open segment from magnet i to magnet j.

    Samples t = k/samples for k = 1..samples-1.
    """
    start = system.magnets[i].position
    end = system.magnets[j].position
    highest = -math.inf
    for k in range(1, samples):
        pe = potential_energy(system, lerp(start, end, k / samples))
        if pe > highest:
            highest = pe
    return highest


def compute_escape_thresholds(system: "PhysicalSystem", samples: int = SADDLE_SAMPLES) -> tuple[float, ...]:
    """
    Escape energy for every magnet, aligned with system.magnets.

    - Repelling magnets get -inf (nothing is ever captured by them).
    - A magnet with no other magnets gets 0.0.
    - Otherwise the minimum barrier_height() over all other magnets.

    Returns:
        Tuple of energies; index k belongs to system.magnets[k].
    """
    thresholds = []
    n = len(system.magnets)
    for i, magnet in enumerate(system.magnets):
        direction = magnet.direction
        if direction is MagnetDirection.REPEL:
            thresholds.append(-math.inf)
            continue
        if direction is not MagnetDirection.ATTRACT:
            raise TypeError(f"Unknown magnet direction: {direction!r}")

        if n == 1:
            thresholds.append(0.0)
            continue

        lowest = math.inf
        for j in range(n):
            if j != i:
                lowest = min(lowest, barrier_height(system, i, j, samples))
        thresholds.append(lowest)

    logger.debug("Escape thresholds: %s", thresholds)
    return tuple(thresholds)


def suggest_simulation_bounds(
    system: "PhysicalSystem",
    padding_ratio: float,
    height_limit_ratio: float,
) -> Bounds:
    """
    Plan the sampling / divergence box (min_x, max_x, min_y, max_y).

    1. Bounding box of magnet x/y positions, extended to contain the origin
       (a unit box around the origin when there are no magnets).
    2. Each axis padded by padding_ratio × span, or 1.0 if the span is 0.
    3. RIGOROUS only: with L = suspension.z and a release height
       h = height_limit_ratio·L, the horizontal reach of a bob released at
       height h is r = sqrt(L² - (L - h)²); the box is clipped to [-r, r].

    Args:
        system: The physical system.
        padding_ratio: Fractional padding per axis.
        height_limit_ratio: Maximum release height as a fraction of L.
    """
    if system.magnets:
        xs = [m.position.x for m in system.magnets]
        ys = [m.position.y for m in system.magnets]
        min_x, max_x = min(min(xs), 0.0), max(max(xs), 0.0)
        min_y, max_y = min(min(ys), 0.0), max(max(ys), 0.0)
    else:
        min_x, max_x, min_y, max_y = -1.0, 1.0, -1.0, 1.0

    width = max_x - min_x
    height = max_y - min_y
    pad_x = 1.0 if width == 0.0 else width * padding_ratio
    pad_y = 1.0 if height == 0.0 else height * padding_ratio

    min_x, max_x = min_x - pad_x, max_x + pad_x
    min_y, max_y = min_y - pad_y, max_y + pad_y

    mode = system.pendulum.approximation
    if mode is Approximation.RIGOROUS:
        length = system.pendulum.suspension_point.z
        dist_vertical = length - height_limit_ratio * length
        if 0.0 < dist_vertical < length:
            r_limit = math.sqrt(length * length - dist_vertical * dist_vertical)
            min_x, max_x = max(min_x, -r_limit), min(max_x, r_limit)
            min_y, max_y = max(min_y, -r_limit), min(max_y, r_limit)
    elif mode is not Approximation.SMALL_ANGLE:
        raise TypeError(f"Unknown approximation: {mode!r}")

    bounds = (min_x, max_x, min_y, max_y)
    logger.debug("Simulation bounds: X[%.3f, %.3f] Y[%.3f, %.3f]", *bounds)
    return bounds
