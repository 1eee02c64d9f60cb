# MIT License (see LICENSE)
"""
Basin-of-attraction map: one trajectory per pixel.

The per-pixel work is embarrassingly parallel. The system, escape
thresholds and bounds are computed once and handed read-only to every
worker; each row of pixels is an independent task.

Pipeline:
    1. compute_escape_thresholds() and suggest_simulation_bounds().
    2. Map each pixel (px, py) to a plane coordinate (fx, fy).
    3. Lift (fx, fy) to a 3D start position (start_position()); pixels
       outside the pendulum's reach in RIGOROUS mode are skipped.
    4. run_simulation() for every remaining pixel.
"""
from __future__ import annotations
import logging
import math
import time
from dataclasses import dataclass
from functools import partial
from multiprocessing import Pool, cpu_count
from typing import Sequence

import numpy as np
from tqdm import tqdm

from .core.thresholds import Bounds, compute_escape_thresholds, suggest_simulation_bounds
from .simulation import SimulationConfig, run_simulation
from .system import PhysicalSystem
from .types import Approximation, Vector3D

logger = logging.getLogger(__name__)

# Marker for pixels that were never simulated / never captured.
NO_MAGNET = -1
SKIPPED = -1


@dataclass(frozen=True)
class RenderConfig:
    """
    Image-level parameters of a basin map.

    Attributes:
        width, height: Pixel grid size.
        padding_ratio: Bounding-box padding passed to suggest_simulation_bounds().
        height_limit_ratio: Maximum release height (fraction of L) for RIGOROUS mode.
        plane_height: z of start positions in SMALL_ANGLE mode.
        workers: Process count; None uses cpu_count() - 1, 1 runs in-process.
        progress: Show a per-row progress bar on stderr.
    """
    width: int = 300
    height: int = 300
    padding_ratio: float = 0.5
    height_limit_ratio: float = 0.5
    plane_height: float = 0.1
    workers: int | None = None
    progress: bool = True

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image size must be positive, got {self.width}x{self.height}")
        if self.workers is not None and self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")


@dataclass
class BasinMap:
    """
    Per-pixel classification results, row-major (height, width).

    Attributes:
        captured: Magnet index, or NO_MAGNET.
        steps: steps_taken of each trajectory (0 for skipped pixels).
        end_reason: EndReason value, or SKIPPED.
        bounds: Plane region covered by the grid.
        escape_thresholds: Thresholds used for the run.
        magnet_count: Number of magnets in the system.
    """
    captured: np.ndarray
    steps: np.ndarray
    end_reason: np.ndarray
    bounds: Bounds
    escape_thresholds: tuple[float, ...]
    magnet_count: int

    @property
    def shape(self) -> tuple[int, int]:
        return self.captured.shape

    def capture_counts(self) -> np.ndarray:
        """Number of pixels captured by each magnet."""
        hits = self.captured[self.captured != NO_MAGNET]
        return np.bincount(hits, minlength=self.magnet_count)


def start_position(system: PhysicalSystem, x: float, y: float, plane_height: float = 0.1) -> Vector3D | None:
    """
    Lift a plane coordinate to a 3D release position.

    SMALL_ANGLE: (x, y, plane_height).
    RIGOROUS:    the point on the lower hemisphere of radius L = suspension.z
                 about the suspension point, or None if (x, y) lies outside
                 the disc of radius L.
    """
    mode = system.pendulum.approximation
    if mode is Approximation.SMALL_ANGLE:
        return Vector3D(x, y, plane_height)
    if mode is Approximation.RIGOROUS:
        suspension = system.pendulum.suspension_point
        length = suspension.z
        dx, dy = x - suspension.x, y - suspension.y
        r_sq = dx * dx + dy * dy
        if r_sq > length * length:
            return None
        return Vector3D(x, y, suspension.z - math.sqrt(length * length - r_sq))
    raise TypeError(f"Unknown approximation: {mode!r}")


def grid_coordinates(bounds: Bounds, width: int, height: int) -> tuple[np.ndarray, np.ndarray]:
    """
    Plane coordinates of the pixel grid.

    Column px maps to min_x + (max_x - min_x)·px/width and row py to
    max_y - (max_y - min_y)·py/height (row 0 is the top edge).
    """
    min_x, max_x, min_y, max_y = bounds
    xs = min_x + (max_x - min_x) * (np.arange(width, dtype=np.float64) / width)
    ys = max_y - (max_y - min_y) * (np.arange(height, dtype=np.float64) / height)
    return xs, ys


@dataclass(frozen=True)
class _RowContext:
    """Read-only inputs shared by every row task."""
    system: PhysicalSystem
    sim_config: SimulationConfig
    escape_thresholds: tuple[float, ...]
    bounds: Bounds
    xs: tuple[float, ...]
    plane_height: float


def _simulate_row(ctx: _RowContext, y: float) -> tuple[list[int], list[int], list[int]]:
    captured, steps, reasons = [], [], []
    for x in ctx.xs:
        start = start_position(ctx.system, x, y, ctx.plane_height)
        if start is None:
            captured.append(NO_MAGNET)
            steps.append(0)
            reasons.append(SKIPPED)
            continue
        result = run_simulation(ctx.system, start, ctx.sim_config, ctx.escape_thresholds, ctx.bounds)
        index = result.captured_magnet_index
        captured.append(NO_MAGNET if index is None else index)
        steps.append(result.steps_taken)
        reasons.append(result.end_reason.value)
    return captured, steps, reasons


def _run_rows(ctx: _RowContext, ys: Sequence[float], workers: int, progress: bool = True) -> list:
    task = partial(_simulate_row, ctx)
    bar = partial(tqdm, total=len(ys), desc="Simulating", unit="row", disable=not progress)
    if workers == 1:
        return list(bar(map(task, ys)))
    with Pool(processes=workers) as pool:
        # imap yields rows in submission order.
        return list(bar(pool.imap(task, ys)))


def compute_basin_map(
    system: PhysicalSystem,
    sim_config: SimulationConfig | None = None,
    render_config: RenderConfig | None = None,
) -> BasinMap:
    """
    Classify every pixel of the configured grid.

    The result does not depend on the worker count: each trajectory is a
    deterministic function of its start position.

    Args:
        system: Physical model.
        sim_config: Per-trajectory parameters (defaults if None).
        render_config: Grid and fan-out parameters (defaults if None).
    """
    sim_config = sim_config or SimulationConfig()
    render_config = render_config or RenderConfig()
    workers = render_config.workers or max(1, cpu_count() - 1)

    thresholds = compute_escape_thresholds(system)
    bounds = suggest_simulation_bounds(
        system, render_config.padding_ratio, render_config.height_limit_ratio
    )
    xs, ys = grid_coordinates(bounds, render_config.width, render_config.height)

    ctx = _RowContext(
        system=system,
        sim_config=sim_config,
        escape_thresholds=thresholds,
        bounds=bounds,
        xs=tuple(xs.tolist()),
        plane_height=render_config.plane_height,
    )

    logger.info(
        "Computing %dx%d basin map with %d worker(s)",
        render_config.width, render_config.height, workers,
    )
    t0 = time.perf_counter()
    rows = _run_rows(ctx, ys.tolist(), workers, render_config.progress)
    logger.info("Basin map finished in %.2fs", time.perf_counter() - t0)

    return BasinMap(
        captured=np.array([r[0] for r in rows], dtype=np.int32),
        steps=np.array([r[1] for r in rows], dtype=np.int64),
        end_reason=np.array([r[2] for r in rows], dtype=np.int8),
        bounds=bounds,
        escape_thresholds=thresholds,
        magnet_count=len(system.magnets),
    )
