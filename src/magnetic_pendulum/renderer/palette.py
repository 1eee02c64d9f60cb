# MIT License (see LICENSE)
"""
Color mapping for basin maps.

Each magnet gets an evenly spaced hue on the color wheel. Lightness
encodes how quickly the trajectory was decided: fast captures are bright,
slow ones dark. Pixels that were skipped or never captured are black.
"""
from __future__ import annotations

import numpy as np

from ..basin import BasinMap, NO_MAGNET


def hsl_to_rgb(h: float, s: float, l: float) -> tuple[int, int, int]:
    """
    Convert HSL (h in degrees [0, 360), s and l in [0, 1]) to 8-bit RGB.

    Reference: https://en.wikipedia.org/wiki/HSL_and_HSV#HSL_to_RGB
    """
    c = (1.0 - abs(2.0 * l - 1.0)) * s
    x = c * (1.0 - abs((h / 60.0) % 2.0 - 1.0))
    m = l - c / 2.0

    if h < 60.0:
        r, g, b = c, x, 0.0
    elif h < 120.0:
        r, g, b = x, c, 0.0
    elif h < 180.0:
        r, g, b = 0.0, c, x
    elif h < 240.0:
        r, g, b = 0.0, x, c
    elif h < 300.0:
        r, g, b = x, 0.0, c
    else:
        r, g, b = c, 0.0, x

    return int((r + m) * 255.0), int((g + m) * 255.0), int((b + m) * 255.0)


def pixel_color(index: int, steps: int, magnet_count: int, max_steps: int) -> tuple[int, int, int]:
    """
    Color of one captured pixel.

    hue       = index / magnet_count · 360
    lightness = 0.6 · max(1 - sqrt(steps / max_steps), 0.1)
    """
    hue = index / magnet_count * 360.0
    ratio = steps / max_steps
    lightness = 0.6 * max(1.0 - ratio ** 0.5, 0.1)
    return hsl_to_rgb(hue, 1.0, lightness)


def colorize_basin_map(basin: BasinMap, max_steps: int) -> np.ndarray:
    """
    Render a BasinMap to an RGB image.

    Args:
        basin: Classification results.
        max_steps: Step budget used for the run (normalizes lightness).

    Returns:
        uint8 array of shape (height, width, 3).
    """
    height, width = basin.shape
    rgb = np.zeros((height, width, 3), dtype=np.uint8)
    if basin.magnet_count == 0:
        return rgb

    mask = basin.captured != NO_MAGNET
    if not mask.any():
        return rgb

    # Colors only depend on (index, steps): convert each distinct pair once.
    pairs = np.stack(
        [basin.captured[mask].astype(np.int64), basin.steps[mask].astype(np.int64)], axis=1
    )
    unique, inverse = np.unique(pairs, axis=0, return_inverse=True)
    palette = np.array(
        [pixel_color(int(i), int(s), basin.magnet_count, max_steps) for i, s in unique],
        dtype=np.uint8,
    )
    rgb[mask] = palette[inverse.ravel()]
    return rgb
