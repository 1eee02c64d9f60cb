# MIT License (see LICENSE)
"""Image output for rendered basin maps (Pillow)."""
from __future__ import annotations

import numpy as np
from PIL import Image

DEFAULT_IMAGE_PATH = "magnetic_fractal.png"


def write_image(rgb: np.ndarray, path: str = DEFAULT_IMAGE_PATH) -> None:
    """
    Save an RGB image. The format follows the file extension.

    Args:
        rgb: uint8 array of shape (height, width, 3).
        path: Output file path.
    """
    if rgb.ndim != 3 or rgb.shape[2] != 3:
        raise ValueError(f"Expected an (height, width, 3) array, got shape {rgb.shape}")
    # A (height, width, 3) uint8 array maps to an "RGB" image.
    Image.fromarray(np.ascontiguousarray(rgb, dtype=np.uint8)).save(path)
