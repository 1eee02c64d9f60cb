# MIT License (see LICENSE)
"""
Utility functions for vector conversion and interpolation.

Bridges between plain sequences / numpy arrays and the immutable
Vector3D type used by the physics core.
"""
from __future__ import annotations
from typing import Any

import numpy as np

from .types import Vector3D


def f64(x) -> np.ndarray:
    """Convert any array-like to a float64 numpy array."""
    return np.array(x, dtype=np.float64)


def as_vector(value: Any) -> Vector3D:
    """
    Coerce a 3-element sequence, numpy array or {"x", "y", "z"} mapping
    to a Vector3D.

    Raises:
        ValueError: If the value does not describe exactly three components.
    """
    if isinstance(value, Vector3D):
        return value
    if isinstance(value, dict):
        try:
            return Vector3D(float(value["x"]), float(value["y"]), float(value["z"]))
        except KeyError as exc:
            raise ValueError(f"Vector mapping missing component {exc}") from None
    arr = f64(value).ravel()
    if arr.shape != (3,):
        raise ValueError(f"Expected 3 vector components, got {arr.shape[0]}")
    return Vector3D(float(arr[0]), float(arr[1]), float(arr[2]))


def lerp(a: Vector3D, b: Vector3D, t: float) -> Vector3D:
    """Linear interpolation a·(1 - t) + b·t."""
    return a.scale(1.0 - t) + b.scale(t)
