# MIT License (see LICENSE)
"""
Rendering helpers for basin maps.

This subpackage provides:
    - hsl_to_rgb / pixel_color: the per-magnet color scheme.
    - colorize_basin_map: BasinMap -> (height, width, 3) uint8 image.
    - write_image: save the image with Pillow (PNG by default).

The physics core has no rendering dependency.

Typical usage:
    from magnetic_pendulum.renderer import colorize_basin_map, write_image

    write_image(colorize_basin_map(basin, sim_config.max_steps), "fractal.png")
"""
from .palette import colorize_basin_map, hsl_to_rgb, pixel_color
from .image import DEFAULT_IMAGE_PATH, write_image

__all__ = [
    "colorize_basin_map",
    "hsl_to_rgb",
    "pixel_color",
    "write_image",
    "DEFAULT_IMAGE_PATH",
]
