# MIT License (see LICENSE)
"""
Input/Output utilities for the magnetic pendulum.

This subpackage provides:
    - JSON loading: magnet layout, pendulum, simulation and render sections.
    - JSON saving: systems round-trip with magnet order preserved.

Typical usage:
    from magnetic_pendulum.io import load_system, simulation_config_from_json

    system = load_system("config.json")
"""
from .json_io import (
    load_system,
    load_system_config_raw,
    save_system,
    system_from_json,
    system_to_json,
    magnet_from_json,
    magnet_to_json,
    pendulum_from_json,
    simulation_config_from_json,
    render_config_from_json,
)

__all__ = [
    # Loading
    "load_system",
    "load_system_config_raw",
    "system_from_json",
    "magnet_from_json",
    "pendulum_from_json",
    "simulation_config_from_json",
    "render_config_from_json",
    # Saving
    "save_system",
    "system_to_json",
    "magnet_to_json",
]
