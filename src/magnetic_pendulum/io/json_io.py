# MIT License (see LICENSE)
"""
JSON serialization and deserialization for magnetic pendulum systems.

This module loads the magnet layout and pendulum description, plus the
optional simulation and render parameters, from a human-readable file.

JSON Schema Overview:
---------------------
{
  "magnets": [
    {
      "position": [x, y, z],           # Required; {"x":..,"y":..,"z":..} also accepted
      "velocity": [vx, vy, vz],        # Default: [0, 0, 0] (not used in dynamics)
      "direction": "Attract",          # "Attract"/"Positive" or "Repel"/"Negative"
      "strength": float                # Required, > 0
    }
  ],
  "pendulum": {
    "suspension_point": [x, y, z],     # Required
    "mass": float,                     # Default: 1.0
    "approximate": "SmallAngle"        # "SmallAngle" or "Rigorous"/"Rigour"
  },
  "friction_coefficient": float,       # Default: 0.01
  "gravity_accel": float,              # Default: 9.8
  "simulation": {                      # Optional, see SimulationConfig
    "time_step": float, "max_steps": int, "capture_radius": float,
    "basin_radius": float, "check_interval": int
  },
  "render": {                          # Optional, see RenderConfig
    "width": int, "height": int, "padding_ratio": float,
    "height_limit_ratio": float, "plane_height": float, "workers": int,
    "progress": bool
  }
}
"""
from __future__ import annotations
import json
import logging
from dataclasses import fields
from typing import Any

from ..basin import RenderConfig
from ..constants import DEFAULT_FRICTION, DEFAULT_GRAVITY
from ..simulation import SimulationConfig
from ..system import PhysicalSystem
from ..types import Approximation, Magnet, MagnetDirection, PendulumInfo, Vector3D
from ..util import as_vector

logger = logging.getLogger(__name__)

_DIRECTIONS = {
    "attract": MagnetDirection.ATTRACT,
    "positive": MagnetDirection.ATTRACT,
    "repel": MagnetDirection.REPEL,
    "negative": MagnetDirection.REPEL,
}

_APPROXIMATIONS = {
    "smallangle": Approximation.SMALL_ANGLE,
    "small_angle": Approximation.SMALL_ANGLE,
    "rigorous": Approximation.RIGOROUS,
    "rigour": Approximation.RIGOROUS,
}


def load_system_config_raw(path: str) -> dict[str, Any]:
    """
    Load raw JSON data from a configuration file without object construction.

    Args:
        path: Absolute or relative path to the JSON file.
    """
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def load_system(
    path: str,
    friction_coefficient: float | None = None,
    gravity_accel: float | None = None,
) -> PhysicalSystem:
    """
    Load and construct a PhysicalSystem from a JSON file.

    Raises:
        FileNotFoundError: If the file cannot be found.
        json.JSONDecodeError: If the file is not valid JSON.
        ValueError: If required fields are missing or invalid.
    """
    system = system_from_json(load_system_config_raw(path), friction_coefficient, gravity_accel)
    logger.info("Loaded %d magnets from %s", len(system.magnets), path)
    return system


def system_from_json(
    data: dict[str, Any],
    friction_coefficient: float | None = None,
    gravity_accel: float | None = None,
) -> PhysicalSystem:
    """
    Build a PhysicalSystem from parsed JSON data.

    Explicit friction_coefficient / gravity_accel arguments take precedence
    over the values stored in the file.
    """
    if "pendulum" not in data:
        raise ValueError("Configuration missing required 'pendulum' field.")

    magnets = [magnet_from_json(m) for m in data.get("magnets", [])]
    pendulum = pendulum_from_json(data["pendulum"])

    if friction_coefficient is None:
        friction_coefficient = float(data.get("friction_coefficient", DEFAULT_FRICTION))
    if gravity_accel is None:
        gravity_accel = float(data.get("gravity_accel", DEFAULT_GRAVITY))

    return PhysicalSystem(
        magnets=tuple(magnets),
        pendulum=pendulum,
        friction_coefficient=friction_coefficient,
        gravity_accel=gravity_accel,
    )


def magnet_from_json(d: dict[str, Any]) -> Magnet:
    """Parse a single magnet definition."""
    if "position" not in d:
        raise ValueError("Magnet definition missing required 'position' field.")
    if "strength" not in d:
        raise ValueError("Magnet definition missing required 'strength' field.")

    return Magnet(
        position=as_vector(d["position"]),
        velocity=as_vector(d.get("velocity", [0.0, 0.0, 0.0])),
        direction=_parse_enum(d.get("direction", "Attract"), _DIRECTIONS, "magnet direction"),
        strength=float(d["strength"]),
    )


def pendulum_from_json(d: dict[str, Any]) -> PendulumInfo:
    """Parse the pendulum description ("approximate" or "approximation" key)."""
    if "suspension_point" not in d:
        raise ValueError("Pendulum definition missing required 'suspension_point' field.")

    mode = d.get("approximation", d.get("approximate", "SmallAngle"))
    return PendulumInfo(
        suspension_point=as_vector(d["suspension_point"]),
        mass=float(d.get("mass", 1.0)),
        approximation=_parse_enum(mode, _APPROXIMATIONS, "approximation"),
    )


def simulation_config_from_json(data: dict[str, Any]) -> SimulationConfig:
    """Read the optional "simulation" section; missing keys keep their defaults."""
    section = data.get("simulation", {})
    kwargs = _known_fields(SimulationConfig, section)
    for name in ("max_steps", "check_interval"):
        if name in kwargs:
            kwargs[name] = int(kwargs[name])
    return SimulationConfig(**kwargs)


def render_config_from_json(data: dict[str, Any]) -> RenderConfig:
    """Read the optional "render" section; missing keys keep their defaults."""
    return RenderConfig(**_known_fields(RenderConfig, data.get("render", {})))


def magnet_to_json(magnet: Magnet) -> dict[str, Any]:
    """Serialize a Magnet (round-trip compatible)."""
    result = {
        "position": magnet.position.to_list(),
        "direction": "Attract" if magnet.attracts else "Repel",
        "strength": magnet.strength,
    }
    if magnet.velocity != Vector3D():
        result["velocity"] = magnet.velocity.to_list()
    return result


def system_to_json(system: PhysicalSystem) -> dict[str, Any]:
    """
    Serialize a PhysicalSystem to a dictionary.

    Magnets keep their order so threshold indices stay valid after reload.
    """
    pendulum = system.pendulum
    result = {
        "magnets": [magnet_to_json(m) for m in system.magnets],
        "pendulum": {
            "suspension_point": pendulum.suspension_point.to_list(),
            "mass": pendulum.mass,
            "approximate": "Rigorous" if pendulum.rigorous else "SmallAngle",
        },
    }
    if system.friction_coefficient != DEFAULT_FRICTION:
        result["friction_coefficient"] = system.friction_coefficient
    if system.gravity_accel != DEFAULT_GRAVITY:
        result["gravity_accel"] = system.gravity_accel
    return result


def save_system(system: PhysicalSystem, path: str, indent: int = 2) -> None:
    """Save a PhysicalSystem to a JSON file on disk."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(system_to_json(system), f, indent=indent)


def _parse_enum(value: Any, table: dict[str, Any], what: str):
    """Case-insensitive lookup of an enum name in one of the alias tables."""
    key = str(value).strip().lower()
    if key not in table:
        raise ValueError(f"Unknown {what}: '{value}'")
    return table[key]


def _known_fields(cls, section: dict[str, Any]) -> dict[str, Any]:
    """Keep only keys that are dataclass fields of cls."""
    names = {f.name for f in fields(cls)}
    return {k: v for k, v in section.items() if k in names}
