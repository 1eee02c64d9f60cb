"""
Render the magnetic pendulum fractal described by a JSON configuration.

Run:
  python examples/fractal.py [config.json] [output.png]
"""
import logging
import os
import sys

from magnetic_pendulum.basin import compute_basin_map
from magnetic_pendulum.io import load_system, load_system_config_raw
from magnetic_pendulum.io import render_config_from_json, simulation_config_from_json
from magnetic_pendulum.renderer import DEFAULT_IMAGE_PATH, colorize_basin_map, write_image

here = os.path.dirname(os.path.abspath(__file__))
config_path = sys.argv[1] if len(sys.argv) > 1 else os.path.join(here, "config.json")
output_path = sys.argv[2] if len(sys.argv) > 2 else DEFAULT_IMAGE_PATH

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")

raw = load_system_config_raw(config_path)
system = load_system(config_path)
sim_config = simulation_config_from_json(raw)
render_config = render_config_from_json(raw)

basin = compute_basin_map(system, sim_config, render_config)
print("bounds:", basin.bounds)
print("escape thresholds:", basin.escape_thresholds)
print("pixels per magnet:", basin.capture_counts().tolist())

write_image(colorize_basin_map(basin, sim_config.max_steps), output_path)
print("wrote", output_path)
