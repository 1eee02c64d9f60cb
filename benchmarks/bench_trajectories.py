"""
Microbenchmark: trajectories per second vs number of magnets.
Run:
  python benchmarks/bench_trajectories.py
"""
import math
import time

import numpy as np

from magnetic_pendulum import (
    Magnet, PendulumInfo, PhysicalSystem, SimulationConfig, Vector3D,
    compute_escape_thresholds, run_simulation, suggest_simulation_bounds,
)


def run(n_magnets: int, n_starts: int = 50):
    magnets = [
        Magnet(Vector3D(math.cos(a), math.sin(a), 0.0), strength=0.5)
        for a in np.linspace(0.0, 2 * math.pi, n_magnets, endpoint=False)
    ]
    system = PhysicalSystem(magnets=magnets, pendulum=PendulumInfo(Vector3D(0.0, 0.0, 1.0)),
                            friction_coefficient=0.2)
    config = SimulationConfig(max_steps=2000)

    t0 = time.perf_counter()
    thresholds = compute_escape_thresholds(system)
    bounds = suggest_simulation_bounds(system, 0.5, 0.5)
    t_pre = time.perf_counter() - t0

    rng = np.random.default_rng(12345)  # determinism
    starts = [Vector3D(float(x), float(y), 0.1) for x, y in rng.uniform(-1.5, 1.5, (n_starts, 2))]

    steps = 0
    t0 = time.perf_counter()
    for s in starts:
        steps += run_simulation(system, s, config, thresholds, bounds).steps_taken
    total = time.perf_counter() - t0
    return t_pre, total / n_starts, steps / total


if __name__ == "__main__":
    for n in [2, 3, 5, 8]:
        t_pre, per_traj, steps_per_s = run(n)
        print(f"magnets={n:2d}  precompute={1e3*t_pre:7.2f} ms  "
              f"trajectory={1e3*per_traj:8.2f} ms  steps/s={steps_per_s:9.0f}")
