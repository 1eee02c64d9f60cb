from magnetic_pendulum import (
    Approximation, Magnet, PendulumInfo, PhysicalSystem, SimulationConfig, Vector3D,
    compute_escape_thresholds, run_simulation, suggest_simulation_bounds,
)

system = PhysicalSystem(
    magnets=[
        Magnet(Vector3D(1.0, 0.0, 0.0), strength=0.5),
        Magnet(Vector3D(-0.5, 0.8660254, 0.0), strength=0.5),
        Magnet(Vector3D(-0.5, -0.8660254, 0.0), strength=0.5),
    ],
    pendulum=PendulumInfo(Vector3D(0.0, 0.0, 1.0), mass=1.0, approximation=Approximation.RIGOROUS),
    friction_coefficient=0.2,
)

thresholds = compute_escape_thresholds(system)
bounds = suggest_simulation_bounds(system, padding_ratio=0.5, height_limit_ratio=0.5)
result = run_simulation(system, Vector3D(0.4, 0.3, 1.0 - 0.866), SimulationConfig(), thresholds, bounds)

print("thresholds:", thresholds)
print("result:", result)
