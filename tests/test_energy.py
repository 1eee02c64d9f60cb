import pytest

from magnetic_pendulum.core.invariants import (
    gravitational_potential,
    kinetic_energy,
    magnetic_potential,
    potential_energy,
    total_energy,
)
from magnetic_pendulum.simulation import PendulumRun, SimulationConfig
from magnetic_pendulum.system import PhysicalSystem
from magnetic_pendulum.types import Approximation, Magnet, MagnetDirection, PendulumInfo, Vector3D


def _system(magnets=(), mode=Approximation.SMALL_ANGLE, friction=0.0, mass=2.0):
    return PhysicalSystem(
        magnets=tuple(magnets),
        pendulum=PendulumInfo(Vector3D(0.0, 0.0, 2.0), mass=mass, approximation=mode),
        friction_coefficient=friction,
        gravity_accel=10.0,
    )


def test_gravity_terms():
    """
    RIGOROUS:    V = m·g·z
    SMALL_ANGLE: V = ½·(m·g/L)·(x² + y²), independent of z.
    """
    p = Vector3D(0.3, 0.4, 0.5)
    rig = _system(mode=Approximation.RIGOROUS)
    small = _system(mode=Approximation.SMALL_ANGLE)
    assert gravitational_potential(rig, p) == pytest.approx(2.0 * 10.0 * 0.5)
    assert gravitational_potential(small, p) == pytest.approx(0.5 * (2.0 * 10.0 / 2.0) * 0.25)
    assert gravitational_potential(small, Vector3D(0.3, 0.4, -7.0)) == gravitational_potential(small, p)


def test_magnetic_wells_and_barriers():
    """Attracting magnets contribute -s/d, repelling ones +s/d."""
    p = Vector3D()
    well = _system([Magnet(Vector3D(2.0, 0.0, 0.0), MagnetDirection.ATTRACT, 4.0)])
    barrier = _system([Magnet(Vector3D(2.0, 0.0, 0.0), MagnetDirection.REPEL, 4.0)])
    assert magnetic_potential(well, p) == pytest.approx(-2.0)
    assert magnetic_potential(barrier, p) == pytest.approx(2.0)


def test_potential_finite_at_magnet():
    """Distance clamped to 1e-6: V = -s / 1e-6 at the magnet itself."""
    system = _system([Magnet(Vector3D(1.0, 1.0, 0.0), strength=1.0)])
    v = magnetic_potential(system, Vector3D(1.0, 1.0, 0.0))
    assert v == pytest.approx(-1e6)


def test_kinetic_and_total():
    system = _system([Magnet(Vector3D(1.0, 0.0, 0.0), strength=1.0)])
    p, v = Vector3D(0.0, 0.0, 0.0), Vector3D(1.0, 2.0, 2.0)
    assert kinetic_energy(system, v) == pytest.approx(0.5 * 2.0 * 9.0)
    assert total_energy(system, p, v) == pytest.approx(9.0 + potential_energy(system, p))


def test_energy_dissipates_with_friction():
    """
    E = T + V is a Lyapunov function: with friction > 0 it never increases
    along a RIGOROUS trajectory (up to integration error).
    """
    system = PhysicalSystem(
        magnets=(Magnet(Vector3D(0.5, 0.0, 0.0), strength=0.05),),
        pendulum=PendulumInfo(Vector3D(0.0, 0.0, 1.0), mass=1.0, approximation=Approximation.RIGOROUS),
        friction_coefficient=0.5,
        gravity_accel=9.8,
    )
    start = Vector3D(0.0, 0.6, 1.0 - 0.8)
    run = PendulumRun(system, start, SimulationConfig(time_step=0.002, max_steps=1000), [0.0], (-1, 1, -1, 1))

    energies = [total_energy(system, run.position, run.velocity)]
    for _ in range(500):
        run.step()
        energies.append(total_energy(system, run.position, run.velocity))

    print("E0", energies[0], "E_end", energies[-1])
    assert energies[-1] < energies[0]
    rises = [b - a for a, b in zip(energies, energies[1:]) if b > a]
    assert max(rises, default=0.0) < 1e-3
