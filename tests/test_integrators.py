import math

import numpy as np
import pytest

from magnetic_pendulum.core.integrators import RungeKuttaSolver, rk4_step


class Decay:
    """dy/dt = -λ·y, exact solution y0·exp(-λt)."""

    def __init__(self, lam: float) -> None:
        self.lam = lam

    def derivatives(self, time, state):
        return tuple(-self.lam * y for y in state)


class Oscillator:
    """x'' = -ω²x as the pair (x, v); state components are numpy arrays."""

    def __init__(self, omega: float) -> None:
        self.omega = omega

    def derivatives(self, time, state):
        x, v = state
        return v, -self.omega ** 2 * x


class Clock:
    """dy/dt = t, exact solution y0 + t²/2; checks stage times."""

    def derivatives(self, time, state):
        return (time,)


def test_exponential_decay_fourth_order():
    """
    Global error of RK4 scales as dt⁴: halving dt shrinks the error ~16x.
    """
    def error(dt):
        solver = RungeKuttaSolver(0.0, (1.0,))
        for _ in range(int(round(1.0 / dt))):
            solver.step(Decay(2.0), dt)
        return abs(solver.state[0] - math.exp(-2.0))

    e1, e2 = error(0.1), error(0.05)
    print("err", e1, e2, "ratio", e1 / e2)
    assert 12.0 < e1 / e2 < 20.0


def test_oscillator_with_array_state():
    """Generic over component types: numpy arrays integrate like scalars."""
    omega = 2.0
    T = 1.0
    state = (np.array([1.0, 0.0]), np.array([0.0, omega]))
    dt = 1e-3
    t = 0.0
    for _ in range(int(round(T / dt))):
        state = rk4_step(Oscillator(omega), t, state, dt)
        t += dt
    x_exp = np.array([math.cos(omega * T), math.sin(omega * T)])
    np.testing.assert_allclose(state[0], x_exp, atol=1e-9)


def test_time_passed_to_stages():
    """y' = t is a polynomial of degree 1 in t: RK4 integrates it exactly."""
    solver = RungeKuttaSolver(0.0, (0.0,))
    for _ in range(10):
        solver.step(Clock(), 0.1)
    assert solver.time == pytest.approx(1.0)
    assert solver.state[0] == pytest.approx(0.5, rel=1e-12)


def test_step_does_not_mutate_input():
    state = (np.array([1.0]), np.array([0.0]))
    before = (state[0].copy(), state[1].copy())
    rk4_step(Oscillator(1.0), 0.0, state, 0.1)
    np.testing.assert_array_equal(state[0], before[0])
    np.testing.assert_array_equal(state[1], before[1])
