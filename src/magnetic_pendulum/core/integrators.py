# MIT License (see LICENSE)
"""
Fixed-step numerical integrator for first-order ODE systems.

The integrator is generic over the right-hand side: any object exposing

    derivatives(time, state) -> state_derivative

can be advanced, where a state is a sequence of components supporting
addition and multiplication by a scalar (Vector3D values, floats or
numpy arrays). The magnetic pendulum passes PhysicalSystem, whose state
is the pair (position, velocity).

Reference:
    Runge-Kutta methods: https://en.wikipedia.org/wiki/Runge-Kutta_methods
"""
from __future__ import annotations
from typing import Any, Protocol, Sequence


class OdeSystem(Protocol):
    """Capability interface for anything the integrator can advance."""

    def derivatives(self, time: float, state: Sequence[Any]) -> Sequence[Any]:
        ...


def _offset(state: Sequence[Any], slope: Sequence[Any], h: float) -> tuple:
    """state + h·slope, component by component."""
    return tuple(s + k * h for s, k in zip(state, slope))


def rk4_step(system: OdeSystem, time: float, state: Sequence[Any], dt: float) -> tuple:
    """
    Advance a state by dt using classical 4th-order Runge-Kutta.

    RK4 evaluates derivatives at 4 points within the timestep and combines
    them with weights (1, 2, 2, 1)/6 to achieve O(dt⁵) local error:

        k1 = f(t,        y)
        k2 = f(t + h/2,  y + h/2·k1)
        k3 = f(t + h/2,  y + h/2·k2)
        k4 = f(t + h,    y + h·k3)
        y' = y + h/6·(k1 + 2k2 + 2k3 + k4)

    Args:
        system: Right-hand side provider.
        time: Current time.
        state: Current state components.
        dt: Timestep.

    Returns:
        The new state as a tuple (the input is not modified).
    """
    half = 0.5 * dt
    k1 = system.derivatives(time, state)
    k2 = system.derivatives(time + half, _offset(state, k1, half))
    k3 = system.derivatives(time + half, _offset(state, k2, half))
    k4 = system.derivatives(time + dt, _offset(state, k3, dt))

    sixth = dt / 6.0
    return tuple(
        y + (a + b * 2.0 + c * 2.0 + d) * sixth
        for y, a, b, c, d in zip(state, k1, k2, k3, k4)
    )


class RungeKuttaSolver:
    """
    Stateful wrapper holding (time, state) for repeated rk4_step calls.

    Usage:
        solver = RungeKuttaSolver(0.0, (position, velocity))
        solver.step(system, dt)
        position, velocity = solver.state
    """

    def __init__(self, time: float, state: Sequence[Any]) -> None:
        self.time = time
        self.state = tuple(state)

    def step(self, system: OdeSystem, dt: float) -> None:
        """Advance the held state by one RK4 step and increment time."""
        self.state = rk4_step(system, self.time, self.state, dt)
        self.time += dt
