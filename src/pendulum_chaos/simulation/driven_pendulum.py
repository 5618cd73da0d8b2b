"""Damped driven pendulum -- fixed-step RK4 integration.

ODE: theta'' = -(g/l)*sin(theta) - q*theta' + f_d*sin(omega_d*t)

The vector field and the RK4 step are pure functions on scalar floats so the
hot loop stays in plain Python arithmetic; numpy is only used to hold the
finished trajectory.
"""
from __future__ import annotations

import logging
import math
from typing import Iterator

import numpy as np

from pendulum_chaos.analysis.poincare import poincare_section
from pendulum_chaos.simulation.base import SimulationEnvironment
from pendulum_chaos.types.simulation import (
    IntegrationParameters,
    PhysicalParameters,
    RunConfig,
)
from pendulum_chaos.types.trajectory import PoincareSection, State, Trajectory

logger = logging.getLogger(__name__)


def pendulum_rhs(
    theta: float, omega: float, t: float, params: PhysicalParameters
) -> tuple[float, float]:
    """Compute (dtheta/dt, domega/dt) for the driven pendulum.

    Args:
        theta: Angle in radians (unbounded).
        omega: Angular velocity.
        t: Current time (needed for the driving term).
        params: Physical coefficients.

    Returns:
        Tuple (dtheta/dt, domega/dt).
    """
    dtheta_dt = omega
    domega_dt = (
        -(params.gravitational_accel / params.length) * math.sin(theta)
        - params.damping_coefficient * omega
        + params.drive_amplitude * math.sin(params.drive_angular_frequency * t)
    )
    return dtheta_dt, domega_dt


def rk4_step(
    state: State, t: float, params: PhysicalParameters, dt: float
) -> tuple[State, float]:
    """Advance one classical fourth-order Runge-Kutta step.

    Returns:
        (next_state, t + dt). NaN/overflow is propagated, not checked.
    """
    theta, omega = state
    half = 0.5 * dt

    k1_theta, k1_omega = pendulum_rhs(theta, omega, t, params)
    k2_theta, k2_omega = pendulum_rhs(
        theta + half * k1_theta, omega + half * k1_omega, t + half, params
    )
    k3_theta, k3_omega = pendulum_rhs(
        theta + half * k2_theta, omega + half * k2_omega, t + half, params
    )
    k4_theta, k4_omega = pendulum_rhs(
        theta + dt * k3_theta, omega + dt * k3_omega, t + dt, params
    )

    next_theta = theta + dt / 6.0 * (k1_theta + 2 * k2_theta + 2 * k3_theta + k4_theta)
    next_omega = omega + dt / 6.0 * (k1_omega + 2 * k2_omega + 2 * k3_omega + k4_omega)
    return State(next_theta, next_omega), t + dt


def iter_trajectory(
    params: PhysicalParameters,
    integration: IntegrationParameters,
    initial_state: State,
) -> Iterator[tuple[float, State]]:
    """Lazily yield (t, State) pairs, starting at (0, initial_state).

    Yields exactly integration.n_steps + 1 pairs. Time accumulates by
    repeated addition of dt.
    """
    dt = integration.time_step
    state = State(float(initial_state[0]), float(initial_state[1]))
    t = 0.0
    yield t, state
    for _ in range(integration.n_steps):
        state, t = rk4_step(state, t, params, dt)
        yield t, state


def solve(
    params: PhysicalParameters,
    integration: IntegrationParameters,
    initial_state: State,
) -> Trajectory:
    """Integrate the pendulum and return the fully materialized trajectory.

    Args:
        params: Physical coefficients.
        integration: Step size and total time; the step count is
            floor(total_time / time_step).
        initial_state: (theta, omega) at t = 0.

    Returns:
        Trajectory with n_steps + 1 points.
    """
    n_points = integration.n_steps + 1
    times = np.empty(n_points, dtype=np.float64)
    states = np.empty((n_points, 2), dtype=np.float64)

    for i, (t, state) in enumerate(iter_trajectory(params, integration, initial_state)):
        times[i] = t
        states[i, 0] = state.theta
        states[i, 1] = state.omega

    logger.debug(
        f"Integrated {integration.n_steps} steps (dt={integration.time_step:.6g}, "
        f"t_end={times[-1]:.6g})"
    )
    return Trajectory(
        times=times,
        states=states,
        parameters={**params.model_dump(), "time_step": integration.time_step},
    )


class DrivenPendulum(SimulationEnvironment):
    """Damped driven pendulum: theta'' + q*theta' + (g/l)*sin(theta) = f_d*sin(omega_d*t).

    State vector: [theta, omega] where theta = angle, omega = angular velocity.
    The current time is exposed through the ``time`` property.

    The dynamics exhibit:
    - Simple periodic motion for small driving amplitude
    - Period-doubling cascade as f_d increases
    - Chaotic motion for large f_d (e.g. q=0.5, f_d=1.2, omega_d=2/3, g=l)
    """

    def __init__(self, config: RunConfig) -> None:
        super().__init__(config)
        self.params = config.physical

    def reset(self) -> np.ndarray:
        """Initialize angle and angular velocity at t = 0."""
        self._state = self.config.initial_state
        self._step_count = 0
        self._t = 0.0
        return self.observe()

    def step(self) -> np.ndarray:
        """Advance one timestep using RK4 with time-dependent forcing."""
        self._state, self._t = rk4_step(
            self._state, self._t, self.params, self.integration.time_step
        )
        self._step_count += 1
        return self.observe()

    def observe(self) -> np.ndarray:
        """Return current state [theta, omega]."""
        return np.array([self._state.theta, self._state.omega], dtype=np.float64)

    @property
    def energy(self) -> float:
        """Energy per unit m*l^2 of the unforced pendulum: 0.5*omega^2 - (g/l)*cos(theta).

        Conserved only when damping and drive are both zero.
        """
        theta, omega = self._state
        g_over_l = self.params.gravitational_accel / self.params.length
        return 0.5 * omega**2 - g_over_l * math.cos(theta)

    @property
    def drive_period(self) -> float:
        return self.params.drive_period

    def poincare_section(self) -> PoincareSection:
        """Run the configured integration and sample it once per drive period."""
        trajectory = self.run()
        return poincare_section(
            trajectory,
            self.params.drive_angular_frequency,
            self.config.transient_periods,
            self.config.sample_periods,
        )
