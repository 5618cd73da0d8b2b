"""Conservation and accuracy checks for integrated trajectories."""

from __future__ import annotations

import numpy as np

from pendulum_chaos.types.simulation import IntegrationParameters
from pendulum_chaos.types.trajectory import Trajectory
from pendulum_chaos.types.validation import CheckResult


def check_energy_conservation(
    kinetic: np.ndarray, potential: np.ndarray, tolerance: float = 1e-4
) -> CheckResult:
    """Check that total energy (KE + PE) is conserved.

    Args:
        kinetic: Kinetic energy at each timestep.
        potential: Potential energy at each timestep.
        tolerance: Maximum allowed relative change in total energy.
    """
    total = np.asarray(kinetic) + np.asarray(potential)
    if total[0] == 0:
        max_drift = np.max(np.abs(total))
    else:
        max_drift = np.max(np.abs(total - total[0]) / (np.abs(total[0]) + 1e-30))
    passed = max_drift < tolerance

    return CheckResult(
        name="energy_conservation",
        passed=bool(passed),
        value=float(max_drift),
        threshold=tolerance,
        message=f"Max relative energy drift: {max_drift:.2e}",
    )


def pendulum_energy(trajectory: Trajectory, natural_frequency: float) -> tuple[np.ndarray, np.ndarray]:
    """Kinetic and potential energy per unit m*l^2 along a trajectory.

    PE is measured from the bottom: omega_n^2 * (1 - cos(theta)).
    """
    kinetic = 0.5 * trajectory.omega**2
    potential = natural_frequency**2 * (1.0 - np.cos(trajectory.theta))
    return kinetic, potential


def check_small_angle_invariant(
    trajectory: Trajectory, natural_frequency: float, tolerance: float = 1e-3
) -> CheckResult:
    """Check theta^2 + (omega/omega_n)^2 stays at its initial value.

    Holds for the undamped, undriven pendulum at small amplitude. The
    initial point is the reference; every later point is compared to it.
    """
    invariant = trajectory.theta**2 + (trajectory.omega / natural_frequency) ** 2
    reference = invariant[0]
    later = invariant[1:]
    if len(later) == 0:
        max_drift = 0.0
    elif reference == 0:
        max_drift = float(np.max(np.abs(later)))
    else:
        max_drift = float(np.max(np.abs(later - reference)) / abs(reference))

    return CheckResult(
        name="small_angle_invariant",
        passed=max_drift < tolerance,
        value=max_drift,
        threshold=tolerance,
        message=f"Max relative invariant drift: {max_drift:.2e}",
    )


def check_analytic_agreement(
    trajectory: Trajectory,
    theta0: float,
    natural_frequency: float,
    tolerance: float = 1e-2,
) -> CheckResult:
    """Compare theta(t) with the linear solution theta0*cos(omega_n*t).

    Only meaningful for zero damping, zero drive, zero initial velocity and
    small theta0.
    """
    analytic = theta0 * np.cos(natural_frequency * trajectory.times)
    max_error = float(np.max(np.abs(trajectory.theta - analytic)))

    return CheckResult(
        name="analytic_agreement",
        passed=max_error < tolerance,
        value=max_error,
        threshold=tolerance,
        message=f"Max |theta - theta0*cos(omega_n*t)|: {max_error:.2e}",
    )


def check_trajectory_length(
    trajectory: Trajectory, integration: IntegrationParameters
) -> CheckResult:
    """Check the trajectory holds floor(total_time/dt) + 1 points."""
    expected = integration.n_steps + 1
    actual = len(trajectory)

    return CheckResult(
        name="trajectory_length",
        passed=actual == expected,
        value=float(actual),
        threshold=float(expected),
        message=f"{actual} points, expected {expected}",
    )
