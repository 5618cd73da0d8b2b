"""Poincare section sampling at integer multiples of the drive period.

Targets are t_n = n * T_d for n = transient_periods + 1 .. transient_periods
+ sample_periods. Each target is located in the trajectory by binary search
and reconstructed by linear interpolation between the bracketing steps. The
angle difference across a step is wrapped before interpolating, and the
interpolated angle is wrapped again before it is emitted.
"""
from __future__ import annotations

import logging
import math
from typing import Iterable, Iterator

import numpy as np

from pendulum_chaos.types.simulation import drive_period
from pendulum_chaos.types.trajectory import (
    PoincareSample,
    PoincareSection,
    State,
    Trajectory,
)

logger = logging.getLogger(__name__)

TWO_PI = 2.0 * math.pi


def wrap_angle(theta: float) -> float:
    """Map an angle onto (-pi, pi].

    Uses ((theta + pi) mod 2*pi) - pi with a floor-style modulo. Angles
    already in range are returned unchanged.
    """
    if -math.pi < theta <= math.pi:
        return theta
    wrapped = (theta + math.pi) % TWO_PI - math.pi
    if wrapped <= -math.pi:
        return math.pi
    return wrapped


def wrap_angles(theta: np.ndarray) -> np.ndarray:
    """Vectorized wrap_angle."""
    theta = np.asarray(theta, dtype=np.float64)
    wrapped = np.mod(theta + np.pi, TWO_PI) - np.pi
    wrapped = np.where(wrapped <= -np.pi, np.pi, wrapped)
    in_range = (theta > -np.pi) & (theta <= np.pi)
    return np.where(in_range, theta, wrapped)


def _check_window(transient_periods: int, sample_periods: int) -> None:
    if transient_periods < 0:
        raise ValueError(f"transient_periods must be >= 0, got {transient_periods}")
    if sample_periods < 0:
        raise ValueError(f"sample_periods must be >= 0, got {sample_periods}")


def interpolate_sample(
    t0: float, s0: State, t1: float, s1: State, target: float
) -> PoincareSample:
    """Reconstruct the state at ``target`` from the step (t0, s0) -> (t1, s1).

    t1 is the first trajectory time >= target. An exact hit returns s1 as-is;
    a non-positive span (duplicate timestamps) also returns s1.
    """
    span = t1 - t0
    if t1 == target or span <= 0:
        return PoincareSample(wrap_angle(s1.theta), s1.omega)

    alpha = (target - t0) / span
    dtheta = wrap_angle(s1.theta - s0.theta)
    theta = s0.theta + alpha * dtheta
    omega = s0.omega + alpha * (s1.omega - s0.omega)
    return PoincareSample(wrap_angle(theta), omega)


def sample_poincare(
    times: np.ndarray,
    thetas: np.ndarray,
    omegas: np.ndarray,
    period: float,
    transient_periods: int,
    sample_periods: int,
) -> list[PoincareSample]:
    """Sample raw time/angle/velocity arrays at t_n = n * period.

    ``times`` must be non-decreasing. Sampling stops at the first target past
    the end of the series, so the result may be shorter than sample_periods.

    Args:
        times: Timestamps, shape (n,).
        thetas: Unbounded angles, shape (n,).
        omegas: Angular velocities, shape (n,).
        period: Stroboscopic period (> 0).
        transient_periods: Number of leading periods to discard.
        sample_periods: Number of samples requested.

    Returns:
        Samples in increasing time order.
    """
    _check_window(transient_periods, sample_periods)
    if period <= 0:
        raise ValueError(f"period must be > 0, got {period}")

    times = np.asarray(times, dtype=np.float64)
    n = np.arange(transient_periods + 1, transient_periods + sample_periods + 1)
    targets = n * period
    indices = np.searchsorted(times, targets, side="left")

    samples: list[PoincareSample] = []
    for target, index in zip(targets, indices):
        index = int(index)
        if index >= len(times):
            break
        if index == 0:
            samples.append(PoincareSample(wrap_angle(float(thetas[0])), float(omegas[0])))
            continue
        samples.append(
            interpolate_sample(
                float(times[index - 1]),
                State(float(thetas[index - 1]), float(omegas[index - 1])),
                float(times[index]),
                State(float(thetas[index]), float(omegas[index])),
                float(target),
            )
        )
    return samples


def poincare_section(
    trajectory: Trajectory,
    drive_angular_frequency: float,
    transient_periods: int,
    sample_periods: int,
) -> PoincareSection:
    """Extract the Poincare section of a materialized trajectory.

    Args:
        trajectory: Dense trajectory from ``solve`` or ``DrivenPendulum.run``.
        drive_angular_frequency: omega_d; the stroboscopic period is 2*pi/omega_d.
        transient_periods: Drive periods discarded before the first sample.
        sample_periods: Number of samples requested.

    Returns:
        PoincareSection with up to sample_periods samples. A shorter result
        means the trajectory ended first; it is not an error.
    """
    period = drive_period(drive_angular_frequency)
    samples = sample_poincare(
        trajectory.times,
        trajectory.theta,
        trajectory.omega,
        period,
        transient_periods,
        sample_periods,
    )
    if len(samples) < sample_periods:
        logger.debug(
            f"Trajectory ends at t={trajectory.times[-1]:.6g}: "
            f"{len(samples)}/{sample_periods} samples"
        )
    return PoincareSection(
        samples=tuple(samples),
        drive_period=period,
        first_period=transient_periods + 1,
        requested=sample_periods,
    )


def stream_poincare_section(
    pairs: Iterable[tuple[float, State]],
    drive_angular_frequency: float,
    transient_periods: int,
    sample_periods: int,
) -> Iterator[PoincareSample]:
    """Sample a lazy (t, State) stream without materializing it.

    Only the previous and current step are held. Produces the same samples
    as ``poincare_section`` on the equivalent trajectory, and stops pulling
    from ``pairs`` once the last target has been emitted. Arguments are
    checked at the call, before any pair is consumed.
    """
    _check_window(transient_periods, sample_periods)
    period = drive_period(drive_angular_frequency)
    return _stream_samples(pairs, period, transient_periods, sample_periods)


def _stream_samples(
    pairs: Iterable[tuple[float, State]],
    period: float,
    transient_periods: int,
    sample_periods: int,
) -> Iterator[PoincareSample]:
    if sample_periods == 0:
        return

    n = transient_periods + 1
    last_n = transient_periods + sample_periods
    target = n * period
    previous: tuple[float, State] | None = None

    for t, state in pairs:
        while t >= target:
            if previous is None:
                yield PoincareSample(wrap_angle(state.theta), state.omega)
            else:
                yield interpolate_sample(previous[0], previous[1], t, state, target)
            n += 1
            if n > last_n:
                return
            target = n * period
        previous = (t, state)
