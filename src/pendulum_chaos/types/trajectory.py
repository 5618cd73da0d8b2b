"""Trajectory and Poincare section data types."""

from __future__ import annotations

from typing import Iterator, NamedTuple

import numpy as np
from pydantic import BaseModel, Field, field_validator, model_validator


class State(NamedTuple):
    """Pendulum phase-space point. theta is unbounded during integration."""

    theta: float
    omega: float


class PoincareSample(NamedTuple):
    """One stroboscopic sample with theta wrapped into (-pi, pi]."""

    theta: float
    omega: float


def _read_only(value: np.ndarray) -> np.ndarray:
    arr = np.array(value, dtype=np.float64)
    arr.flags.writeable = False
    return arr


class Trajectory(BaseModel):
    """Dense (time, State) series produced by the integrator.

    The arrays are copied on construction and marked read-only, so a
    trajectory cannot change after it has been produced.
    """

    model_config = {"arbitrary_types_allowed": True, "frozen": True}

    times: np.ndarray
    states: np.ndarray
    parameters: dict[str, float] = Field(default_factory=dict)

    @field_validator("times", mode="before")
    @classmethod
    def validate_times(cls, value):
        arr = _read_only(value)
        if arr.ndim != 1:
            raise ValueError(f"times must be 1-D, got shape {arr.shape}")
        if len(arr) > 1 and not np.all(np.diff(arr) > 0):
            raise ValueError("times must be strictly increasing")
        return arr

    @field_validator("states", mode="before")
    @classmethod
    def validate_states(cls, value):
        arr = _read_only(value)
        if arr.ndim != 2 or arr.shape[1] != 2:
            raise ValueError(f"states must have shape (n, 2), got {arr.shape}")
        return arr

    @model_validator(mode="after")
    def check_lengths(self) -> Trajectory:
        if len(self.times) != len(self.states):
            raise ValueError(
                f"{len(self.times)} timestamps for {len(self.states)} states"
            )
        return self

    def __len__(self) -> int:
        return len(self.times)

    def __getitem__(self, index: int) -> tuple[float, State]:
        theta, omega = self.states[index]
        return float(self.times[index]), State(float(theta), float(omega))

    def pairs(self) -> Iterator[tuple[float, State]]:
        """Iterate (time, State) in time order."""
        for i in range(len(self)):
            yield self[i]

    @property
    def theta(self) -> np.ndarray:
        return self.states[:, 0]

    @property
    def omega(self) -> np.ndarray:
        return self.states[:, 1]

    @property
    def n_steps(self) -> int:
        """Number of integration steps (points minus the initial one)."""
        return max(len(self) - 1, 0)


class PoincareSection(BaseModel):
    """Ordered stroboscopic samples at t_n = n * drive_period."""

    model_config = {"frozen": True}

    samples: tuple[PoincareSample, ...] = ()
    drive_period: float
    first_period: int = Field(default=1, ge=1)
    requested: int = Field(default=0, ge=0)

    def __len__(self) -> int:
        return len(self.samples)

    @property
    def is_complete(self) -> bool:
        """False when the trajectory ended before the requested window."""
        return len(self.samples) == self.requested

    @property
    def theta(self) -> np.ndarray:
        return np.array([s.theta for s in self.samples], dtype=np.float64)

    @property
    def omega(self) -> np.ndarray:
        return np.array([s.omega for s in self.samples], dtype=np.float64)

    @property
    def sample_times(self) -> np.ndarray:
        n = np.arange(self.first_period, self.first_period + len(self.samples))
        return n * self.drive_period
