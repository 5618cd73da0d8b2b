"""Abstract base class for simulation environments."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import numpy as np

from pendulum_chaos.types.simulation import RunConfig
from pendulum_chaos.types.trajectory import Trajectory


class SimulationEnvironment(ABC):
    """Base class for fixed-step simulation backends.

    Subclasses implement the physics via reset/step/observe.
    The base class provides trajectory collection and step bookkeeping.
    """

    def __init__(self, config: RunConfig) -> None:
        self.config = config
        self.integration = config.resolved_integration()
        self._step_count = 0
        self._t = 0.0
        self._state: Any = None
        self._trajectory_states: list[np.ndarray] = []
        self._trajectory_timestamps: list[float] = []

    @abstractmethod
    def reset(self) -> np.ndarray:
        """Reset simulation to initial conditions.

        Returns the initial state as a numpy array.
        """

    @abstractmethod
    def step(self) -> np.ndarray:
        """Advance simulation by one timestep.

        Returns the new state as a numpy array.
        """

    @abstractmethod
    def observe(self) -> np.ndarray:
        """Return the current observable state as a numpy array."""

    @property
    def time(self) -> float:
        return self._t

    @property
    def step_count(self) -> int:
        return self._step_count

    def run(self, n_steps: int | None = None) -> Trajectory:
        """Run simulation for n_steps and collect a trajectory."""
        if n_steps is None:
            n_steps = self.integration.n_steps

        state = self.reset()
        self._trajectory_states = [state.copy()]
        self._trajectory_timestamps = [self._t]

        for _ in range(n_steps):
            state = self.step()
            self._trajectory_states.append(state.copy())
            self._trajectory_timestamps.append(self._t)

        return self.get_trajectory()

    def get_trajectory(self) -> Trajectory:
        """Package collected states into a Trajectory object."""
        return Trajectory(
            times=np.array(self._trajectory_timestamps),
            states=np.array(self._trajectory_states).reshape(-1, 2),
            parameters={
                **self.config.physical.model_dump(),
                "time_step": self.integration.time_step,
            },
        )
