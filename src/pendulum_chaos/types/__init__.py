"""Core data types for pendulum-chaos."""

from pendulum_chaos.types.simulation import (
    IntegrationParameters,
    PhysicalParameters,
    RunConfig,
    SweepRanges,
    drive_period,
)
from pendulum_chaos.types.trajectory import (
    PoincareSample,
    PoincareSection,
    State,
    Trajectory,
)
from pendulum_chaos.types.validation import CheckResult

__all__ = [
    # simulation
    "PhysicalParameters",
    "IntegrationParameters",
    "SweepRanges",
    "RunConfig",
    "drive_period",
    # trajectory
    "State",
    "Trajectory",
    "PoincareSample",
    "PoincareSection",
    # validation
    "CheckResult",
]
