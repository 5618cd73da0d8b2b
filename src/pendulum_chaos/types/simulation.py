"""Physical, integration and run configuration types.

All models are frozen: a run is configured once and the same values flow
through the integrator and the sampler unchanged.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, Field, field_validator

from pendulum_chaos.types.trajectory import State

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def drive_period(drive_angular_frequency: float) -> float:
    """Period of the external forcing: T_d = 2*pi/omega_d.

    Raises:
        ValueError: If omega_d is not strictly positive.
    """
    if drive_angular_frequency <= 0:
        raise ValueError(
            f"drive_angular_frequency must be > 0 to define a drive period, "
            f"got {drive_angular_frequency}"
        )
    return 2 * math.pi / drive_angular_frequency


class PhysicalParameters(BaseModel):
    """Coefficients of theta'' = -(g/l)*sin(theta) - q*theta' + f_d*sin(omega_d*t)."""

    model_config = {"frozen": True, "allow_inf_nan": False}

    gravitational_accel: float = 9.8
    length: float = Field(default=1.0, gt=0)
    damping_coefficient: float = 0.1
    drive_amplitude: float = 1.0
    drive_angular_frequency: float = 1.0

    @property
    def natural_frequency(self) -> float:
        """Small-angle angular frequency omega_n = sqrt(g/l)."""
        return math.sqrt(self.gravitational_accel / self.length)

    @property
    def drive_period(self) -> float:
        return drive_period(self.drive_angular_frequency)


class IntegrationParameters(BaseModel):
    """Fixed step size and total integration time."""

    model_config = {"frozen": True, "allow_inf_nan": False}

    time_step: float = Field(default=0.01, gt=0)
    total_time: float = Field(default=10.0, ge=0)

    @property
    def n_steps(self) -> int:
        """Number of RK4 steps, fixed before the loop starts."""
        return math.floor(self.total_time / self.time_step)

    @classmethod
    def for_sampling_window(
        cls,
        physical: PhysicalParameters,
        transient_periods: int,
        sample_periods: int,
        steps_per_period: int = 400,
    ) -> IntegrationParameters:
        """Step size and duration that cover transient + sampled drive periods.

        A margin of 1.5 steps past the last target keeps floor(total_time/dt)
        at least one step beyond it, whatever the rounding of the division.
        """
        period = physical.drive_period
        dt = period / steps_per_period
        return cls(
            time_step=dt,
            total_time=period * (transient_periods + sample_periods) + 1.5 * dt,
        )


class SweepRanges(BaseModel):
    """Phase-space traversal grid. Carried in configuration only."""

    model_config = {"frozen": True}

    theta_start: float = -4.0
    theta_end: float = 4.0
    d_theta: float = 0.01
    omega_start: float = -4.0
    omega_end: float = 4.0
    d_omega: float = 0.01


class RunConfig(BaseModel):
    """Everything needed for one trajectory + Poincare section run."""

    model_config = {"frozen": True, "allow_inf_nan": False}

    physical: PhysicalParameters = Field(default_factory=PhysicalParameters)
    integration: IntegrationParameters | None = None
    initial_theta: float = 1.0
    initial_omega: float = 0.0
    transient_periods: int = Field(default=100, ge=0)
    sample_periods: int = Field(default=2000, ge=0)
    steps_per_period: int = Field(default=400, gt=0)
    sweep: SweepRanges = Field(default_factory=SweepRanges)
    output_dir: str = "data"
    output_file: str = "poincare.csv"
    log_level: str = "INFO"
    save_trajectory: bool = False
    streaming: bool = False

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, value):
        level = str(value).upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {LOG_LEVELS}, got {value!r}")
        return level

    @property
    def initial_state(self) -> State:
        return State(self.initial_theta, self.initial_omega)

    def resolved_integration(self) -> IntegrationParameters:
        """Explicit integration parameters, or ones derived from the sampling window."""
        if self.integration is not None:
            return self.integration
        return IntegrationParameters.for_sampling_window(
            self.physical,
            self.transient_periods,
            self.sample_periods,
            self.steps_per_period,
        )
