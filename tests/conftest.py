"""Shared test fixtures for pendulum-chaos."""

import pytest

from pendulum_chaos.types.simulation import PhysicalParameters


@pytest.fixture
def tmp_output_dir(tmp_path):
    """Temporary directory for test outputs."""
    out = tmp_path / "output"
    out.mkdir()
    return out


@pytest.fixture
def free_pendulum():
    """Undamped, undriven pendulum with omega_n = 1 and omega_d = 1."""
    return PhysicalParameters(
        gravitational_accel=9.8,
        length=9.8,
        damping_coefficient=0.0,
        drive_amplitude=0.0,
        drive_angular_frequency=1.0,
    )
