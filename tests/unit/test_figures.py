"""Tests for matplotlib figures."""

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402

from pendulum_chaos.analysis.poincare import poincare_section  # noqa: E402
from pendulum_chaos.simulation.driven_pendulum import solve  # noqa: E402
from pendulum_chaos.types.simulation import (  # noqa: E402
    IntegrationParameters,
    PhysicalParameters,
)
from pendulum_chaos.types.trajectory import State  # noqa: E402
from pendulum_chaos.viz.figures import (  # noqa: E402
    plot_phase_portrait,
    plot_poincare_section,
    setup_paper_style,
)

PARAMS = PhysicalParameters(
    gravitational_accel=9.8, length=9.8, damping_coefficient=0.5,
    drive_amplitude=1.2, drive_angular_frequency=2.0 / 3.0,
)


def _trajectory():
    integ = IntegrationParameters.for_sampling_window(PARAMS, 0, 5, 100)
    return solve(PARAMS, integ, State(1.0, 0.0))


class TestFigures:
    def test_section_figure(self, tmp_output_dir):
        setup_paper_style()
        section = poincare_section(_trajectory(), PARAMS.drive_angular_frequency, 0, 5)
        fig = plot_poincare_section(section)
        assert isinstance(fig, plt.Figure)
        out = tmp_output_dir / "section.png"
        fig.savefig(out)
        plt.close(fig)
        assert out.exists()

    def test_section_from_array(self):
        fig, ax = plt.subplots()
        returned = plot_poincare_section(np.array([[0.1, 0.2], [0.3, 0.4]]), ax=ax)
        assert returned is fig
        assert "2 points" in ax.get_title()
        plt.close(fig)

    def test_phase_portrait(self):
        fig = plot_phase_portrait(_trajectory())
        assert isinstance(fig, plt.Figure)
        plt.close(fig)
