"""Visualization functions."""

from __future__ import annotations

from pendulum_chaos.viz.figures import (
    plot_phase_portrait,
    plot_poincare_section,
    setup_paper_style,
)

__all__ = [
    "setup_paper_style",
    "plot_poincare_section",
    "plot_phase_portrait",
]
