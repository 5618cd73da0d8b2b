"""Matplotlib figures for Poincare sections and phase portraits."""

from __future__ import annotations

import matplotlib.pyplot as plt
import numpy as np

from pendulum_chaos.analysis.poincare import wrap_angles
from pendulum_chaos.types.trajectory import PoincareSection, Trajectory


def setup_paper_style() -> None:
    """Configure matplotlib for publication-quality figures."""
    plt.rcParams.update({
        "font.family": "serif",
        "font.size": 11,
        "axes.titlesize": 13,
        "axes.labelsize": 12,
        "figure.figsize": (7, 6),
        "figure.dpi": 150,
        "savefig.dpi": 300,
        "savefig.bbox": "tight",
        "axes.grid": True,
        "grid.alpha": 0.3,
        "axes.spines.top": False,
        "axes.spines.right": False,
    })


def plot_poincare_section(
    section: PoincareSection | np.ndarray,
    ax: plt.Axes | None = None,
    title: str = "Poincare Section",
) -> plt.Figure:
    """Scatter wrapped theta against omega, one point per drive period.

    Accepts a PoincareSection or an (n, 2) array as read back from CSV.
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(7, 6))
    else:
        fig = ax.figure

    if isinstance(section, PoincareSection):
        theta, omega = section.theta, section.omega
    else:
        points = np.asarray(section, dtype=np.float64).reshape(-1, 2)
        theta, omega = points[:, 0], points[:, 1]

    ax.scatter(theta, omega, s=1, c="black", alpha=0.7)
    ax.set_xlim(-np.pi, np.pi)
    ax.set_xlabel(r"$\theta$ (rad)")
    ax.set_ylabel(r"$\omega$ (rad/s)")
    ax.set_title(f"{title} ({len(theta)} points)")
    fig.tight_layout()
    return fig


def plot_phase_portrait(
    trajectory: Trajectory,
    ax: plt.Axes | None = None,
    wrap: bool = True,
) -> plt.Figure:
    """Plot the dense trajectory in the (theta, omega) plane, colored by time."""
    if ax is None:
        fig, ax = plt.subplots(figsize=(7, 6))
    else:
        fig = ax.figure

    theta = wrap_angles(trajectory.theta) if wrap else trajectory.theta
    colors = np.linspace(0, 1, len(theta))
    ax.scatter(theta, trajectory.omega, c=colors, cmap="viridis", s=0.5, alpha=0.5)
    ax.plot(theta[0], trajectory.omega[0], "go", markersize=8, label="Start", zorder=5)

    ax.set_xlabel(r"$\theta$ (rad)")
    ax.set_ylabel(r"$\omega$ (rad/s)")
    ax.set_title("Driven Pendulum Phase Portrait")
    ax.legend()
    fig.tight_layout()
    return fig
