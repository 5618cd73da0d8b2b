"""Plain-text CSV output for Poincare sections."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

import numpy as np

from pendulum_chaos.types.trajectory import PoincareSample

logger = logging.getLogger(__name__)

HEADER = "theta,omega"


def format_sample(sample: PoincareSample) -> str:
    """One CSV row with 12 fractional digits per value."""
    return f"{sample.theta:.12f},{sample.omega:.12f}"


def write_section_csv(samples: Iterable[PoincareSample], path: str | Path) -> Path:
    """Write samples to ``path`` in sampling order.

    The parent directory is created if missing. OSError propagates; a file
    that fails part-way is left as written.

    Returns:
        The path written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    n_rows = 0
    with open(path, "w") as f:
        f.write(HEADER + "\n")
        for sample in samples:
            f.write(format_sample(sample) + "\n")
            n_rows += 1

    logger.info(f"Wrote {n_rows} Poincare samples to {path}")
    return path


def read_section_csv(path: str | Path) -> np.ndarray:
    """Load a section CSV as an array of shape (n, 2) with columns [theta, omega]."""
    return np.loadtxt(path, delimiter=",", skiprows=1, ndmin=2).reshape(-1, 2)
