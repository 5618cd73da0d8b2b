"""Configuration loading and validation."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from pendulum_chaos.types.simulation import RunConfig

# Default config directory relative to package root
_PACKAGE_ROOT = Path(__file__).resolve().parent.parent.parent.parent
_CONFIGS_DIR = _PACKAGE_ROOT / "configs"


def load_config(path: str | Path | None = None) -> RunConfig:
    """Load a run configuration from a YAML file.

    Falls back to configs/default.yaml if no path is given, and to the
    model defaults if that file does not exist. Invalid values raise
    pydantic.ValidationError before anything is integrated.

    Raises:
        FileNotFoundError: If an explicit path does not exist.
    """
    if path is None:
        path = _CONFIGS_DIR / "default.yaml"
        if not path.exists():
            return RunConfig()
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        raw: dict[str, Any] = yaml.safe_load(f) or {}

    return RunConfig(**raw)


def save_config(config: RunConfig, path: str | Path) -> Path:
    """Write a run configuration as YAML, e.g. next to its output."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.safe_dump(config.model_dump(), f, sort_keys=False)
    return path
