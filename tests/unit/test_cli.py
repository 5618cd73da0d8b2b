"""Tests for CLI entry point."""
from __future__ import annotations

import subprocess
import sys

import yaml


def _run_cli(*args: str, cwd=None) -> subprocess.CompletedProcess:
    """Run the CLI with the given arguments."""
    return subprocess.run(
        [sys.executable, "-m", "pendulum_chaos", *args],
        capture_output=True, text=True, timeout=120, cwd=cwd,
    )


def _write_config(tmp_path, **overrides):
    raw = {
        "physical": {
            "gravitational_accel": 9.8,
            "length": 9.8,
            "damping_coefficient": 0.5,
            "drive_amplitude": 1.2,
            "drive_angular_frequency": 2.0 / 3.0,
        },
        "transient_periods": 2,
        "sample_periods": 6,
        "steps_per_period": 80,
        "output_dir": str(tmp_path / "data"),
        "log_level": "WARNING",
    }
    raw.update(overrides)
    path = tmp_path / "run.yaml"
    path.write_text(yaml.dump(raw))
    return path


class TestCLI:
    """Test CLI commands."""

    def test_version(self):
        result = _run_cli("version")
        assert result.returncode == 0
        assert "pendulum-chaos" in result.stdout
        assert "0.1.0" in result.stdout

    def test_help(self):
        result = _run_cli("help")
        assert result.returncode == 0
        assert "run" in result.stdout
        assert "plot" in result.stdout

    def test_no_args(self):
        result = _run_cli()
        assert result.returncode == 0
        assert "Usage:" in result.stdout

    def test_unknown_command(self):
        result = _run_cli("nonexistent")
        assert result.returncode == 1
        assert "Unknown command" in result.stdout

    def test_run(self, tmp_path):
        config_path = _write_config(tmp_path)
        result = _run_cli("run", str(config_path))
        assert result.returncode == 0, result.stderr
        assert "Wrote 6 Poincare samples" in result.stdout

        csv_path = tmp_path / "data" / "poincare.csv"
        lines = csv_path.read_text().splitlines()
        assert lines[0] == "theta,omega"
        assert len(lines) == 7

    def test_run_invalid_config(self, tmp_path):
        config_path = _write_config(tmp_path, integration={"time_step": -1.0, "total_time": 5.0})
        result = _run_cli("run", str(config_path))
        assert result.returncode == 1
        assert "Invalid configuration" in result.stderr

    def test_run_unknown_log_level(self, tmp_path):
        config_path = _write_config(tmp_path, log_level="LOUD")
        result = _run_cli("run", str(config_path))
        assert result.returncode == 1
        assert "Invalid configuration" in result.stderr
        assert "Traceback" not in result.stderr

    def test_run_missing_config_file(self, tmp_path):
        result = _run_cli("run", str(tmp_path / "typo.yaml"))
        assert result.returncode == 1
        assert "Invalid configuration" in result.stderr
        assert not (tmp_path / "data").exists()

    def test_run_unwritable_output(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        config_path = _write_config(tmp_path, output_dir=str(blocker / "data"))
        result = _run_cli("run", str(config_path))
        assert result.returncode == 1
        assert "Run failed" in result.stderr

    def test_plot(self, tmp_path):
        config_path = _write_config(tmp_path)
        assert _run_cli("run", str(config_path)).returncode == 0

        csv_path = tmp_path / "data" / "poincare.csv"
        out = tmp_path / "section.png"
        result = _run_cli("plot", str(csv_path), str(out))
        assert result.returncode == 0, result.stderr
        assert out.exists()

    def test_plot_missing_argument(self):
        result = _run_cli("plot")
        assert result.returncode == 1
