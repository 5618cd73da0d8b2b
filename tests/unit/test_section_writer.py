"""Tests for Poincare section CSV output."""

import numpy as np
import pytest

from pendulum_chaos.knowledge.section_writer import (
    format_sample,
    read_section_csv,
    write_section_csv,
)
from pendulum_chaos.types.trajectory import PoincareSample


class TestSectionWriter:
    def test_format(self):
        assert format_sample(PoincareSample(0.5, -1.25)) == "0.500000000000,-1.250000000000"

    def test_twelve_fractional_digits(self):
        line = format_sample(PoincareSample(1 / 3, -2 / 3))
        theta, omega = line.split(",")
        assert len(theta.split(".")[1]) == 12
        assert len(omega.split(".")[1]) == 12
        assert theta == "0.333333333333"
        assert omega == "-0.666666666667"

    def test_file_layout(self, tmp_output_dir):
        samples = [PoincareSample(0.1, 0.2), PoincareSample(-3.0, 4.5)]
        path = write_section_csv(samples, tmp_output_dir / "poincare.csv")
        lines = path.read_text().splitlines()
        assert lines == [
            "theta,omega",
            "0.100000000000,0.200000000000",
            "-3.000000000000,4.500000000000",
        ]

    def test_creates_parent_directory(self, tmp_path):
        path = write_section_csv([PoincareSample(0.0, 0.0)], tmp_path / "a" / "b" / "out.csv")
        assert path.exists()

    def test_header_only_when_empty(self, tmp_path):
        path = write_section_csv([], tmp_path / "empty.csv")
        assert path.read_text() == "theta,omega\n"

    def test_accepts_generator(self, tmp_path):
        path = write_section_csv(
            (PoincareSample(float(i), 0.0) for i in range(3)), tmp_path / "gen.csv"
        )
        assert len(path.read_text().splitlines()) == 4

    def test_unwritable_path_raises(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")
        with pytest.raises(OSError):
            write_section_csv([PoincareSample(0.0, 0.0)], blocker / "out.csv")

    def test_read_back(self, tmp_path):
        samples = [PoincareSample(0.1, 0.2), PoincareSample(-3.0, 4.5)]
        path = write_section_csv(samples, tmp_path / "p.csv")
        points = read_section_csv(path)
        assert points.shape == (2, 2)
        np.testing.assert_allclose(points, [[0.1, 0.2], [-3.0, 4.5]])

    def test_read_single_row(self, tmp_path):
        path = write_section_csv([PoincareSample(0.1, 0.2)], tmp_path / "one.csv")
        assert read_section_csv(path).shape == (1, 2)
