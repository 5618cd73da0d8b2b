"""CLI entry point for pendulum-chaos.

Usage:
    pendulum-chaos run [config.yaml]           Integrate and write the Poincare section CSV
    pendulum-chaos plot <section.csv> [out]    Render a section CSV to an image
    pendulum-chaos version                     Show version
"""
from __future__ import annotations

import sys


def main() -> None:
    """Main CLI entry point."""
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(0)

    command = sys.argv[1].lower()

    if command == "run":
        _run(sys.argv[2] if len(sys.argv) > 2 else None)
    elif command == "plot":
        if len(sys.argv) < 3:
            print("plot needs a section CSV path")
            print(__doc__)
            sys.exit(1)
        _plot(sys.argv[2], sys.argv[3] if len(sys.argv) > 3 else None)
    elif command in ("version", "--version", "-v"):
        from pendulum_chaos import __version__
        print(f"pendulum-chaos {__version__}")
    elif command in ("help", "--help", "-h"):
        print(__doc__)
    else:
        print(f"Unknown command: {command}")
        print(__doc__)
        sys.exit(1)


def _run(config_path: str | None) -> None:
    """Run one integration + sampling pass."""
    import logging

    from pendulum_chaos.pipeline import PoincarePipeline
    from pendulum_chaos.utils.config import load_config

    try:
        config = load_config(config_path)
    except (OSError, ValueError) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        sys.exit(1)

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    try:
        result = PoincarePipeline(config).run()
    except (OSError, ValueError) as e:
        print(f"Run failed: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Wrote {len(result.section)} Poincare samples to {result.csv_path}")
    if result.trajectory_id:
        print(f"Trajectory stored as {result.trajectory_id}")


def _plot(csv_path: str, out_path: str | None) -> None:
    """Render a section CSV as a scatter plot."""
    from pathlib import Path

    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    from pendulum_chaos.knowledge.section_writer import read_section_csv
    from pendulum_chaos.viz.figures import plot_poincare_section, setup_paper_style

    out = Path(out_path) if out_path else Path(csv_path).with_suffix(".png")
    try:
        points = read_section_csv(csv_path)
        setup_paper_style()
        fig = plot_poincare_section(points)
        fig.savefig(out)
        plt.close(fig)
    except OSError as e:
        print(f"Plot failed: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Saved {out}")


if __name__ == "__main__":
    main()
