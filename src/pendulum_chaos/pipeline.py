"""End-to-end run: configuration -> trajectory -> Poincare section -> files."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path

from pendulum_chaos.analysis.poincare import poincare_section, stream_poincare_section
from pendulum_chaos.knowledge.section_writer import write_section_csv
from pendulum_chaos.knowledge.trajectory_store import TrajectoryStore
from pendulum_chaos.simulation.driven_pendulum import iter_trajectory, solve
from pendulum_chaos.types.simulation import RunConfig
from pendulum_chaos.types.trajectory import PoincareSection
from pendulum_chaos.utils.config import load_config

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """Outcome of one pipeline run."""

    section: PoincareSection
    csv_path: Path
    n_steps: int
    trajectory_id: str | None = None
    elapsed: float = 0.0


class PoincarePipeline:
    """Integrate one trajectory and write its Poincare section.

    Stages:
    1. Resolve integration parameters (explicit, or derived from the
       sampling window)
    2. Integrate with fixed-step RK4
    3. Sample once per drive period after the transient
    4. Write the section CSV (and optionally archive the trajectory)

    With ``config.streaming`` set, stages 2 and 3 are fused and the dense
    trajectory is never held in memory. Archiving needs the dense
    trajectory, so ``save_trajectory`` takes precedence over streaming.
    """

    def __init__(
        self,
        config: RunConfig | None = None,
        output_dir: str | Path | None = None,
    ) -> None:
        self.config = config or load_config()
        self.output_dir = Path(output_dir or self.config.output_dir)

    @property
    def csv_path(self) -> Path:
        return self.output_dir / self.config.output_file

    def run(self) -> RunResult:
        """Execute the run and return the section with output locations.

        Raises:
            ValueError: If the drive frequency does not define a period.
            OSError: If the output directory or files cannot be written.
        """
        cfg = self.config
        physical = cfg.physical
        start_time = time.time()

        logger.info("[1/4] Resolving integration parameters...")
        integration = cfg.resolved_integration()
        logger.info(
            f"  -> dt={integration.time_step:.6g}, t_end={integration.total_time:.6g}, "
            f"{integration.n_steps} steps"
        )

        trajectory_id = None
        if cfg.streaming and not cfg.save_trajectory:
            logger.info("[2-3/4] Integrating and sampling (streaming)...")
            pairs = iter_trajectory(physical, integration, cfg.initial_state)
            samples = stream_poincare_section(
                pairs,
                physical.drive_angular_frequency,
                cfg.transient_periods,
                cfg.sample_periods,
            )
            section = PoincareSection(
                samples=tuple(samples),
                drive_period=physical.drive_period,
                first_period=cfg.transient_periods + 1,
                requested=cfg.sample_periods,
            )
        else:
            logger.info("[2/4] Integrating trajectory...")
            trajectory = solve(physical, integration, cfg.initial_state)
            logger.info(f"  -> {len(trajectory)} points")

            logger.info("[3/4] Sampling Poincare section...")
            section = poincare_section(
                trajectory,
                physical.drive_angular_frequency,
                cfg.transient_periods,
                cfg.sample_periods,
            )

            if cfg.save_trajectory:
                store = TrajectoryStore(self.output_dir / "trajectories")
                trajectory_id = store.save(trajectory)

        if not section.is_complete:
            logger.warning(
                f"Trajectory too short: {len(section)}/{cfg.sample_periods} samples"
            )

        logger.info("[4/4] Writing output...")
        csv_path = write_section_csv(section.samples, self.csv_path)

        elapsed = time.time() - start_time
        logger.info(f"Run complete in {elapsed:.1f}s")
        return RunResult(
            section=section,
            csv_path=csv_path,
            n_steps=integration.n_steps,
            trajectory_id=trajectory_id,
            elapsed=elapsed,
        )


def run_poincare(
    config: RunConfig | None = None,
    output_dir: str | Path | None = None,
) -> RunResult:
    """Run the full pipeline for ``config`` and return its result."""
    return PoincarePipeline(config, output_dir).run()


def write_poincare_csv(path: str | Path, config: RunConfig) -> Path:
    """Integrate, sample and write the section for ``config`` to ``path``."""
    path = Path(path)
    pipeline = PoincarePipeline(
        config.model_copy(update={"output_file": path.name}),
        output_dir=path.parent,
    )
    return pipeline.run().csv_path
