"""Trajectory persistence using Parquet + JSON sidecar."""

from __future__ import annotations

import json
import logging
import uuid
from pathlib import Path

import numpy as np
import pyarrow as pa
import pyarrow.parquet as pq

from pendulum_chaos.types.trajectory import Trajectory

logger = logging.getLogger(__name__)


class TrajectoryStore:
    """Persistent store for dense pendulum trajectories.

    Storage format:
    - {store_dir}/{trajectory_id}.parquet -- step/time/theta/omega columns
    - {store_dir}/{trajectory_id}.json -- parameters sidecar
    - {store_dir}/index.json -- index of all stored trajectories
    """

    def __init__(self, store_dir: str | Path) -> None:
        self.store_dir = Path(store_dir)
        self.store_dir.mkdir(parents=True, exist_ok=True)
        self._index_path = self.store_dir / "index.json"
        self._index: list[dict] = self._load_index()

    def _load_index(self) -> list[dict]:
        if self._index_path.exists():
            with open(self._index_path) as f:
                return json.load(f)
        return []

    def _save_index(self) -> None:
        with open(self._index_path, "w") as f:
            json.dump(self._index, f, indent=2)

    def save(self, trajectory: Trajectory, traj_id: str | None = None) -> str:
        """Save a trajectory and return its ID."""
        traj_id = traj_id or str(uuid.uuid4())[:12]

        table = pa.table({
            "step": pa.array(np.arange(len(trajectory), dtype=np.int64)),
            "time": pa.array(trajectory.times),
            "theta": pa.array(trajectory.theta),
            "omega": pa.array(trajectory.omega),
        })
        pq.write_table(table, self.store_dir / f"{traj_id}.parquet")

        meta = {
            "id": traj_id,
            "parameters": trajectory.parameters,
            "n_points": len(trajectory),
            "t_end": float(trajectory.times[-1]) if len(trajectory) else 0.0,
        }
        with open(self.store_dir / f"{traj_id}.json", "w") as f:
            json.dump(meta, f, indent=2)

        self._index = [e for e in self._index if e["id"] != traj_id]
        self._index.append({
            "id": traj_id,
            "parameters": trajectory.parameters,
            "n_points": len(trajectory),
        })
        self._save_index()

        logger.info(f"Stored trajectory {traj_id} ({len(trajectory)} points)")
        return traj_id

    def load(self, traj_id: str) -> Trajectory:
        """Load a trajectory by ID."""
        with open(self.store_dir / f"{traj_id}.json") as f:
            meta = json.load(f)

        table = pq.read_table(self.store_dir / f"{traj_id}.parquet")
        theta = table.column("theta").to_numpy()
        omega = table.column("omega").to_numpy()

        return Trajectory(
            times=table.column("time").to_numpy(),
            states=np.column_stack([theta, omega]),
            parameters=meta.get("parameters", {}),
        )

    def list_all(self) -> list[dict]:
        """Return the full index."""
        return list(self._index)
