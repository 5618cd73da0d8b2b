"""Tests for Parquet trajectory persistence."""

import numpy as np

from pendulum_chaos.knowledge.trajectory_store import TrajectoryStore
from pendulum_chaos.simulation.driven_pendulum import solve
from pendulum_chaos.types.simulation import IntegrationParameters, PhysicalParameters
from pendulum_chaos.types.trajectory import State


def _trajectory():
    return solve(
        PhysicalParameters(),
        IntegrationParameters(time_step=0.05, total_time=1.0),
        State(0.7, 0.1),
    )


class TestTrajectoryStore:
    """Test Parquet archiving of trajectories."""

    def test_save_and_load(self, tmp_output_dir):
        store = TrajectoryStore(tmp_output_dir / "traj")
        traj = _trajectory()
        traj_id = store.save(traj)

        loaded = store.load(traj_id)
        np.testing.assert_array_equal(loaded.times, traj.times)
        np.testing.assert_array_equal(loaded.states, traj.states)
        assert loaded.parameters == traj.parameters

    def test_files_written(self, tmp_output_dir):
        store = TrajectoryStore(tmp_output_dir)
        traj_id = store.save(_trajectory(), traj_id="run-1")
        assert traj_id == "run-1"
        assert (tmp_output_dir / "run-1.parquet").exists()
        assert (tmp_output_dir / "run-1.json").exists()
        assert (tmp_output_dir / "index.json").exists()

    def test_index_persists(self, tmp_output_dir):
        store = TrajectoryStore(tmp_output_dir)
        store.save(_trajectory(), traj_id="a")
        store.save(_trajectory(), traj_id="b")

        reopened = TrajectoryStore(tmp_output_dir)
        entries = reopened.list_all()
        assert [e["id"] for e in entries] == ["a", "b"]
        assert entries[0]["n_points"] == 21

    def test_resave_replaces_index_entry(self, tmp_output_dir):
        store = TrajectoryStore(tmp_output_dir)
        store.save(_trajectory(), traj_id="a")
        store.save(_trajectory(), traj_id="a")
        assert len(store.list_all()) == 1

    def test_loaded_is_read_only(self, tmp_output_dir):
        store = TrajectoryStore(tmp_output_dir)
        loaded = store.load(store.save(_trajectory()))
        assert not loaded.states.flags.writeable
