"""Analysis of integrated trajectories."""
