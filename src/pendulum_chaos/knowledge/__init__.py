"""Persistence of Poincare sections and trajectories."""
