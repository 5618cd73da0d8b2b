"""Numerical validation checks."""
