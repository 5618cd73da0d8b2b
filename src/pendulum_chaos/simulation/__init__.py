"""Fixed-step simulation of the damped driven pendulum."""
