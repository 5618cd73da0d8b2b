"""pendulum-chaos: Poincare sections of the damped driven pendulum."""

__version__ = "0.1.0"

from pendulum_chaos.pipeline import PoincarePipeline, run_poincare, write_poincare_csv

__all__ = ["PoincarePipeline", "run_poincare", "write_poincare_csv", "__version__"]
