from .benchmarks import sphere, shifted_quadratic, rosenbrock
from .log import setup_logging, LOG_FORMAT

__all__ = [
    "sphere",
    "shifted_quadratic",
    "rosenbrock",
    "setup_logging",
    "LOG_FORMAT",
]
