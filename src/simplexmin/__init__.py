"""
A python package for derivative-free minimization with the Nelder-Mead downhill simplex method.
"""

__author__       = "wdp"
__email__        = "wangdp77@163.com"
__version__      = "0.1.0"
__license__      = "MIT"

from .optimization import (
    NelderMeadConfig,
    NelderMeadOptimizer,
    SimplexMinError,
    InvalidInputError,
    MaxIterationsExceeded,
    Converged,
    Failed,
    minimize,
    build_simplex,
    as_simplex,
)
from .fitting import CostFunction, Fitting
from .utils import setup_logging

__all__ = [
    "__version__",
    "__author__",
    "__email__",
    # Optimization
    "NelderMeadConfig",
    "NelderMeadOptimizer",
    "SimplexMinError",
    "InvalidInputError",
    "MaxIterationsExceeded",
    "Converged",
    "Failed",
    "minimize",
    "build_simplex",
    "as_simplex",
    # Fitting
    "CostFunction",
    "Fitting",
    # Utils
    "setup_logging",
]
