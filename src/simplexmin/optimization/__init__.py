"""Derivative-free minimization with the Nelder-Mead downhill simplex method"""

from .config import NelderMeadConfig
from .errors import SimplexMinError, InvalidInputError, MaxIterationsExceeded
from .nelder import NelderMeadOptimizer, RunContext, minimize
from .result import Converged, Failed, MinimizeResult
from .simplex import build_simplex, as_simplex

__all__ = [
    "NelderMeadConfig",
    "SimplexMinError",
    "InvalidInputError",
    "MaxIterationsExceeded",
    "NelderMeadOptimizer",
    "RunContext",
    "minimize",
    "Converged",
    "Failed",
    "MinimizeResult",
    "build_simplex",
    "as_simplex",
]
