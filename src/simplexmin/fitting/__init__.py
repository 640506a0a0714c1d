from .costfunc import CostFunction
from .fitting import Fitting

__all__ = [
    "CostFunction",
    "Fitting",
]
