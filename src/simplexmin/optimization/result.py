from __future__ import annotations

import numpy as np
from dataclasses import dataclass, field
from typing import List, Tuple, Union

from .errors import MaxIterationsExceeded

# (evaluations so far, best value, best vertex) after a ranking step
HistoryEntry = Tuple[int, float, np.ndarray]


@dataclass
class Converged:
    """The convergence test passed. ``point`` is the best vertex, stored at ``simplex[0]``."""

    point: np.ndarray
    value: float
    evaluations: int
    simplex: np.ndarray
    values: np.ndarray
    history: List[HistoryEntry] = field(default_factory=list)

    success = True

    def unwrap(self) -> np.ndarray:
        return self.point


@dataclass
class Failed:
    """The run stopped without converging; no best-so-far point is reported."""

    reason: MaxIterationsExceeded
    evaluations: int
    history: List[HistoryEntry] = field(default_factory=list)

    success = False

    def unwrap(self) -> np.ndarray:
        raise self.reason


MinimizeResult = Union[Converged, Failed]
