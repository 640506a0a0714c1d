from __future__ import annotations

import numpy as np
from typing import Callable, Optional


class CostFunction:
    """
    Weighted least-squares cost for fitting model parameters to data,
    where objective function is defined as:

    f = sum(((model(params, x) - y) / sigma) ** 2)

    The instance is the objective handed to an optimizer; after each call the
    misfit of the last evaluated parameters is kept for inspection.
    """

    def __init__(
        self,
        model: Callable[[np.ndarray, np.ndarray], np.ndarray],
        x,
        y,
        sigma: Optional[np.ndarray] = None,
    ):
        if not callable(model):
            raise ValueError("model must be callable as model(params, x)")

        self.model = model
        self.x = np.asarray(x, dtype=float)
        self.y = np.asarray(y, dtype=float)
        self.sigma = np.ones_like(self.y) if sigma is None else np.broadcast_to(np.asarray(sigma, dtype=float), self.y.shape)

        if self.x.shape[0] != self.y.shape[0]:
            raise ValueError(f"x and y must have the same length, got {self.x.shape[0]} and {self.y.shape[0]}")
        if self.y.size == 0:
            raise ValueError("Cannot fit an empty dataset")
        if np.any(self.sigma <= 0):
            raise ValueError("sigma must be positive")

        # cache
        self._clear_cache()

    # ------------------- Public Properties -------------------

    @property
    def data_misfit(self) -> float:
        if self._data_misfit is None:
            raise ValueError("Call the instance with parameters before accessing data_misfit.")
        return self._data_misfit

    @property
    def residuals(self) -> np.ndarray:
        if self._residuals is None:
            raise ValueError("Call the instance with parameters before accessing residuals.")
        return self._residuals

    @property
    def chi_factor(self) -> float:
        """Root mean square of the weighted residuals."""
        return float(np.sqrt(self.data_misfit / self.y.size))

    def _clear_cache(self):
        self._data_misfit = None
        self._residuals = None

    # ------------------- Core Interface -------------------

    def predict(self, params: np.ndarray) -> np.ndarray:
        return np.asarray(self.model(np.asarray(params, dtype=float), self.x), dtype=float)

    def __call__(self, params: np.ndarray) -> float:
        residuals = (self.predict(params) - self.y) / self.sigma
        data_misfit = float(np.sum(residuals**2))

        self._residuals = residuals
        self._data_misfit = data_misfit
        return data_misfit
