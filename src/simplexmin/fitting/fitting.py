"""
Parameter fitting driven by a black-box optimizer.

This module runs an optimizer class over one cost function, or over a dict of
cost functions keyed by dataset, and keeps the fitted parameters per dataset.
"""

import inspect
import logging
import numpy as np

from typing import Any, Dict, Optional, Sequence, Union

from .costfunc import CostFunction
from simplexmin.optimization import NelderMeadOptimizer

logger = logging.getLogger(__name__)


class Fitting:
    """
    Fit model parameters by minimizing a cost function.

    Attributes:
        costfunction: Cost function, or dict of cost functions keyed by site
        optimizer_cls: Optimizer class used for every site
        directives: Keyword options passed to the optimizer class
        result: Dictionary storing fitted results per site
        optimizer: Dictionary storing optimizer instances per site
    """

    def __init__(
        self,
        costfunction: Union[CostFunction, Dict[str, CostFunction]],
        optimizer: Any = NelderMeadOptimizer,
        directives: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Initialize the fitting instance.

        Args:
            costfunction: Cost function instance, or dict of them for a multi-site fit
            optimizer: Optimizer class, constructed as ``optimizer(costfunction, **directives)``
            directives: Dictionary of optimizer options; keys the class does not accept are dropped

        Raises:
            ValueError: If costfunction or optimizer is None
        """
        if costfunction is None:
            raise ValueError("Cost function cannot be None")
        if optimizer is None:
            raise ValueError("Optimizer cannot be None")

        self.costfunction = costfunction
        self.optimizer_cls = optimizer
        self.directives = dict(directives) if directives is not None else {}
        self.result: Dict[str, Dict[str, Any]] = {}
        self.optimizer: Dict[str, Any] = {}

    def best_position(self, site: str = "site0") -> Optional[np.ndarray]:
        """Return fitted parameters for a given site, or None if not found."""
        return self.result.get(site, {}).get("best_position")

    def best_misfit(self, site: str = "site0") -> Optional[float]:
        """Return the minimal cost for a given site, or None if not found."""
        return self.result.get(site, {}).get("best_fitness")

    def chi_factor(self, site: str = "site0") -> Optional[float]:
        return self.result.get(site, {}).get("chi_factor")

    def evaluations(self, site: str = "site0") -> Optional[int]:
        return self.result.get(site, {}).get("evaluations")

    def convergence_curve(self, site: str = "site0") -> np.ndarray:
        curve = self.result.get(site, {}).get("convergence_curve")
        if curve is None:
            return np.array([])
        return curve

    def predict(self, x, site: str = "site0") -> np.ndarray:
        """
        Evaluate the site's model at ``x`` with the fitted parameters.

        Raises:
            ValueError: If the site has not been fitted
        """
        best_pos = self.best_position(site)
        if best_pos is None:
            raise ValueError(f"No best position available for site '{site}'")
        costfunc = self._costfunctions()[site]
        return np.asarray(costfunc.model(best_pos, np.asarray(x, dtype=float)), dtype=float)

    def _costfunctions(self) -> Dict[str, CostFunction]:
        if isinstance(self.costfunction, dict):
            return self.costfunction
        return {"site0": self.costfunction}

    def _filter_directives(self) -> Dict[str, Any]:
        # keep only the options the optimizer's __init__ accepts; self and the
        # objective are positional and never come from directives
        try:
            sig = inspect.signature(self.optimizer_cls.__init__)
        except (TypeError, ValueError) as e:
            raise RuntimeError(f"Failed to inspect optimizer signature: {e}")
        accepted = list(sig.parameters)[2:]
        return {k: v for k, v in self.directives.items() if k in accepted}

    def run(self, x0: Sequence[float], delta: Union[float, Sequence[float]] = 1.0) -> None:
        """
        Run the fit for every site from the same starting point.

        Results are stored in the `result` attribute.

        Args:
            x0: Starting parameters
            delta: Initial step size(s) around ``x0``

        Raises:
            RuntimeError: If the optimizer fails for a site
        """
        filter_kwargs = self._filter_directives()

        for site, costfunc in self._costfunctions().items():
            optimizer = self.optimizer_cls(costfunc, **filter_kwargs)
            self.optimizer[site] = optimizer
            try:
                best = optimizer.optimize(x0=x0, delta=delta)
            except Exception as e:
                raise RuntimeError(f"Fitting failed for site '{site}': {e}") from e

            # leave the cost function's cache at the fitted parameters
            costfunc(best)
            tracked = getattr(getattr(optimizer, "config", None), "track_history", False)
            curve = optimizer.convergence_curve if tracked else None
            self.result[site] = {
                "best_position": np.asarray(best),
                "best_fitness": optimizer.best_fitness,
                "chi_factor": costfunc.chi_factor,
                "evaluations": optimizer.evaluations,
                "convergence_curve": curve,
            }
            logger.info(
                "site %s fitted with %d evaluations, misfit=%.6e", site, optimizer.evaluations, optimizer.best_fitness
            )
