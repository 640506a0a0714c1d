from __future__ import annotations

import logging
import numpy as np

from dataclasses import dataclass, field
from tqdm import tqdm
from typing import Callable, List, Optional, Sequence, Tuple, Union

from .config import NelderMeadConfig
from .errors import InvalidInputError, MaxIterationsExceeded
from .result import Converged, Failed, HistoryEntry, MinimizeResult
from .simplex import as_simplex, build_simplex

logger = logging.getLogger(__name__)

# extrapolation factors of the trial vertex, see _amotry
REFLECT = -1.0
EXPAND = 2.0
CONTRACT = 0.5
SHRINK = 0.5


@dataclass(eq=False)
class RunContext:
    """
    Mutable state of one minimization, owned by the call that created it.

    ``values[i]`` is always the objective at ``simplex[i]`` and ``psum`` the
    column sums of ``simplex``.
    """

    objective: Callable[[np.ndarray], float]
    simplex: np.ndarray
    config: NelderMeadConfig
    values: Optional[np.ndarray] = None
    psum: Optional[np.ndarray] = None
    evaluations: int = 0
    history: List[HistoryEntry] = field(default_factory=list)
    pbar: Optional[tqdm] = None

    @classmethod
    def start(cls, objective, simplex: np.ndarray, config: NelderMeadConfig) -> "RunContext":
        ctx = cls(objective=objective, simplex=simplex, config=config)
        ctx.values = np.full(ctx.npts, np.nan)
        ctx.psum = simplex.sum(axis=0)
        return ctx

    @property
    def ndim(self) -> int:
        return self.simplex.shape[1]

    @property
    def npts(self) -> int:
        return self.simplex.shape[0]


# ---------------- evaluator ----------------
def _evaluate(ctx: RunContext, vertex: np.ndarray) -> float:
    if ctx.evaluations >= ctx.config.max_evaluations:
        raise MaxIterationsExceeded(ctx.evaluations, ctx.config.max_evaluations)
    value = float(ctx.objective(vertex.copy()))
    ctx.evaluations += 1
    if ctx.pbar is not None:
        ctx.pbar.update(1)
    return value


def _evaluate_simplex(ctx: RunContext, skip: Optional[int] = None) -> None:
    """Evaluate every vertex in index order, except ``skip``."""
    for i in range(ctx.npts):
        if i == skip:
            continue
        ctx.values[i] = _evaluate(ctx, ctx.simplex[i])


# ---------------- ranking ----------------
def _rank(values: np.ndarray) -> Tuple[int, int, int]:
    """
    Indices of the lowest, highest and second highest values in one pass.

    The earliest index wins ties for both the lowest and the highest value.
    """
    low = 0
    if values[1] > values[0]:
        high, next_high = 1, 0
    else:
        high, next_high = 0, 1

    for i in range(len(values)):
        if values[i] < values[low]:
            low = i
        if values[i] > values[high]:
            next_high = high
            high = i
        elif values[i] > values[next_high] and i != high:
            next_high = i
    return low, high, next_high


def _spread(low_value: float, high_value: float, epsilon: float) -> float:
    return 2.0 * abs(high_value - low_value) / (abs(high_value) + abs(low_value) + epsilon)


# ---------------- geometric operator ----------------
def _amotry(ctx: RunContext, high: int, factor: float) -> float:
    r"""
    Try the vertex ``(1 - factor) * centroid + factor * simplex[high]``.

    The centroid is taken over every vertex except ``high``; factor -1 reflects
    the worst vertex through it, 2 extends a committed reflection and 0.5 pulls
    the worst vertex halfway in. The trial replaces ``simplex[high]`` only when
    it improves on ``values[high]``. Its value is returned either way.
    """
    fac1 = (1.0 - factor) / ctx.ndim
    fac2 = fac1 - factor
    trial = ctx.psum * fac1 - ctx.simplex[high] * fac2
    value = _evaluate(ctx, trial)
    if value < ctx.values[high]:
        ctx.values[high] = value
        ctx.psum += trial - ctx.simplex[high]
        ctx.simplex[high] = trial
    return value


def _shrink(ctx: RunContext, low: int) -> None:
    """Move every vertex but the best halfway towards it and re-evaluate them."""
    best = ctx.simplex[low].copy()
    for i in range(ctx.npts):
        if i != low:
            ctx.simplex[i] = SHRINK * (ctx.simplex[i] + best)
    _evaluate_simplex(ctx, skip=low)
    ctx.psum = ctx.simplex.sum(axis=0)


def _iterate(ctx: RunContext, low: int, high: int, next_high: int) -> str:
    """One reflect/expand/contract/shrink round. Returns the name of the last move."""
    trial = _amotry(ctx, high, REFLECT)
    if trial < ctx.values[low]:
        _amotry(ctx, high, EXPAND)
        return "expand"

    if trial >= ctx.values[next_high]:
        saved = ctx.values[high]
        trial = _amotry(ctx, high, CONTRACT)
        if trial >= saved:
            _shrink(ctx, low)
            return "shrink"
        return "contract"

    return "reflect"


def _converged(ctx: RunContext, low: int) -> Converged:
    # a row swap leaves psum unchanged
    if low != 0:
        ctx.simplex[[0, low]] = ctx.simplex[[low, 0]]
        ctx.values[[0, low]] = ctx.values[[low, 0]]
    return Converged(
        point=ctx.simplex[0].copy(),
        value=float(ctx.values[0]),
        evaluations=ctx.evaluations,
        simplex=ctx.simplex.copy(),
        values=ctx.values.copy(),
        history=ctx.history,
    )


def _run(ctx: RunContext) -> Converged:
    cfg = ctx.config
    _evaluate_simplex(ctx)

    while True:
        low, high, next_high = _rank(ctx.values)
        if cfg.track_history:
            ctx.history.append((ctx.evaluations, float(ctx.values[low]), ctx.simplex[low].copy()))

        spread = _spread(ctx.values[low], ctx.values[high], cfg.epsilon)
        if spread < cfg.function_tolerance:
            return _converged(ctx, low)

        move = _iterate(ctx, low, high, next_high)
        logger.debug(
            "evaluations=%d move=%s best=%.6e spread=%.3e", ctx.evaluations, move, np.min(ctx.values), spread
        )
        if ctx.pbar is not None:
            ctx.pbar.set_postfix({"best": f"{np.min(ctx.values):.6e}"})


def minimize(
    objective: Callable[[np.ndarray], float],
    x0: Optional[Sequence[float]] = None,
    delta: Union[float, Sequence[float]] = 1.0,
    simplex=None,
    config: Optional[NelderMeadConfig] = None,
    **options,
) -> MinimizeResult:
    """
    Minimize ``objective`` with the Nelder-Mead downhill simplex method.

    Pass either a starting point ``x0`` (with a scalar or per-dimension
    ``delta``) or a complete ``simplex`` of shape (N+1, N).

    Args:
        objective: Callable taking a 1-D array of length N and returning a scalar
        x0: Starting point
        delta: Step size(s) used to build the simplex around ``x0``
        simplex: Initial simplex, used as given
        config: Run options; defaults to ``NelderMeadConfig()``
        **options: ``NelderMeadConfig`` fields overriding ``config``

    Returns:
        ``Converged`` with the best point and value, or ``Failed`` when the
        evaluation budget ran out first

    Raises:
        InvalidInputError: If the inputs or options are malformed
    """
    if not callable(objective):
        raise InvalidInputError("objective must be callable")
    if (x0 is None) == (simplex is None):
        raise InvalidInputError("Pass exactly one of x0 or simplex")

    config = NelderMeadConfig() if config is None else config
    if options:
        config = config.replace(**options)

    p = build_simplex(x0, delta) if simplex is None else as_simplex(simplex)
    ctx = RunContext.start(objective, p, config)
    if config.verbose:
        ctx.pbar = tqdm(
            total=config.max_evaluations,
            dynamic_ncols=True,
            leave=True,
            desc="Nelder-Mead Optimizing",
            bar_format="{l_bar}{bar}| {n_fmt}/{total_fmt} {postfix}",
        )

    try:
        result = _run(ctx)
    except MaxIterationsExceeded as e:
        logger.warning("Nelder-Mead stopped without converging: %s", e)
        return Failed(reason=e, evaluations=ctx.evaluations, history=ctx.history)
    finally:
        if ctx.pbar is not None:
            ctx.pbar.close()

    logger.info("Nelder-Mead converged after %d evaluations, f=%.6e", result.evaluations, result.value)
    return result


class NelderMeadOptimizer:
    r"""
    Downhill simplex (Nelder-Mead) optimizer.

    Every call to :meth:`optimize` starts a fresh run, so one instance can be
    reused for independent minimizations, one at a time.

    Parameters
    ----------
    objective_function : `callable`
        Function accepting a 1D array (dim,) and returning a scalar fitness.
    function_tolerance : `float`
        Relative spread of the best and worst simplex values that stops the run.
    max_evaluations : `int`
        Maximum number of objective evaluations, initial simplex included.
    epsilon : `float`
        Keeps the spread finite when the best and worst values are both zero.
    track_history : `bool, optional`
        If True, record the best vertex after every iteration.
    verbose : `bool, optional`
        If True, show a progress bar.
    """

    def __init__(
        self,
        objective_function,
        function_tolerance: float = 3e-8,
        max_evaluations: int = 5000,
        epsilon: float = 1e-10,
        track_history: bool = False,
        verbose: bool = False,
    ):
        # fmt: off
        self.fobj   = objective_function
        self.config = NelderMeadConfig(
            function_tolerance=function_tolerance,
            max_evaluations=max_evaluations,
            epsilon=epsilon,
            track_history=track_history,
            verbose=verbose,
        )
        self.res: Optional[MinimizeResult] = None
        # fmt: on

    @property
    def result(self) -> Optional[MinimizeResult]:
        return self.res

    @property
    def best_position(self):
        return self.res.point if isinstance(self.res, Converged) else None

    @property
    def best_fitness(self):
        return self.res.value if isinstance(self.res, Converged) else None

    @property
    def evaluations(self) -> int:
        return self.res.evaluations if self.res is not None else 0

    def _ensure_history(self) -> List[HistoryEntry]:
        if self.res is None:
            raise RuntimeError("Call .optimize() first.")
        if not self.config.track_history:
            raise RuntimeError("History is only recorded with track_history=True.")
        return self.res.history

    @property
    def convergence_curve(self) -> np.ndarray:
        return np.array([value for _, value, _ in self._ensure_history()])

    @property
    def position_history(self) -> np.ndarray:
        history = self._ensure_history()
        if not history:
            return np.empty((0, 0))
        return np.vstack([vertex for _, _, vertex in history])

    def optimize(self, x0=None, delta: Union[float, Sequence[float]] = 1.0, simplex=None) -> np.ndarray:
        """
        Run the minimization and return the best position.

        Raises:
            MaxIterationsExceeded: If the evaluation budget ran out before convergence
        """
        self.res = minimize(self.fobj, x0=x0, delta=delta, simplex=simplex, config=self.config)
        return self.res.unwrap()

    def positions_below(self, threshold: float) -> np.ndarray:
        fit = self.convergence_curve
        pos = self.position_history
        mask = fit < threshold
        return pos[mask]
