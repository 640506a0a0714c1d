"""
Construction and validation of the initial simplex.

A simplex in N dimensions is stored as a float array of shape (N+1, N), one
vertex per row. Both builders return a fresh array, never a view of the
caller's data.
"""

import numpy as np
from typing import Sequence, Union

from .errors import InvalidInputError


def _as_point(point) -> np.ndarray:
    try:
        x = np.array(point, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"Starting point must be a sequence of numbers: {e}")
    if x.ndim != 1:
        raise InvalidInputError(f"Starting point must be 1-D, got shape {x.shape}")
    if x.size == 0:
        raise InvalidInputError("Starting point is empty")
    if not np.all(np.isfinite(x)):
        raise InvalidInputError("Starting point contains non-finite coordinates")
    return x


def _as_deltas(delta, ndim: int) -> np.ndarray:
    try:
        d = np.array(delta, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"delta must be a number or a sequence of numbers: {e}")
    if d.ndim == 0:
        d = np.full(ndim, float(d))
    elif d.ndim != 1 or d.shape[0] != ndim:
        raise InvalidInputError(f"delta must be a scalar or have length {ndim}, got shape {d.shape}")
    if not np.all(np.isfinite(d)):
        raise InvalidInputError("delta contains non-finite values")
    return d


def build_simplex(point: Sequence[float], delta: Union[float, Sequence[float]] = 1.0) -> np.ndarray:
    """
    Build an initial simplex around a starting point.

    Vertex 0 is the starting point; vertex i (i = 1..N) is the starting point
    with coordinate i-1 moved by ``delta[i-1]``.

    Parameters
    ----------
    point : `array_like`
        Starting point of length N.
    delta : `float` or `array_like`
        One step size for every dimension, or N per-dimension step sizes.
        A zero step collapses the simplex; keeping it non-degenerate is up to the caller.

    Returns
    -------
    simplex : np.ndarray
        Array of shape (N+1, N).
    """
    x0 = _as_point(point)
    ndim = x0.shape[0]
    deltas = _as_deltas(delta, ndim)

    simplex = np.tile(x0, (ndim + 1, 1))
    simplex[np.arange(1, ndim + 1), np.arange(ndim)] += deltas
    return simplex


def as_simplex(simplex) -> np.ndarray:
    """
    Validate a caller-supplied simplex and return it as a new (N+1, N) float array.

    Raises:
        InvalidInputError: If the simplex is empty, ragged, not of shape
            (N+1, N) or holds non-finite coordinates
    """
    if isinstance(simplex, np.ndarray):
        rows = np.atleast_1d(simplex)
    else:
        try:
            rows = list(simplex)
        except TypeError:
            raise InvalidInputError("Simplex must be a sequence of vertices")
    if len(rows) == 0:
        raise InvalidInputError("Simplex is empty")

    if not isinstance(rows, np.ndarray):
        lengths = set()
        for row in rows:
            try:
                lengths.add(len(row))
            except TypeError:
                raise InvalidInputError("Simplex rows must be sequences of coordinates")
        if len(lengths) != 1:
            raise InvalidInputError(f"Simplex rows have differing lengths: {sorted(lengths)}")

    try:
        p = np.array(rows, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"Simplex must be a matrix of numbers: {e}")

    if p.ndim != 2 or p.shape[1] == 0:
        raise InvalidInputError(f"Simplex must be a 2-D (N+1, N) matrix, got shape {p.shape}")
    npts, ndim = p.shape
    if npts != ndim + 1:
        raise InvalidInputError(f"Simplex in {ndim} dimensions needs {ndim + 1} vertices, got {npts}")
    if not np.all(np.isfinite(p)):
        raise InvalidInputError("Simplex contains non-finite coordinates")
    return p
