"""Benchmark objective functions for exercising the minimizer."""

import numpy as np
from typing import Sequence


def sphere(x):
    x = np.asarray(x, dtype=float)
    return float(np.sum(x**2))


def shifted_quadratic(center: Sequence[float]):
    r"""
    Return :math:`f(x) = \sum_i (x_i - c_i)^2`, a convex bowl with its minimum 0 at ``center``.
    """
    c = np.asarray(center, dtype=float)

    def fobj(x):
        x = np.asarray(x, dtype=float)
        return float(np.sum((x - c) ** 2))

    return fobj


def rosenbrock(x, a: float = 1.0, b: float = 100.0):
    """Banana valley, minimum 0 at (a, a**2, ...) when a = 1."""
    x = np.asarray(x, dtype=float)
    return float(np.sum(b * (x[1:] - x[:-1] ** 2) ** 2 + (a - x[:-1]) ** 2))
