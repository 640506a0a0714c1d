"""Exceptions raised by the simplex minimizer."""

from typing import Optional


class SimplexMinError(Exception):
    """Base class for errors raised by simplexmin."""


class InvalidInputError(SimplexMinError, ValueError):
    """Malformed starting point, step sizes, simplex or options."""


class MaxIterationsExceeded(SimplexMinError, RuntimeError):
    """
    The objective evaluation budget ran out before the convergence test passed.

    Attributes:
        evaluations: Number of objective evaluations performed
        max_evaluations: The configured budget
    """

    def __init__(self, evaluations: int, max_evaluations: int, message: Optional[str] = None):
        self.evaluations = evaluations
        self.max_evaluations = max_evaluations
        if message is None:
            message = f"max_evaluations={max_evaluations} exceeded after {evaluations} evaluations"
        super().__init__(message)
