from __future__ import annotations

import numbers
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping

from .errors import InvalidInputError


@dataclass(frozen=True)
class NelderMeadConfig:
    """
    Options of a Nelder-Mead run.

    Attributes:
        function_tolerance: Relative spread between the best and worst vertex
            values below which the run is converged
        max_evaluations: Hard cap on objective evaluations, initial simplex included
        epsilon: Positive constant added to the spread denominator so two zero values do
            not divide by zero
        track_history: Record the best vertex after every ranking step
        verbose: Show a tqdm progress bar over the evaluation budget
    """

    function_tolerance: float = 3e-8
    max_evaluations: int = 5000
    epsilon: float = 1e-10
    track_history: bool = False
    verbose: bool = False

    def __post_init__(self):
        if not isinstance(self.function_tolerance, numbers.Real) or not self.function_tolerance > 0:
            raise InvalidInputError(f"function_tolerance must be positive, got {self.function_tolerance!r}")
        if (
            isinstance(self.max_evaluations, bool)
            or not isinstance(self.max_evaluations, numbers.Integral)
            or self.max_evaluations < 1
        ):
            raise InvalidInputError(f"max_evaluations must be a positive integer, got {self.max_evaluations!r}")
        if not isinstance(self.epsilon, numbers.Real) or not self.epsilon > 0:
            raise InvalidInputError(f"epsilon must be positive, got {self.epsilon!r}")

    @classmethod
    def field_names(cls):
        return tuple(f.name for f in fields(cls))

    @classmethod
    def from_directives(cls, directives: Mapping[str, Any]) -> "NelderMeadConfig":
        """Build a config from a directives dict, ignoring keys that are not options."""
        names = cls.field_names()
        return cls(**{k: v for k, v in directives.items() if k in names})

    def replace(self, **changes) -> "NelderMeadConfig":
        unknown = set(changes) - set(self.field_names())
        if unknown:
            raise InvalidInputError(f"Unknown Nelder-Mead options: {sorted(unknown)}")
        return replace(self, **changes)

    def as_dict(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in self.field_names()}
