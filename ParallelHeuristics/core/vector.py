"""
Solution vectors and the total order used to compare their scores.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Iterable, Optional, Sequence, Tuple, Union

import numpy as np

from .errors import ConfigurationError


class Ordering(Enum):
    """Minimize-or-maximize intent of an objective function."""

    MIN = "min"
    MAX = "max"

    def compare(self, a: float, b: float) -> int:
        """
        Compares two scores. NaN is worse than any number under both
        orderings, and two NaNs are equally good.

        Returns:
            A negative number if `a` is better than `b`, zero if they are
            equally good, a positive number otherwise.
        """
        a_nan, b_nan = math.isnan(a), math.isnan(b)
        if a_nan or b_nan:
            return int(a_nan) - int(b_nan)
        if a == b:
            return 0
        if self is Ordering.MIN:
            return -1 if a < b else 1
        return -1 if a > b else 1

    def is_better(self, a: float, b: float) -> bool:
        """True if score `a` is strictly better than score `b`."""
        return self.compare(a, b) < 0

    def is_at_least_as_good(self, a: float, b: float) -> bool:
        return self.compare(a, b) <= 0

    def sort_key(self, score: float) -> Tuple[bool, float]:
        """Key that sorts scores best-first in ascending order, NaN last."""
        if math.isnan(score):
            return (True, 0.0)
        return (False, score if self is Ordering.MIN else -score)

    def best(self, vectors: Iterable["SolutionVector"]) -> Optional["SolutionVector"]:
        """Returns the first best-scoring vector, or None for an empty input."""
        return min(vectors, key=lambda v: self.sort_key(v.score), default=None)

    @classmethod
    def parse(cls, value: Union[str, "Ordering"]) -> "Ordering":
        if isinstance(value, Ordering):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise ConfigurationError(f"Unknown ordering: {value!r}") from exc


class SolutionVector:
    """
    A fixed-length array of float64 coordinates plus a scalar score.

    The array may be written in place (e.g. by an individual generator) but is
    never reallocated, so its length is fixed for the lifetime of the vector.
    Equality and hashing look at the coordinates only; the score is ignored.
    """

    __slots__ = ("_values", "score")

    def __init__(self, values: Union[Sequence[float], np.ndarray], score: float = 0.0):
        array = np.array(values, dtype=np.float64, copy=True).reshape(-1)
        if array.size == 0:
            raise ConfigurationError("A solution vector needs at least one coordinate.")
        self._values = array
        self.score = float(score)

    @classmethod
    def zeros(cls, length: int) -> "SolutionVector":
        if length < 1:
            raise ConfigurationError(f"Vector length must be positive, got {length}.")
        return cls(np.zeros(length, dtype=np.float64))

    @property
    def values(self) -> np.ndarray:
        """The coordinate array. Writable in place; do not resize."""
        return self._values

    def __len__(self) -> int:
        return self._values.shape[0]

    def __getitem__(self, index):
        return self._values[index]

    def __setitem__(self, index, value) -> None:
        self._values[index] = value

    def copy(self) -> "SolutionVector":
        """Independent copy: coordinates are deep-copied, the score is carried."""
        return SolutionVector(self._values, self.score)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SolutionVector):
            return NotImplemented
        # Bit-level comparison keeps __eq__ consistent with __hash__ (0.0 vs -0.0, NaN).
        return self._values.tobytes() == other._values.tobytes()

    def __hash__(self) -> int:
        return hash(self._values.tobytes())

    def __repr__(self) -> str:
        return f"SolutionVector(score={self.score}, values={np.array2string(self._values, precision=6)})"
