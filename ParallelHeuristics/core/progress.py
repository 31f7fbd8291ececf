"""
Per-heuristic progress bookkeeping: counters, incumbent and run history.
"""

from __future__ import annotations

import time
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional, Tuple

from .vector import SolutionVector


class ProgressTracker:
    """
    Counters and improvement log owned by exactly one heuristic.

    `history` maps each distinct incumbent score to the milliseconds elapsed
    between tracker creation and the first time that score was reached.
    `trajectory` lists `(iterations, score)` for every improvement in order,
    which, unlike `history`, does not depend on wall-clock time.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._created_at = clock()
        self._iterations = 0
        self._iterations_since_improvement = 0
        self._incumbent: Optional[SolutionVector] = None
        self._history: Dict[float, int] = {}
        self._trajectory: List[Tuple[int, float]] = []

    def record_step(self) -> None:
        self._iterations += 1
        self._iterations_since_improvement += 1

    def record_improvement(self, vector: SolutionVector) -> None:
        """Stores a copy of `vector` as the incumbent and logs its score."""
        elapsed_ms = int((self._clock() - self._created_at) * 1000)
        self._history.setdefault(vector.score, elapsed_ms)
        self._trajectory.append((self._iterations, vector.score))
        self._incumbent = vector.copy()
        self._iterations_since_improvement = 0

    @property
    def iterations(self) -> int:
        return self._iterations

    @property
    def iterations_since_improvement(self) -> int:
        return self._iterations_since_improvement

    @property
    def iterations_to_incumbent(self) -> int:
        return self._iterations - self._iterations_since_improvement

    @property
    def incumbent(self) -> Optional[SolutionVector]:
        """The tracker's own incumbent object; callers must not mutate it."""
        return self._incumbent

    @property
    def history(self) -> Mapping[float, int]:
        return MappingProxyType(self._history)

    @property
    def trajectory(self) -> List[Tuple[int, float]]:
        return list(self._trajectory)

    def __repr__(self) -> str:
        score = None if self._incumbent is None else self._incumbent.score
        return (
            f"ProgressTracker(iterations={self._iterations}, "
            f"since_improvement={self._iterations_since_improvement}, incumbent_score={score})"
        )
