"""
Composite stopping criterion evaluated before every heuristic step.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Callable, Optional

from .errors import ConfigurationError
from .vector import Ordering

if TYPE_CHECKING:
    from .heuristic import Heuristic


class StoppingCriterion:
    """
    Predicate over a heuristic's progress. `test` returns True (stop) if any of
    the following holds:

    - iterations > max_iterations
    - iterations since the last improvement > max_iterations_since_improvement
    - more than `time_limit` seconds elapsed since creation or `reset_time()`
    - the incumbent score is at least as good as `target_score`

    Thresholds set to None are disabled. The criterion only reads the
    heuristic, so one instance can be shared by every worker of a batch.
    """

    def __init__(
        self,
        ordering: Ordering = Ordering.MIN,
        *,
        max_iterations: Optional[int] = None,
        max_iterations_since_improvement: Optional[int] = None,
        time_limit: Optional[float] = None,
        target_score: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_iterations is not None and max_iterations < 0:
            raise ConfigurationError("max_iterations must be non-negative")
        if max_iterations_since_improvement is not None and max_iterations_since_improvement < 0:
            raise ConfigurationError("max_iterations_since_improvement must be non-negative")
        if time_limit is not None and time_limit < 0:
            raise ConfigurationError("time_limit must be non-negative")
        self.ordering = Ordering.parse(ordering)
        self.max_iterations = max_iterations
        self.max_iterations_since_improvement = max_iterations_since_improvement
        self.time_limit_ms = None if time_limit is None else int(round(time_limit * 1000))
        self.target_score = target_score
        self._clock = clock
        self.started_at = clock()

    def reset_time(self) -> None:
        """Restarts the wall-clock budget from now."""
        self.started_at = self._clock()

    def elapsed_ms(self) -> float:
        return (self._clock() - self.started_at) * 1000.0

    def is_timed_out(self) -> bool:
        return self.time_limit_ms is not None and self.elapsed_ms() > self.time_limit_ms

    def test(self, heuristic: "Heuristic") -> bool:
        if self.max_iterations is not None and heuristic.iterations > self.max_iterations:
            return True
        if (
            self.max_iterations_since_improvement is not None
            and heuristic.iterations_since_improvement > self.max_iterations_since_improvement
        ):
            return True
        if self.is_timed_out():
            return True
        if self.target_score is not None:
            return self.ordering.is_at_least_as_good(heuristic.incumbent_score, self.target_score)
        return False

    __call__ = test

    def __repr__(self) -> str:
        return (
            f"StoppingCriterion(ordering={self.ordering.name}, max_iterations={self.max_iterations}, "
            f"max_iterations_since_improvement={self.max_iterations_since_improvement}, "
            f"time_limit_ms={self.time_limit_ms}, target_score={self.target_score})"
        )


def never_stop(heuristic: "Heuristic") -> bool:
    """Criterion that never fires; the heuristic runs until halted or cancelled."""
    return False
