"""
The step-wise execution contract shared by every heuristic.
"""

import abc
import logging
import threading
from typing import Callable, List, Mapping, Optional, Tuple

from .progress import ProgressTracker
from .stopping import never_stop
from .vector import Ordering, SolutionVector

StopPredicate = Callable[["Heuristic"], bool]
Evaluator = Callable[[SolutionVector], float]


def evaluate_into(vector: SolutionVector, evaluator: Evaluator) -> SolutionVector:
    """Scores `vector` in place and returns it."""
    vector.score = float(evaluator(vector))
    return vector


class Heuristic(abc.ABC):
    """
    Abstract base class for a single independent optimization run.

    A heuristic owns a ProgressTracker and an algorithm-specific state. Each
    call to `advance` performs at most one unit of work. Subclasses implement
    `_step`, which mutates the algorithm state and returns the candidate that
    should be compared against the incumbent (or None if the step produced no
    candidate worth comparing).
    """

    # Short label used in log messages and reprs.
    name: str = "heuristic"

    def __init__(
        self,
        ordering: Ordering,
        stopping_criterion: Optional[StopPredicate] = None,
        *,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Args:
            ordering: Whether scores are minimized or maximized.
            stopping_criterion: Predicate returning True when the run must
                stop. Checked before every step. Defaults to never stopping.
            logger: Logger for improvement and halt messages.
        """
        self.ordering = Ordering.parse(ordering)
        self.stopping_criterion = stopping_criterion or never_stop
        self.logger = logger or logging.getLogger(__name__)
        self._tracker = ProgressTracker()
        self._halt_reason: Optional[str] = None
        # Held while stepping; one instance is never stepped from two threads at once.
        self._step_lock = threading.RLock()

    # Life-cycle -----------------------------------------------------------

    @abc.abstractmethod
    def _step(self) -> Optional[SolutionVector]:
        """
        Performs one algorithm-defined step.

        Implementations call `_halt` and return None when they cannot proceed;
        that step is then not counted.
        """

    def advance(self) -> bool:
        """
        Performs one step unless the stopping criterion fires.

        Returns:
            True if a step was performed, False if the heuristic stopped.
        """
        with self._step_lock:
            if self._halt_reason is not None or self.stopping_criterion(self):
                return False
            candidate = self._step()
            if self._halt_reason is not None:
                return False
            self._tracker.record_step()
            if candidate is not None and self.ordering.is_better(candidate.score, self.incumbent_score):
                self._record_improvement(candidate)
            return True

    def run(self, steps: Optional[int] = None, cancel_event: Optional[threading.Event] = None) -> int:
        """
        Advances up to `steps` times, or until the heuristic stops if `steps`
        is None. The cancellation event is checked between steps.

        Callers driving the same instance from other threads wait until this
        run returns.

        Returns:
            The number of steps actually performed.
        """
        performed = 0
        with self._step_lock:
            while steps is None or performed < steps:
                if cancel_event is not None and cancel_event.is_set():
                    break
                if not self.advance():
                    break
                performed += 1
        return performed

    def run_to_completion(self, cancel_event: Optional[threading.Event] = None) -> int:
        return self.run(None, cancel_event)

    # Helpers for subclasses -------------------------------------------------

    def _record_improvement(self, vector: SolutionVector) -> None:
        self._tracker.record_improvement(vector)
        self.logger.debug(
            "%s: new incumbent %.6g at iteration %d", self.name, vector.score, self._tracker.iterations
        )

    def _initialize_incumbent(self, vector: SolutionVector) -> None:
        """Records the initial scored state as the first incumbent (zero iterations)."""
        self._record_improvement(vector)

    def _halt(self, reason: str) -> None:
        self._halt_reason = reason
        self.logger.info("%s halted after %d iterations: %s", self.name, self._tracker.iterations, reason)

    # Read-only views --------------------------------------------------------

    @property
    def tracker(self) -> ProgressTracker:
        return self._tracker

    @property
    def incumbent(self) -> SolutionVector:
        """A copy of the best vector found so far."""
        return self._tracker.incumbent.copy()

    @property
    def incumbent_score(self) -> float:
        return self._tracker.incumbent.score

    @property
    def iterations(self) -> int:
        return self._tracker.iterations

    @property
    def iterations_since_improvement(self) -> int:
        return self._tracker.iterations_since_improvement

    @property
    def iterations_to_incumbent(self) -> int:
        return self._tracker.iterations_to_incumbent

    @property
    def history(self) -> Mapping[float, int]:
        return self._tracker.history

    @property
    def trajectory(self) -> List[Tuple[int, float]]:
        return self._tracker.trajectory

    @property
    def halted(self) -> bool:
        return self._halt_reason is not None

    @property
    def halt_reason(self) -> Optional[str]:
        return self._halt_reason

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(ordering={self.ordering.name}, iterations={self.iterations}, "
            f"incumbent_score={self.incumbent_score})"
        )
