"""
Local-search operators for iterated local search.

Both operators descend from a starting vector for at most `max_iterations`
neighborhood explorations and return the best vector reached, which is a
local optimum unless the iteration budget ran out first. The input vector is
never modified.
"""

import abc
from typing import Callable, Optional, Sequence

from ..core.config import LocalSearchConfig
from ..core.heuristic import Evaluator, evaluate_into
from ..core.vector import Ordering, SolutionVector

Neighborhood = Callable[[SolutionVector], Sequence[SolutionVector]]


class _LocalSearch(abc.ABC):

    def __init__(
        self,
        max_iterations: int,
        neighborhood: Neighborhood,
        evaluator: Evaluator,
        ordering: Ordering = Ordering.MIN,
    ):
        self.max_iterations = LocalSearchConfig(max_iterations).max_iterations
        self.neighborhood = neighborhood
        self.evaluator = evaluator
        self.ordering = Ordering.parse(ordering)

    def __call__(self, start: SolutionVector) -> SolutionVector:
        current = evaluate_into(start.copy(), self.evaluator)
        for _ in range(self.max_iterations):
            move = self._select(current)
            if move is None:
                break
            current = move
        return current

    @abc.abstractmethod
    def _select(self, current: SolutionVector) -> Optional[SolutionVector]:
        """Returns the next vector to move to, or None at a local optimum."""


class BestImprovement(_LocalSearch):
    """Moves to the best neighbor while it strictly improves on the current vector."""

    def _select(self, current):
        neighbors = list(self.neighborhood(current))
        if not neighbors:
            return None
        for neighbor in neighbors:
            evaluate_into(neighbor, self.evaluator)
        best = self.ordering.best(neighbors)
        if self.ordering.is_better(best.score, current.score):
            return best
        return None


class FirstImprovement(_LocalSearch):
    """Moves to the first neighbor that strictly improves on the current vector."""

    def _select(self, current):
        for neighbor in self.neighborhood(current):
            evaluate_into(neighbor, self.evaluator)
            if self.ordering.is_better(neighbor.score, current.score):
                return neighbor
        return None
