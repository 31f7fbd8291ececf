"""
Tabu search over a user-supplied neighborhood.
"""

from __future__ import annotations

import logging
from collections import deque
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterator, List, Optional, Sequence

import numpy as np

from ..core.config import TabuConfig
from ..core.heuristic import Evaluator, Heuristic, StopPredicate, evaluate_into
from ..core.vector import Ordering, SolutionVector

Neighborhood = Callable[[SolutionVector], Sequence[SolutionVector]]

DEFAULT_TABU_LIST_SIZE = TabuConfig().capacity


class TabuList:
    """Bounded recency queue; adding to a full list evicts the oldest entry."""

    def __init__(self, capacity: int = DEFAULT_TABU_LIST_SIZE):
        self.capacity = TabuConfig(capacity).capacity
        self._entries: deque = deque(maxlen=self.capacity)

    def add(self, vector: SolutionVector) -> None:
        self._entries.append(vector)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, vector: object) -> bool:
        return vector in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[SolutionVector]:
        return iter(self._entries)


class TabuSearch(Heuristic):
    """
    Each step moves to the best non-tabu neighbor of the current vector,
    choosing uniformly among neighbors tied with the best score.

    When every neighbor is tabu the list is cleared once and the step ends
    without a move; if the list was already empty the run halts.
    """

    name = "tabu-search"

    def __init__(
        self,
        initial_solution: SolutionVector,
        evaluator: Evaluator,
        neighborhood: Neighborhood,
        config: TabuConfig = TabuConfig(),
        ordering: Ordering = Ordering.MIN,
        stopping_criterion: Optional[StopPredicate] = None,
        rng: Optional[np.random.Generator] = None,
        *,
        evaluation_workers: int = 1,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(ordering, stopping_criterion, logger=logger)
        self.evaluator = evaluator
        self.neighborhood = neighborhood
        self.config = config
        self.rng = rng if rng is not None else np.random.default_rng()
        self.evaluation_workers = max(1, int(evaluation_workers))
        self.tabu_list = TabuList(config.capacity)
        self.current = evaluate_into(initial_solution.copy(), evaluator)
        self._initialize_incumbent(self.current)

    def _evaluate_and_sort(self, neighbors: List[SolutionVector]) -> None:
        if self.evaluation_workers > 1 and len(neighbors) > 1:
            with ThreadPoolExecutor(max_workers=self.evaluation_workers) as pool:
                scores = list(pool.map(self.evaluator, neighbors))
            for neighbor, score in zip(neighbors, scores):
                neighbor.score = float(score)
        else:
            for neighbor in neighbors:
                evaluate_into(neighbor, self.evaluator)
        neighbors.sort(key=lambda neighbor: self.ordering.sort_key(neighbor.score))

    def _step(self) -> Optional[SolutionVector]:
        neighbors = [n for n in self.neighborhood(self.current) if n not in self.tabu_list]
        if not neighbors:
            if len(self.tabu_list) == 0:
                self._halt("no neighbors available")
            else:
                self.logger.debug("%s: every neighbor is tabu, clearing tabu list", self.name)
                self.tabu_list.clear()
            return None

        self._evaluate_and_sort(neighbors)
        tied = 1
        while tied < len(neighbors) and self.ordering.compare(neighbors[0].score, neighbors[tied].score) == 0:
            tied += 1
        self.current = neighbors[int(self.rng.integers(tied))]
        self.tabu_list.add(self.current.copy())
        return self.current
