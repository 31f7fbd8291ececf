"""
Iterated local search: alternate a descent to a local optimum with a
perturbation that escapes it.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from ..core.heuristic import Evaluator, Heuristic, StopPredicate, evaluate_into
from ..core.vector import Ordering, SolutionVector

Operator = Callable[[SolutionVector], SolutionVector]


class IteratedLocalSearch(Heuristic):
    """
    One step runs the local-search operator from the current vector, compares
    the local optimum with the incumbent, then perturbs the local optimum to
    obtain the next starting vector.
    """

    name = "iterated-local-search"

    def __init__(
        self,
        initial_solution: SolutionVector,
        evaluator: Evaluator,
        local_search: Operator,
        perturbation: Operator,
        ordering: Ordering = Ordering.MIN,
        stopping_criterion: Optional[StopPredicate] = None,
        *,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(ordering, stopping_criterion, logger=logger)
        self.evaluator = evaluator
        self.local_search = local_search
        self.perturbation = perturbation
        self.current = evaluate_into(initial_solution.copy(), evaluator)
        self._initialize_incumbent(self.current)

    def _step(self) -> Optional[SolutionVector]:
        local_optimum = evaluate_into(self.local_search(self.current), self.evaluator)
        self.current = evaluate_into(self.perturbation(local_optimum.copy()), self.evaluator)
        return local_optimum
