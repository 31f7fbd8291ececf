"""
Simulated annealing with a sawtooth temperature schedule.

The temperature drops by a fixed delta after every step and jumps back to
its initial value whenever it would become negative.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, Optional

import numpy as np

from ..core.config import AnnealingConfig
from ..core.heuristic import Evaluator, Heuristic, StopPredicate, evaluate_into
from ..core.vector import Ordering, SolutionVector

RandomNeighbor = Callable[[SolutionVector], Optional[SolutionVector]]


class SimulatedAnnealing(Heuristic):
    """
    Single-state search over random feasible neighbors.

    A neighbor better than the current state is always accepted; a worse one
    is accepted with probability exp(-|delta| / temperature). A neighbor
    function returning None halts the run.
    """

    name = "simulated-annealing"

    def __init__(
        self,
        initial_solution: SolutionVector,
        evaluator: Evaluator,
        neighbor: RandomNeighbor,
        config: AnnealingConfig,
        ordering: Ordering = Ordering.MIN,
        stopping_criterion: Optional[StopPredicate] = None,
        rng: Optional[np.random.Generator] = None,
        *,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(ordering, stopping_criterion, logger=logger)
        self.evaluator = evaluator
        self.neighbor = neighbor
        self.config = config
        self.rng = rng if rng is not None else np.random.default_rng()
        self.temperature = config.initial_temperature
        self.current = evaluate_into(initial_solution.copy(), evaluator)
        self._initialize_incumbent(self.current)

    def acceptance_probability(self, candidate: SolutionVector) -> float:
        if self.ordering.is_better(candidate.score, self.current.score):
            return 1.0
        if self.temperature <= 0:
            return 0.0
        return math.exp(-abs(candidate.score - self.current.score) / self.temperature)

    def _cool_down(self) -> None:
        temperature = self.temperature - self.config.temperature_delta
        if temperature < 0:
            temperature = self.config.initial_temperature
        self.temperature = temperature

    def _step(self) -> Optional[SolutionVector]:
        candidate = self.neighbor(self.current)
        if candidate is None:
            self._halt("neighbor function returned no neighbor")
            return None
        if candidate is self.current:
            candidate = candidate.copy()
        evaluate_into(candidate, self.evaluator)

        if self.ordering.is_better(candidate.score, self.incumbent_score):
            self.current = candidate
        elif self.rng.random() < self.acceptance_probability(candidate):
            self.current = candidate

        self._cool_down()
        return self.current
