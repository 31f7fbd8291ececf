"""
Biased random-key genetic algorithm.

One step is one epoch:
    1. draw the mutant sample from the non-elite index pool and regenerate
       those individuals in place,
    2. replace every other non-elite individual with the crossover of a
       uniformly chosen elite donor and itself,
    3. return the drawn indices to the pool, re-evaluate and re-sort.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

import numpy as np

from ..core.config import GeneticConfig
from ..core.heuristic import Evaluator, Heuristic, StopPredicate
from ..core.vector import Ordering, SolutionVector
from .population import IndexPool, IndividualGenerator, Population

Crossover = Callable[[SolutionVector, SolutionVector], SolutionVector]


class BiasedRandomKeyGeneticAlgorithm(Heuristic):
    """
    Args:
        config: Population layout (sizes and fractions).
        evaluator: Decoder mapping an individual to its score.
        crossover: `(elite, non_elite) -> child`; must not mutate its inputs.
        generator: Overwrites an individual's coordinates with a new random
            feasible individual.
        ordering: Whether scores are minimized or maximized.
        stopping_criterion: Predicate checked before every epoch.
        rng: Random generator for mutant sampling and donor selection.
        evaluation_workers: Threads used to score the population (1 = serial).
    """

    name = "brkga"

    def __init__(
        self,
        config: GeneticConfig,
        evaluator: Evaluator,
        crossover: Crossover,
        generator: IndividualGenerator,
        ordering: Ordering = Ordering.MIN,
        stopping_criterion: Optional[StopPredicate] = None,
        rng: Optional[np.random.Generator] = None,
        *,
        evaluation_workers: int = 1,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(ordering, stopping_criterion, logger=logger)
        self.config = config
        self.evaluator = evaluator
        self.crossover = crossover
        self.generator = generator
        self.rng = rng if rng is not None else np.random.default_rng()
        self.evaluation_workers = max(1, int(evaluation_workers))
        self.elite_size = config.elite_size
        self.mutant_size = min(config.mutant_size, config.population_size - config.elite_size)
        self._non_elites = IndexPool(self.elite_size, config.population_size)

        self.population = Population.generate(
            config.population_size, config.chromosome_length, generator, self.ordering
        )
        self._evaluate_and_sort()
        self._initialize_incumbent(self.population.best())

    def _evaluate_and_sort(self) -> None:
        self.population.evaluate(self.evaluator, self.evaluation_workers)
        self.population.sort()

    def _cross(self, index: int) -> None:
        donor = self.population[int(self.rng.integers(self.elite_size))]
        current = self.population[index]
        child = self.crossover(donor, current)
        if child is donor or child is current:
            # Population slots never share a vector.
            child = child.copy()
        self.population[index] = child

    def _mutate(self, index: int) -> None:
        self.generator(self.population[index])

    def _reproduce(self) -> None:
        for index in self._non_elites.draw(self.mutant_size, self.rng):
            self._mutate(index)
        for index in self._non_elites.remaining():
            self._cross(index)
        self._non_elites.restore()

    def _step(self) -> Optional[SolutionVector]:
        self._reproduce()
        self._evaluate_and_sort()
        return self.population.best()
