"""
Batch builders for the genetic variants: one independent population per
worker, worker `i` seeded with `seed + i`.
"""

import logging
from typing import Optional, Type

from ..core.batch import Batch
from ..core.config import BatchConfig, GeneticConfig
from ..core.heuristic import Evaluator, StopPredicate
from ..core.vector import Ordering
from .brkga import BiasedRandomKeyGeneticAlgorithm, Crossover
from .population import IndividualGenerator
from .standard import GeneticAlgorithm


def _population_batch(
    cls: Type[BiasedRandomKeyGeneticAlgorithm],
    config: GeneticConfig,
    evaluator: Evaluator,
    crossover: Crossover,
    generator: IndividualGenerator,
    ordering: Ordering,
    stopping_criterion: Optional[StopPredicate],
    seed: int,
    evaluation_workers: int,
    logger: Optional[logging.Logger],
) -> Batch:
    ordering = Ordering.parse(ordering)

    def build(index, rng):
        return cls(
            config, evaluator, crossover, generator, ordering, stopping_criterion, rng,
            evaluation_workers=evaluation_workers, logger=logger,
        )

    return Batch.from_config(build, BatchConfig(config.n_populations, seed), ordering, logger=logger)


def brkga_batch(
    config: GeneticConfig,
    evaluator: Evaluator,
    crossover: Crossover,
    generator: IndividualGenerator,
    ordering: Ordering = Ordering.MIN,
    stopping_criterion: Optional[StopPredicate] = None,
    seed: int = 0,
    *,
    evaluation_workers: int = 1,
    logger: Optional[logging.Logger] = None,
) -> Batch:
    """
    Builds `config.n_populations` independent biased random-key GAs.

    The evaluator, crossover and generator are shared by every worker and are
    called from several threads at once.
    """
    return _population_batch(
        BiasedRandomKeyGeneticAlgorithm, config, evaluator, crossover, generator,
        ordering, stopping_criterion, seed, evaluation_workers, logger,
    )


def genetic_batch(
    config: GeneticConfig,
    evaluator: Evaluator,
    crossover: Crossover,
    generator: IndividualGenerator,
    ordering: Ordering = Ordering.MIN,
    stopping_criterion: Optional[StopPredicate] = None,
    seed: int = 0,
    *,
    evaluation_workers: int = 1,
    logger: Optional[logging.Logger] = None,
) -> Batch:
    """Builds `config.n_populations` independent standard GAs."""
    return _population_batch(
        GeneticAlgorithm, config, evaluator, crossover, generator,
        ordering, stopping_criterion, seed, evaluation_workers, logger,
    )
