"""
Batch builders for the trajectory variants. Each worker starts from its own
initial solution; randomized variants seed worker `i` with `seed + i`.

Worker count and seed come either from the loose `n_workers` / `seed`
arguments or from a BatchConfig, which takes precedence when given.
"""

import logging
from typing import Optional, Sequence

from ..core.batch import Batch
from ..core.config import AnnealingConfig, BatchConfig, TabuConfig
from ..core.errors import ConfigurationError
from ..core.heuristic import Evaluator, StopPredicate
from ..core.vector import Ordering, SolutionVector
from .annealing import RandomNeighbor, SimulatedAnnealing
from .ils import IteratedLocalSearch, Operator
from .tabu import Neighborhood, TabuSearch


def _batch_config(
    initial_solutions: Sequence[SolutionVector],
    n_workers: Optional[int],
    seed: int,
    batch_config: Optional[BatchConfig],
) -> BatchConfig:
    count = len(initial_solutions)
    if batch_config is None:
        batch_config = BatchConfig(count if n_workers is None else n_workers, seed)
    if batch_config.n_workers != count:
        raise ConfigurationError(
            f"The number of workers ({batch_config.n_workers}) and of initial solutions ({count}) must be the same"
        )
    return batch_config


def simulated_annealing_batch(
    initial_solutions: Sequence[SolutionVector],
    evaluator: Evaluator,
    neighbor: RandomNeighbor,
    config: AnnealingConfig,
    ordering: Ordering = Ordering.MIN,
    stopping_criterion: Optional[StopPredicate] = None,
    seed: int = 0,
    *,
    n_workers: Optional[int] = None,
    batch_config: Optional[BatchConfig] = None,
    logger: Optional[logging.Logger] = None,
) -> Batch:
    batch_config = _batch_config(initial_solutions, n_workers, seed, batch_config)
    ordering = Ordering.parse(ordering)

    def build(index, rng):
        return SimulatedAnnealing(
            initial_solutions[index], evaluator, neighbor, config, ordering,
            stopping_criterion, rng, logger=logger,
        )

    return Batch.from_config(build, batch_config, ordering, logger=logger)


def tabu_search_batch(
    initial_solutions: Sequence[SolutionVector],
    evaluator: Evaluator,
    neighborhood: Neighborhood,
    config: TabuConfig = TabuConfig(),
    ordering: Ordering = Ordering.MIN,
    stopping_criterion: Optional[StopPredicate] = None,
    seed: int = 0,
    *,
    n_workers: Optional[int] = None,
    batch_config: Optional[BatchConfig] = None,
    evaluation_workers: int = 1,
    logger: Optional[logging.Logger] = None,
) -> Batch:
    batch_config = _batch_config(initial_solutions, n_workers, seed, batch_config)
    ordering = Ordering.parse(ordering)

    def build(index, rng):
        return TabuSearch(
            initial_solutions[index], evaluator, neighborhood, config, ordering,
            stopping_criterion, rng, evaluation_workers=evaluation_workers, logger=logger,
        )

    return Batch.from_config(build, batch_config, ordering, logger=logger)


def iterated_local_search_batch(
    initial_solutions: Sequence[SolutionVector],
    evaluator: Evaluator,
    local_search: Operator,
    perturbation: Operator,
    ordering: Ordering = Ordering.MIN,
    stopping_criterion: Optional[StopPredicate] = None,
    *,
    n_workers: Optional[int] = None,
    batch_config: Optional[BatchConfig] = None,
    logger: Optional[logging.Logger] = None,
) -> Batch:
    """
    Iterated local search draws no random numbers of its own; any randomness
    lives in the perturbation operator, which is shared by every worker. The
    seed of `batch_config` is therefore unused.
    """
    _batch_config(initial_solutions, n_workers, 0, batch_config)
    ordering = Ordering.parse(ordering)
    workers = [
        IteratedLocalSearch(
            solution, evaluator, local_search, perturbation, ordering, stopping_criterion, logger=logger,
        )
        for solution in initial_solutions
    ]
    return Batch(workers, ordering, logger=logger)
