"""
ParallelHeuristics

Stochastic local and population-based optimization procedures (biased
random-key and standard genetic algorithms, simulated annealing, tabu search,
iterated local search) behind one step-wise execution contract, plus a batch
orchestrator that runs independent seeded instances concurrently and reduces
them to one best solution.
"""

from .core import (
    Batch,
    BatchExecutionError,
    ConfigurationError,
    Heuristic,
    Ordering,
    ProgressTracker,
    SolutionVector,
    StoppingCriterion,
    setup_logging,
)
from .genetic import BiasedRandomKeyGeneticAlgorithm, GeneticAlgorithm, brkga_batch, genetic_batch
from .neighborhood import (
    IteratedLocalSearch,
    SimulatedAnnealing,
    TabuSearch,
    iterated_local_search_batch,
    simulated_annealing_batch,
    tabu_search_batch,
)

__version__ = "0.1.0"
__all__ = [
    'Batch', 'BatchExecutionError', 'ConfigurationError', 'Heuristic', 'Ordering',
    'ProgressTracker', 'SolutionVector', 'StoppingCriterion', 'setup_logging',
    'BiasedRandomKeyGeneticAlgorithm', 'GeneticAlgorithm', 'brkga_batch', 'genetic_batch',
    'IteratedLocalSearch', 'SimulatedAnnealing', 'TabuSearch',
    'iterated_local_search_batch', 'simulated_annealing_batch', 'tabu_search_batch',
    '__version__',
]
