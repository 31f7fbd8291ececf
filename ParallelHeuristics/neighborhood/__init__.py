"""
Trajectory-based heuristics: simulated annealing, tabu search and iterated
local search, plus the local-search operators used by the latter.
"""

from .annealing import RandomNeighbor, SimulatedAnnealing
from .batch import iterated_local_search_batch, simulated_annealing_batch, tabu_search_batch
from .ils import IteratedLocalSearch, Operator
from .local_search import BestImprovement, FirstImprovement
from .tabu import DEFAULT_TABU_LIST_SIZE, Neighborhood, TabuList, TabuSearch

__all__ = [
    'SimulatedAnnealing', 'RandomNeighbor',
    'TabuSearch', 'TabuList', 'Neighborhood', 'DEFAULT_TABU_LIST_SIZE',
    'IteratedLocalSearch', 'Operator',
    'BestImprovement', 'FirstImprovement',
    'simulated_annealing_batch', 'tabu_search_batch', 'iterated_local_search_batch',
]
