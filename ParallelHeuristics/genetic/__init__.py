"""
Population-based heuristics (biased random-key and standard genetic algorithms).
"""

from .batch import brkga_batch, genetic_batch
from .brkga import BiasedRandomKeyGeneticAlgorithm, Crossover
from .population import IndexPool, IndividualGenerator, Population
from .standard import GeneticAlgorithm

__all__ = [
    'BiasedRandomKeyGeneticAlgorithm', 'GeneticAlgorithm',
    'Crossover', 'IndividualGenerator',
    'IndexPool', 'Population',
    'brkga_batch', 'genetic_batch',
]
