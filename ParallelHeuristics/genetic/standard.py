"""
Standard elitist genetic algorithm.

Differs from the biased random-key variant only in the order of the
reproduction phases: every non-elite individual is first replaced by an
elite x non-elite crossover, then a fresh sample of the non-elite range is
overwritten by random mutants.
"""

from .brkga import BiasedRandomKeyGeneticAlgorithm


class GeneticAlgorithm(BiasedRandomKeyGeneticAlgorithm):

    name = "ga"

    def _reproduce(self) -> None:
        for index in range(self.elite_size, len(self.population)):
            self._cross(index)
        for index in self._non_elites.draw(self.mutant_size, self.rng):
            self._mutate(index)
        self._non_elites.restore()
