import sys
import threading
from pathlib import Path

import numpy as np
import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from ParallelHeuristics.core import GeneticConfig, Ordering, SolutionVector, StoppingCriterion
from ParallelHeuristics.genetic import (
    BiasedRandomKeyGeneticAlgorithm,
    GeneticAlgorithm,
    brkga_batch,
    genetic_batch,
)


def sphere(vector):
    return float(np.sum((vector.values - 0.5) ** 2))


class CountingGenerator:
    """Uniform random keys in [0, 1)."""

    def __init__(self, seed=0):
        self.rng = np.random.default_rng(seed)
        self.calls = 0

    def __call__(self, individual):
        self.calls += 1
        individual.values[:] = self.rng.random(len(individual))


class LockedGenerator(CountingGenerator):
    """Generator shared by several workers."""

    def __init__(self, seed=0):
        super().__init__(seed)
        self._lock = threading.Lock()

    def __call__(self, individual):
        with self._lock:
            super().__call__(individual)


class CountingCrossover:
    """Deterministic elite-biased blend; never mutates its inputs."""

    def __init__(self, bias=0.7):
        self.bias = bias
        self.calls = 0

    def __call__(self, elite, other):
        self.calls += 1
        return SolutionVector(self.bias * elite.values + (1.0 - self.bias) * other.values)


@pytest.fixture
def config():
    # 10 individuals: 2 elite, 5 mutants, 3 crossovers per epoch
    return GeneticConfig(chromosome_length=4, population_size=10, elite_fraction=0.2, mutant_fraction=0.5)


def build(cls, config, seed=0, ordering=Ordering.MIN, **kwargs):
    generator = CountingGenerator(seed)
    crossover = CountingCrossover()
    algorithm = cls(
        config, sphere, crossover, generator, ordering,
        rng=np.random.default_rng(seed + 100), **kwargs,
    )
    return algorithm, generator, crossover


class TestBiasedRandomKeyGeneticAlgorithm:

    def test_initial_population(self, config):
        algorithm, generator, crossover = build(BiasedRandomKeyGeneticAlgorithm, config)
        assert generator.calls == config.population_size
        assert crossover.calls == 0
        assert algorithm.iterations == 0
        assert algorithm.incumbent_score == algorithm.population.best().score
        scores = algorithm.population.scores()
        np.testing.assert_array_equal(scores, np.sort(scores))

    def test_epoch_call_counts(self, config):
        algorithm, generator, crossover = build(BiasedRandomKeyGeneticAlgorithm, config)
        algorithm.run(3)
        assert generator.calls == 10 + 3 * 5
        assert crossover.calls == 3 * 3
        assert len(algorithm.population) == 10

    def test_reproduction_keeps_elite(self, config):
        algorithm, _, _ = build(BiasedRandomKeyGeneticAlgorithm, config)
        elite = list(algorithm.population.elite(2))
        elite_values = [individual.values.copy() for individual in elite]
        algorithm._reproduce()
        for index in range(2):
            assert algorithm.population[index] is elite[index]
            np.testing.assert_array_equal(algorithm.population[index].values, elite_values[index])

    def test_slots_never_share_a_vector(self, config):
        algorithm, _, _ = build(BiasedRandomKeyGeneticAlgorithm, config)
        algorithm.crossover = lambda elite, other: elite
        algorithm.run(2)
        assert len({id(individual) for individual in algorithm.population}) == 10

    def test_incumbent_never_worsens(self, config):
        algorithm, _, _ = build(BiasedRandomKeyGeneticAlgorithm, config)
        algorithm.run(30)
        scores = [score for _, score in algorithm.trajectory]
        assert all(later < earlier for earlier, later in zip(scores, scores[1:]))
        assert algorithm.iterations == 30
        assert algorithm.iterations == algorithm.iterations_since_improvement + algorithm.iterations_to_incumbent

    def test_maximization(self, config):
        algorithm, _, _ = build(BiasedRandomKeyGeneticAlgorithm, config, ordering=Ordering.MAX)
        algorithm.run(10)
        scores = algorithm.population.scores()
        np.testing.assert_array_equal(scores, np.sort(scores)[::-1])
        assert algorithm.incumbent_score >= scores[0]

    def test_same_seed_same_run(self, config):
        first, _, _ = build(BiasedRandomKeyGeneticAlgorithm, config, seed=7)
        second, _, _ = build(BiasedRandomKeyGeneticAlgorithm, config, seed=7)
        first.run(20)
        second.run(20)
        assert first.incumbent == second.incumbent
        assert first.trajectory == second.trajectory

    def test_threaded_evaluation_does_not_change_the_run(self, config):
        serial, _, _ = build(BiasedRandomKeyGeneticAlgorithm, config, seed=3)
        threaded, _, _ = build(BiasedRandomKeyGeneticAlgorithm, config, seed=3, evaluation_workers=4)
        serial.run(15)
        threaded.run(15)
        assert serial.incumbent == threaded.incumbent
        assert serial.trajectory == threaded.trajectory

    def test_mutant_count_clamped_to_non_elite(self):
        config = GeneticConfig(chromosome_length=2, population_size=10, elite_fraction=0.5, mutant_fraction=0.9)
        algorithm, generator, crossover = build(BiasedRandomKeyGeneticAlgorithm, config)
        assert algorithm.mutant_size == 5
        algorithm.run(1)
        assert generator.calls == 10 + 5
        assert crossover.calls == 0

    def test_stopping_criterion(self, config):
        algorithm, _, _ = build(
            BiasedRandomKeyGeneticAlgorithm, config, stopping_criterion=StoppingCriterion(max_iterations=4)
        )
        assert algorithm.run_to_completion() == 5
        assert not algorithm.advance()


class TestGeneticAlgorithm:

    def test_epoch_call_counts(self, config):
        algorithm, generator, crossover = build(GeneticAlgorithm, config)
        algorithm.run(2)
        # Every non-elite is crossed, then a sample of them is overwritten.
        assert crossover.calls == 2 * 8
        assert generator.calls == 10 + 2 * 5

    def test_keeps_elite_and_improves(self, config):
        algorithm, _, _ = build(GeneticAlgorithm, config)
        elite = list(algorithm.population.elite(2))
        algorithm._reproduce()
        assert [algorithm.population[0], algorithm.population[1]] == elite
        algorithm.run(20)
        scores = [score for _, score in algorithm.trajectory]
        assert scores == sorted(scores, reverse=True)


class TestGeneticBatches:

    def test_brkga_batch(self):
        config = GeneticConfig(
            chromosome_length=3, population_size=8, elite_fraction=0.25, mutant_fraction=0.25, n_populations=3
        )
        generator = LockedGenerator(seed=11)

        batch = brkga_batch(config, sphere, CountingCrossover(), generator, Ordering.MIN, seed=11)
        assert len(batch) == 3
        assert generator.calls == 3 * 8
        assert all(isinstance(worker, BiasedRandomKeyGeneticAlgorithm) for worker in batch.workers)
        assert batch.run_steps(5) == [5, 5, 5]
        assert generator.calls == 3 * 8 + 3 * 5 * 2
        scores = [batch.incumbent_of(i).score for i in range(3)]
        assert batch.best_incumbent().score == min(scores)

    def test_genetic_batch(self):
        config = GeneticConfig(
            chromosome_length=3, population_size=6, elite_fraction=0.5, mutant_fraction=0.5, n_populations=2
        )

        def generator(individual):
            individual.values[:] = 0.25

        batch = genetic_batch(config, sphere, CountingCrossover(), generator, "max", seed=1)
        assert all(type(worker) is GeneticAlgorithm for worker in batch.workers)
        assert batch.ordering is Ordering.MAX
        assert batch.run_steps(3) == [3, 3]
