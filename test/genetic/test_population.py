import sys
from pathlib import Path

import numpy as np
import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from ParallelHeuristics.core import Ordering, SolutionVector
from ParallelHeuristics.genetic import IndexPool, Population


def total(vector):
    return float(np.sum(vector.values))


class TestIndexPool:

    def test_draw_returns_distinct_indices_in_range(self):
        pool = IndexPool(3, 10)
        drawn = pool.draw(4, np.random.default_rng(0))
        assert len(set(drawn)) == 4
        assert all(3 <= i < 10 for i in drawn)
        assert pool.available == 3
        assert sorted(drawn + pool.remaining()) == list(range(3, 10))

    def test_restore_returns_every_index(self):
        pool = IndexPool(0, 5)
        pool.draw(5, np.random.default_rng(1))
        assert pool.remaining() == []
        pool.restore()
        assert pool.available == len(pool) == 5
        assert sorted(pool.remaining()) == [0, 1, 2, 3, 4]

    def test_overdraw_raises(self):
        pool = IndexPool(0, 2)
        with pytest.raises(ValueError):
            pool.draw(3, np.random.default_rng(0))

    def test_empty_draw(self):
        pool = IndexPool(4, 4)
        assert pool.draw(0, np.random.default_rng(0)) == []
        assert len(pool) == 0


class TestPopulation:

    @pytest.fixture
    def population(self):
        rng = np.random.default_rng(5)

        def generator(individual):
            individual.values[:] = rng.uniform(0, 1, len(individual))

        return Population.generate(12, 3, generator, Ordering.MIN)

    def test_generate(self, population):
        assert len(population) == 12
        assert all(len(individual) == 3 for individual in population)
        assert len({id(individual) for individual in population}) == 12

    def test_threaded_evaluation_matches_serial(self, population):
        population.evaluate(total)
        serial = population.scores().copy()
        for individual in population:
            individual.score = 0.0
        population.evaluate(total, workers=4)
        np.testing.assert_array_equal(population.scores(), serial)

    @pytest.mark.parametrize("ordering", [Ordering.MIN, Ordering.MAX])
    def test_sort_puts_best_first(self, population, ordering):
        population.ordering = ordering
        population.evaluate(total)
        population.sort()
        scores = population.scores()
        expected = np.sort(scores) if ordering is Ordering.MIN else np.sort(scores)[::-1]
        np.testing.assert_array_equal(scores, expected)
        assert population.best() is population[0]
        assert population.elite(3) == [population[0], population[1], population[2]]

    def test_setitem_checks_length(self, population):
        population[0] = SolutionVector([1.0, 2.0, 3.0])
        with pytest.raises(ValueError):
            population[0] = SolutionVector([1.0])

    @pytest.mark.parametrize("ordering,best", [(Ordering.MIN, 1.0), (Ordering.MAX, 3.0)])
    def test_nan_scored_individual_sorts_last(self, ordering, best):
        population = Population([SolutionVector([s]) for s in (3.0, float("nan"), 1.0, 2.0)], ordering)
        population.evaluate(lambda v: float(v[0]))
        population.sort()
        assert population.best().score == best
        assert np.isnan(population[len(population) - 1].score)
