import sys
from pathlib import Path

import numpy as np
import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from ParallelHeuristics.core import ConfigurationError, Ordering, SolutionVector, TabuConfig
from ParallelHeuristics.neighborhood import (
    DEFAULT_TABU_LIST_SIZE,
    TabuList,
    TabuSearch,
    tabu_search_batch,
)


def first_coordinate(vector):
    return float(vector[0])


def all_points(vector):
    return [SolutionVector([0.0]), SolutionVector([1.0]), SolutionVector([2.0])]


def line(vector):
    return [SolutionVector(vector.values - 1.0), SolutionVector(vector.values + 1.0)]


class TestTabuList:

    def test_bounded_fifo(self):
        tabu = TabuList(2)
        for value in (1.0, 2.0, 3.0):
            tabu.add(SolutionVector([value]))
        assert len(tabu) == 2
        assert SolutionVector([1.0]) not in tabu
        assert SolutionVector([3.0], score=42.0) in tabu

    def test_default_capacity(self):
        assert TabuList().capacity == DEFAULT_TABU_LIST_SIZE == 150

    def test_zero_capacity_rejected(self):
        with pytest.raises(ConfigurationError):
            TabuList(0)
        with pytest.raises(ConfigurationError):
            TabuConfig(0)


class TestTabuSearch:

    def test_tabu_vector_is_never_revisited(self):
        search = TabuSearch(
            SolutionVector([1.0]), first_coordinate, all_points, TabuConfig(1), rng=np.random.default_rng(0)
        )
        previous = None
        for _ in range(6):
            assert search.advance()
            assert list(search.tabu_list) == [search.current]
            if previous is not None:
                assert search.current != previous
            previous = search.current.copy()
        # Alternates between the two best points.
        assert search.incumbent_score == 0.0

    def test_clears_tabu_list_when_everything_is_tabu(self):
        search = TabuSearch(
            SolutionVector([5.0]), first_coordinate, lambda v: [SolutionVector([1.0])], TabuConfig(3),
            rng=np.random.default_rng(0),
        )
        assert search.advance()
        assert len(search.tabu_list) == 1
        assert search.advance()
        assert len(search.tabu_list) == 0
        assert not search.halted
        assert search.iterations == 2
        assert search.advance()
        assert search.current[0] == 1.0

    def test_empty_neighborhood_halts(self):
        search = TabuSearch(SolutionVector([5.0]), first_coordinate, lambda v: [], rng=np.random.default_rng(0))
        assert not search.advance()
        assert search.halted
        assert search.iterations == 0
        assert search.run(5) == 0

    def test_descends_on_a_line(self):
        search = TabuSearch(
            SolutionVector([10.0]), lambda v: (v[0] - 3.0) ** 2, line, rng=np.random.default_rng(0)
        )
        search.run(7)
        assert search.incumbent[0] == 3.0
        assert search.incumbent_score == 0.0

    def test_ties_are_broken_at_random(self):
        chosen = set()
        for seed in range(20):
            search = TabuSearch(
                SolutionVector([0.0]), lambda v: 1.0,
                lambda v: [SolutionVector([1.0]), SolutionVector([2.0]), SolutionVector([3.0])],
                rng=np.random.default_rng(seed),
            )
            search.advance()
            chosen.add(search.current[0])
        assert len(chosen) > 1
        assert chosen <= {1.0, 2.0, 3.0}

    def test_tie_prefix_excludes_worse_neighbors(self):
        for seed in range(10):
            search = TabuSearch(
                SolutionVector([0.0]), first_coordinate,
                lambda v: [SolutionVector([5.0]), SolutionVector([4.0]), SolutionVector([6.0])],
                Ordering.MAX, rng=np.random.default_rng(seed),
            )
            search.advance()
            assert search.current[0] == 6.0

    def test_threaded_evaluation_matches_serial(self):
        runs = []
        for workers in (1, 3):
            search = TabuSearch(
                SolutionVector([10.0]), lambda v: abs(v[0] - 2.5), line,
                rng=np.random.default_rng(4), evaluation_workers=workers,
            )
            search.run(20)
            runs.append(search.trajectory)
        assert runs[0] == runs[1]


class TestTabuSearchBatch:

    def test_runs_every_worker(self):
        starts = [SolutionVector([float(v)]) for v in (10.0, -4.0, 7.0)]
        batch = tabu_search_batch(starts, lambda v: (v[0] - 3.0) ** 2, line, TabuConfig(5), seed=2)
        assert batch.run_steps(15) == [15, 15, 15]
        assert batch.best_incumbent()[0] == 3.0

    def test_worker_count_must_match_initial_solutions(self):
        with pytest.raises(ConfigurationError):
            tabu_search_batch([SolutionVector([1.0])], first_coordinate, line, n_workers=3)
        with pytest.raises(ConfigurationError):
            tabu_search_batch([], first_coordinate, line)
