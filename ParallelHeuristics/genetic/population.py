"""
Population container and the index working set used to sample mutants.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterator, List, Sequence

import numpy as np

from ..core.errors import ConfigurationError
from ..core.heuristic import Evaluator, evaluate_into
from ..core.vector import Ordering, SolutionVector

IndividualGenerator = Callable[[SolutionVector], None]


class IndexPool:
    """
    Bounded working set over a fixed range of indices.

    `draw` removes distinct indices by swapping the picked slot with the last
    available one, so no list removal by value is ever needed. `restore`
    returns every drawn index to the pool in O(1).
    """

    def __init__(self, start: int, stop: int):
        if stop < start:
            raise ConfigurationError(f"Invalid index range [{start}, {stop})")
        self._slots = np.arange(start, stop, dtype=np.int64)
        self._available = self._slots.shape[0]

    def __len__(self) -> int:
        return self._slots.shape[0]

    @property
    def available(self) -> int:
        return self._available

    def draw(self, k: int, rng: np.random.Generator) -> List[int]:
        """Removes and returns `k` distinct indices chosen uniformly at random."""
        if k > self._available:
            raise ValueError(f"Cannot draw {k} indices, only {self._available} available")
        drawn: List[int] = []
        for _ in range(k):
            pick = int(rng.integers(self._available))
            last = self._available - 1
            self._slots[pick], self._slots[last] = self._slots[last], self._slots[pick]
            drawn.append(int(self._slots[last]))
            self._available = last
        return drawn

    def remaining(self) -> List[int]:
        """Indices not drawn since the last `restore`."""
        return [int(i) for i in self._slots[: self._available]]

    def restore(self) -> None:
        self._available = self._slots.shape[0]


class Population:
    """
    Fixed-size ordered collection of individuals.

    After `sort`, index 0 holds the best individual under the ordering and the
    first `elite_size` indices form the elite.
    """

    def __init__(self, individuals: Sequence[SolutionVector], ordering: Ordering):
        if not individuals:
            raise ConfigurationError("A population needs at least one individual")
        self._individuals: List[SolutionVector] = list(individuals)
        self.ordering = ordering

    @classmethod
    def generate(
        cls,
        size: int,
        chromosome_length: int,
        generator: IndividualGenerator,
        ordering: Ordering,
    ) -> "Population":
        individuals = []
        for _ in range(size):
            individual = SolutionVector.zeros(chromosome_length)
            generator(individual)
            individuals.append(individual)
        return cls(individuals, ordering)

    def __len__(self) -> int:
        return len(self._individuals)

    def __getitem__(self, index: int) -> SolutionVector:
        return self._individuals[index]

    def __setitem__(self, index: int, individual: SolutionVector) -> None:
        if len(individual) != len(self._individuals[index]):
            raise ValueError(
                f"Individual length {len(individual)} does not match chromosome length "
                f"{len(self._individuals[index])}"
            )
        self._individuals[index] = individual

    def __iter__(self) -> Iterator[SolutionVector]:
        return iter(self._individuals)

    def evaluate(self, evaluator: Evaluator, workers: int = 1) -> None:
        """Scores every individual; individuals are independent, so this may run in threads."""
        if workers > 1:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                scores = list(pool.map(evaluator, self._individuals))
            for individual, score in zip(self._individuals, scores):
                individual.score = float(score)
        else:
            for individual in self._individuals:
                evaluate_into(individual, evaluator)

    def sort(self) -> None:
        self._individuals.sort(key=lambda individual: self.ordering.sort_key(individual.score))

    def best(self) -> SolutionVector:
        return self._individuals[0]

    def elite(self, elite_size: int) -> List[SolutionVector]:
        return self._individuals[:elite_size]

    def scores(self) -> np.ndarray:
        return np.fromiter((individual.score for individual in self._individuals), dtype=np.float64)
