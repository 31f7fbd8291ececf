"""
Batch: runs several independent heuristics concurrently and reduces their
results.

Each worker gets its own thread for the duration of a `run_steps` call. The
call returns only after every worker has joined, and results are read only
after that join. Strategy objects shared by the workers (evaluator, crossover,
generators, neighborhoods) are invoked concurrently without serialization;
stateful strategies must synchronize themselves.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from .config import BatchConfig
from .errors import BatchExecutionError, ConfigurationError
from .heuristic import Heuristic
from .utils import worker_rng
from .vector import Ordering, SolutionVector

HeuristicFactory = Callable[[int, np.random.Generator], Heuristic]

_LOGGER = logging.getLogger(__name__)


class Batch:
    """Fixed-size group of sibling heuristics sharing one ordering."""

    def __init__(
        self,
        workers: Sequence[Heuristic],
        ordering: Ordering,
        *,
        logger: Optional[logging.Logger] = None,
    ):
        workers = tuple(workers)
        if not workers:
            raise ConfigurationError("At least 1 worker is required")
        if len({id(w) for w in workers}) != len(workers):
            raise ConfigurationError("A heuristic instance can belong to a batch only once")
        self.ordering = Ordering.parse(ordering)
        for index, worker in enumerate(workers):
            if worker.ordering is not self.ordering:
                raise ConfigurationError(
                    f"Worker {index} uses ordering {worker.ordering.name}, batch uses {self.ordering.name}"
                )
        self._workers = workers
        self._run_lock = threading.Lock()
        self._cancel_event = threading.Event()
        self.logger = logger or _LOGGER

    @classmethod
    def from_config(
        cls,
        factory: HeuristicFactory,
        config: BatchConfig,
        ordering: Ordering,
        **kwargs,
    ) -> "Batch":
        """
        Builds `config.n_workers` heuristics, worker `i` receiving a generator
        seeded with `config.seed + i` so that every run is reproducible on its own.
        """
        workers = [factory(i, worker_rng(config.seed, i)) for i in range(config.n_workers)]
        return cls(workers, ordering, **kwargs)

    @classmethod
    def from_factory(
        cls,
        factory: HeuristicFactory,
        n_workers: int,
        seed: int,
        ordering: Ordering,
        **kwargs,
    ) -> "Batch":
        return cls.from_config(factory, BatchConfig(n_workers, seed), ordering, **kwargs)

    # Execution ----------------------------------------------------------------

    def run_steps(
        self,
        steps: Optional[int] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> List[int]:
        """
        Advances every worker `steps` times (fewer if its stopping criterion
        fires), or runs every worker to completion if `steps` is None.

        Blocks until all workers have joined. Only one call runs at a time on
        a batch; concurrent callers wait for the current call to finish.

        Args:
            steps: Number of steps per worker, or None to run to completion.
            cancel_event: Optional external event; setting it (or calling
                `cancel`) stops every worker before its next step.

        Returns:
            The number of steps each worker actually performed.

        Raises:
            BatchExecutionError: If any worker raised. Raised after the join,
                once the other workers finished their own work.
        """
        if steps is not None and steps < 0:
            raise ConfigurationError("steps must be non-negative")
        with self._run_lock:
            self._cancel_event.clear()
            stop_event = self._cancel_event
            if cancel_event is not None:
                stop_event = _AnyEvent(self._cancel_event, cancel_event)

            label = "completion" if steps is None else f"{steps} step(s)"
            self.logger.info("Running %d worker(s) for %s", len(self._workers), label)

            performed: List[int] = [0] * len(self._workers)
            failures: Dict[int, BaseException] = {}
            with ThreadPoolExecutor(
                max_workers=len(self._workers), thread_name_prefix="heuristic-worker"
            ) as pool:
                futures = [
                    pool.submit(worker.run, steps, stop_event) for worker in self._workers
                ]
                # Futures are collected in submission order; the executor joins on exit.
                for index, future in enumerate(futures):
                    try:
                        performed[index] = future.result()
                    except Exception as exc:
                        failures[index] = exc
                        self.logger.error("Worker %d failed: %s: %s", index, type(exc).__name__, exc)
                    else:
                        self.logger.debug(
                            "Worker %d finished %d step(s), incumbent %.6g",
                            index, performed[index], self._workers[index].incumbent_score,
                        )

            if failures:
                error = BatchExecutionError(failures)
                raise error from failures[min(failures)]

            self.logger.info(
                "Batch finished: best score %.6g, steps per worker %s",
                self._best_worker()[1].incumbent_score, performed,
            )
            return performed

    def run_to_completion(self, cancel_event: Optional[threading.Event] = None) -> List[int]:
        return self.run_steps(None, cancel_event)

    def cancel(self) -> None:
        """Asks the in-flight `run_steps` call to stop every worker between steps."""
        self._cancel_event.set()

    # Queries --------------------------------------------------------------------

    @property
    def workers(self) -> Tuple[Heuristic, ...]:
        return self._workers

    def __len__(self) -> int:
        return len(self._workers)

    def _rank(self, worker: Heuristic, fewest_iterations: bool = True) -> Tuple[Tuple[bool, float], int]:
        to_incumbent = worker.iterations_to_incumbent
        return (
            self.ordering.sort_key(worker.incumbent_score),
            to_incumbent if fewest_iterations else -to_incumbent,
        )

    def _best_worker(self, fewest_iterations: bool = True) -> Tuple[int, Heuristic]:
        return min(
            enumerate(self._workers),
            key=lambda item: self._rank(item[1], fewest_iterations),
        )

    def best_incumbent(self) -> SolutionVector:
        """Best incumbent across workers; ties go to the fewest iterations-to-incumbent."""
        return self._best_worker()[1].incumbent

    def best_index(self) -> int:
        return self._best_worker()[0]

    def incumbent_of(self, index: int) -> SolutionVector:
        return self._workers[index].incumbent

    def iterations_to_incumbent_of(self, index: int) -> int:
        return self._workers[index].iterations_to_incumbent

    def iterations_of(self, index: int) -> int:
        return self._workers[index].iterations

    def min_iterations_to_global_best(self) -> int:
        """Iterations-to-incumbent of the best worker (fewest-iterations tie-break)."""
        return self._best_worker()[1].iterations_to_incumbent

    def max_total_iterations_among_best_reachers(self) -> int:
        """
        Total iterations of the best worker when ties on score go to the worker
        that needed the most iterations to reach its incumbent.
        """
        return self._best_worker(fewest_iterations=False)[1].iterations

    def history_of_best(self) -> Mapping[float, int]:
        """History of the best worker (fewest-iterations tie-break)."""
        return self._best_worker()[1].history

    def __repr__(self) -> str:
        return f"Batch(workers={len(self._workers)}, ordering={self.ordering.name})"


class _AnyEvent:
    """Read-only view that is set when any of the wrapped events is set."""

    def __init__(self, *events: threading.Event):
        self._events = events

    def is_set(self) -> bool:
        return any(event.is_set() for event in self._events)
