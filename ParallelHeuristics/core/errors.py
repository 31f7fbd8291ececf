"""
Exception types shared by every heuristic and by the batch orchestrator.
"""

from typing import Dict


class ConfigurationError(ValueError):
    """Raised synchronously by constructors when a configuration is invalid."""


class BatchExecutionError(RuntimeError):
    """
    Raised by a batch once every worker has joined and at least one of them
    failed. Workers that did not fail still completed their share of work.

    Attributes:
        failures: Mapping from worker index to the exception it raised.
    """

    def __init__(self, failures: Dict[int, BaseException]):
        self.failures = dict(failures)
        indices = ", ".join(str(i) for i in sorted(self.failures))
        first = self.failures[min(self.failures)]
        super().__init__(
            f"{len(self.failures)} worker(s) failed (indices: {indices}); "
            f"first failure: {type(first).__name__}: {first}"
        )

    @property
    def failed_indices(self):
        return sorted(self.failures)
