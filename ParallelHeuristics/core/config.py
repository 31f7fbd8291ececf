"""
Configuration dataclasses consumed by heuristic and batch constructors.

Every dataclass validates itself in `__post_init__` and raises
ConfigurationError on invalid input, so a bad configuration fails at the
point it is built rather than inside a worker.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Type, TypeVar, Union

from .errors import ConfigurationError
from .stopping import StoppingCriterion
from .vector import Ordering

T = TypeVar("T")


@dataclass(frozen=True)
class GeneticConfig:
    """Population layout for the genetic variants."""
    chromosome_length: int
    population_size: int
    elite_fraction: float
    mutant_fraction: float
    n_populations: int = 1

    def __post_init__(self) -> None:
        if self.chromosome_length < 1:
            raise ConfigurationError("chromosome_length must be positive")
        if self.population_size < 1:
            raise ConfigurationError("population_size must be positive")
        if self.n_populations < 1:
            raise ConfigurationError("n_populations must be positive")
        if not 0.0 < self.elite_fraction <= 1.0:
            raise ConfigurationError("elite_fraction must be in (0, 1]")
        if not 0.0 <= self.mutant_fraction <= 1.0:
            raise ConfigurationError("mutant_fraction must be in [0, 1]")
        if self.elite_size < 1:
            raise ConfigurationError(
                f"elite_fraction * population_size = {self.elite_fraction * self.population_size:g} "
                "leaves no elite individual to act as crossover donor"
            )

    @property
    def elite_size(self) -> int:
        return int(self.elite_fraction * self.population_size)

    @property
    def mutant_size(self) -> int:
        return int(self.mutant_fraction * self.population_size)


@dataclass(frozen=True)
class AnnealingConfig:
    """Sawtooth temperature schedule for simulated annealing."""
    initial_temperature: float
    temperature_delta: float

    def __post_init__(self) -> None:
        if self.initial_temperature <= 0:
            raise ConfigurationError("initial_temperature must be positive")
        if self.temperature_delta < 0:
            raise ConfigurationError("temperature_delta must be non-negative")


@dataclass(frozen=True)
class TabuConfig:
    capacity: int = 150

    def __post_init__(self) -> None:
        if self.capacity < 1:
            raise ConfigurationError("Tabu list capacity must be greater than 0")


@dataclass(frozen=True)
class LocalSearchConfig:
    max_iterations: int

    def __post_init__(self) -> None:
        if self.max_iterations < 1:
            raise ConfigurationError("The maximum number of local-search iterations must be greater than 0")


@dataclass(frozen=True)
class StoppingConfig:
    """Thresholds of a StoppingCriterion; None disables a threshold."""
    max_iterations: Optional[int] = None
    max_iterations_since_improvement: Optional[int] = None
    time_limit: Optional[float] = None
    target_score: Optional[float] = None

    def build(self, ordering: Union[Ordering, str]) -> StoppingCriterion:
        return StoppingCriterion(
            Ordering.parse(ordering),
            max_iterations=self.max_iterations,
            max_iterations_since_improvement=self.max_iterations_since_improvement,
            time_limit=self.time_limit,
            target_score=self.target_score,
        )


@dataclass(frozen=True)
class BatchConfig:
    """Number of independent runs and the seed base (worker i uses seed + i)."""
    n_workers: int
    seed: int = 0

    def __post_init__(self) -> None:
        if self.n_workers < 1:
            raise ConfigurationError("At least 1 worker is required")


def config_from_dict(cls: Type[T], data: Mapping[str, Any]) -> T:
    """Builds a config dataclass from a mapping, rejecting unknown keys."""
    if not dataclasses.is_dataclass(cls):
        raise TypeError(f"{cls!r} is not a config dataclass")
    known = {f.name for f in dataclasses.fields(cls)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigurationError(f"Unknown {cls.__name__} option(s): {', '.join(unknown)}")
    try:
        return cls(**dict(data))
    except TypeError as exc:
        raise ConfigurationError(f"Invalid {cls.__name__} options: {exc}") from exc
