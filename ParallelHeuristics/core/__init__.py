"""
Execution contract shared by every heuristic: solution vectors, orderings,
progress bookkeeping, stopping criteria and the batch orchestrator.
"""

from .batch import Batch, HeuristicFactory
from .config import (
    AnnealingConfig,
    BatchConfig,
    GeneticConfig,
    LocalSearchConfig,
    StoppingConfig,
    TabuConfig,
    config_from_dict,
)
from .errors import BatchExecutionError, ConfigurationError
from .heuristic import Evaluator, Heuristic, evaluate_into
from .progress import ProgressTracker
from .stopping import StoppingCriterion, never_stop
from .utils import setup_logging, worker_rng
from .vector import Ordering, SolutionVector

__all__ = [
    'Batch', 'HeuristicFactory',
    'AnnealingConfig', 'BatchConfig', 'GeneticConfig', 'LocalSearchConfig',
    'StoppingConfig', 'TabuConfig', 'config_from_dict',
    'BatchExecutionError', 'ConfigurationError',
    'Evaluator', 'Heuristic', 'evaluate_into',
    'ProgressTracker',
    'StoppingCriterion', 'never_stop',
    'setup_logging', 'worker_rng',
    'Ordering', 'SolutionVector',
]
