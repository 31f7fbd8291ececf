"""
Logging and seeding helpers.
"""

import logging
from pathlib import Path
from typing import Optional, Union

import numpy as np


def setup_logging(
    name: str = "ParallelHeuristics",
    level: int = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """Sets up a named logger with a stream handler and an optional file handler."""
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Prevent adding multiple handlers if the logger already exists
    if not logger.handlers:
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - [%(threadName)s] %(message)s')
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)

        if log_file is not None:
            log_path = Path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_path, mode='a')  # Append mode
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger


def worker_rng(seed: int, index: int) -> np.random.Generator:
    """Random generator for the `index`-th worker of a batch seeded with `seed`."""
    return np.random.default_rng(seed + index)
