"""
Logging utilities for the genetic algorithms toolkit.

This module provides:
- Standard logging setup with console and optional file handlers
- ProgressReporter, which turns the solver's verbosity level into
  per-generation progress messages
"""

import logging
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Optional

PACKAGE_LOGGER = 'genetic_algorithms'

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


@dataclass
class GenerationSummary:
    """Progress information for one completed generation."""
    generation: int
    best_rank: Any
    generation_top_rank: Any
    improved: bool
    population_size: int
    average_rank: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


class ProgressReporter:
    """
    Reports solver progress according to a verbosity level.

    Verbosity levels:
    - 0: silent
    - 1: one INFO line per generation plus start/end messages
    - 2: additionally DEBUG statistics (average rank) per generation
    """

    def __init__(self, verbosity: int = 0, logger: Optional[logging.Logger] = None):
        """
        Initialize the reporter.

        Args:
            verbosity: Verbosity level (0, 1 or 2; larger values behave as 2)
            logger: Logger to write to (default: the solver module logger)
        """
        self.verbosity = max(0, int(verbosity))
        self.logger = logger or get_logger(f'{PACKAGE_LOGGER}.evolutionary.solver')
        self.improvements = 0

    @property
    def wants_statistics(self) -> bool:
        """Whether per-generation statistics should be computed."""
        return self.verbosity >= 2

    def log_run_start(self, num_iterations: int, population_size: int, initial_best_rank: Any):
        """Log the start of a run."""
        if self.verbosity < 1:
            return
        self.logger.info(
            f"Starting evolution: {num_iterations} generations, "
            f"population size {population_size}, initial best rank={initial_best_rank}"
        )

    def log_generation(self, summary: GenerationSummary):
        """
        Log one completed generation.

        Args:
            summary: GenerationSummary of the generation
        """
        if summary.improved:
            self.improvements += 1
        if self.verbosity < 1:
            return

        marker = " (improved)" if summary.improved else ""
        self.logger.info(
            f"Generation {summary.generation}: best rank={summary.best_rank} | "
            f"generation top={summary.generation_top_rank}{marker}"
        )
        if self.wants_statistics and summary.average_rank is not None:
            self.logger.debug(
                f"Generation {summary.generation} statistics: "
                f"population={summary.population_size} | average rank={summary.average_rank:.6g}"
            )

    def log_run_complete(self, num_iterations: int, best_rank: Any):
        """Log the end of a run."""
        if self.verbosity < 1:
            return
        self.logger.info(
            f"Evolution complete after {num_iterations} generations: "
            f"best rank={best_rank} ({self.improvements} improvements)"
        )


def setup_logging(
    log_dir: str = "results/logs",
    log_level: Any = "INFO",
    log_to_file: bool = False,
    log_to_console: bool = True,
) -> logging.Logger:
    """
    Set up standard logging configuration for the toolkit.

    Args:
        log_dir: Directory to store log files
        log_level: Logging level as string ('DEBUG', 'INFO', ...) or int
        log_to_file: Whether to log to file
        log_to_console: Whether to log to console

    Returns:
        Configured package logger
    """
    level_map = {
        'DEBUG': logging.DEBUG,
        'INFO': logging.INFO,
        'WARNING': logging.WARNING,
        'ERROR': logging.ERROR,
        'CRITICAL': logging.CRITICAL
    }
    if isinstance(log_level, int):
        log_level_int = log_level
    else:
        log_level_int = level_map.get(str(log_level).upper(), logging.INFO)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(log_level_int)

    # Clear existing handlers
    logger.handlers = []

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if log_to_console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_level_int)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_to_file:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path / 'genetic_algorithms.log', mode='a')
        file_handler.setLevel(log_level_int)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

        # Separate file for errors only
        error_handler = logging.FileHandler(log_path / 'errors.log', mode='a')
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(formatter)
        logger.addHandler(error_handler)

    logger.debug(f"Logging initialized at level {log_level}")

    return logger


def get_logger(name: str = PACKAGE_LOGGER) -> logging.Logger:
    """
    Get a logger instance by name.

    Args:
        name: Logger name (default: the package logger)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
