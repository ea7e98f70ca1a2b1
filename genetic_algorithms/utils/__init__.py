"""
Utilities module for the genetic algorithms toolkit.
"""

from .logging import setup_logging, get_logger, ProgressReporter, GenerationSummary

__all__ = [
    'setup_logging',
    'get_logger',
    'ProgressReporter',
    'GenerationSummary',
]
