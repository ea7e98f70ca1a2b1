"""
Exception types raised by the genetic algorithm engine.

All of them derive from ValueError so that callers validating inputs the
usual way keep working, and from GeneticAlgorithmError so that engine
failures can be caught as a group.
"""


class GeneticAlgorithmError(Exception):
    """Base class for every error raised by the engine."""


class LengthMismatchError(GeneticAlgorithmError, ValueError):
    """Chromosomes taking part in one operation have different lengths."""


class InvalidConfigurationError(GeneticAlgorithmError, ValueError):
    """A solver, operator or config file parameter is out of range."""


class InvalidRankError(GeneticAlgorithmError, ValueError):
    """A rank function returned a value without a total order (NaN)."""


class SelectionError(GeneticAlgorithmError, ValueError):
    """A selection operator returned the wrong number of couples."""
