"""
Decoding helpers and demonstration rank functions.

Rank functions map a chromosome to a scalar where higher is better. The
problems registered here are small benchmarks used by the command line tool
and by the test suite:

- onemax: number of genes set to 1
- float_max: decoded value in [low, high], maximized at the upper bound
- float_peak: negative squared distance of the decoded value to a target
"""

import logging
from typing import Any, Callable, Dict

import numpy as np

from .evolutionary.chromosome import Chromosome
from .evolutionary.errors import InvalidConfigurationError

logger = logging.getLogger(__name__)


def decode_float(chromosome: Chromosome, low: float, high: float) -> float:
    """
    Decode a chromosome as a real number in ``[low, high]``.

    The bits are read as an unsigned big-endian integer and scaled linearly,
    so all-zero maps to ``low`` and all-one maps to ``high``.

    Args:
        chromosome: Chromosome to decode
        low: Lower bound of the decoded range
        high: Upper bound of the decoded range

    Returns:
        Decoded value
    """
    if len(chromosome) == 0:
        return float(low)
    max_value = (1 << len(chromosome)) - 1
    normalized = chromosome.to_int() / max_value
    return float(low + normalized * (high - low))


class OneMax:
    """Rank is the number of genes set to 1."""

    def __call__(self, chromosome: Chromosome) -> float:
        return float(chromosome.count_ones())


class FloatFunctionRank:
    """
    Rank computed by applying ``func`` to the decoded chromosome value.

    Attributes:
        func: Objective applied to the decoded float
        low: Lower bound of the decoded range
        high: Upper bound of the decoded range
    """

    def __init__(self, func: Callable[[float], float], low: float = -5.0, high: float = 5.0):
        if high <= low:
            raise InvalidConfigurationError(f"Invalid decoding range: [{low}, {high}]")
        self.func = func
        self.low = float(low)
        self.high = float(high)

    def decode(self, chromosome: Chromosome) -> float:
        return decode_float(chromosome, self.low, self.high)

    def __call__(self, chromosome: Chromosome) -> float:
        return float(self.func(self.decode(chromosome)))


def _make_onemax(problem_config: Dict[str, Any]) -> Callable[[Chromosome], float]:
    return OneMax()


def _make_float_max(problem_config: Dict[str, Any]) -> Callable[[Chromosome], float]:
    return FloatFunctionRank(
        lambda x: x,
        low=problem_config.get('min_value', -5.0),
        high=problem_config.get('max_value', 5.0),
    )


def _make_float_peak(problem_config: Dict[str, Any]) -> Callable[[Chromosome], float]:
    target = float(problem_config.get('target', 1.5))
    return FloatFunctionRank(
        lambda x: -float(np.square(x - target)),
        low=problem_config.get('min_value', -5.0),
        high=problem_config.get('max_value', 5.0),
    )


PROBLEMS: Dict[str, Callable[[Dict[str, Any]], Callable[[Chromosome], float]]] = {
    'onemax': _make_onemax,
    'float_max': _make_float_max,
    'float_peak': _make_float_peak,
}


def create_rank_function_from_config(config: Dict[str, Any]) -> Callable[[Chromosome], float]:
    """
    Create the rank function named in the 'problem' config section.

    Args:
        config: Configuration dictionary

    Returns:
        Rank function callable

    Raises:
        InvalidConfigurationError: If the problem name is unknown
    """
    problem_config = config.get('problem', {}) or {}
    name = str(problem_config.get('name', 'onemax')).lower()
    if name not in PROBLEMS:
        raise InvalidConfigurationError(
            f"Unknown problem: {name}. Options: {', '.join(sorted(PROBLEMS))}"
        )
    logger.debug(f"Using problem '{name}'")
    return PROBLEMS[name](problem_config)
