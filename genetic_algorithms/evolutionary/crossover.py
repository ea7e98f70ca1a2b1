"""
Crossover operators for the genetic algorithm engine.

This module implements:
- RandomSplitCrossOver: single-point recombination at a random position,
  with a random choice of which parent supplies the prefix
- RandomMixCrossOver: uniform recombination, one fair coin per gene
- CrossOverOnProbWrapper: gates any crossover with a crossover probability,
  returning one parent unmodified when recombination does not happen

Every operator owns a private numpy random Generator seeded once at
construction. Operators are stateful and NOT safe for concurrent use: create
one instance per thread or worker, each with its own seed.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple

import numpy as np

from .chromosome import Chromosome, check_same_length
from .errors import InvalidConfigurationError, LengthMismatchError

logger = logging.getLogger(__name__)


class CrossOver(ABC):
    """
    Base class for crossover operators.

    Subclasses implement ``_combine``; the public ``combine`` (and calling the
    operator directly) validates that both parents share the same length
    before any random number is drawn.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def combine(self, a: Chromosome, b: Chromosome) -> Chromosome:
        """
        Produce one child from two parents.

        Args:
            a: First parent (left untouched)
            b: Second parent (left untouched)

        Returns:
            Child chromosome with the same length as the parents

        Raises:
            LengthMismatchError: If the parents have different lengths
        """
        check_same_length(a, b)
        return self._combine(a, b)

    def __call__(self, a: Chromosome, b: Chromosome) -> Chromosome:
        return self.combine(a, b)

    @abstractmethod
    def _combine(self, a: Chromosome, b: Chromosome) -> Chromosome:
        """Combine two parents already known to have the same length."""


class RandomSplitCrossOver(CrossOver):
    """
    Crossover based on a random position-based split.

    A split position ``pos`` is sampled uniformly in ``[0, length)`` and then a
    fair coin decides the direction: on 0 the child takes ``a[:pos]`` followed
    by ``b[pos:]``, on 1 it takes ``b[:pos]`` followed by ``a[pos:]``.
    """

    def __init__(self, length: int, seed: Optional[int] = None):
        """
        Initialize the split crossover.

        Args:
            length: Chromosome length N shared by every parent
            seed: Seed of the private random stream

        Raises:
            InvalidConfigurationError: If length is not positive
        """
        if length < 1:
            raise InvalidConfigurationError(f"Chromosome length must be positive, got {length}")
        super().__init__(seed)
        self.length = int(length)

    def sample_split(self) -> Tuple[int, int]:
        """
        Draw the next split position and direction from the private stream.

        Returns:
            Tuple (pos, direction) with pos in [0, length) and direction in {0, 1}
        """
        pos = int(self._rng.integers(0, self.length))
        direction = int(self._rng.integers(0, 2))
        return pos, direction

    def _combine(self, a: Chromosome, b: Chromosome) -> Chromosome:
        if len(a) != self.length:
            raise LengthMismatchError(
                f"Expected chromosomes of length {self.length}, got {len(a)}"
            )
        pos, direction = self.sample_split()
        if direction == 0:
            prefix, suffix = a.bits, b.bits
        else:
            prefix, suffix = b.bits, a.bits
        child = np.concatenate((prefix[:pos], suffix[pos:]))
        return Chromosome(child, copy=False)


class RandomMixCrossOver(CrossOver):
    """
    Crossover based on random mixing of genes.

    Each gene comes from either parent with probability 0.5: a coin flip of 0
    copies the gene of ``a``, a flip of 1 copies the gene of ``b``.
    """

    def _combine(self, a: Chromosome, b: Chromosome) -> Chromosome:
        coins = self._rng.integers(0, 2, size=len(a))
        child = np.where(coins == 0, a.bits, b.bits)
        return Chromosome(child, copy=False)


class CrossOverOnProbWrapper(CrossOver):
    """
    Introduces a crossover probability over any crossover operator.

    With probability ``prob`` the wrapped operator produces the child;
    otherwise a fair coin returns parent ``a`` (0) or parent ``b`` (1)
    unmodified. Prefer the ``make_cross_over_on_prob`` helper for construction.
    """

    def __init__(self, seed: Optional[int], prob: float, crossover: CrossOver):
        """
        Initialize the probability wrapper.

        Args:
            seed: Seed of the private random stream (independent of the wrapped one)
            prob: Crossover probability in [0, 1]
            crossover: Operator invoked when recombination happens

        Raises:
            InvalidConfigurationError: If prob is outside [0, 1]
        """
        if not (0.0 <= prob <= 1.0):
            raise InvalidConfigurationError(f"Crossover probability must be in [0, 1], got {prob}")
        super().__init__(seed)
        self.prob = float(prob)
        self.crossover = crossover

    def _combine(self, a: Chromosome, b: Chromosome) -> Chromosome:
        if self._rng.random() < self.prob:
            return self.crossover(a, b)
        if int(self._rng.integers(0, 2)) == 0:
            return a
        return b


def make_cross_over_on_prob(seed: Optional[int], prob: float, crossover: CrossOver) -> CrossOverOnProbWrapper:
    """Helper for construction of CrossOverOnProbWrapper instances."""
    return CrossOverOnProbWrapper(seed, prob, crossover)


CROSSOVER_TYPES = ('split', 'mix')


def create_crossover_from_config(
    config: Dict[str, Any],
    length: int,
    seeds: Tuple[int, int]
) -> CrossOver:
    """
    Create a crossover operator from the 'crossover' config section.

    A ``probability`` other than 1.0 wraps the operator in a
    CrossOverOnProbWrapper seeded with the second seed.

    Args:
        config: Configuration dictionary with a 'crossover' section
        length: Chromosome length of the run
        seeds: Seeds for the operator and for the probability gate

    Returns:
        Configured crossover operator

    Raises:
        InvalidConfigurationError: If the crossover type is unknown
    """
    cx_config = config.get('crossover', {}) or {}
    cx_type = str(cx_config.get('type', 'split')).lower()
    probability = float(cx_config.get('probability', 1.0))

    if cx_type == 'split':
        crossover: CrossOver = RandomSplitCrossOver(length, seeds[0])
    elif cx_type == 'mix':
        crossover = RandomMixCrossOver(seeds[0])
    else:
        raise InvalidConfigurationError(
            f"Unknown crossover type: {cx_type}. Options: {', '.join(CROSSOVER_TYPES)}"
        )

    if probability != 1.0:
        crossover = make_cross_over_on_prob(seeds[1], probability, crossover)

    logger.debug(f"Created {cx_type} crossover (probability={probability})")
    return crossover
