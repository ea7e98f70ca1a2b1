"""
Mutation operators for the genetic algorithm engine.

Mutations map one chromosome to another of the same length and may return
their input unchanged. Each operator owns a private random stream.
"""

import logging
from typing import Any, Dict, Optional

import numpy as np

from .chromosome import Chromosome
from .errors import InvalidConfigurationError

logger = logging.getLogger(__name__)


def bit_flip(chromosome: Chromosome, k_bf: int, rng: np.random.Generator) -> Chromosome:
    """
    Flip k_bf random genes of a chromosome (with replacement).

    This allows genes to be flipped multiple times, potentially canceling out.

    Args:
        chromosome: Chromosome to perturb
        k_bf: Number of bit flips to perform
        rng: Random generator used to draw the positions

    Returns:
        New chromosome (or the input itself when nothing is flipped)
    """
    if k_bf <= 0 or len(chromosome) == 0:
        return chromosome

    positions = rng.integers(0, len(chromosome), size=k_bf)
    return chromosome.flip(int(p) for p in positions)


class RandomMutate:
    """
    With probability ``prob``, flips ``num_bits`` random genes.

    Positions are drawn with replacement, so a mutated child may end up
    identical to its input.
    """

    def __init__(self, seed: Optional[int] = None, prob: float = 0.5, num_bits: int = 1):
        if not (0.0 <= prob <= 1.0):
            raise InvalidConfigurationError(f"Mutation probability must be in [0, 1], got {prob}")
        if num_bits < 0:
            raise InvalidConfigurationError(f"Number of mutated bits must be non-negative, got {num_bits}")
        self.prob = float(prob)
        self.num_bits = int(num_bits)
        self._rng = np.random.default_rng(seed)

    def __call__(self, chromosome: Chromosome) -> Chromosome:
        if self._rng.random() < self.prob:
            return bit_flip(chromosome, self.num_bits, self._rng)
        return chromosome


class PerBitMutate:
    """Flips every gene independently with probability ``rate``."""

    def __init__(self, seed: Optional[int] = None, rate: float = 0.01):
        if not (0.0 <= rate <= 1.0):
            raise InvalidConfigurationError(f"Mutation rate must be in [0, 1], got {rate}")
        self.rate = float(rate)
        self._rng = np.random.default_rng(seed)

    def __call__(self, chromosome: Chromosome) -> Chromosome:
        mask = self._rng.random(len(chromosome)) < self.rate
        if not mask.any():
            return chromosome
        return Chromosome(np.logical_xor(chromosome.bits, mask), copy=False)


MUTATION_TYPES = ('random', 'per_bit')


def create_mutation_from_config(config: Dict[str, Any], seed: int):
    """
    Create the mutation operator described by the 'mutation' config section.

    Args:
        config: Configuration dictionary
        seed: Seed of the mutation stream

    Returns:
        RandomMutate or PerBitMutate instance

    Raises:
        InvalidConfigurationError: If the mutation type is unknown
    """
    mut_config = config.get('mutation', {}) or {}
    mut_type = str(mut_config.get('type', 'random')).lower()

    if mut_type == 'random':
        return RandomMutate(
            seed,
            prob=float(mut_config.get('prob', 0.5)),
            num_bits=int(mut_config.get('num_bits', 1)),
        )
    if mut_type == 'per_bit':
        return PerBitMutate(seed, rate=float(mut_config.get('rate', 0.01)))

    raise InvalidConfigurationError(
        f"Unknown mutation type: {mut_type}. Options: {', '.join(MUTATION_TYPES)}"
    )
