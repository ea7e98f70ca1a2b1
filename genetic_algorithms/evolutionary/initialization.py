"""Chromosome initializers used to build generation 0."""

import logging
from typing import Any, Dict, Optional

import numpy as np

from .chromosome import Chromosome
from .errors import InvalidConfigurationError

logger = logging.getLogger(__name__)


class RandomInitializer:
    """
    Produces random chromosomes where every gene is 1 with probability ``prob``.

    Stateful, one instance per thread.
    """

    def __init__(self, length: int, seed: Optional[int] = None, prob: float = 0.5):
        if length < 1:
            raise InvalidConfigurationError(f"Chromosome length must be positive, got {length}")
        if not (0.0 <= prob <= 1.0):
            raise InvalidConfigurationError(f"Initializer probability must be in [0, 1], got {prob}")
        self.length = int(length)
        self.prob = float(prob)
        self._rng = np.random.default_rng(seed)

    def __call__(self) -> Chromosome:
        bits = self._rng.random(self.length) < self.prob
        return Chromosome(bits, copy=False)


def create_initializer_from_config(config: Dict[str, Any], length: int, seed: int) -> RandomInitializer:
    """
    Create the initializer described by the 'initializer' config section.

    Args:
        config: Configuration dictionary
        length: Chromosome length of the run
        seed: Seed of the initializer stream

    Returns:
        Configured initializer
    """
    init_config = config.get('initializer', {}) or {}
    init_type = str(init_config.get('type', 'random')).lower()
    if init_type != 'random':
        raise InvalidConfigurationError(f"Unknown initializer type: {init_type}. Options: random")
    return RandomInitializer(length, seed, prob=float(init_config.get('prob', 0.5)))
