"""
Selection mechanisms for the genetic algorithm engine.

This module implements:
- Roulette wheel selection: parents sampled with probability proportional
  to their (shifted) rank
- Tournament selection: each parent is the best of a random tournament

Both are callables with the contract ``(population, count) -> List[Couple]``
and return exactly ``count`` couples. Each instance owns a private random
stream and is not safe for concurrent use.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from .chromosome import Couple, Hypothesis
from .errors import InvalidConfigurationError
from .population import Population

logger = logging.getLogger(__name__)


def _normalize_probs(weights: np.ndarray) -> np.ndarray:
    total = float(np.sum(weights))
    if total > 0 and np.isfinite(total):
        return weights / total
    if len(weights):
        return np.full(len(weights), 1.0 / len(weights))
    return weights


def roulette_probabilities(ranks: np.ndarray) -> np.ndarray:
    """
    Compute roulette wheel probabilities from ranks.

    Ranks are shifted so the worst hypothesis gets weight zero; when every rank
    is equal the distribution falls back to uniform. Hypotheses ranked +inf
    share all the weight, and -inf ranks get none.

    Args:
        ranks: Array of ranks (higher is better)

    Returns:
        Probability array summing to 1.0
    """
    ranks = np.asarray(ranks, dtype=float)
    if ranks.size == 0:
        return ranks
    top = np.isposinf(ranks)
    if top.any():
        return _normalize_probs(top.astype(float))
    finite = np.isfinite(ranks)
    if not finite.any():
        return _normalize_probs(np.zeros(ranks.size))
    weights = np.where(finite, ranks - np.min(ranks[finite]), 0.0)
    return _normalize_probs(weights)


class RouletteWheelSelection:
    """Fitness-proportional couple selection."""

    def __init__(self, seed: Optional[int] = None):
        self._rng = np.random.default_rng(seed)

    def __call__(self, population: Population, count: int) -> List[Couple]:
        """
        Sample ``count`` couples with probability proportional to rank.

        Args:
            population: Current population (must not be empty)
            count: Number of couples to produce

        Returns:
            List of (parent_a, parent_b) couples

        Raises:
            ValueError: If the population is empty
        """
        if len(population) == 0:
            raise ValueError("Cannot perform roulette selection on empty population")

        hypotheses = population.hypotheses
        probs = roulette_probabilities(population.ranks())
        indices = self._rng.choice(len(hypotheses), size=(count, 2), p=probs)
        couples = [
            (hypotheses[i].chromosome, hypotheses[j].chromosome)
            for i, j in indices
        ]
        logger.debug(f"Roulette selection: {count} couples from {len(hypotheses)} hypotheses")
        return couples


class TournamentSelection:
    """
    Couple selection by tournament.

    Useful when ranks are not positive or span several orders of magnitude,
    since only their order matters.
    """

    def __init__(self, seed: Optional[int] = None, tournament_size: int = 3):
        """
        Initialize tournament selection.

        Args:
            seed: Seed of the private random stream
            tournament_size: Number of hypotheses competing for each parent slot

        Raises:
            InvalidConfigurationError: If tournament_size is smaller than 1
        """
        if tournament_size < 1:
            raise InvalidConfigurationError(f"Tournament size must be at least 1, got {tournament_size}")
        self.tournament_size = int(tournament_size)
        self._rng = np.random.default_rng(seed)

    def _tournament(self, hypotheses: Sequence[Hypothesis]) -> Hypothesis:
        size = min(self.tournament_size, len(hypotheses))
        competitors = self._rng.choice(len(hypotheses), size=size, replace=False)
        # Hypotheses are sorted best-first, so the smallest index wins.
        return hypotheses[int(np.min(competitors))]

    def __call__(self, population: Population, count: int) -> List[Couple]:
        """
        Produce ``count`` couples, each parent winning its own tournament.

        Args:
            population: Current population (must not be empty)
            count: Number of couples to produce

        Returns:
            List of (parent_a, parent_b) couples

        Raises:
            ValueError: If the population is empty
        """
        if len(population) == 0:
            raise ValueError("Cannot perform tournament selection on empty population")

        hypotheses = population.hypotheses
        couples = []
        for _ in range(count):
            first = self._tournament(hypotheses)
            second = self._tournament(hypotheses)
            couples.append((first.chromosome, second.chromosome))
        logger.debug(f"Tournament selection: {count} couples, tournament size {self.tournament_size}")
        return couples


SELECTION_TYPES = ('roulette', 'tournament')


def create_selection_from_config(config: Dict[str, Any], seed: int):
    """
    Create the selection operator described by the 'selection' config section.

    Args:
        config: Configuration dictionary
        seed: Seed of the selection stream

    Returns:
        RouletteWheelSelection or TournamentSelection instance

    Raises:
        InvalidConfigurationError: If the selection type is unknown
    """
    sel_config = config.get('selection', {}) or {}
    sel_type = str(sel_config.get('type', 'roulette')).lower()

    if sel_type == 'roulette':
        return RouletteWheelSelection(seed)
    if sel_type == 'tournament':
        return TournamentSelection(seed, tournament_size=int(sel_config.get('tournament_size', 3)))

    raise InvalidConfigurationError(
        f"Unknown selection type: {sel_type}. Options: {', '.join(SELECTION_TYPES)}"
    )
