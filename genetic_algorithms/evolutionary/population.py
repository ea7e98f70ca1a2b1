"""
Population storage for the genetic algorithm engine.

A Population holds the hypotheses of one generation, each chromosome paired
with the rank computed by the rank function when it was pushed. Hypotheses are
kept in non-increasing rank order at all times; among equal ranks the earliest
pushed comes first, so ``top()`` is stable under ties.
"""

import logging
from typing import Any, Callable, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from .chromosome import Chromosome, Couple, Hypothesis
from .errors import (
    InvalidConfigurationError,
    InvalidRankError,
    LengthMismatchError,
    SelectionError,
)

logger = logging.getLogger(__name__)

RankFunction = Callable[[Chromosome], Any]
Initializer = Callable[[], Chromosome]


class Population:
    """
    Ranked, ordered collection of hypotheses for one generation.

    Attributes:
        rank_func: Callable mapping a chromosome to its rank (higher is better)
    """

    def __init__(self, rank_func: RankFunction):
        """
        Initialize an empty population.

        Args:
            rank_func: Rank function applied to every pushed chromosome
        """
        self.rank_func = rank_func
        self._hypotheses: List[Hypothesis] = []

    def init(self, initializer: Initializer, size: int) -> None:
        """
        Fill the population with ``size`` chromosomes from the initializer.

        Any previous content is discarded first.

        Args:
            initializer: Nullary callable returning a new chromosome
            size: Number of chromosomes to create

        Raises:
            InvalidConfigurationError: If size is smaller than 1
        """
        if size < 1:
            raise InvalidConfigurationError(f"Population size must be at least 1, got {size}")
        self.reset()
        for _ in range(size):
            self.push(initializer())
        logger.debug(f"Initialized population with {size} chromosomes "
                     f"(top rank={self.top().rank})")

    def push(self, chromosome: Chromosome) -> Hypothesis:
        """
        Rank a chromosome and insert it keeping the rank order.

        Args:
            chromosome: Chromosome to store

        Returns:
            The inserted Hypothesis

        Raises:
            LengthMismatchError: If its length differs from the stored chromosomes
            InvalidRankError: If the rank function returned NaN
        """
        if self._hypotheses and len(chromosome) != self.chromosome_length:
            raise LengthMismatchError(
                f"Cannot push chromosome of length {len(chromosome)} into a population "
                f"of length {self.chromosome_length}"
            )

        rank = self.rank_func(chromosome)
        if isinstance(rank, (float, np.floating)) and np.isnan(rank):
            raise InvalidRankError(f"Rank function returned NaN for {chromosome!r}")

        hypothesis = Hypothesis(chromosome, rank)
        self._hypotheses.insert(self._insertion_index(rank), hypothesis)
        return hypothesis

    def _insertion_index(self, rank: Any) -> int:
        # First index whose rank is strictly lower, so equal ranks keep push order.
        lo, hi = 0, len(self._hypotheses)
        while lo < hi:
            mid = (lo + hi) // 2
            if self._hypotheses[mid].rank < rank:
                hi = mid
            else:
                lo = mid + 1
        return lo

    def top(self) -> Hypothesis:
        """
        Get the best hypothesis of the population.

        Returns:
            Hypothesis with the highest rank (earliest pushed among ties)

        Raises:
            ValueError: If the population is empty
        """
        if not self._hypotheses:
            raise ValueError("Cannot get top hypothesis of an empty population")
        return self._hypotheses[0]

    def select(
        self,
        selection: Callable[['Population', int], Sequence[Couple]],
        count: int
    ) -> List[Couple]:
        """
        Ask a selection operator for ``count`` couples of parents.

        Args:
            selection: Callable (population, count) -> sequence of couples
            count: Number of couples requested

        Returns:
            List of couples in the order produced by the selection operator

        Raises:
            SelectionError: If the operator returned a different number of couples
        """
        if count <= 0:
            return []
        couples = list(selection(self, count))
        if len(couples) != count:
            raise SelectionError(f"Selection returned {len(couples)} couples, expected {count}")
        return couples

    def reset(self) -> None:
        """Remove every hypothesis, keeping the rank function."""
        self._hypotheses.clear()

    @property
    def hypotheses(self) -> Tuple[Hypothesis, ...]:
        """Hypotheses in non-increasing rank order."""
        return tuple(self._hypotheses)

    @property
    def chromosome_length(self) -> Optional[int]:
        """Length shared by the stored chromosomes, None when empty."""
        if not self._hypotheses:
            return None
        return len(self._hypotheses[0].chromosome)

    def ranks(self) -> np.ndarray:
        """Ranks as a float array, in the same order as ``hypotheses``."""
        return np.array([h.rank for h in self._hypotheses], dtype=float)

    def get_average_rank(self) -> float:
        """Mean rank of the population (0.0 when empty)."""
        if not self._hypotheses:
            return 0.0
        return float(np.mean(self.ranks()))

    def __len__(self) -> int:
        return len(self._hypotheses)

    def __iter__(self) -> Iterator[Hypothesis]:
        return iter(self._hypotheses)

    def __getitem__(self, index: int) -> Hypothesis:
        return self._hypotheses[index]
