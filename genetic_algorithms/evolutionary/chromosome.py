"""
Chromosome (genotype) representation for the genetic algorithm engine.

A chromosome is a fixed-length, immutable bit vector backed by a read-only
numpy boolean array. Every transformation (crossover, mutation, bit writes)
produces a new instance, so chromosomes can be shared freely between
populations and hypotheses without copying.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, Sequence, Tuple, Union

import numpy as np

from .errors import LengthMismatchError

logger = logging.getLogger(__name__)


class Chromosome:
    """
    Fixed-length immutable bit vector representing one candidate solution.

    Construction copies the source bits by default. Passing ``copy=False``
    adopts a transient numpy buffer as-is (the buffer is frozen in place), which
    is how operators hand over freshly synthesized children without an extra
    copy.

    Attributes:
        bits: Read-only numpy boolean array with one entry per gene
    """

    __slots__ = ('_bits',)

    def __init__(self, bits: Union[Sequence[Any], np.ndarray], copy: bool = True):
        """
        Initialize a chromosome from a bit sequence.

        Args:
            bits: Sequence of truthy/falsy values or a numpy array
            copy: Copy the source (default) or adopt it without copying

        Raises:
            ValueError: If the bits do not form a one-dimensional sequence
        """
        if isinstance(bits, Chromosome):
            array = bits._bits
        elif copy:
            array = np.array(bits, dtype=bool)
        else:
            array = np.asarray(bits, dtype=bool)

        if array.ndim != 1:
            raise ValueError(f"Chromosome bits must be one-dimensional, got shape {array.shape}")

        if array.flags.writeable:
            array.flags.writeable = False
        self._bits = array

    @classmethod
    def from_string(cls, binary_string: str) -> 'Chromosome':
        """
        Create a chromosome from a binary string such as ``"0110"``.

        Args:
            binary_string: String made only of '0' and '1' characters

        Returns:
            New Chromosome
        """
        if any(c not in '01' for c in binary_string):
            raise ValueError(f"Invalid binary string: {binary_string!r}")
        bits = np.fromiter((c == '1' for c in binary_string), dtype=bool, count=len(binary_string))
        return cls(bits, copy=False)

    @classmethod
    def zeros(cls, length: int) -> 'Chromosome':
        """Create an all-zero chromosome of the given length."""
        return cls(np.zeros(length, dtype=bool), copy=False)

    @classmethod
    def ones(cls, length: int) -> 'Chromosome':
        """Create an all-one chromosome of the given length."""
        return cls(np.ones(length, dtype=bool), copy=False)

    @property
    def bits(self) -> np.ndarray:
        """Read-only view of the underlying bits."""
        return self._bits

    @property
    def size(self) -> int:
        """Number of genes in the chromosome."""
        return int(self._bits.shape[0])

    def __len__(self) -> int:
        return self.size

    def __getitem__(self, index):
        if isinstance(index, slice):
            return Chromosome(self._bits[index])
        return bool(self._bits[index])

    def __iter__(self) -> Iterator[bool]:
        return (bool(b) for b in self._bits)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Chromosome):
            return NotImplemented
        return self.size == other.size and bool(np.array_equal(self._bits, other._bits))

    def __hash__(self) -> int:
        return hash((self.size, np.packbits(self._bits).tobytes()))

    def __repr__(self) -> str:
        return f"Chromosome('{self.to_string()}')"

    def __str__(self) -> str:
        return self.to_string()

    def with_bit(self, index: int, value: bool) -> 'Chromosome':
        """
        Return a copy of this chromosome with one gene overwritten.

        Args:
            index: Position of the gene to write
            value: New value of the gene

        Returns:
            New Chromosome (self is left untouched)
        """
        bits = self._bits.copy()
        bits[index] = bool(value)
        return Chromosome(bits, copy=False)

    def flip(self, positions: Iterable[int]) -> 'Chromosome':
        """
        Return a copy with the genes at ``positions`` inverted.

        Positions are applied one after another, so repeating a position
        cancels the previous flip.

        Args:
            positions: Gene indices to flip (repetitions allowed)

        Returns:
            New Chromosome
        """
        bits = self._bits.copy()
        for pos in positions:
            bits[pos] = not bits[pos]
        return Chromosome(bits, copy=False)

    def count_ones(self) -> int:
        """Number of genes set to 1."""
        return int(np.count_nonzero(self._bits))

    def to_string(self) -> str:
        """Binary string representation, most significant gene first."""
        return ''.join('1' if b else '0' for b in self._bits)

    def to_int(self) -> int:
        """Unsigned big-endian integer value of the bit vector."""
        if self.size == 0:
            return 0
        return int(self.to_string(), 2)


def check_same_length(a: Chromosome, b: Chromosome) -> int:
    """
    Validate that two chromosomes have the same length.

    Args:
        a: First chromosome
        b: Second chromosome

    Returns:
        The shared length

    Raises:
        LengthMismatchError: If the lengths differ
    """
    if len(a) != len(b):
        raise LengthMismatchError(f"Chromosome length mismatch: {len(a)} vs {len(b)}")
    return len(a)


Couple = Tuple[Chromosome, Chromosome]


@dataclass(frozen=True)
class Hypothesis:
    """A chromosome paired with the rank computed for it at insertion time."""
    chromosome: Chromosome
    rank: Any

    def to_dict(self) -> Dict[str, Any]:
        """Convert hypothesis to dictionary for reporting."""
        rank = self.rank.item() if isinstance(self.rank, np.generic) else self.rank
        return {
            'chromosome': self.chromosome.to_string(),
            'rank': rank,
        }
