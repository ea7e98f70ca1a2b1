"""
Test suite for the crossover operators.

Tests cover:
- Every child gene comes from one of the parents at the same position
- Split crossover produces a prefix of one parent followed by a suffix of the other
- Uniform mix crossover inherits each gene with probability 0.5
- Probability gate: p=0 never recombines, p=1 always recombines
- Determinism with fixed seeds and length validation
"""

import pytest
import numpy as np

from genetic_algorithms.evolutionary.chromosome import Chromosome
from genetic_algorithms.evolutionary.crossover import (
    CrossOver,
    RandomSplitCrossOver,
    RandomMixCrossOver,
    CrossOverOnProbWrapper,
    make_cross_over_on_prob,
    create_crossover_from_config,
)
from genetic_algorithms.evolutionary.errors import (
    InvalidConfigurationError,
    LengthMismatchError,
)


def _random_parents(length: int, seed: int):
    rng = np.random.default_rng(seed)
    a = Chromosome(rng.integers(0, 2, size=length))
    b = Chromosome(rng.integers(0, 2, size=length))
    return a, b


def _is_split_child(child: Chromosome, a: Chromosome, b: Chromosome) -> bool:
    n = len(a)
    for pos in range(n):
        for first, second in ((a, b), (b, a)):
            expected = np.concatenate((first.bits[:pos], second.bits[pos:]))
            if np.array_equal(child.bits, expected):
                return True
    return False


class SpyCrossOver(CrossOver):
    """Crossover recording its calls and returning an all-one child."""

    def __init__(self):
        super().__init__(seed=0)
        self.calls = 0

    def _combine(self, a, b):
        self.calls += 1
        return Chromosome.ones(len(a))


class TestGenesComeFromParents:
    """Test that children never contain a third value at any position."""

    @pytest.mark.parametrize("length", [1, 2, 7, 64])
    def test_split_child_genes_from_parents(self, length):
        """Test gene provenance for the split crossover."""
        crossover = RandomSplitCrossOver(length, seed=3)
        for trial in range(50):
            a, b = _random_parents(length, seed=trial)
            child = crossover(a, b)
            assert len(child) == length
            assert np.all((child.bits == a.bits) | (child.bits == b.bits))

    @pytest.mark.parametrize("length", [1, 2, 7, 64])
    def test_mix_child_genes_from_parents(self, length):
        """Test gene provenance for the mix crossover."""
        crossover = RandomMixCrossOver(seed=3)
        for trial in range(50):
            a, b = _random_parents(length, seed=trial)
            child = crossover(a, b)
            assert len(child) == length
            assert np.all((child.bits == a.bits) | (child.bits == b.bits))

    def test_parents_are_not_modified(self):
        """Test that the parents keep their bits after a crossover."""
        a, b = Chromosome.zeros(16), Chromosome.ones(16)
        RandomSplitCrossOver(16, seed=1)(a, b)
        RandomMixCrossOver(seed=1)(a, b)
        assert a == Chromosome.zeros(16)
        assert b == Chromosome.ones(16)


class TestRandomSplitCrossOver:
    """Test the position-based split crossover."""

    def test_child_is_prefix_plus_suffix(self):
        """Test that the child is a prefix of one parent and a suffix of the other."""
        a, b = _random_parents(20, seed=11)
        crossover = RandomSplitCrossOver(20, seed=5)
        for _ in range(100):
            child = crossover(a, b)
            assert _is_split_child(child, a, b), f"{child} is not a split of the parents"

    def test_split_on_constant_parents(self):
        """Test the child shape with all-zero and all-one parents."""
        crossover = RandomSplitCrossOver(10, seed=9)
        probe = RandomSplitCrossOver(10, seed=9)
        zeros, ones = Chromosome.zeros(10), Chromosome.ones(10)
        for _ in range(50):
            pos, direction = probe.sample_split()
            child = crossover(zeros, ones)
            expected = '0' * pos + '1' * (10 - pos) if direction == 0 else '1' * pos + '0' * (10 - pos)
            assert child.to_string() == expected

    def test_same_seed_same_split(self):
        """Test that two operators with the same seed draw the same splits."""
        first = RandomSplitCrossOver(32, seed=42)
        second = RandomSplitCrossOver(32, seed=42)
        draws_first = [first.sample_split() for _ in range(20)]
        draws_second = [second.sample_split() for _ in range(20)]
        assert draws_first == draws_second

    def test_split_range(self):
        """Test that positions stay in [0, N) and both directions occur."""
        crossover = RandomSplitCrossOver(8, seed=0)
        draws = [crossover.sample_split() for _ in range(500)]
        positions = {pos for pos, _ in draws}
        directions = {direction for _, direction in draws}
        assert positions == set(range(8))
        assert directions == {0, 1}

    def test_deterministic_children(self):
        """Test that identical seeds produce identical children."""
        a, b = _random_parents(24, seed=2)
        children_1 = [RandomSplitCrossOver(24, seed=7)(a, b)]
        children_2 = [RandomSplitCrossOver(24, seed=7)(a, b)]
        assert children_1 == children_2

    def test_length_mismatch(self):
        """Test that parents of different length are rejected."""
        crossover = RandomSplitCrossOver(4, seed=0)
        with pytest.raises(LengthMismatchError):
            crossover(Chromosome.zeros(4), Chromosome.ones(5))

    def test_length_differs_from_configured(self):
        """Test that parents must match the configured length."""
        crossover = RandomSplitCrossOver(4, seed=0)
        with pytest.raises(LengthMismatchError):
            crossover(Chromosome.zeros(6), Chromosome.ones(6))

    def test_invalid_length(self):
        """Test that a non-positive length is rejected."""
        with pytest.raises(InvalidConfigurationError):
            RandomSplitCrossOver(0, seed=0)


class TestRandomMixCrossOver:
    """Test the uniform mix crossover."""

    def test_heads_frequency_is_one_half(self):
        """Test that parent a supplies a gene half of the time (within 3 sigma)."""
        trials = 10000
        crossover = RandomMixCrossOver(seed=2017)
        zeros, ones = Chromosome.zeros(1), Chromosome.ones(1)
        heads = sum(1 for _ in range(trials) if crossover(zeros, ones)[0] is False)
        frequency = heads / trials
        sigma = np.sqrt(0.25 / trials)
        assert abs(frequency - 0.5) <= 3 * sigma, f"Heads frequency {frequency} too far from 0.5"

    def test_per_position_frequency(self):
        """Test that every position is mixed independently and fairly."""
        trials = 4000
        length = 16
        crossover = RandomMixCrossOver(seed=5)
        zeros, ones = Chromosome.zeros(length), Chromosome.ones(length)
        counts = np.zeros(length)
        for _ in range(trials):
            counts += crossover(zeros, ones).bits
        frequencies = counts / trials
        sigma = np.sqrt(0.25 / trials)
        # 4 sigma keeps the 16 simultaneous checks robust
        assert np.all(np.abs(frequencies - 0.5) <= 4 * sigma)

    def test_identical_parents(self):
        """Test that mixing a chromosome with itself returns the same genes."""
        a, _ = _random_parents(30, seed=4)
        assert RandomMixCrossOver(seed=1)(a, a) == a

    def test_length_mismatch(self):
        """Test that parents of different length are rejected."""
        with pytest.raises(LengthMismatchError):
            RandomMixCrossOver(seed=0)(Chromosome.zeros(3), Chromosome.zeros(2))


class TestCrossOverOnProbWrapper:
    """Test the crossover probability gate."""

    def test_probability_zero_never_recombines(self):
        """Test that p=0 returns one of the parents and never calls the operator."""
        spy = SpyCrossOver()
        wrapper = CrossOverOnProbWrapper(seed=1, prob=0.0, crossover=spy)
        a, b = Chromosome.zeros(8), Chromosome.from_string('10101010')
        seen = set()
        for _ in range(200):
            child = wrapper(a, b)
            assert child == a or child == b
            seen.add(child.to_string())
        assert spy.calls == 0
        assert seen == {a.to_string(), b.to_string()}, "Both parents should be returned"

    def test_probability_one_always_recombines(self):
        """Test that p=1 always delegates to the wrapped operator."""
        spy = SpyCrossOver()
        wrapper = make_cross_over_on_prob(2, 1.0, spy)
        a, b = Chromosome.zeros(8), Chromosome.zeros(8)
        for _ in range(100):
            assert wrapper(a, b) == Chromosome.ones(8)
        assert spy.calls == 100

    def test_intermediate_probability(self):
        """Test that the delegation rate follows the probability."""
        spy = SpyCrossOver()
        wrapper = make_cross_over_on_prob(3, 0.3, spy)
        a, b = Chromosome.zeros(4), Chromosome.zeros(4)
        trials = 5000
        for _ in range(trials):
            wrapper(a, b)
        sigma = np.sqrt(0.3 * 0.7 / trials)
        assert abs(spy.calls / trials - 0.3) <= 4 * sigma

    def test_wraps_itself(self):
        """Test that a wrapper can wrap another wrapper."""
        spy = SpyCrossOver()
        inner = make_cross_over_on_prob(4, 1.0, spy)
        outer = make_cross_over_on_prob(5, 1.0, inner)
        outer(Chromosome.zeros(2), Chromosome.zeros(2))
        assert spy.calls == 1

    def test_length_mismatch_before_delegation(self):
        """Test that mismatched parents fail even when no recombination happens."""
        wrapper = make_cross_over_on_prob(1, 0.0, SpyCrossOver())
        with pytest.raises(LengthMismatchError):
            wrapper(Chromosome.zeros(2), Chromosome.zeros(3))

    @pytest.mark.parametrize("prob", [-0.1, 1.5])
    def test_invalid_probability(self, prob):
        """Test that probabilities outside [0, 1] are rejected."""
        with pytest.raises(InvalidConfigurationError):
            make_cross_over_on_prob(1, prob, SpyCrossOver())


class TestCreateCrossoverFromConfig:
    """Test crossover creation from configuration."""

    def test_split_with_probability(self):
        """Test that a probability below 1 adds a gate around the split crossover."""
        crossover = create_crossover_from_config(
            {'crossover': {'type': 'split', 'probability': 0.9}}, 16, (1, 2)
        )
        assert isinstance(crossover, CrossOverOnProbWrapper)
        assert isinstance(crossover.crossover, RandomSplitCrossOver)
        assert crossover.prob == pytest.approx(0.9)

    def test_mix_without_probability(self):
        """Test that probability 1 returns the bare operator."""
        crossover = create_crossover_from_config({'crossover': {'type': 'mix'}}, 16, (1, 2))
        assert isinstance(crossover, RandomMixCrossOver)

    def test_unknown_type(self):
        """Test that unknown types are rejected."""
        with pytest.raises(InvalidConfigurationError):
            create_crossover_from_config({'crossover': {'type': 'two_point'}}, 16, (1, 2))
