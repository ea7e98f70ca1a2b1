"""
Evolutionary Algorithm Module for the genetic algorithms toolkit.

This module implements the bit-string genetic algorithm engine: the
chromosome representation, crossover/mutation/selection operators, the
ranked population and the generational solver loop with elitism.
"""

from .chromosome import Chromosome, Couple, Hypothesis, check_same_length
from .errors import (
    GeneticAlgorithmError,
    LengthMismatchError,
    InvalidConfigurationError,
    InvalidRankError,
    SelectionError,
)
from .crossover import (
    CrossOver,
    RandomSplitCrossOver,
    RandomMixCrossOver,
    CrossOverOnProbWrapper,
    make_cross_over_on_prob,
    create_crossover_from_config,
)
from .initialization import RandomInitializer, create_initializer_from_config
from .mutation import bit_flip, RandomMutate, PerBitMutate, create_mutation_from_config
from .population import Population
from .selection import (
    RouletteWheelSelection,
    TournamentSelection,
    roulette_probabilities,
    create_selection_from_config,
)
from .solver import GeneticSolver, solve, spawn_seeds, create_solver_from_config

__all__ = [
    # Chromosome
    'Chromosome',
    'Couple',
    'Hypothesis',
    'check_same_length',

    # Errors
    'GeneticAlgorithmError',
    'LengthMismatchError',
    'InvalidConfigurationError',
    'InvalidRankError',
    'SelectionError',

    # Crossover
    'CrossOver',
    'RandomSplitCrossOver',
    'RandomMixCrossOver',
    'CrossOverOnProbWrapper',
    'make_cross_over_on_prob',
    'create_crossover_from_config',

    # Initialization & mutation
    'RandomInitializer',
    'create_initializer_from_config',
    'bit_flip',
    'RandomMutate',
    'PerBitMutate',
    'create_mutation_from_config',

    # Population & selection
    'Population',
    'RouletteWheelSelection',
    'TournamentSelection',
    'roulette_probabilities',
    'create_selection_from_config',

    # Solver
    'GeneticSolver',
    'solve',
    'spawn_seeds',
    'create_solver_from_config',
]
