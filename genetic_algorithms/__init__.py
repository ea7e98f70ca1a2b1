"""
Genetic Algorithms toolkit: generic bit-string evolutionary optimization.

Given a fixed-length bit-string search space and a rank (fitness) function,
the engine evolves a population of candidate solutions with selection,
crossover and mutation, and returns the best hypothesis found.

Main Components:
- evolutionary: Chromosome, operators, population and the solver loop
- problems: Decoding helpers and demonstration rank functions
- utils: Logging and progress reporting

Usage:
    from genetic_algorithms.evolutionary import solve, RandomSplitCrossOver
    from genetic_algorithms.main import run_evolution
"""

__version__ = "1.0.0"

__all__ = [
    "evolutionary",
    "problems",
    "utils",
]
