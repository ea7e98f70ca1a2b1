"""
Generic genetic algorithm solver.

This module implements the generational loop on top of several genetic
operators:

- initializer: callable returning a Chromosome each time it is called
- selection: callable (population, count) returning ``count`` couples of
  parents selected for crossover
- crossover: callable receiving two chromosomes and returning their child
- mutation: callable receiving a chromosome and returning another one with
  some genes mutated (or not)
- rank function: callable receiving a chromosome and returning its rank

The solver MAXIMIZES the rank; change the sign of the rank function for
minimization. Basic elitism is applied: the best hypothesis found so far is
reinserted into every generation, so the returned rank never decreases as
more generations are run.

Usage:
    seeds = spawn_seeds(12564, 4)
    best = solve(1000,  # iterations
                 100,   # population
                 RandomInitializer(N, seeds[0], 0.5),
                 RouletteWheelSelection(seeds[1]),
                 RandomSplitCrossOver(N, seeds[2]),
                 RandomMutate(seeds[3], 0.5),
                 FloatFunctionRank(lambda x: x, -5.0, 5.0))
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

import numpy as np

from .chromosome import Chromosome, Couple, Hypothesis
from .crossover import create_crossover_from_config
from .errors import InvalidConfigurationError, LengthMismatchError
from .initialization import create_initializer_from_config
from .mutation import create_mutation_from_config
from .population import Population
from .selection import create_selection_from_config
from ..utils.logging import GenerationSummary, ProgressReporter

logger = logging.getLogger(__name__)

GenerationCallback = Callable[[int, Hypothesis], None]


class GeneticSolver:
    """
    Generational genetic algorithm with elitism.

    A run goes through three states: initialization (generation 0 is built
    from the initializer and the running best is its top hypothesis),
    evolution (exactly ``num_iterations`` rounds) and done (the running best is
    returned).

    Attributes:
        num_iterations: Number of generations to evolve
        population_size: Number of hypotheses per generation
        verbosity: Progress reporting level (0 silent, 1 per generation, 2 statistics)
    """

    def __init__(
        self,
        num_iterations: int,
        population_size: int,
        init_func: Callable[[], Chromosome],
        select_func: Callable[[Population, int], Sequence[Couple]],
        cross_over_func: Callable[[Chromosome, Chromosome], Chromosome],
        mutate_func: Callable[[Chromosome], Chromosome],
        rank_func: Callable[[Chromosome], Any],
        verbosity: int = 0
    ):
        """
        Initialize the solver.

        Args:
            num_iterations: Number of generations (0 returns the initial best)
            population_size: Hypotheses per generation, at least 1
            init_func: Initializer collaborator
            select_func: Selection collaborator
            cross_over_func: Crossover collaborator
            mutate_func: Mutation collaborator
            rank_func: Rank function (higher is better)
            verbosity: Progress reporting level

        Raises:
            InvalidConfigurationError: If num_iterations or population_size is out of range
        """
        if population_size < 1:
            raise InvalidConfigurationError(
                f"Population size must be at least 1, got {population_size}"
            )
        if num_iterations < 0:
            raise InvalidConfigurationError(
                f"Number of iterations must be non-negative, got {num_iterations}"
            )

        self.num_iterations = int(num_iterations)
        self.population_size = int(population_size)
        self.init_func = init_func
        self.select_func = select_func
        self.cross_over_func = cross_over_func
        self.mutate_func = mutate_func
        self.rank_func = rank_func
        self.verbosity = verbosity

    def _breed(self, couple: Couple) -> Chromosome:
        a, b = couple
        child = self.mutate_func(self.cross_over_func(a, b))
        if len(child) != len(a):
            raise LengthMismatchError(
                f"Offspring length {len(child)} differs from parent length {len(a)}"
            )
        return child

    def run(self, on_generation: Optional[GenerationCallback] = None) -> Hypothesis:
        """
        Execute the evolutionary loop.

        Args:
            on_generation: Optional callback invoked after every generation with
                the generation number (starting at 1) and the running best

        Returns:
            Best hypothesis found during the run
        """
        reporter = ProgressReporter(self.verbosity)

        current = Population(self.rank_func)
        next_generation = Population(self.rank_func)

        current.init(self.init_func, self.population_size)
        best = current.top()
        reporter.log_run_start(self.num_iterations, self.population_size, best.rank)

        for generation in range(1, self.num_iterations + 1):
            for couple in current.select(self.select_func, self.population_size - 1):
                next_generation.push(self._breed(couple))

            current, next_generation = next_generation, current
            next_generation.reset()

            # A population of size 1 produces no offspring, only the elite survives.
            generation_top = current.top() if len(current) else None
            improved = generation_top is not None and best.rank < generation_top.rank
            if improved:
                best = generation_top

            # elitism: the best one passes directly
            current.push(best.chromosome)

            reporter.log_generation(GenerationSummary(
                generation=generation,
                best_rank=best.rank,
                generation_top_rank=generation_top.rank if generation_top is not None else None,
                improved=improved,
                population_size=len(current),
                average_rank=current.get_average_rank() if reporter.wants_statistics else None,
            ))
            if on_generation is not None:
                on_generation(generation, best)

        reporter.log_run_complete(self.num_iterations, best.rank)
        return best


def solve(
    num_iterations: int,
    population_size: int,
    init_func: Callable[[], Chromosome],
    select_func: Callable[[Population, int], Sequence[Couple]],
    cross_over_func: Callable[[Chromosome, Chromosome], Chromosome],
    mutate_func: Callable[[Chromosome], Chromosome],
    rank_func: Callable[[Chromosome], Any],
    verbosity: int = 0,
    on_generation: Optional[GenerationCallback] = None
) -> Hypothesis:
    """
    Run a generic genetic algorithm and return the best hypothesis.

    See GeneticSolver for the meaning of every argument.
    """
    solver = GeneticSolver(
        num_iterations,
        population_size,
        init_func,
        select_func,
        cross_over_func,
        mutate_func,
        rank_func,
        verbosity=verbosity,
    )
    return solver.run(on_generation=on_generation)


def spawn_seeds(seed: Optional[int], count: int) -> List[int]:
    """
    Derive independent collaborator seeds from one master seed.

    Args:
        seed: Master seed (None draws fresh entropy)
        count: Number of seeds to derive

    Returns:
        List of ``count`` integer seeds
    """
    state = np.random.SeedSequence(seed).generate_state(count)
    return [int(s) for s in state]


def create_solver_from_config(
    config: Dict[str, Any],
    rank_func: Callable[[Chromosome], Any]
) -> GeneticSolver:
    """
    Factory function to create a GeneticSolver from a configuration dictionary.

    Every collaborator gets its own seed spawned from ``solver.seed``, so two
    solvers built from the same configuration produce identical runs.

    Args:
        config: Configuration dictionary (see configs/default.yaml)
        rank_func: Rank function to maximize

    Returns:
        GeneticSolver: Initialized solver
    """
    solver_config = config.get('solver', {}) or {}
    length = int((config.get('chromosome', {}) or {}).get('length', 32))
    if length < 1:
        raise InvalidConfigurationError(f"Chromosome length must be positive, got {length}")

    seed = solver_config.get('seed')
    init_seed, select_seed, cx_seed, gate_seed, mutate_seed = spawn_seeds(seed, 5)

    solver = GeneticSolver(
        num_iterations=int(solver_config.get('num_iterations', 100)),
        population_size=int(solver_config.get('population_size', 50)),
        init_func=create_initializer_from_config(config, length, init_seed),
        select_func=create_selection_from_config(config, select_seed),
        cross_over_func=create_crossover_from_config(config, length, (cx_seed, gate_seed)),
        mutate_func=create_mutation_from_config(config, mutate_seed),
        rank_func=rank_func,
        verbosity=int(solver_config.get('verbosity', 0)),
    )
    logger.info(f"Solver created: {solver.num_iterations} generations, "
                f"population {solver.population_size}, chromosome length {length}, seed {seed}")
    return solver
