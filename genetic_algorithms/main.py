#!/usr/bin/env python3
"""
Command line entry point of the genetic algorithms toolkit.

Runs the genetic solver on one of the bundled demonstration problems, as
described by a YAML configuration file.

Usage:
    genetic-solve --config onemax
    genetic-solve --config float_peak --generations 300 --seed 7
    python -m genetic_algorithms.main --config-path my_config.yaml
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .evolutionary.chromosome import Hypothesis
from .evolutionary.errors import GeneticAlgorithmError
from .evolutionary.solver import create_solver_from_config
from .problems import create_rank_function_from_config, decode_float
from .utils.logging import setup_logging

logger = logging.getLogger(__name__)

CONFIG_DIR = Path(__file__).parent / "configs"


def load_config(config_path: str) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to a YAML file, or the name of a bundled config

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If neither a file nor a bundled config matches
    """
    config_file = Path(config_path)

    if not config_file.exists():
        # Try bundled config locations
        possible_paths = [
            CONFIG_DIR / f"{config_path}.yaml",
            CONFIG_DIR / f"{config_path}_config.yaml",
        ]

        for path in possible_paths:
            if path.exists():
                config_file = path
                break
        else:
            raise FileNotFoundError(
                f"Configuration file not found: {config_path}. "
                f"Tried: {[str(p) for p in possible_paths]}"
            )

    logger.info(f"Loading configuration from: {config_file}")

    with open(config_file, 'r') as f:
        config = yaml.safe_load(f) or {}

    # Handle YAML defaults directive if present
    if 'defaults' in config:
        defaults = config.pop('defaults') or []
        if isinstance(defaults, str):
            defaults = [defaults]
        merged: Dict[str, Any] = {}
        for name in defaults:
            merged = _deep_merge(merged, load_config(str(name)))
        config = _deep_merge(merged, config)

    return config


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries, with override taking precedence.

    Args:
        base: Base dictionary
        override: Dictionary with override values

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        argv: Argument list (default: sys.argv[1:])

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        description="Genetic Algorithms: bit-string evolutionary optimization",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Maximize the number of ones in a 64-bit chromosome
  genetic-solve --config onemax

  # Find the peak of a decoded real function with a custom seed
  genetic-solve --config float_peak --seed 7

  # Longer run with a bigger population
  genetic-solve --config onemax --generations 500 --population 100
        """
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        default="default",
        help="Bundled configuration name (without .yaml extension). Options: default, onemax, float_peak (default: default)"
    )

    parser.add_argument(
        "--config-path",
        type=str,
        default=None,
        help="Full path to configuration file (overrides --config)"
    )

    parser.add_argument(
        "--generations", "-g",
        type=int,
        default=None,
        help="Number of generations to run (overrides config file setting)"
    )

    parser.add_argument(
        "--population", "-p",
        type=int,
        default=None,
        help="Population size (overrides config file setting)"
    )

    parser.add_argument(
        "--length", "-n",
        type=int,
        default=None,
        help="Chromosome length in bits (overrides config file setting)"
    )

    parser.add_argument(
        "--seed", "-s",
        type=int,
        default=None,
        help="Master random seed (overrides config file setting)"
    )

    parser.add_argument(
        "--verbosity", "-v",
        type=int,
        default=None,
        help="Progress verbosity: 0 silent, 1 per generation, 2 statistics"
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: from config, INFO)"
    )

    return parser.parse_args(argv)


def apply_overrides(config: Dict[str, Any], args: argparse.Namespace) -> Dict[str, Any]:
    """
    Override configuration values with command-line arguments.

    Args:
        config: Configuration dictionary
        args: Parsed command-line arguments

    Returns:
        New configuration dictionary
    """
    overrides: Dict[str, Any] = {'solver': {}, 'chromosome': {}, 'logging': {}}
    if args.generations is not None:
        overrides['solver']['num_iterations'] = args.generations
    if args.population is not None:
        overrides['solver']['population_size'] = args.population
    if args.seed is not None:
        overrides['solver']['seed'] = args.seed
    if args.verbosity is not None:
        overrides['solver']['verbosity'] = args.verbosity
    if args.length is not None:
        overrides['chromosome']['length'] = args.length
    if args.log_level is not None:
        overrides['logging']['level'] = args.log_level

    for section, values in overrides.items():
        for key, value in values.items():
            logger.debug(f"Overriding {section}.{key}: {value}")

    return _deep_merge(config, overrides)


def run_evolution(config: Dict[str, Any]) -> Hypothesis:
    """
    Run the solver on the problem described by a configuration dictionary.

    Args:
        config: Configuration dictionary

    Returns:
        Best hypothesis found
    """
    rank_func = create_rank_function_from_config(config)
    solver = create_solver_from_config(config, rank_func)
    return solver.run()


def report_result(best: Hypothesis, config: Dict[str, Any]) -> None:
    """Log the best hypothesis of a run."""
    problem_config = config.get('problem', {}) or {}
    logger.info("=" * 60)
    logger.info("BEST HYPOTHESIS")
    logger.info("=" * 60)
    logger.info(f"Chromosome: {best.chromosome.to_string()}")
    logger.info(f"Rank: {best.rank}")
    if str(problem_config.get('name', 'onemax')).startswith('float'):
        value = decode_float(
            best.chromosome,
            float(problem_config.get('min_value', -5.0)),
            float(problem_config.get('max_value', 5.0)),
        )
        logger.info(f"Decoded value: {value:.6f}")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Process exit code (0 on success, 1 on failure)
    """
    args = parse_arguments(argv)

    try:
        config = load_config(args.config_path or args.config)
    except (FileNotFoundError, yaml.YAMLError) as e:
        setup_logging(log_level=args.log_level or 'INFO')
        logger.error(f"Failed to load configuration: {e}")
        return 1

    config = apply_overrides(config, args)

    logging_config = config.get('logging', {}) or {}
    setup_logging(
        log_dir=logging_config.get('directory', 'results/logs'),
        log_level=logging_config.get('level', 'INFO'),
        log_to_file=bool(logging_config.get('log_to_file', False)),
    )

    try:
        best = run_evolution(config)
    except GeneticAlgorithmError as e:
        logger.error(f"Evolution failed: {e}", exc_info=True)
        return 1
    except KeyboardInterrupt:
        logger.warning("Evolution interrupted by user")
        return 1
    except Exception as e:
        logger.error(f"Unexpected error during evolution: {e}", exc_info=True)
        return 1

    report_result(best, config)
    return 0


if __name__ == "__main__":
    sys.exit(main())
