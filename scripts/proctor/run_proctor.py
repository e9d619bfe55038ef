#!/usr/bin/env python3
"""
Proctor Experiment Runner

Trains the synthetic detector on every catalog model, runs the test trials,
and prints precision-recall, classifier rank, timing and confusion matrix.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from colorama import Fore, Style, init as colorama_init

colorama_init()

# Put scripts/ ahead of this file's own directory so "proctor" resolves to the package
_scripts_dir = str(Path(__file__).resolve().parent.parent)
if _scripts_dir in sys.path:
    sys.path.remove(_scripts_dir)
sys.path.insert(0, _scripts_dir)

from common.config_utils import ProctorConfig, SyntheticConfig, load_proctor_config
from common.exceptions import ConfigError, TrainingError
from common.logger import setup_logger
from common.validation import validate_proctor_config

from proctor.proctor import Proctor
from proctor.synthetic import CentroidDetector, SyntheticModelSource


def build_config(args: argparse.Namespace) -> ProctorConfig:
    """Merge the optional YAML file with command-line overrides."""
    overrides = {
        "num_models": args.num_models,
        "num_trials": args.num_trials,
        "seed": args.seed,
        "count_self_tie": True if args.count_self_tie else None,
    }
    if args.config:
        return load_proctor_config(args.config, overrides)

    config = ProctorConfig()
    for key, value in overrides.items():
        if value is not None:
            setattr(config, key, value)
    return config


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Run a proctor train/test experiment with synthetic collaborators",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Default experiment
  python run_proctor.py

  # Small reproducible run
  python run_proctor.py --num-models 3 --num-trials 9 --seed 42

  # Settings from file
  python run_proctor.py --config proctor.yaml
        """,
    )
    parser.add_argument("--config", "-c", help="Path to experiment YAML")
    parser.add_argument("--num-models", type=int, help="Number of catalog models")
    parser.add_argument("--num-trials", type=int, help="Number of test trials")
    parser.add_argument("--seed", type=int, help="Seed for the test phase")
    parser.add_argument(
        "--count-self-tie",
        action="store_true",
        help="Count the true model's own slot as a tie when ranking",
    )
    parser.add_argument("--num-points", type=int, default=SyntheticConfig.num_points,
                        help="Points per synthetic model (default: %(default)s)")
    parser.add_argument("--log-level", default=None, help="Logging level (default: PROCTOR_LOG_LEVEL or INFO)")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Command-line interface for proctor experiments."""
    args = parse_args(argv)
    logger = setup_logger("proctor", level=args.log_level)

    try:
        config = build_config(args)
    except ConfigError as e:
        logger.error(str(e))
        return 1

    validation = validate_proctor_config(config)
    validation.print_all()
    if not validation.is_valid:
        print(f"\n{Fore.RED}Invalid configuration, aborting{Style.RESET_ALL}")
        return 1

    try:
        synthetic = SyntheticConfig(num_points=args.num_points)
    except ValueError as e:
        logger.error(f"Invalid synthetic settings: {e}")
        return 1

    source = SyntheticModelSource(config, synthetic)
    detector = CentroidDetector(synthetic)
    proctor = Proctor(source, config)

    try:
        proctor.train(detector)
    except TrainingError as e:
        logger.error(f"Training aborted: {e}")
        return 1

    proctor.test(detector, config.seed)
    proctor.print_results(detector)
    return 0


if __name__ == "__main__":
    sys.exit(main())
