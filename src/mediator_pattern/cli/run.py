"""
CLI entry point for running mediator scenarios.

Usage:
    python -m mediator_pattern.cli.run [scenario_path] [--events-dir DIR] [--verbose]
"""

import argparse
import logging
import sys

from pydantic import ValidationError

from mediator_pattern.core.config import ConfigError, get_env
from mediator_pattern.mediation.errors import MediationError
from mediator_pattern.runner.scenario import ScenarioRunner, default_scenario


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="mediator-pattern",
        description="Run a mediator scenario. Without a path, the built-in two-mediator scenario runs.",
    )
    parser.add_argument(
        "scenario",
        nargs="?",
        default=None,
        help="Path to a scenario YAML file.",
    )
    parser.add_argument(
        "--events-dir",
        default=None,
        help="Write events.jsonl under this directory.",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging.",
    )
    return parser.parse_args(argv)


def run(args: argparse.Namespace) -> int:
    """Build and run the selected scenario."""
    if args.scenario:
        runner = ScenarioRunner.from_config_file(args.scenario, output_dir=args.events_dir)
    else:
        runner = ScenarioRunner(default_scenario(), output_dir=args.events_dir)

    summary = runner.run()

    logging.getLogger(__name__).info(
        f"Scenario {summary['scenario']}: {summary['sends']} send(s), "
        f"{summary['deliveries']} deliver(ies)"
    )
    if summary["events_path"]:
        print(f"Events: {summary['events_path']}", file=sys.stderr)
    return 0


def resolve_log_level(verbose: bool = False) -> int:
    """
    Pick the logging level: DEBUG with --verbose, otherwise MEDIATOR_LOG_LEVEL
    (a level name such as "info", default WARNING).

    Raises:
        ConfigError: If MEDIATOR_LOG_LEVEL is not a known level name.
    """
    if verbose:
        return logging.DEBUG
    name = get_env("MEDIATOR_LOG_LEVEL", default="WARNING").strip().upper()
    level = getattr(logging, name, None)
    if not isinstance(level, int):
        raise ConfigError(f"Unknown log level in MEDIATOR_LOG_LEVEL: {name!r}")
    return level


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    args = parse_args(argv)

    try:
        logging.basicConfig(
            level=resolve_log_level(args.verbose),
            format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        )
        return run(args)
    except (ConfigError, ValidationError, MediationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
