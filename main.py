#!/usr/bin/env python
"""
Automail - Mail Delivery Robot Simulation

Main entry point for running simulations, printing mail schedules and
evaluating strategies across seeds.
"""

import sys
import json
import argparse
from loguru import logger


def load_config(args):
    """Build the simulation config from --config plus command-line overrides."""
    from automail.core.config import SimulationConfig

    config = SimulationConfig.from_yaml(args.config) if args.config else SimulationConfig()
    return config.with_overrides(seed=args.seed, mail_to_create=args.mail)


def run_simulation(args):
    """Run one simulation and print its statistics."""
    from automail.core.events import LoggingEventSink
    from automail.simulation.engine import SimulationEngine

    config = load_config(args)
    sink = LoggingEventSink() if args.trace else None
    engine = SimulationEngine(config, event_sink=sink)
    statistics = engine.run()

    print(f"Final Delivery time: {statistics.final_tick}")
    print(f"Delivered: {statistics.delivered}/{statistics.mail_created}")
    print(f"Final Score: {statistics.total_score:.2f}")
    return statistics.completed


def print_schedule(args):
    """Print the arrival schedule the generator builds for this config."""
    from automail.simulation.generator import MailGenerator
    from automail.strategies.mail_pool import MailPool

    config = load_config(args)
    generator = MailGenerator(
        config.mail_to_create, MailPool(), config.building, seed=config.seed
    )
    schedule = generator.generate_all_mail()

    print(f"Num Mail Items: {generator.mail_to_create}")
    for tick in sorted(schedule):
        for item in schedule[tick]:
            print(item.describe())
    return True


def run_evaluation(args):
    """Evaluate the config over a range of seeds and print a JSON summary."""
    from automail.simulation.evaluation import evaluate

    config = load_config(args)
    first = args.seed if args.seed is not None else 0
    summary = evaluate(config, range(first, first + args.runs))

    print(json.dumps(summary.to_dict(), indent=2))
    return summary.successful_runs == summary.num_runs


def main():
    parser = argparse.ArgumentParser(description="Automail Simulation")
    parser.add_argument("command", choices=["run", "generate", "evaluate"],
                       help="Command to run")
    parser.add_argument("-c", "--config", default=None,
                       help="YAML simulation config")
    parser.add_argument("-s", "--seed", type=int, default=None,
                       help="Random seed (first seed for evaluate)")
    parser.add_argument("-m", "--mail", type=int, default=None,
                       help="Approximate number of mail items")
    parser.add_argument("-n", "--runs", type=int, default=10,
                       help="Number of seeds to evaluate")
    parser.add_argument("-t", "--trace", action="store_true",
                       help="Log every simulation event")
    parser.add_argument("-v", "--verbose", action="store_true",
                       help="Enable verbose logging")

    args = parser.parse_args()

    if not args.verbose:
        logger.remove()
        logger.add(sys.stderr, level="INFO" if args.trace else "WARNING")

    from automail.core.errors import AutomailError

    commands = {
        "run": run_simulation,
        "generate": print_schedule,
        "evaluate": run_evaluation,
    }

    try:
        success = commands[args.command](args)
    except AutomailError as e:
        print(f"Simulation unable to complete: {e}", file=sys.stderr)
        sys.exit(1)

    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
