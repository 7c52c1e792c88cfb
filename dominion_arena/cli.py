# dominion_arena/cli.py
from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from .checks import available_checks, get_card_check
from .engine import DominionEngine, EngineLoadError, load_engine
from .failure_log import FailureLogger
from .paths import resolve_results_path
from .trial_log import write_check_results_csv
from .state import MAX_DECK
from .trials import DEFAULT_TRIALS, TrialConfig, TrialDriver


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError("must be zero or a positive integer")
    return number


def zone_capacity_arg(value: str) -> int:
    number = int(value)
    if not 1 <= number <= MAX_DECK:
        raise argparse.ArgumentTypeError(f"must be between 1 and {MAX_DECK}")
    return number


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Run randomized property checks for one Dominion card effect "
            "against an engine and print a pass/fail tally."
        )
    )

    parser.add_argument(
        "card",
        choices=available_checks(),
        help="Card whose effect is tested.",
    )
    parser.add_argument(
        "trials",
        nargs="?",
        type=_non_negative_int,
        default=DEFAULT_TRIALS,
        help="Trials per phase (default: %(default)s).",
    )
    parser.add_argument(
        "--engine",
        type=str,
        default=None,
        help=(
            "Engine under test as '<module>:<attribute>', where the attribute "
            "is an engine instance or a zero-argument factory."
        ),
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Base random seed. If omitted, one is drawn and logged.",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only print FAIL lines (suppress PASS lines).",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log every rule and delta computation at DEBUG level.",
    )
    parser.add_argument(
        "--random-discards",
        action="store_true",
        help="Also randomize discard piles in fresh games.",
    )
    parser.add_argument(
        "--zone-capacity",
        type=zone_capacity_arg,
        default=MAX_DECK,
        help="Largest random hand, deck or discard size (default: %(default)s).",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ...). Default: WARNING.",
    )
    parser.add_argument(
        "--csv",
        type=str,
        default=None,
        help=(
            "Optional path for a CSV with one row per evaluated check; "
            "{card} and {seed} in the name are filled in."
        ),
    )
    parser.add_argument(
        "--failure-log",
        type=str,
        default=None,
        help="Optional path capturing pre/post dumps of failing trials.",
    )

    return parser.parse_args(argv)


def main(
    argv: List[str] | None = None,
    engine: Optional[DominionEngine] = None,
) -> int:
    """
    Run both trial phases and print the tally.

    Failed checks are informational: the return code is 0 whenever the run
    itself completes.
    """
    args = parse_args(argv)

    level = logging.DEBUG if args.debug else getattr(
        logging, args.log_level.upper(), logging.WARNING
    )
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if engine is None:
        if not args.engine:
            raise SystemExit("An engine is required: pass --engine <module>:<attribute>")
        try:
            engine = load_engine(args.engine)
        except EngineLoadError as exc:
            raise SystemExit(str(exc)) from exc

    config = TrialConfig(
        trials=args.trials,
        seed=args.seed,
        print_on_success=not args.quiet,
        debug=args.debug,
        zone_capacity=args.zone_capacity,
        randomize_discards=args.random_discards,
    )
    driver = TrialDriver(engine, get_card_check(args.card), config)

    names = {"card": args.card, "seed": driver.base_seed}
    csv_path = resolve_results_path(args.csv, **names) if args.csv else None
    failure_path = (
        resolve_results_path(args.failure_log, **names) if args.failure_log else None
    )
    if csv_path:
        logging.info("Output CSV: %s", csv_path)
    if failure_path:
        logging.info("Failure log: %s", failure_path)
        driver.failure_logger = FailureLogger(failure_path)

    accounting = driver.run()

    print(f"\n{accounting.summary_line()}")
    logging.info(
        "Seed %d: %d trials run, %d failed, %d skipped, %d setup failures",
        driver.base_seed,
        accounting.trials_run,
        accounting.failed_trials,
        accounting.skipped_trials,
        accounting.setup_failures,
    )

    if csv_path:
        rows = write_check_results_csv(
            driver.reporter.results,
            csv_path,
            run_id=f"{args.card}-{driver.base_seed}",
        )
        logging.info("Wrote %d rows to %s", rows, csv_path)
    if driver.failure_logger is not None:
        driver.failure_logger.flush()

    return 0


if __name__ == "__main__":
    raise SystemExit(main())

'''
python3 -m dominion_arena.cli adventurer 500 \
  --engine my_dominion.bindings:Engine \
  --seed 1 \
  --quiet \
  --csv "{card}-{seed}.csv" \
  --failure-log "{card}-{seed}-failures.log"
'''
