# dominion_arena/debug_trial.py
from __future__ import annotations

import argparse
import json
import logging
import random
from dataclasses import replace
from pathlib import Path
from typing import List, Optional, Tuple

from .assertions import ReportConfig, Reporter
from .checks import TrialOutcome, available_checks, get_card_check
from .cli import zone_capacity_arg
from .engine import DominionEngine, EngineLoadError, load_engine
from .state import (
    MAX_DECK,
    GameSnapshot,
    copy_snapshot,
    format_snapshot,
    snapshot_from_dict,
)
from .trials import TrialConfig, TrialDriver


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Replay a single trial with full debug output: either fresh trial "
            "N of a seeded run, or a pre-state saved in a failure log."
        )
    )
    parser.add_argument("card", choices=available_checks())
    parser.add_argument("--engine", type=str, default=None)
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Base seed of the run to reproduce.",
    )
    parser.add_argument(
        "--trial",
        type=int,
        default=0,
        help="Index of the fresh (phase 1) trial to reproduce (default: 0).",
    )
    parser.add_argument(
        "--snapshot",
        type=str,
        default=None,
        help="JSON file holding a pre-state (the 'PRE JSON' line of a failure log).",
    )
    parser.add_argument(
        "--random-discards",
        action="store_true",
        help="Pass when the reproduced run used --random-discards.",
    )
    parser.add_argument(
        "--zone-capacity",
        type=zone_capacity_arg,
        default=MAX_DECK,
        help="The reproduced run's --zone-capacity (default: %(default)s).",
    )
    args = parser.parse_args(argv)
    if args.seed is None and args.snapshot is None:
        parser.error("one of --seed or --snapshot is required")
    return args


def load_snapshot(path: str | Path) -> GameSnapshot:
    return snapshot_from_dict(json.loads(Path(path).read_text(encoding="utf-8")))


def replay_trial(
    engine: DominionEngine,
    card: str,
    *,
    seed: Optional[int] = None,
    trial: int = 0,
    snapshot: Optional[GameSnapshot] = None,
    config: Optional[TrialConfig] = None,
) -> Tuple[GameSnapshot, GameSnapshot, TrialOutcome]:
    """
    Run one trial and return (pre, post, outcome).

    With ``snapshot`` the battery runs on a copy of it; otherwise the pre-state
    is rebuilt exactly as fresh trial ``trial`` of a run seeded with ``seed``.
    ``config`` must carry the same zone options as that run; its trial count
    and seed are ignored.
    """
    check = get_card_check(card)
    reporter = Reporter(ReportConfig(print_on_success=True, debug=True))

    if snapshot is not None:
        pre = copy_snapshot(snapshot)
    else:
        if seed is None:
            raise ValueError("seed is required when no snapshot is given")
        run_config = replace(config or TrialConfig(), trials=0, seed=seed)
        driver = TrialDriver(engine, check, run_config)
        pre = driver.new_game(random.Random(seed + trial))

    post = copy_snapshot(pre)
    outcome = check.run(engine, pre, post, engine.whose_turn(pre), reporter)
    return pre, post, outcome


def main(
    argv: List[str] | None = None,
    engine: Optional[DominionEngine] = None,
) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if engine is None:
        if not args.engine:
            raise SystemExit("An engine is required: pass --engine <module>:<attribute>")
        try:
            engine = load_engine(args.engine)
        except EngineLoadError as exc:
            raise SystemExit(str(exc)) from exc

    snapshot = load_snapshot(args.snapshot) if args.snapshot else None
    config = TrialConfig(
        zone_capacity=args.zone_capacity,
        randomize_discards=args.random_discards,
    )
    pre, post, outcome = replay_trial(
        engine,
        args.card,
        seed=args.seed,
        trial=args.trial,
        snapshot=snapshot,
        config=config,
    )

    print(f"\nPRE: {format_snapshot(pre)}")
    print(f"\nPOST: {format_snapshot(post)}")
    print(
        f"\n** Checks: {outcome.applicable} | Passed: {outcome.passed} "
        f"| Failed: {outcome.failed}"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
