# dominion_arena/trials.py
from __future__ import annotations

import logging
import random
import sys
from dataclasses import dataclass
from typing import List, Optional, TextIO

from .assertions import CheckResult, ReportConfig, Reporter
from .checks import CardCheck, TrialOutcome
from .engine import DominionEngine, EngineSetupError
from .failure_log import FailureLogger
from .randomize import (
    card_pool,
    random_kingdom_cards,
    randomize_decks,
    randomize_discards,
    randomize_hands,
)
from .state import (
    MAX_DECK,
    MAX_PLAYERS,
    MIN_PLAYERS,
    GameSnapshot,
    copy_snapshot,
    format_snapshot,
    validate_snapshot,
)

logger = logging.getLogger(__name__)

DEFAULT_TRIALS = 500

PHASE_FRESH = 1
PHASE_CONTINUING = 2

# Mixed into the base seed so the chained phase does not replay trial 0's draws.
_CONTINUING_SEED_SALT = 0x5EED


@dataclass
class TrialConfig:
    trials: int = DEFAULT_TRIALS
    # Base seed; fresh trial i uses seed + i. None draws one at random.
    seed: Optional[int] = None
    print_on_success: bool = True
    debug: bool = False
    # Upper bound used when sizing random hands, decks and discards.
    zone_capacity: int = MAX_DECK
    randomize_discards: bool = False
    # Validate every chained snapshot against the snapshot invariants.
    validate_chain: bool = True

    def report_config(self) -> ReportConfig:
        return ReportConfig(print_on_success=self.print_on_success, debug=self.debug)


@dataclass
class TrialAccounting:
    total_passed: int = 0
    total_failed: int = 0
    trials_run: int = 0
    failed_trials: int = 0
    skipped_trials: int = 0
    setup_failures: int = 0

    @property
    def total(self) -> int:
        return self.total_passed + self.total_failed

    def record(self, outcome: TrialOutcome) -> None:
        self.total_passed += outcome.passed
        self.total_failed += outcome.failed
        self.trials_run += 1
        if outcome.failed:
            self.failed_trials += 1

    def summary_line(self) -> str:
        return (
            f"** Total Individual Tests: {self.total} | "
            f"Passed: {self.total_passed} | Failed: {self.total_failed}"
        )


class TrialDriver:
    """
    Runs randomized trials of one card's effect against an engine.

    Phase 1 builds a fresh random game for every trial. Phase 2 keeps playing
    the card on a single game, each trial's post-state becoming the next
    trial's pre-state.
    """

    def __init__(
        self,
        engine: DominionEngine,
        check: CardCheck,
        config: Optional[TrialConfig] = None,
        *,
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None,
        reporter: Optional[Reporter] = None,
        failure_logger: Optional[FailureLogger] = None,
    ) -> None:
        self.engine = engine
        self.check = check
        self.config = config or TrialConfig()
        if self.config.trials < 0:
            raise ValueError("trials must be non-negative")
        if not 1 <= self.config.zone_capacity <= MAX_DECK:
            raise ValueError(
                f"zone_capacity must be between 1 and {MAX_DECK}, "
                f"got {self.config.zone_capacity}"
            )

        if self.config.seed is None:
            self.base_seed = random.SystemRandom().randrange(2**31)
        else:
            self.base_seed = self.config.seed

        self.out = out
        self.err = err
        self.reporter = reporter or Reporter(self.config.report_config(), stream=out)
        self.failure_logger = failure_logger
        self.accounting = TrialAccounting()
        self.invariant_violations: List[str] = []
        # Most recent post-state; Phase 2 continues from it.
        self.last_snapshot: Optional[GameSnapshot] = None

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def run(self) -> TrialAccounting:
        """Run both phases and return the accumulated accounting."""
        logger.info(
            "Testing %s with %d trials per phase (seed %d)",
            self.check.function_name,
            self.config.trials,
            self.base_seed,
        )
        self._print(
            f"\nCard: {self.check.card}\nFunction: {self.check.function_name}\n"
        )
        self.run_fresh_trials()
        self.run_continuing_trials()
        return self.accounting

    def run_fresh_trials(self, trials: Optional[int] = None) -> TrialAccounting:
        count = self.config.trials if trials is None else trials
        self._print(
            f"** PHASE 1 :: {count} TESTS :: Initializing a new game for each "
            f"{self.check.card} card test..."
        )
        for index in range(count):
            self.run_fresh_trial(index)
        logger.info(
            "Phase 1 finished: %d trials run, %d setup failures",
            self.accounting.trials_run,
            self.accounting.setup_failures,
        )
        return self.accounting

    def run_fresh_trial(self, index: int) -> Optional[TrialOutcome]:
        """Run fresh trial ``index``; returns None when the engine refused the setup."""
        rng = random.Random(self.base_seed + index)
        try:
            pre = self.new_game(rng)
        except EngineSetupError as exc:
            logger.warning("Skipping trial %d: %s", index, exc)
            self.accounting.setup_failures += 1
            return None

        post = copy_snapshot(pre)
        player = self.engine.whose_turn(pre)
        outcome = self._evaluate(
            PHASE_FRESH, index, pre, post, player, seed=self.base_seed + index
        )
        self.last_snapshot = post
        return outcome

    def run_continuing_trials(
        self,
        trials: Optional[int] = None,
        start: Optional[GameSnapshot] = None,
    ) -> TrialAccounting:
        count = self.config.trials if trials is None else trials
        self._print(
            f"** PHASE 2 :: {count} TESTS :: Testing {self.check.card} card on "
            "continuous game..."
        )

        post = start if start is not None else self.last_snapshot
        if post is None:
            logger.warning("No game to continue from; skipping phase 2")
            return self.accounting

        rng = random.Random(self.base_seed ^ _CONTINUING_SEED_SALT)
        skipped_before = self.accounting.skipped_trials
        for index in range(count):
            post.whose_turn = rng.randint(0, post.num_players - 1)
            pre = copy_snapshot(post)
            player = self.engine.whose_turn(pre)

            if not self.check.can_continue(self.engine, pre, player):
                self.accounting.skipped_trials += 1
                continue

            self._evaluate(PHASE_CONTINUING, index, pre, post, player)

            if self.config.validate_chain:
                problems = validate_snapshot(post)
                for problem in problems:
                    logger.error("Chained trial %d left an invalid game: %s", index, problem)
                self.invariant_violations.extend(problems)

        self.last_snapshot = post
        logger.info(
            "Phase 2 finished: %d of %d trials skipped by precondition",
            self.accounting.skipped_trials - skipped_before,
            count,
        )
        return self.accounting

    def new_game(self, rng: random.Random) -> GameSnapshot:
        """
        Initialize a random game through the engine and randomize its zones.

        Raises EngineSetupError when the engine rejects the configuration.
        """
        num_players = rng.randint(MIN_PLAYERS, MAX_PLAYERS)
        active_player = rng.randint(0, num_players - 1)
        kingdom = random_kingdom_cards(rng, self.check.kingdom_requirements)
        engine_seed = rng.randrange(2**31)

        snapshot = self.engine.initialize_game(num_players, kingdom, engine_seed)

        pool = card_pool(kingdom)
        capacity = self.config.zone_capacity
        randomize_hands(snapshot, pool, rng, capacity)
        randomize_decks(snapshot, pool, rng, capacity)
        if self.config.randomize_discards:
            randomize_discards(snapshot, pool, rng, capacity)
        snapshot.whose_turn = active_player
        return snapshot

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _evaluate(
        self,
        phase: int,
        index: int,
        pre: GameSnapshot,
        post: GameSnapshot,
        player: int,
        seed: Optional[int] = None,
    ) -> TrialOutcome:
        self.reporter.set_context(phase, index)
        first_result = len(self.reporter.results)

        outcome = self.check.run(self.engine, pre, post, player, self.reporter)
        self.accounting.record(outcome)

        if outcome.failed:
            failed = [r for r in self.reporter.results[first_result:] if not r.passed]
            self._dump_failure(phase, index, player, seed, failed, pre, post)
        return outcome

    def _dump_failure(
        self,
        phase: int,
        index: int,
        player: int,
        seed: Optional[int],
        failed: List[CheckResult],
        pre: GameSnapshot,
        post: GameSnapshot,
    ) -> None:
        self._print_err(f"\n\nPRE: {format_snapshot(pre)}")
        self._print_err(f"\nPOST: {format_snapshot(post)}")
        if self.failure_logger is not None:
            self.failure_logger.log_failure(
                label=self.check.function_name,
                phase=phase,
                trial_index=index,
                player=player,
                seed=seed,
                failed_checks=failed,
                pre=pre,
                post=post,
            )

    def _print(self, text: str) -> None:
        out = self.out if self.out is not None else sys.stdout
        out.write(text + "\n")

    def _print_err(self, text: str) -> None:
        err = self.err if self.err is not None else sys.stderr
        err.write(text + "\n")
