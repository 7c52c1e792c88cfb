# tests/test_trials.py
import io
import random

import pytest
from fake_engine import FakeEngine, RefusingEngine, SelfCursingSeaHagEngine

from dominion_arena.cards import Card
from dominion_arena.checks import get_card_check
from dominion_arena.failure_log import FailureLogger
from dominion_arena.state import MAX_DECK, GameSnapshot, Zone, validate_snapshot
from dominion_arena.trials import TrialAccounting, TrialConfig, TrialDriver


def _make_driver(card: str, engine=None, failure_logger=None, **config) -> TrialDriver:
    config.setdefault("trials", 20)
    config.setdefault("seed", 7)
    config.setdefault("print_on_success", False)
    config.setdefault("zone_capacity", 40)
    return TrialDriver(
        engine or FakeEngine(),
        get_card_check(card),
        TrialConfig(**config),
        out=io.StringIO(),
        err=io.StringIO(),
        failure_logger=failure_logger,
    )


@pytest.mark.parametrize("card", ["adventurer", "sea_hag"])
def test_correct_engine_passes_every_check(card):
    driver = _make_driver(card)
    accounting = driver.run()

    assert accounting.total_failed == 0
    assert accounting.total_passed > 0
    assert accounting.total == len(driver.reporter.results)
    assert accounting.setup_failures == 0
    assert driver.invariant_violations == []
    assert driver.err.getvalue() == ""

    out = driver.out.getvalue()
    assert f"Card: {card}\n" in out
    assert "** PHASE 1 :: 20 TESTS :: Initializing a new game" in out
    assert f"** PHASE 2 :: 20 TESTS :: Testing {card} card on continuous game..." in out
    # Quiet mode prints no PASS lines.
    assert ":: PASS ::" not in out


def test_fresh_games_have_required_shape():
    driver = _make_driver("sea_hag")
    for seed in range(30):
        game = driver.new_game(random.Random(seed))
        assert validate_snapshot(game) == []
        assert 2 <= game.num_players <= 4
        assert game.supply_count(Card.SEA_HAG) > 0
        assert game.supply_count(Card.CURSE) > 0
        for player in range(game.num_players):
            assert game.count(player, Zone.HAND) >= 5
            assert game.count(player, Zone.DECK) >= 2
            assert game.count(player, Zone.DISCARD) == 0


def test_same_seed_reproduces_the_run():
    first = _make_driver("adventurer", trials=10, seed=42)
    second = _make_driver("adventurer", trials=10, seed=42)
    first.run()
    second.run()

    def _observed(driver):
        return [(r.phase, r.trial_index, r.rule, r.actual) for r in driver.reporter.results]

    assert _observed(first) == _observed(second)


def test_setup_failures_are_counted_and_skipped():
    driver = _make_driver("adventurer", engine=RefusingEngine(), trials=40)
    accounting = driver.run_fresh_trials()

    assert accounting.setup_failures > 0
    assert accounting.trials_run + accounting.setup_failures == 40
    assert accounting.total_failed == 0


def test_long_chained_game_stays_valid():
    driver = _make_driver("sea_hag", trials=100, seed=11, zone_capacity=30)
    accounting = driver.run()

    assert driver.invariant_violations == []
    assert validate_snapshot(driver.last_snapshot) == []
    assert accounting.total_failed == 0
    # Chained trials run until the curses are gone, the rest are skipped.
    assert accounting.skipped_trials > 0
    assert accounting.trials_run + accounting.skipped_trials == 200


def test_continuing_from_given_game():
    start = GameSnapshot(
        num_players=2,
        hands=[[Card.SEA_HAG] * 5, [Card.SEA_HAG] * 5],
        decks=[[Card.COPPER] * 3, [Card.ESTATE] * 3],
        supply={Card.CURSE: 4, Card.SEA_HAG: 10},
    )
    driver = _make_driver("sea_hag", trials=10)
    accounting = driver.run_continuing_trials(start=start)

    assert accounting.trials_run == 4
    assert accounting.skipped_trials == 6
    assert accounting.total_failed == 0
    assert start.supply[Card.CURSE] == 0
    assert driver.last_snapshot is start


def test_phase_two_needs_a_game():
    driver = _make_driver("adventurer", trials=0)
    accounting = driver.run()
    assert accounting.total == 0
    assert driver.last_snapshot is None


def test_failing_trials_are_dumped(tmp_path):
    failure_logger = FailureLogger(tmp_path / "failures.log")
    driver = _make_driver(
        "sea_hag",
        engine=SelfCursingSeaHagEngine(),
        failure_logger=failure_logger,
        trials=5,
    )
    accounting = driver.run_fresh_trials()

    assert accounting.failed_trials == 5
    assert accounting.total_failed == 10
    err = driver.err.getvalue()
    assert err.count("\n\nPRE: Players:") == 5
    assert err.count("\nPOST: Players:") == 5
    assert "seaHagEffect :: FAIL ::" in driver.out.getvalue()

    assert failure_logger.entry_count == 5
    failure_logger.flush()
    text = (tmp_path / "failures.log").read_text(encoding="utf-8")
    assert text.count("=== Function: seaHagEffect | Phase: 1") == 5
    assert "Seed: 7 ===" in text
    assert "PRE JSON:" in text


def test_negative_trials_rejected():
    with pytest.raises(ValueError):
        _make_driver("adventurer", trials=-1)


def test_summary_line():
    accounting = TrialAccounting(total_passed=7, total_failed=2)
    assert accounting.summary_line() == "** Total Individual Tests: 9 | Passed: 7 | Failed: 2"


@pytest.mark.parametrize("capacity", [0, MAX_DECK + 1])
def test_zone_capacity_outside_engine_limits_rejected(capacity):
    with pytest.raises(ValueError):
        _make_driver("adventurer", zone_capacity=capacity)
