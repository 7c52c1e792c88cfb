# dominion_arena/checks/sea_hag.py
from __future__ import annotations

from ..assertions import Reporter
from ..cards import Card
from ..deltas import (
    all_other_top_of_deck_is_card,
    any_player_count_changed,
    combined_count_delta_excluding,
    count_did_change,
    first_occurrence,
    kingdom_card_supply_delta,
    victory_card_supply_delta,
    zone_did_change,
)
from ..engine import DominionEngine
from ..state import GameSnapshot, Zone
from .base import CardCheck, TrialOutcome


class SeaHagCheck(CardCheck):
    """Sea Hag: every other player discards the top card of their deck, then
    gains a curse on top of it."""

    card = Card.SEA_HAG
    function_name = "seaHagEffect"
    required_cards = (Card.CURSE,)

    def check(
        self,
        pre: GameSnapshot,
        post: GameSnapshot,
        player: int,
        reporter: Reporter,
    ) -> TrialOutcome:
        label = self.function_name
        outcome = TrialOutcome()

        outcome.record(
            reporter.assert_equal_bool(
                label,
                "There should NOT be any player whose hand count changes",
                False,
                any_player_count_changed(pre, post, Zone.HAND),
            )
        )
        outcome.record(
            reporter.assert_equal_bool(
                label,
                "All other players should have a curse on the top of their deck",
                True,
                all_other_top_of_deck_is_card(post, player, Card.CURSE),
            )
        )
        outcome.record(
            reporter.assert_equal_bool(
                label,
                "The current player's discard count should NOT change",
                False,
                count_did_change(pre, post, player, Zone.DISCARD),
            )
        )
        outcome.record(
            reporter.assert_equal_int(
                label,
                "All other player's discard count should increase by 1 (each)",
                pre.num_players - 1,
                combined_count_delta_excluding(pre, post, player, Zone.DISCARD),
            )
        )
        outcome.record(
            reporter.assert_equal_bool(
                label,
                "The current player's deck count should not change",
                False,
                count_did_change(pre, post, player, Zone.DECK),
            )
        )
        outcome.record(
            reporter.assert_equal_bool(
                label,
                "The current player's deck should not change",
                False,
                zone_did_change(pre, post, player, Zone.DECK),
            )
        )
        outcome.record(
            reporter.assert_equal_int(
                label,
                "No state change should occur to the victory card pile",
                0,
                victory_card_supply_delta(pre, post),
            )
        )
        outcome.record(
            reporter.assert_equal_int(
                label,
                "No state change should occur to the kingdom card pile",
                0,
                kingdom_card_supply_delta(pre, post),
            )
        )
        return outcome

    def can_continue(
        self, engine: DominionEngine, pre: GameSnapshot, player: int
    ) -> bool:
        # Needs a sea hag to play and a curse left to hand out.
        if first_occurrence(pre, player, Zone.HAND, Card.SEA_HAG) is None:
            return False
        return engine.supply_count(Card.CURSE, pre) > 0
