# dominion_arena/checks/adventurer.py
from __future__ import annotations

from ..assertions import Reporter
from ..cards import Card
from ..deltas import (
    any_other_player_zone_changed,
    count_difference,
    kingdom_card_supply_delta,
    treasure_card_difference,
    treasure_cards_in_zone,
    victory_card_supply_delta,
)
from ..state import GameSnapshot, Zone
from .base import CardCheck, TrialOutcome


class AdventurerCheck(CardCheck):
    """
    Adventurer: reveal cards from the deck until two treasures are revealed,
    put those in hand and discard the rest.

    The draw checks only apply when enough treasure exists to be found: two
    across deck and discard for the hand checks, two in the deck alone for
    the deck checks.
    """

    card = Card.ADVENTURER
    function_name = "adventurerEffect"

    def check(
        self,
        pre: GameSnapshot,
        post: GameSnapshot,
        player: int,
        reporter: Reporter,
    ) -> TrialOutcome:
        label = self.function_name
        outcome = TrialOutcome()

        treasure_in_deck = treasure_cards_in_zone(pre, player, Zone.DECK)
        treasure_in_discard = treasure_cards_in_zone(pre, player, Zone.DISCARD)

        if treasure_in_deck + treasure_in_discard >= 2:
            outcome.record(
                reporter.assert_equal_int(
                    label,
                    "The current player should receive exactly 2 additional cards",
                    +2,
                    count_difference(pre, post, player, Zone.HAND),
                )
            )
            outcome.record(
                reporter.assert_equal_int(
                    label,
                    "The current player's hand should have exactly 2 additional treasure cards",
                    +2,
                    treasure_card_difference(pre, post, player, Zone.HAND),
                )
            )

        if treasure_in_deck >= 2:
            outcome.record(
                reporter.assert_at_most(
                    label,
                    "The current player's deck count should decrease by at least 2",
                    -2,
                    count_difference(pre, post, player, Zone.DECK),
                )
            )
            outcome.record(
                reporter.assert_equal_int(
                    label,
                    "The current player's deck should have exactly 2 fewer treasure cards",
                    -2,
                    treasure_card_difference(pre, post, player, Zone.DECK),
                )
            )

        for zone, noun in (
            (Zone.HAND, "hand"),
            (Zone.DECK, "deck"),
            (Zone.DISCARD, "discard pile"),
        ):
            outcome.record(
                reporter.assert_equal_bool(
                    label,
                    f"No other player's {noun} should change",
                    False,
                    any_other_player_zone_changed(pre, post, player, zone),
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
