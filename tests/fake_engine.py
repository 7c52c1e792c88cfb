# tests/fake_engine.py
from __future__ import annotations

import random
from typing import Optional, Sequence

from dominion_arena.cards import (
    KINGDOM_SIZE,
    TREASURE_CARDS,
    VICTORY_CARDS,
    Card,
)
from dominion_arena.engine import EngineSetupError
from dominion_arena.state import GameSnapshot, Zone


class FakeEngine:
    """
    Small stand-in for the rules engine: opening setup plus the two effects
    the check batteries cover. Effects follow the printed card text.
    """

    def __init__(self, reshuffle_seed: int = 0) -> None:
        self._rng = random.Random(reshuffle_seed)

    # -- setup -------------------------------------------------------------

    def initialize_game(
        self,
        num_players: int,
        kingdom_cards: Sequence[Card],
        seed: int,
    ) -> GameSnapshot:
        if not 2 <= num_players <= 4:
            raise EngineSetupError(num_players, kingdom_cards, seed, "bad player count")
        if len(set(kingdom_cards)) != KINGDOM_SIZE:
            raise EngineSetupError(num_players, kingdom_cards, seed, "duplicate kingdom cards")

        rng = random.Random(seed)
        victory_pile = 8 if num_players == 2 else 12
        supply = {
            Card.CURSE: 10 * (num_players - 1),
            Card.ESTATE: victory_pile,
            Card.DUCHY: victory_pile,
            Card.PROVINCE: victory_pile,
            Card.COPPER: 60 - 7 * num_players,
            Card.SILVER: 40,
            Card.GOLD: 30,
        }
        for card in kingdom_cards:
            if card in supply:
                continue
            supply[card] = victory_pile if card in VICTORY_CARDS else 10

        snapshot = GameSnapshot(num_players=num_players, supply=supply)
        for player in range(num_players):
            deck = [Card.ESTATE] * 3 + [Card.COPPER] * 7
            rng.shuffle(deck)
            snapshot.decks[player] = deck
            for _ in range(5):
                snapshot.hands[player].append(deck.pop())
        return snapshot

    # -- effects -----------------------------------------------------------

    def card_effect(self, card: Card, player: int, snapshot: GameSnapshot) -> int:
        if card == Card.ADVENTURER:
            return self._adventurer(player, snapshot)
        if card == Card.SEA_HAG:
            return self._sea_hag(player, snapshot)
        return -1

    def _draw(self, player: int, snapshot: GameSnapshot) -> Optional[Card]:
        deck = snapshot.zone(player, Zone.DECK)
        if not deck:
            discard = snapshot.zone(player, Zone.DISCARD)
            deck.extend(discard)
            discard.clear()
            self._rng.shuffle(deck)
        return deck.pop() if deck else None

    def _adventurer(self, player: int, snapshot: GameSnapshot) -> int:
        hand = snapshot.zone(player, Zone.HAND)
        revealed = []
        treasures = 0
        while treasures < 2:
            card = self._draw(player, snapshot)
            if card is None:
                break
            if card in TREASURE_CARDS:
                hand.append(card)
                treasures += 1
            else:
                revealed.append(card)
        snapshot.zone(player, Zone.DISCARD).extend(revealed)
        return 0

    def _sea_hag(self, player: int, snapshot: GameSnapshot) -> int:
        for other in range(snapshot.num_players):
            if other == player:
                continue
            top = self._draw(other, snapshot)
            if top is not None:
                snapshot.zone(other, Zone.DISCARD).append(top)
            if snapshot.supply.get(Card.CURSE, 0) > 0:
                snapshot.supply[Card.CURSE] -= 1
                snapshot.zone(other, Zone.DECK).append(Card.CURSE)
        return 0

    # -- queries -----------------------------------------------------------

    def supply_count(self, card: Card, snapshot: GameSnapshot) -> int:
        return snapshot.supply_count(card)

    def full_deck_count(self, player: int, card: Card, snapshot: GameSnapshot) -> int:
        return sum(
            1 for zone in Zone for c in snapshot.zone(player, zone) if c == card
        )

    def whose_turn(self, snapshot: GameSnapshot) -> int:
        return snapshot.whose_turn


class GreedyAdventurerEngine(FakeEngine):
    """Adventurer keeps every revealed card instead of discarding non-treasures."""

    def _adventurer(self, player: int, snapshot: GameSnapshot) -> int:
        hand = snapshot.zone(player, Zone.HAND)
        treasures = 0
        while treasures < 2:
            card = self._draw(player, snapshot)
            if card is None:
                break
            hand.append(card)
            if card in TREASURE_CARDS:
                treasures += 1
        return 0


class SelfCursingSeaHagEngine(FakeEngine):
    """Sea hag also curses the player who played it."""

    def _sea_hag(self, player: int, snapshot: GameSnapshot) -> int:
        super()._sea_hag(player, snapshot)
        if snapshot.supply.get(Card.CURSE, 0) > 0:
            snapshot.supply[Card.CURSE] -= 1
            snapshot.zone(player, Zone.DECK).append(Card.CURSE)
        return 0


class RefusingEngine(FakeEngine):
    """Refuses to set up any four-player game."""

    def initialize_game(self, num_players, kingdom_cards, seed):
        if num_players == 4:
            raise EngineSetupError(num_players, kingdom_cards, seed, "no four-player games")
        return super().initialize_game(num_players, kingdom_cards, seed)


# Instance form, for load_engine("fake_engine:ENGINE").
ENGINE = FakeEngine()
