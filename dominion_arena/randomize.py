# dominion_arena/randomize.py
from __future__ import annotations

import random
from typing import Iterable, List, Sequence

from .cards import BASE_CARDS, KINGDOM_CARDS, KINGDOM_SIZE, Card
from .state import MAX_DECK, GameSnapshot, Zone

# Smallest random hand and deck sizes.
MIN_HAND = 5
MIN_DECK = 2


def random_kingdom_cards(
    rng: random.Random,
    required: Iterable[Card] = (),
    size: int = KINGDOM_SIZE,
) -> List[Card]:
    """
    Pick ``size`` distinct kingdom cards, making sure every ``required`` card
    is among them.

    Required cards that are not kingdom cards (curse, for sea hag) still take a
    slot, replacing a random pick from the front of the selection.
    """
    required = list(dict.fromkeys(required))
    if len(required) > size:
        raise ValueError(f"{len(required)} required cards do not fit in {size} slots")

    picks = rng.sample(KINGDOM_CARDS, size)
    for card in required:
        if card in picks:
            continue
        # Overwrite the earliest slot not already holding a required card.
        slot = next(i for i, pick in enumerate(picks) if pick not in required)
        picks[slot] = card
    return picks


def card_pool(kingdom_cards: Sequence[Card]) -> List[Card]:
    """Every card that can appear in a game using this kingdom selection."""
    return list(dict.fromkeys([*BASE_CARDS, *kingdom_cards]))


def _fill_zone(
    snapshot: GameSnapshot,
    player: int,
    zone: Zone,
    pool: Sequence[Card],
    count: int,
    rng: random.Random,
) -> None:
    cards = snapshot.zone(player, zone)
    cards[:] = [rng.choice(pool) for _ in range(count)]


def randomize_player_hand(
    snapshot: GameSnapshot,
    player: int,
    pool: Sequence[Card],
    rng: random.Random,
    capacity: int = MAX_DECK,
) -> None:
    """Replace a player's hand with ``MIN_HAND..`` random cards from ``pool``."""
    upper = max(MIN_HAND, capacity - snapshot.count(player, Zone.DECK))
    _fill_zone(snapshot, player, Zone.HAND, pool, rng.randint(MIN_HAND, upper), rng)


def randomize_player_deck(
    snapshot: GameSnapshot,
    player: int,
    pool: Sequence[Card],
    rng: random.Random,
    capacity: int = MAX_DECK,
) -> None:
    upper = max(MIN_HAND, capacity - snapshot.count(player, Zone.HAND))
    _fill_zone(snapshot, player, Zone.DECK, pool, rng.randint(MIN_DECK, upper), rng)


def randomize_player_discard(
    snapshot: GameSnapshot,
    player: int,
    pool: Sequence[Card],
    rng: random.Random,
    capacity: int = MAX_DECK,
) -> None:
    occupied = snapshot.count(player, Zone.HAND) + snapshot.count(player, Zone.DECK)
    upper = max(0, capacity - occupied)
    _fill_zone(snapshot, player, Zone.DISCARD, pool, rng.randint(0, upper), rng)


def randomize_hands(
    snapshot: GameSnapshot,
    pool: Sequence[Card],
    rng: random.Random,
    capacity: int = MAX_DECK,
) -> None:
    for player in range(snapshot.num_players):
        randomize_player_hand(snapshot, player, pool, rng, capacity)


def randomize_decks(
    snapshot: GameSnapshot,
    pool: Sequence[Card],
    rng: random.Random,
    capacity: int = MAX_DECK,
) -> None:
    for player in range(snapshot.num_players):
        randomize_player_deck(snapshot, player, pool, rng, capacity)


def randomize_discards(
    snapshot: GameSnapshot,
    pool: Sequence[Card],
    rng: random.Random,
    capacity: int = MAX_DECK,
) -> None:
    for player in range(snapshot.num_players):
        randomize_player_discard(snapshot, player, pool, rng, capacity)
