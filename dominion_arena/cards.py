# dominion_arena/cards.py
from __future__ import annotations

import enum
from typing import Any, Dict, FrozenSet, List


class Card(enum.IntEnum):
    """
    The 27 card kinds known to the engine.

    Values match the engine's card identifiers, so a snapshot can hold either
    form interchangeably.
    """

    CURSE = 0
    ESTATE = 1
    DUCHY = 2
    PROVINCE = 3
    COPPER = 4
    SILVER = 5
    GOLD = 6
    ADVENTURER = 7
    COUNCIL_ROOM = 8
    FEAST = 9
    GARDENS = 10
    MINE = 11
    REMODEL = 12
    SMITHY = 13
    VILLAGE = 14
    BARON = 15
    GREAT_HALL = 16
    MINION = 17
    STEWARD = 18
    TRIBUTE = 19
    AMBASSADOR = 20
    CUTPURSE = 21
    EMBARGO = 22
    OUTPOST = 23
    SALVAGER = 24
    SEA_HAG = 25
    TREASURE_MAP = 26

    def __str__(self) -> str:
        return card_name(self)


ALL_CARDS: List[Card] = list(Card)

BASE_CARDS: List[Card] = [
    Card.CURSE,
    Card.ESTATE,
    Card.DUCHY,
    Card.PROVINCE,
    Card.COPPER,
    Card.SILVER,
    Card.GOLD,
]

KINGDOM_CARDS: List[Card] = [c for c in Card if c >= Card.ADVENTURER]

TREASURE_CARDS: FrozenSet[Card] = frozenset(
    {Card.COPPER, Card.SILVER, Card.GOLD}
)

# Curse is not a victory pile.
VICTORY_CARDS: FrozenSet[Card] = frozenset(
    {Card.ESTATE, Card.DUCHY, Card.PROVINCE, Card.GARDENS, Card.GREAT_HALL}
)

KINGDOM_CARD_SET: FrozenSet[Card] = frozenset(KINGDOM_CARDS)

# Number of kingdom piles chosen for a game.
KINGDOM_SIZE = 10


def card_name(card: int) -> str:
    """Lowercase name of a card identifier, or "NONE" for unknown values."""
    try:
        return Card(card).name.lower()
    except ValueError:
        return "NONE"


def card_from_name(name: str) -> Card:
    """Parse a card name such as "sea_hag", "sea-hag" or "Sea Hag"."""
    key = name.strip().upper().replace("-", "_").replace(" ", "_")
    try:
        return Card[key]
    except KeyError:
        raise ValueError(f"Unknown card name: {name!r}") from None


def dict_to_card(data: Dict[str, Any]) -> Card:
    """Convert a dict back into a Card."""
    if "id" in data:
        return Card(int(data["id"]))
    return card_from_name(data["name"])
