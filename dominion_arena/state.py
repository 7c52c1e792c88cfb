# dominion_arena/state.py
from __future__ import annotations

import copy
import enum
from dataclasses import dataclass, field
from typing import Any, Dict, List

from .cards import Card, card_name, dict_to_card

# Capacities of the engine's per-player zones.
MAX_HAND = 500
MAX_DECK = 500
MIN_PLAYERS = 2
MAX_PLAYERS = 4


class Zone(enum.Enum):
    HAND = "hand"
    DECK = "deck"
    DISCARD = "discard"


@dataclass
class GameSnapshot:
    """
    A point-in-time view of a Dominion game.

    Each zone holds one list of cards per player. The list length is the
    zone's count; the deck is drawn from the END of its list, so the top of
    the deck is ``decks[p][-1]``.
    """

    num_players: int
    whose_turn: int = 0
    num_actions: int = 1
    num_buys: int = 1
    played_card_count: int = 0
    hands: List[List[Card]] = field(default_factory=list)
    decks: List[List[Card]] = field(default_factory=list)
    discards: List[List[Card]] = field(default_factory=list)
    supply: Dict[Card, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for zone_lists in (self.hands, self.decks, self.discards):
            while len(zone_lists) < self.num_players:
                zone_lists.append([])

    def zone(self, player: int, zone: Zone) -> List[Card]:
        """
        Return the live list backing a player's zone.

        Players outside ``0..num_players-1`` get a fresh empty list, so lookups
        on a malformed index read as an empty zone instead of failing.
        """
        lists = self._zone_lists(zone)
        if not 0 <= player < min(self.num_players, len(lists)):
            return []
        return lists[player]

    def count(self, player: int, zone: Zone) -> int:
        return len(self.zone(player, zone))

    def supply_count(self, card: Card) -> int:
        return self.supply.get(card, 0)

    def _zone_lists(self, zone: Zone) -> List[List[Card]]:
        if zone is Zone.HAND:
            return self.hands
        if zone is Zone.DECK:
            return self.decks
        if zone is Zone.DISCARD:
            return self.discards
        raise ValueError(f"Unknown zone: {zone!r}")


def copy_snapshot(src: GameSnapshot) -> GameSnapshot:
    """Full-value copy of a snapshot; mutating the copy never touches ``src``."""
    return copy.deepcopy(src)


def snapshots_equal(a: GameSnapshot, b: GameSnapshot) -> bool:
    """True when every counter, zone and supply entry matches."""
    if (
        a.num_players != b.num_players
        or a.whose_turn != b.whose_turn
        or a.num_actions != b.num_actions
        or a.num_buys != b.num_buys
        or a.played_card_count != b.played_card_count
    ):
        return False
    for zone in Zone:
        for player in range(a.num_players):
            if a.zone(player, zone) != b.zone(player, zone):
                return False
    return dict(a.supply) == dict(b.supply)


def empty_zone(snapshot: GameSnapshot, player: int, zone: Zone) -> None:
    """Remove every card from a player's zone, leaving a count of 0."""
    snapshot.zone(player, zone).clear()


def validate_snapshot(snapshot: GameSnapshot) -> List[str]:
    """Return a list of invariant violations; empty when the snapshot is sound."""
    problems: List[str] = []

    if not MIN_PLAYERS <= snapshot.num_players <= MAX_PLAYERS:
        problems.append(f"num_players {snapshot.num_players} outside 2..4")
    if not 0 <= snapshot.whose_turn < snapshot.num_players:
        problems.append(
            f"whose_turn {snapshot.whose_turn} outside "
            f"0..{snapshot.num_players - 1}"
        )

    for counter in ("num_actions", "num_buys", "played_card_count"):
        value = getattr(snapshot, counter)
        if value < 0:
            problems.append(f"{counter} is negative ({value})")

    for zone in Zone:
        lists = snapshot._zone_lists(zone)
        if len(lists) != snapshot.num_players:
            problems.append(
                f"{zone.value}: {len(lists)} player lists for "
                f"{snapshot.num_players} players"
            )
        capacity = MAX_HAND if zone is Zone.HAND else MAX_DECK
        for player, cards in enumerate(lists):
            if len(cards) > capacity:
                problems.append(
                    f"{zone.value} | player {player}: count {len(cards)} "
                    f"exceeds capacity {capacity}"
                )
            bad = [c for c in cards if not isinstance(c, Card)]
            if bad:
                problems.append(
                    f"{zone.value} | player {player}: unknown cards {bad!r}"
                )

    for card, remaining in snapshot.supply.items():
        if remaining < 0:
            problems.append(f"supply of {card_name(card)} is negative ({remaining})")

    return problems


# ---------------------------------------------------------------------------
# Dumps
# ---------------------------------------------------------------------------


def format_zone(snapshot: GameSnapshot, player: int, zone: Zone) -> str:
    names = ", ".join(card_name(c) for c in snapshot.zone(player, zone))
    return f"{player}: {names}"


def format_snapshot(snapshot: GameSnapshot) -> str:
    """Multi-line dump of players, hands, decks and discards."""
    lines = [
        f"Players: {snapshot.num_players}   Current: {snapshot.whose_turn}",
    ]
    for title, zone in (
        ("Hands:", Zone.HAND),
        ("Decks:", Zone.DECK),
        ("Discards:", Zone.DISCARD),
    ):
        lines.append(title)
        for player in range(snapshot.num_players):
            lines.append(format_zone(snapshot, player, zone))
    return "\n".join(lines)


def snapshot_to_dict(snapshot: GameSnapshot) -> Dict[str, Any]:
    """Convert a snapshot to a JSON-serializable dict."""

    def _zones(lists: List[List[Card]]) -> List[List[str]]:
        return [[card_name(c) for c in cards] for cards in lists]

    return {
        "num_players": snapshot.num_players,
        "whose_turn": snapshot.whose_turn,
        "num_actions": snapshot.num_actions,
        "num_buys": snapshot.num_buys,
        "played_card_count": snapshot.played_card_count,
        "hands": _zones(snapshot.hands),
        "decks": _zones(snapshot.decks),
        "discards": _zones(snapshot.discards),
        "supply": {card_name(c): n for c, n in sorted(snapshot.supply.items())},
    }


def snapshot_from_dict(data: Dict[str, Any]) -> GameSnapshot:
    """Convert a dict produced by ``snapshot_to_dict`` back into a snapshot."""

    def _zones(raw: List[List[Any]]) -> List[List[Card]]:
        return [[_card(entry) for entry in cards] for cards in raw]

    return GameSnapshot(
        num_players=int(data["num_players"]),
        whose_turn=int(data.get("whose_turn", 0)),
        num_actions=int(data.get("num_actions", 1)),
        num_buys=int(data.get("num_buys", 1)),
        played_card_count=int(data.get("played_card_count", 0)),
        hands=_zones(data.get("hands", [])),
        decks=_zones(data.get("decks", [])),
        discards=_zones(data.get("discards", [])),
        supply={
            _card(name): int(n) for name, n in data.get("supply", {}).items()
        },
    )


def _card(entry: Any) -> Card:
    if isinstance(entry, dict):
        return dict_to_card(entry)
    if isinstance(entry, int):
        return Card(entry)
    return dict_to_card({"name": entry})
