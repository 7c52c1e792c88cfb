# dominion_arena/deltas.py
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Iterable, Optional

from .cards import KINGDOM_CARDS, TREASURE_CARDS, VICTORY_CARDS, Card, card_name
from .state import GameSnapshot, Zone

if TYPE_CHECKING:
    from .engine import DominionEngine

logger = logging.getLogger(__name__)

# Victory piles in a fixed order so traces are stable.
_VICTORY_ORDER = sorted(VICTORY_CARDS)


def _trace(label: str, **fields: Any) -> None:
    """Emit one DEBUG record: a label plus ``name=value`` fields."""
    if logger.isEnabledFor(logging.DEBUG):
        rendered = " ".join(f"{name}={value}" for name, value in fields.items())
        logger.debug("%s | %s", label, rendered)


def _others(pre: GameSnapshot, excluded: int) -> Iterable[int]:
    return (p for p in range(pre.num_players) if p != excluded)


# ---------------------------------------------------------------------------
# Zone counts
# ---------------------------------------------------------------------------


def count_difference(
    pre: GameSnapshot, post: GameSnapshot, player: int, zone: Zone
) -> int:
    """Signed change in a player's zone count (post - pre)."""
    before = pre.count(player, zone)
    after = post.count(player, zone)
    _trace(f"{zone.value} count", player=player, pre=before, post=after)
    return after - before


def count_delta(
    pre: GameSnapshot, post: GameSnapshot, player: int, zone: Zone
) -> int:
    return abs(count_difference(pre, post, player, zone))


def combined_count_delta_excluding(
    pre: GameSnapshot, post: GameSnapshot, excluded: int, zone: Zone
) -> int:
    """Sum of count deltas over every player except ``excluded``."""
    delta = sum(count_delta(pre, post, p, zone) for p in _others(pre, excluded))
    _trace(f"{zone.value} count | all other players", excluded=excluded, delta=delta)
    return delta


def combined_count_delta_all(pre: GameSnapshot, post: GameSnapshot, zone: Zone) -> int:
    delta = sum(count_delta(pre, post, p, zone) for p in range(pre.num_players))
    _trace(f"{zone.value} count | all players", delta=delta)
    return delta


def count_did_change(
    pre: GameSnapshot, post: GameSnapshot, player: int, zone: Zone
) -> bool:
    return count_delta(pre, post, player, zone) != 0


def any_other_player_count_changed(
    pre: GameSnapshot, post: GameSnapshot, excluded: int, zone: Zone
) -> bool:
    return any(count_did_change(pre, post, p, zone) for p in _others(pre, excluded))


def any_player_count_changed(pre: GameSnapshot, post: GameSnapshot, zone: Zone) -> bool:
    return any(
        count_did_change(pre, post, p, zone) for p in range(pre.num_players)
    )


# ---------------------------------------------------------------------------
# Zone contents
# ---------------------------------------------------------------------------


def zone_delta(pre: GameSnapshot, post: GameSnapshot, player: int, zone: Zone) -> int:
    """
    Change score for one player's zone.

    The count change plus the number of positions, within the shorter of the
    two zones, whose card differs. Zero means the zone is untouched; any other
    value only says that something changed, not what.
    """
    before = pre.zone(player, zone)
    after = post.zone(player, zone)
    delta = abs(len(after) - len(before))
    delta += sum(1 for a, b in zip(before, after) if a != b)
    _trace(
        zone.value,
        player=player,
        pre=[card_name(c) for c in before],
        post=[card_name(c) for c in after],
        delta=delta,
    )
    return delta


def combined_zone_delta_excluding(
    pre: GameSnapshot, post: GameSnapshot, excluded: int, zone: Zone
) -> int:
    delta = sum(zone_delta(pre, post, p, zone) for p in _others(pre, excluded))
    _trace(f"{zone.value} | all other players", excluded=excluded, delta=delta)
    return delta


def combined_zone_delta_all(pre: GameSnapshot, post: GameSnapshot, zone: Zone) -> int:
    delta = sum(zone_delta(pre, post, p, zone) for p in range(pre.num_players))
    _trace(f"{zone.value} | all players", delta=delta)
    return delta


def zone_did_change(
    pre: GameSnapshot, post: GameSnapshot, player: int, zone: Zone
) -> bool:
    return zone_delta(pre, post, player, zone) != 0


def any_other_player_zone_changed(
    pre: GameSnapshot, post: GameSnapshot, excluded: int, zone: Zone
) -> bool:
    return any(zone_did_change(pre, post, p, zone) for p in _others(pre, excluded))


def any_player_zone_changed(pre: GameSnapshot, post: GameSnapshot, zone: Zone) -> bool:
    return any(zone_did_change(pre, post, p, zone) for p in range(pre.num_players))


# ---------------------------------------------------------------------------
# Top of deck
# ---------------------------------------------------------------------------


def top_deck_card(snapshot: GameSnapshot, player: int) -> Optional[Card]:
    """The card a player would draw next, or None for an empty deck."""
    deck = snapshot.zone(player, Zone.DECK)
    top = deck[-1] if deck else None
    _trace("top of deck", player=player, card=card_name(top) if top is not None else None)
    return top


def top_of_deck_is_card(snapshot: GameSnapshot, player: int, card: Card) -> bool:
    return top_deck_card(snapshot, player) == card


def all_other_top_of_deck_is_card(
    snapshot: GameSnapshot, player: int, card: Card
) -> bool:
    """True when every player but ``player`` has ``card`` on top of their deck."""
    return all(
        top_of_deck_is_card(snapshot, p, card) for p in _others(snapshot, player)
    )


# ---------------------------------------------------------------------------
# Card positions and totals
# ---------------------------------------------------------------------------


def nth_occurrence(
    snapshot: GameSnapshot, player: int, zone: Zone, card: Card, n: int
) -> Optional[int]:
    """
    Index of the n-th copy of ``card`` in a zone.

    ``n > 0`` counts from the front (1 is the first copy); ``n < 0`` counts
    from the back (-1 is the last copy). Returns None when there are fewer
    than ``abs(n)`` copies, or when ``n`` is 0.
    """
    if n == 0:
        return None

    cards = snapshot.zone(player, zone)
    if n > 0:
        indices: Iterable[int] = range(len(cards))
    else:
        indices = range(len(cards) - 1, -1, -1)

    wanted = abs(n)
    found = 0
    for i in indices:
        if cards[i] == card:
            found += 1
            if found == wanted:
                return i
    return None


def first_occurrence(
    snapshot: GameSnapshot, player: int, zone: Zone, card: Card
) -> Optional[int]:
    return nth_occurrence(snapshot, player, zone, card, 1)


def last_occurrence(
    snapshot: GameSnapshot, player: int, zone: Zone, card: Card
) -> Optional[int]:
    return nth_occurrence(snapshot, player, zone, card, -1)


def count_of_card_in_zone(
    snapshot: GameSnapshot, player: int, zone: Zone, card: Card
) -> int:
    total = sum(1 for c in snapshot.zone(player, zone) if c == card)
    _trace(f"{zone.value} count of card", card=card_name(card), player=player, total=total)
    return total


def card_count_difference_in_zone(
    pre: GameSnapshot, post: GameSnapshot, player: int, zone: Zone, card: Card
) -> int:
    return count_of_card_in_zone(post, player, zone, card) - count_of_card_in_zone(
        pre, player, zone, card
    )


def count_of_card_in_full_deck(
    engine: "DominionEngine", snapshot: GameSnapshot, player: int, card: Card
) -> int:
    """Copies of ``card`` the player owns, as counted by the engine itself."""
    total = engine.full_deck_count(player, card, snapshot)
    _trace("full deck count", card=card_name(card), player=player, total=total)
    return total


def card_count_difference_in_full_deck(
    engine: "DominionEngine",
    pre: GameSnapshot,
    post: GameSnapshot,
    player: int,
    card: Card,
) -> int:
    return count_of_card_in_full_deck(
        engine, post, player, card
    ) - count_of_card_in_full_deck(engine, pre, player, card)


def total_cards(snapshot: GameSnapshot, player: int) -> int:
    """Cards in circulation for a player: hand, deck and discard combined."""
    return sum(snapshot.count(player, zone) for zone in Zone)


def total_cards_difference(pre: GameSnapshot, post: GameSnapshot, player: int) -> int:
    before = total_cards(pre, player)
    after = total_cards(post, player)
    _trace("total cards", player=player, pre=before, post=after)
    return after - before


def total_cards_delta(pre: GameSnapshot, post: GameSnapshot, player: int) -> int:
    return abs(total_cards_difference(pre, post, player))


# ---------------------------------------------------------------------------
# Treasure
# ---------------------------------------------------------------------------


def is_treasure_card(card: int) -> bool:
    return card in TREASURE_CARDS


def treasure_cards_in_zone(snapshot: GameSnapshot, player: int, zone: Zone) -> int:
    total = sum(1 for c in snapshot.zone(player, zone) if is_treasure_card(c))
    _trace(f"treasure cards in {zone.value}", player=player, total=total)
    return total


def treasure_card_difference(
    pre: GameSnapshot, post: GameSnapshot, player: int, zone: Zone
) -> int:
    return treasure_cards_in_zone(post, player, zone) - treasure_cards_in_zone(
        pre, player, zone
    )


# ---------------------------------------------------------------------------
# Supply
# ---------------------------------------------------------------------------


def supply_count_difference(pre: GameSnapshot, post: GameSnapshot, card: Card) -> int:
    before = pre.supply_count(card)
    after = post.supply_count(card)
    _trace("supply count", card=card_name(card), pre=before, post=after)
    return after - before


def supply_count_delta(pre: GameSnapshot, post: GameSnapshot, card: Card) -> int:
    return abs(supply_count_difference(pre, post, card))


def supply_count_did_change(pre: GameSnapshot, post: GameSnapshot, card: Card) -> bool:
    return supply_count_delta(pre, post, card) != 0


def victory_card_supply_delta(pre: GameSnapshot, post: GameSnapshot) -> int:
    """Total movement across the victory piles (estate, duchy, province, gardens, great hall)."""
    return sum(supply_count_delta(pre, post, card) for card in _VICTORY_ORDER)


def kingdom_card_supply_delta(pre: GameSnapshot, post: GameSnapshot) -> int:
    """Total movement across all twenty kingdom piles."""
    return sum(supply_count_delta(pre, post, card) for card in KINGDOM_CARDS)


# ---------------------------------------------------------------------------
# Turn counters
# ---------------------------------------------------------------------------


def actions_difference(pre: GameSnapshot, post: GameSnapshot) -> int:
    _trace("actions", pre=pre.num_actions, post=post.num_actions)
    return post.num_actions - pre.num_actions


def cards_played_difference(pre: GameSnapshot, post: GameSnapshot) -> int:
    _trace("cards played", pre=pre.played_card_count, post=post.played_card_count)
    return post.played_card_count - pre.played_card_count


def buys_difference(pre: GameSnapshot, post: GameSnapshot) -> int:
    _trace("buys", pre=pre.num_buys, post=post.num_buys)
    return post.num_buys - pre.num_buys
