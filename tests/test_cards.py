# tests/test_cards.py
import pytest

from dominion_arena.cards import (
    ALL_CARDS,
    BASE_CARDS,
    KINGDOM_CARDS,
    TREASURE_CARDS,
    VICTORY_CARDS,
    Card,
    card_from_name,
    card_name,
    dict_to_card,
)


def test_card_identifiers_and_categories():
    assert len(ALL_CARDS) == 27
    assert Card.CURSE == 0
    assert Card.SEA_HAG == 25
    assert Card.TREASURE_MAP == 26

    assert len(KINGDOM_CARDS) == 20
    assert KINGDOM_CARDS[0] is Card.ADVENTURER
    assert not set(BASE_CARDS) & set(KINGDOM_CARDS)

    assert TREASURE_CARDS == {Card.COPPER, Card.SILVER, Card.GOLD}
    # Curse is not counted among the victory piles.
    assert Card.CURSE not in VICTORY_CARDS
    assert {Card.GARDENS, Card.GREAT_HALL} <= VICTORY_CARDS


def test_card_names_round_trip():
    for card in ALL_CARDS:
        assert card_from_name(card_name(card)) is card
    assert str(Card.SEA_HAG) == "sea_hag"
    assert card_name(99) == "NONE"


def test_card_from_name_accepts_loose_spellings():
    assert card_from_name("Sea Hag") is Card.SEA_HAG
    assert card_from_name("treasure-map") is Card.TREASURE_MAP
    with pytest.raises(ValueError):
        card_from_name("moat")


def test_dict_to_card_accepts_id_or_name():
    assert dict_to_card({"id": 7}) is Card.ADVENTURER
    assert dict_to_card({"name": "gold"}) is Card.GOLD
