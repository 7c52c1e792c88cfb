from typing import Dict, List, Type

from ..cards import card_name
from .adventurer import AdventurerCheck
from .base import CardCheck, TrialOutcome
from .sea_hag import SeaHagCheck

CARD_CHECKS: Dict[str, Type[CardCheck]] = {
    card_name(check.card): check for check in (AdventurerCheck, SeaHagCheck)
}


def available_checks() -> List[str]:
    return sorted(CARD_CHECKS)


def get_card_check(name: str) -> CardCheck:
    """Build the check battery for a card name such as "adventurer" or "sea_hag"."""
    key = name.strip().lower().replace("-", "_").replace(" ", "_")
    try:
        return CARD_CHECKS[key]()
    except KeyError:
        raise ValueError(
            f"No checks for card {name!r}; choose from {', '.join(available_checks())}"
        ) from None


__all__ = [
    "CARD_CHECKS",
    "AdventurerCheck",
    "CardCheck",
    "SeaHagCheck",
    "TrialOutcome",
    "available_checks",
    "get_card_check",
]
