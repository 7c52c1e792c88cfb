# dominion_arena/checks/base.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Tuple

from ..assertions import Reporter
from ..cards import Card
from ..engine import DominionEngine
from ..state import GameSnapshot

logger = logging.getLogger(__name__)


@dataclass
class TrialOutcome:
    """How many checks applied to a trial and how many of them passed."""

    applicable: int = 0
    passed: int = 0

    @property
    def failed(self) -> int:
        return self.applicable - self.passed

    def record(self, passed: bool) -> None:
        self.applicable += 1
        if passed:
            self.passed += 1


class CardCheck:
    """
    A battery of property checks for one card's effect.

    Subclasses set ``card`` and ``function_name`` and implement ``check``,
    which compares ``pre`` against the mutated ``post`` through a Reporter.
    """

    card: Card
    # Label used on every report line, e.g. "adventurerEffect".
    function_name: str
    # Cards that must be part of the kingdom selection for the effect to work.
    required_cards: Tuple[Card, ...] = ()

    @property
    def kingdom_requirements(self) -> Tuple[Card, ...]:
        return (self.card, *self.required_cards)

    def run(
        self,
        engine: DominionEngine,
        pre: GameSnapshot,
        post: GameSnapshot,
        player: int,
        reporter: Reporter,
    ) -> TrialOutcome:
        """Apply the card's effect to ``post`` and evaluate the battery."""
        result = engine.card_effect(self.card, player, post)
        if result != 0:
            logger.debug(
                "%s returned %s for player %d", self.function_name, result, player
            )
        return self.check(pre, post, player, reporter)

    def check(
        self,
        pre: GameSnapshot,
        post: GameSnapshot,
        player: int,
        reporter: Reporter,
    ) -> TrialOutcome:
        raise NotImplementedError

    def can_continue(
        self, engine: DominionEngine, pre: GameSnapshot, player: int
    ) -> bool:
        """Whether a chained (continuing-game) trial makes sense for ``player``."""
        return True
