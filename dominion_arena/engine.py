# dominion_arena/engine.py
from __future__ import annotations

import importlib
import logging
from typing import Any, Protocol, Sequence, runtime_checkable

from .cards import Card
from .state import GameSnapshot

logger = logging.getLogger(__name__)


class EngineError(Exception):
    """Base class for problems reported at the engine boundary."""


class EngineSetupError(EngineError):
    """The engine refused to initialize a game for the given configuration."""

    def __init__(
        self,
        num_players: int,
        kingdom_cards: Sequence[Card],
        seed: int,
        reason: str = "",
    ) -> None:
        self.num_players = num_players
        self.kingdom_cards = list(kingdom_cards)
        self.seed = seed
        self.reason = reason
        detail = f": {reason}" if reason else ""
        super().__init__(
            f"initialize_game failed for {num_players} players, seed {seed}{detail}"
        )


class EngineLoadError(EngineError):
    """An engine could not be imported from a ``module:attribute`` path."""


@runtime_checkable
class DominionEngine(Protocol):
    """
    Interface to the Dominion rules engine under test.

    Nothing in this package implements the rules. Implementations wrap a real
    engine (a binding to the C engine, a port, ...) and translate its state to
    and from ``GameSnapshot``.
    """

    def initialize_game(
        self,
        num_players: int,
        kingdom_cards: Sequence[Card],
        seed: int,
    ) -> GameSnapshot:
        """
        Build the opening state of a game.

        Raises EngineSetupError when the engine reports a failure code.
        """
        raise NotImplementedError

    def card_effect(self, card: Card, player: int, snapshot: GameSnapshot) -> int:
        """Apply ``card``'s effect for ``player``, mutating ``snapshot`` in place."""
        raise NotImplementedError

    def supply_count(self, card: Card, snapshot: GameSnapshot) -> int:
        raise NotImplementedError

    def full_deck_count(self, player: int, card: Card, snapshot: GameSnapshot) -> int:
        """Copies of ``card`` across the player's deck, hand and discard."""
        raise NotImplementedError

    def whose_turn(self, snapshot: GameSnapshot) -> int:
        raise NotImplementedError


def load_engine(path: str) -> DominionEngine:
    """
    Import an engine from ``"package.module:attribute"``.

    The attribute may be an engine instance, or a class/factory taking no
    arguments that returns one.
    """
    module_name, sep, attr = path.partition(":")
    if not sep or not module_name or not attr:
        raise EngineLoadError(
            f"Engine path must look like 'package.module:attribute', got {path!r}"
        )

    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise EngineLoadError(f"Cannot import engine module {module_name!r}: {exc}") from exc

    try:
        target: Any = getattr(module, attr)
    except AttributeError:
        raise EngineLoadError(
            f"Module {module_name!r} has no attribute {attr!r}"
        ) from None

    # A class object also passes the protocol check, so instantiate it first.
    if isinstance(target, type) or (
        callable(target) and not isinstance(target, DominionEngine)
    ):
        engine = target()
    else:
        engine = target
    if not isinstance(engine, DominionEngine):
        raise EngineLoadError(
            f"{path!r} does not provide the DominionEngine interface"
        )

    logger.info("Loaded engine %s (%s)", path, type(engine).__name__)
    return engine
