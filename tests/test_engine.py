# tests/test_engine.py
import pytest
from fake_engine import ENGINE, FakeEngine

from dominion_arena.cards import Card
from dominion_arena.engine import (
    DominionEngine,
    EngineLoadError,
    EngineSetupError,
    load_engine,
)


def test_fake_engine_satisfies_protocol():
    assert isinstance(FakeEngine(), DominionEngine)
    assert not isinstance(object(), DominionEngine)


def test_load_engine_from_class_or_instance():
    assert isinstance(load_engine("fake_engine:FakeEngine"), FakeEngine)
    assert load_engine("fake_engine:ENGINE") is ENGINE


@pytest.mark.parametrize(
    "path",
    [
        "fake_engine",
        ":FakeEngine",
        "no_such_module:Engine",
        "fake_engine:Missing",
        "fake_engine:random",
    ],
)
def test_load_engine_rejects_bad_paths(path):
    with pytest.raises(EngineLoadError):
        load_engine(path)


def test_setup_error_carries_configuration():
    kingdom = [Card.ADVENTURER] * 10
    with pytest.raises(EngineSetupError) as excinfo:
        FakeEngine().initialize_game(2, kingdom, 99)
    err = excinfo.value
    assert err.num_players == 2
    assert err.seed == 99
    assert err.kingdom_cards == kingdom
    assert "seed 99" in str(err)
