import random

import pytest

from cartrunner.config.settings import PhysicsSettings, Settings
from cartrunner.core.events import EventBus
from cartrunner.game.layout import Layout, PhysicsConstants
from cartrunner.game.session import GameSession
from cartrunner.storage.highscore import MemoryHighScoreStore


@pytest.fixture
def layout():
    return Layout(360, 640)


@pytest.fixture
def physics(layout):
    return PhysicsConstants.scaled(PhysicsSettings(), layout.scale)


@pytest.fixture
def settings(tmp_path):
    return Settings(assets_path=tmp_path / "assets", data_path=tmp_path / "data")


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def store():
    return MemoryHighScoreStore()


@pytest.fixture
def make_session(settings, bus, store, layout):
    def factory(**kwargs):
        kwargs.setdefault("rng", random.Random(1234))
        kwargs.setdefault("layout", layout)
        return GameSession(settings, bus, store, **kwargs)

    return factory
