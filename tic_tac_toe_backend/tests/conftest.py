import random

import pytest

from tictactoe.database import MemoryStore
from tictactoe.records import Scoreboard
from tictactoe.session import GameSession


class RecordingFeedback:
    """Keeps every event it receives, in order."""

    def __init__(self):
        self.events = []
        self.sound_enabled = True

    def notify(self, event):
        self.events.append(event)


class BrokenStore(MemoryStore):
    """Store whose backend fails on every read and write."""

    async def _read(self, key):
        raise ConnectionError("storage offline")

    async def _write(self, key, value):
        raise ConnectionError("storage offline")


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def scoreboard(store):
    return Scoreboard(store)


@pytest.fixture
def feedback():
    return RecordingFeedback()


@pytest.fixture
def make_session(scoreboard, feedback):
    def factory(**kwargs):
        kwargs.setdefault("think_delay", 0)
        kwargs.setdefault("rng", random.Random(7))
        return GameSession(scoreboard, feedback=feedback, **kwargs)
    return factory


@pytest.fixture
def broken_store():
    return BrokenStore()
