"""Pytest fixtures shared by the hub and game tests."""
import random
from unittest.mock import Mock

import pytest

from hub import logging as hub_logging
from hub.scheduler import Scheduler
from hub.scores import ScoreRecorder
from hub.storage import MemoryStore, UserStore


class FakeClock:
    """Controllable epoch-millisecond clock."""

    def __init__(self, start_ms: float = 1_700_000_000_000.0):
        self.now = start_ms

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


class ConstantRandom(random.Random):
    """Random source whose random() always returns the same value."""

    def __init__(self, value: float):
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


@pytest.fixture
def store():
    """Empty in-memory key-value store."""
    return MemoryStore()


@pytest.fixture
def users(store):
    return UserStore(store)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scheduler():
    """Virtual-time scheduler starting at 0ms."""
    return Scheduler()


@pytest.fixture
def rng():
    """Seeded random source for reproducible sessions."""
    return random.Random(1234)


@pytest.fixture
def recorder():
    """Recorder double that only captures calls."""
    return Mock(spec=ScoreRecorder)


@pytest.fixture
def logged_in(users):
    """Store with 'alice' registered and logged in.

    Returns the ScoreRecorder bound to that store.
    """
    from models.user import User

    users.save_users([User(username='alice', password='secret', score=5, games_played=2)])
    users.set_current_user('alice')
    return ScoreRecorder(users)


@pytest.fixture
def quiet_logging():
    """Silence console logging for a test, restore levels after."""
    saved_default = hub_logging._config['default_level']
    saved_modules = dict(hub_logging._config['module_levels'])
    hub_logging.disable_logging()
    yield
    hub_logging._config['default_level'] = saved_default
    hub_logging._config['module_levels'].clear()
    hub_logging._config['module_levels'].update(saved_modules)


@pytest.fixture
def constant_random():
    """Factory for random sources that always draw the given value."""
    return ConstantRandom
