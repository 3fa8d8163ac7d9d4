"""
Hub Session

The object a front end holds for the lifetime of the app. It wires one
key-value store into the user store, the login gate and the score
recorder, and owns the scheduler every game timer runs on.

Usage:
    hub = HubSession.open()                  # JSON profile in the data dir
    hub.auth.register('alice', 'pw')
    hub.auth.login('alice', 'pw')

    catch = hub.create_game('catch')
    catch.start('easy')
    while catch.is_running:
        hub.scheduler.advance(clock.tick(60))

    hub.current_stats()                      # PlayerStats(username='alice', ...)
    hub.logout()
"""

import random
from typing import Callable, Optional

from hub.auth import AuthGate, wall_clock_ms
from hub.logging import get_logger, register_sink, create_sink_for_environment
from hub.scheduler import Scheduler
from hub.scores import ScoreRecorder
from hub.storage import KeyValueStore, JsonFileStore, MemoryStore, UserStore
from models.user import PlayerStats

log = get_logger('session')

# Modules emitting structured records (game results, lockouts)
STRUCTURED_MODULES = ('scores', 'auth')


class HubSession:
    """
    Shared services for the login gate, the hub view and the games.

    Responsibilities:
    1. Own the store and the UserStore view of it
    2. Expose the login gate and the score recorder
    3. Create game engines bound to the shared scheduler and recorder
    """

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        scheduler: Optional[Scheduler] = None,
        clock: Callable[[], float] = wall_clock_ms,
        rng: Optional[random.Random] = None,
    ):
        """
        Args:
            store: Persistence backend (in-memory if omitted)
            scheduler: Scheduler for game timers (new one if omitted)
            clock: Epoch-millisecond clock for lockout expiry
            rng: Random source handed to created games
        """
        self.store = store if store is not None else MemoryStore()
        self.users = UserStore(self.store)
        self.auth = AuthGate(self.users, clock=clock)
        self.recorder = ScoreRecorder(self.users)
        self.scheduler = scheduler if scheduler is not None else Scheduler()
        self._rng = rng

    @classmethod
    def open(cls, **kwargs) -> 'HubSession':
        """Session backed by the configured JSON profile file."""
        store = JsonFileStore.default()
        log.info("Using profile store %s", store.path)
        for module in STRUCTURED_MODULES:
            register_sink(module, create_sink_for_environment(module))
        return cls(store=store, **kwargs)

    @property
    def current_user(self) -> Optional[str]:
        """Username of the logged-in player, if the account still exists."""
        user = self.users.find_user(self.users.get_current_user())
        return user.username if user else None

    def current_stats(self) -> Optional[PlayerStats]:
        """Hub view data for the logged-in player."""
        return self.recorder.get_stats()

    def logout(self) -> None:
        self.auth.logout()

    def create_game(self, slug: str, **kwargs):
        """Create a game engine bound to this session's scheduler and recorder."""
        from games.registry import get_registry

        kwargs.setdefault('rng', self._rng)
        return get_registry().create_game(
            slug, scheduler=self.scheduler, recorder=self.recorder, **kwargs)

    def create_catch_game(self, **kwargs):
        return self.create_game('catch', **kwargs)

    def create_memory_game(self, **kwargs):
        return self.create_game('memory', **kwargs)
