"""Base class for all hub games.

All games inherit from BaseGame to get a consistent interface for the hub,
the launcher and the game registry.

Game metadata (NAME, DESCRIPTION, etc.) and CLI arguments (ARGUMENTS)
are declared as class attributes, making them part of the plugin architecture.

Games never run their own loop. Everything time-driven is a callback on the
shared Scheduler, registered through the _every/_after/_each_frame helpers.
Those helpers track the handles so one call to _cancel_activities() stops a
session, and they wrap each callback with a session generation check so a
callback from an earlier session does nothing even if it still fires.
"""
import random
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, TYPE_CHECKING

from games.common.game_state import GameState
from games.common.difficulty import DIFFICULTY_ORDER
from hub.scheduler import Scheduler, TimerHandle

if TYPE_CHECKING:
    from hub.scores import ScoreRecorder


class BaseGame(ABC):
    """Abstract base class for all hub games.

    Class Attributes (metadata):
        NAME: Display name for the game
        SLUG: Registry identifier
        DESCRIPTION: Short description of gameplay
        VERSION: Semantic version string
        AUTHOR: Author/team name
        ARGUMENTS: List of CLI argument definitions for argparse

    Subclasses must implement:
        - start(difficulty): Begin a session
        - get_score() -> int: Return current score

    Usage:
        class MyGame(BaseGame):
            NAME = "My Game"
            SLUG = "mygame"

            def start(self, difficulty=None):
                self._begin_session(difficulty)
                self._every(1000, self._on_second)

            def get_score(self):
                return self._score
    """

    # =========================================================================
    # Game Metadata (override in subclasses)
    # =========================================================================

    NAME: str = "Unnamed Game"
    SLUG: str = "unnamed"
    DESCRIPTION: str = "No description"
    VERSION: str = "1.0.0"
    AUTHOR: str = "Unknown"

    # CLI argument definitions for argparse
    # Each entry is a dict with keys: name, type, default, help, choices (optional), action (optional)
    ARGUMENTS: List[Dict[str, Any]] = []

    _BASE_ARGUMENTS: List[Dict[str, Any]] = [
        {
            'name': '--difficulty',
            'type': str,
            'default': DIFFICULTY_ORDER[0],
            'choices': DIFFICULTY_ORDER,
            'help': 'Starting difficulty'
        },
        {
            'name': '--seed',
            'type': int,
            'default': None,
            'help': 'Random seed for reproducible sessions'
        },
    ]

    @classmethod
    def get_arguments(cls) -> List[Dict[str, Any]]:
        """Get all CLI arguments for this game (game-specific + base).

        Game-specific arguments come first, then base arguments.
        Duplicates by name are removed (game-specific takes precedence).
        """
        seen_names = set()
        result = []

        for arg in list(cls.ARGUMENTS) + cls._BASE_ARGUMENTS:
            name = arg.get('name', '')
            if name and name not in seen_names:
                seen_names.add(name)
                result.append(arg)

        return result

    @classmethod
    def get_info(cls) -> Dict[str, Any]:
        """Get game metadata as a dictionary.

        Returns:
            Dict with keys: name, slug, description, version, author, arguments
        """
        return {
            'name': cls.NAME,
            'slug': cls.SLUG,
            'description': cls.DESCRIPTION,
            'version': cls.VERSION,
            'author': cls.AUTHOR,
            'arguments': cls.get_arguments(),
        }

    # =========================================================================
    # Instance Initialization
    # =========================================================================

    def __init__(
        self,
        scheduler: Scheduler,
        recorder: Optional['ScoreRecorder'] = None,
        rng: Optional[random.Random] = None,
        difficulty: str = DIFFICULTY_ORDER[0],
        seed: Optional[int] = None,
        **kwargs,
    ):
        """Initialize base game.

        Args:
            scheduler: Shared scheduler driving all timers of this game
            recorder: Credits finished sessions to the current user
            rng: Random source (defaults to a Random seeded with seed)
            difficulty: Initially selected difficulty
            seed: Seed for the default random source
        """
        if difficulty not in DIFFICULTY_ORDER:
            raise ValueError(f"Unknown difficulty {difficulty!r}")
        self._scheduler = scheduler
        self._recorder = recorder
        self._rng = rng if rng is not None else random.Random(seed)
        self._difficulty = difficulty
        self._state = GameState.IDLE
        self.message = ""

        self._generation = 0
        self._handles: List[TimerHandle] = []

    @property
    def state(self) -> GameState:
        """Current game state (standard interface)."""
        return self._state

    @property
    def difficulty(self) -> str:
        """Currently selected difficulty name."""
        return self._difficulty

    @property
    def is_running(self) -> bool:
        return self._state == GameState.RUNNING

    @property
    def active_timers(self) -> int:
        """Timers this game still has scheduled."""
        return sum(1 for h in self._handles if h.active)

    @abstractmethod
    def start(self, difficulty: Optional[str] = None) -> None:
        """Start a session at difficulty (default: the selected one)."""
        pass

    @abstractmethod
    def get_score(self) -> int:
        """Get current score."""
        pass

    # =========================================================================
    # Scheduling helpers
    # =========================================================================

    def _guard(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Wrap callback so it only runs within the current session."""
        generation = self._generation

        def guarded() -> None:
            if generation != self._generation:
                return
            callback()

        guarded.__name__ = getattr(callback, '__name__', 'callback')
        return guarded

    def _track(self, handle: TimerHandle) -> TimerHandle:
        self._handles = [h for h in self._handles if h.active]
        self._handles.append(handle)
        return handle

    def _every(self, interval_ms: float, callback: Callable[[], None]) -> TimerHandle:
        return self._track(self._scheduler.every(interval_ms, self._guard(callback)))

    def _after(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        return self._track(self._scheduler.after(delay_ms, self._guard(callback)))

    def _each_frame(self, callback: Callable[[], None]) -> TimerHandle:
        return self._track(self._scheduler.each_frame(self._guard(callback)))

    def _cancel_activities(self) -> None:
        """Stop every timer of the session and invalidate stale callbacks."""
        for handle in self._handles:
            handle.cancel()
        self._handles = []
        self._generation += 1

    # =========================================================================
    # Session helpers
    # =========================================================================

    def _select_difficulty(self, difficulty: Optional[str]) -> str:
        if difficulty is not None:
            if difficulty not in DIFFICULTY_ORDER:
                raise ValueError(
                    f"Unknown difficulty {difficulty!r}; expected one of: {', '.join(DIFFICULTY_ORDER)}"
                )
            self._difficulty = difficulty
        return self._difficulty

    def _record(self, points: int) -> None:
        """Credit points to the current user, if a recorder is attached."""
        if self._recorder is not None:
            self._recorder.record(points, game=self.SLUG, difficulty=self._difficulty)

    def reset(self) -> None:
        """Stop any session and return to IDLE."""
        self._cancel_activities()
        self._state = GameState.IDLE
        self.message = ""
