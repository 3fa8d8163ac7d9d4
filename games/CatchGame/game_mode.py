"""
CatchGame Game Mode

Falling-objects game: move the paddle left and right to catch good drops
and dodge bad ones before the countdown runs out.

Three independent activities run while a session is active:
- countdown: every second, time_left -= 1; at zero the session ends (time up)
- spawner: every profile.spawn_interval_ms, one new drop at the top
- simulation: every frame, move the paddle, move drops, resolve collisions

Each is a scheduler callback; they may interleave in any order and each
one re-checks that the session is still running before acting.
"""
import random
from enum import Enum
from typing import List, Optional, Set, TYPE_CHECKING, Union

from games.common import BaseGame, GameState, get_profile, next_difficulty
from games.CatchGame import config
from games.CatchGame.config import CatchProfile, CATCH_PROFILES
from games.CatchGame.drop import Drop
from games.CatchGame.spawner import DropSpawner
from hub.logging import get_logger
from hub.scheduler import Scheduler
from models import Rectangle

if TYPE_CHECKING:
    from hub.scores import ScoreRecorder

log = get_logger('catch_game')


class Direction(str, Enum):
    """Paddle movement directions."""
    LEFT = "left"
    RIGHT = "right"


class EndReason(str, Enum):
    """Why a session ended."""
    TIME_UP = "time_up"
    LIVES_EXHAUSTED = "lives_exhausted"


class CatchGameMode(BaseGame):
    """Catch game engine - catch good drops, avoid bad ones.

    State machine: IDLE -> RUNNING -> ENDED (time up or out of lives).
    Restarting always passes through IDLE.
    """

    NAME = "Falling Objects"
    SLUG = "catch"
    DESCRIPTION = "Catch the green drops, dodge the pink ones before time runs out."
    VERSION = "1.0.0"
    AUTHOR = "Arcade Hub Team"

    ARGUMENTS = [
        {
            'name': '--lives',
            'type': int,
            'default': config.STARTING_LIVES,
            'help': 'Starting lives'
        },
        {
            'name': '--field-width',
            'type': int,
            'default': config.FIELD_WIDTH,
            'help': 'Playfield width in pixels'
        },
        {
            'name': '--field-height',
            'type': int,
            'default': config.FIELD_HEIGHT,
            'help': 'Playfield height in pixels'
        },
    ]

    def __init__(
        self,
        scheduler: Scheduler,
        recorder: Optional['ScoreRecorder'] = None,
        rng: Optional[random.Random] = None,
        difficulty: str = 'easy',
        lives: int = config.STARTING_LIVES,
        field_width: int = config.FIELD_WIDTH,
        field_height: int = config.FIELD_HEIGHT,
        player_width: int = config.PLAYER_WIDTH,
        player_height: int = config.PLAYER_HEIGHT,
        player_speed: float = config.PLAYER_SPEED,
        drop_size: int = config.DROP_SIZE,
        **kwargs,
    ):
        """Initialize the catch game.

        Args:
            scheduler: Shared scheduler driving the session timers
            recorder: ScoreRecorder credited when a session ends
            rng: Random source for spawn position, speed and kind
            difficulty: Initially selected difficulty
            lives: Lives at the start of each session
            field_width: Playfield width in pixels
            field_height: Playfield height in pixels
            player_width: Paddle width in pixels
            player_height: Paddle height in pixels
            player_speed: Paddle movement per frame while a key is held
            drop_size: Drop width/height in pixels
        """
        super().__init__(scheduler, recorder=recorder, rng=rng, difficulty=difficulty, **kwargs)

        self.field_width = field_width
        self.field_height = field_height
        self.player_width = player_width
        self.player_height = player_height
        self.player_speed = player_speed
        self.drop_size = drop_size
        self._starting_lives = lives

        self.score = 0
        self.lives = lives
        self.time_left = 0
        self.drops: List[Drop] = []
        self.player_x = 0.0
        self.end_reason: Optional[EndReason] = None
        self.all_levels_complete = False

        self._held: Set[Direction] = set()
        self._spawner: Optional[DropSpawner] = None

        self._center_player()

    # =========================================================================
    # Read-only views
    # =========================================================================

    @property
    def profile(self) -> CatchProfile:
        return get_profile(CATCH_PROFILES, self._difficulty)

    @property
    def time_up(self) -> bool:
        """True when the last session ended because the countdown expired."""
        return self.end_reason == EndReason.TIME_UP

    @property
    def player_y(self) -> float:
        return self.field_height - self.player_height - config.PLAYER_BOTTOM_MARGIN

    @property
    def player_bounds(self) -> Rectangle:
        return Rectangle(
            x=self.player_x,
            y=self.player_y,
            width=self.player_width,
            height=self.player_height,
        )

    def get_score(self) -> int:
        return self.score

    # =========================================================================
    # Session lifecycle
    # =========================================================================

    def start(self, difficulty: Optional[str] = None) -> None:
        """Start a session; ignored while one is already running."""
        if self._state == GameState.RUNNING:
            log.debug("start() ignored: session already running")
            return

        name = self._select_difficulty(difficulty)
        profile = get_profile(CATCH_PROFILES, name)

        self.reset()

        self.score = 0
        self.lives = self._starting_lives
        self.time_left = profile.duration
        self.drops = []
        self._held.clear()
        self.end_reason = None
        self.all_levels_complete = False
        self._center_player()
        self._spawner = DropSpawner(profile, self._rng, self.field_width, self.drop_size)

        self._state = GameState.RUNNING
        self.message = "GO! Catch green drops, avoid pink drops."

        self._every(config.COUNTDOWN_INTERVAL_MS, self._on_countdown)
        self._every(profile.spawn_interval_ms, self._on_spawn)
        self._each_frame(self._on_frame)

        log.info("Session started on %s (%ds, spawn every %dms)",
                 name, profile.duration, profile.spawn_interval_ms)

    def end(self, time_up: bool) -> None:
        """Finish the running session and credit its score.

        Args:
            time_up: True when the countdown expired, False when out of lives
        """
        if self._state != GameState.RUNNING:
            return

        self._cancel_activities()
        self.drops = []
        self._held.clear()
        self.end_reason = EndReason.TIME_UP if time_up else EndReason.LIVES_EXHAUSTED
        self._state = GameState.ENDED

        if time_up and self.lives > 0:
            self.message = "Time's up! Well done"
        else:
            self.message = f"Game Over! Final Score: {self.score}"

        log.info("Session ended (%s) with score %d", self.end_reason.value, self.score)
        self._record(self.score)

    def advance_difficulty(self) -> Optional[str]:
        """Select the next difficulty and start it after a short delay.

        Ignored while a session is running.

        Returns:
            The new difficulty name, or None when hard was already selected
            or a session is running
        """
        if self._state == GameState.RUNNING:
            return None

        upcoming = next_difficulty(self._difficulty)
        if upcoming is None:
            self.all_levels_complete = True
            self.message = "You finished all levels!"
            log.info("All catch levels complete")
            return None

        self._difficulty = upcoming
        self._after(config.LEVEL_ADVANCE_DELAY_MS, self._start_selected)
        log.info("Advancing to %s", upcoming)
        return upcoming

    def _start_selected(self) -> None:
        self.start()

    # =========================================================================
    # Input
    # =========================================================================

    def press(self, direction: Union[Direction, str]) -> None:
        """Hold a direction key; ignored unless a session is running."""
        if self._state != GameState.RUNNING:
            return
        self._held.add(Direction(direction))

    def release(self, direction: Union[Direction, str]) -> None:
        """Release a direction key."""
        self._held.discard(Direction(direction))

    # =========================================================================
    # Periodic activities
    # =========================================================================

    def _on_countdown(self) -> None:
        if self._state != GameState.RUNNING:
            return
        self.time_left -= 1
        if self.time_left <= 0:
            self.end(time_up=True)

    def _on_spawn(self) -> None:
        if self._state != GameState.RUNNING or self._spawner is None:
            return
        drop = self._spawner.spawn()
        self.drops.append(drop)
        log.trace("Spawned %s drop at x=%.1f speed=%.2f", drop.kind.value, drop.x, drop.speed)

    def _on_frame(self) -> None:
        if self._state != GameState.RUNNING:
            return
        self.step()

    def step(self) -> None:
        """Advance the simulation by one frame."""
        self._move_player()
        self._update_drops()

    def _move_player(self) -> None:
        if Direction.LEFT in self._held:
            self.player_x -= self.player_speed
        if Direction.RIGHT in self._held:
            self.player_x += self.player_speed
        self.player_x = _clamp(self.player_x, 0, self.field_width - self.player_width)

    def _update_drops(self) -> None:
        """Move drops, resolve catches, drop escapes."""
        player = self.player_bounds

        for drop in list(self.drops):
            drop.fall()

            if drop.get_bounds().intersects(player):
                self.drops.remove(drop)
                if drop.is_bad:
                    self.lives -= 1
                    log.debug("Bad drop caught, %d lives left", self.lives)
                    if self.lives <= 0:
                        self.end(time_up=False)
                        return
                else:
                    self.score += 1
                continue

            if drop.has_escaped(self.field_height, config.DROP_ESCAPE_MARGIN):
                self.drops.remove(drop)

    def _center_player(self) -> None:
        self.player_x = max(0.0, self.field_width / 2 - self.player_width / 2)


def _clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))
