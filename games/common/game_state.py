"""Common GameState enum for all hub games.

All games report one of these states via their `state` property, so the
hub and the launcher can react to sessions without knowing game internals.

Catch game:   IDLE -> RUNNING -> ENDED
Memory game:  IDLE -> RUNNING -> LEVEL_COMPLETE -> RUNNING (next level)
                                                -> ALL_LEVELS_COMPLETE
"""
from enum import Enum


class GameState(Enum):
    """Standard session states.

    States:
        IDLE: No session started yet, or being reset for a restart
        RUNNING: Timers active, accepting input
        ENDED: Session finished (time up or out of lives)
        LEVEL_COMPLETE: Board cleared, waiting to advance to the next level
        ALL_LEVELS_COMPLETE: Last level cleared; terminal until restarted
    """
    IDLE = "idle"
    RUNNING = "running"
    ENDED = "ended"
    LEVEL_COMPLETE = "level_complete"
    ALL_LEVELS_COMPLETE = "all_levels_complete"

    @property
    def is_finished(self) -> bool:
        """True for states in which no timer of the session is active."""
        return self in (GameState.ENDED, GameState.ALL_LEVELS_COMPLETE)
