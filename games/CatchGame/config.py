"""
CatchGame - Configuration loader with difficulty profiles.

Playfield geometry and movement constants can be overridden from a .env
file in the game directory or from the environment. Difficulty profiles
are fixed.
"""
import os
from pathlib import Path
from dataclasses import dataclass
from typing import Dict

from dotenv import load_dotenv

# Load .env from game directory
_env_path = Path(__file__).parent / '.env'
load_dotenv(_env_path)


def _get_int(key: str, default: int) -> int:
    """Get integer from environment."""
    return int(os.getenv(key, str(default)))


def _get_float(key: str, default: float) -> float:
    """Get float from environment."""
    return float(os.getenv(key, str(default)))


# Playfield (pixels)
FIELD_WIDTH = _get_int('FIELD_WIDTH', 600)
FIELD_HEIGHT = _get_int('FIELD_HEIGHT', 420)

# Player paddle
PLAYER_WIDTH = _get_int('PLAYER_WIDTH', 90)
PLAYER_HEIGHT = _get_int('PLAYER_HEIGHT', 18)
PLAYER_BOTTOM_MARGIN = _get_int('PLAYER_BOTTOM_MARGIN', 10)
PLAYER_SPEED = _get_float('PLAYER_SPEED', 7.0)  # pixels per frame

# Drops
DROP_SIZE = _get_int('DROP_SIZE', 24)
DROP_SPAWN_Y = -30.0
DROP_ESCAPE_MARGIN = 40.0  # removed once y passes FIELD_HEIGHT + margin

# Game rules
STARTING_LIVES = _get_int('STARTING_LIVES', 3)
COUNTDOWN_INTERVAL_MS = 1000
LEVEL_ADVANCE_DELAY_MS = _get_int('CATCH_LEVEL_ADVANCE_DELAY_MS', 1200)


@dataclass(frozen=True)
class CatchProfile:
    """Pacing parameters for one difficulty."""
    name: str
    duration: int              # Session length in seconds
    spawn_interval_ms: int     # Milliseconds between spawns
    speed_min: float           # Fall speed range, pixels per frame
    speed_max: float
    bad_chance: float          # Probability a spawn is a bad drop


CATCH_PROFILES: Dict[str, CatchProfile] = {
    'easy': CatchProfile(
        name='easy',
        duration=60,
        spawn_interval_ms=900,
        speed_min=2.0,
        speed_max=3.2,
        bad_chance=0.15,
    ),
    'medium': CatchProfile(
        name='medium',
        duration=45,
        spawn_interval_ms=650,
        speed_min=2.6,
        speed_max=4.1,
        bad_chance=0.22,
    ),
    'hard': CatchProfile(
        name='hard',
        duration=35,
        spawn_interval_ms=480,
        speed_min=3.2,
        speed_max=5.2,
        bad_chance=0.30,
    ),
}

# Visual (used by the launcher only)
BACKGROUND_COLOR = (18, 20, 34)
PLAYER_COLOR = (90, 170, 255)
GOOD_DROP_COLOR = (80, 220, 120)
BAD_DROP_COLOR = (255, 90, 170)
