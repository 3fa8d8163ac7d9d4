"""
MemoryMatrix - Configuration loader with difficulty profiles.

Board sizes, symbol sets and points per difficulty are fixed; the reveal and
level-advance delays can be overridden from a .env file in the game
directory or from the environment.
"""
import os
from pathlib import Path
from dataclasses import dataclass
from typing import Dict, Tuple

from dotenv import load_dotenv

# Load .env from game directory
_env_path = Path(__file__).parent / '.env'
load_dotenv(_env_path)


def _get_int(key: str, default: int) -> int:
    """Get integer from environment."""
    return int(os.getenv(key, str(default)))


# Timing (milliseconds)
MISMATCH_DELAY_MS = _get_int('MISMATCH_DELAY_MS', 700)
LEVEL_ADVANCE_DELAY_MS = _get_int('MEMORY_LEVEL_ADVANCE_DELAY_MS', 1400)
TIMER_INTERVAL_MS = 1000


@dataclass(frozen=True)
class MemoryProfile:
    """Board parameters for one difficulty."""
    name: str
    pairs: int                 # Number of matching pairs on the board
    columns: int               # Grid width
    points: int                # Awarded when the board is cleared
    symbols: Tuple[str, ...]   # One symbol per pair

    def __post_init__(self):
        if len(self.symbols) < self.pairs:
            raise ValueError(
                f"Profile {self.name!r} needs {self.pairs} symbols, has {len(self.symbols)}"
            )


MEMORY_PROFILES: Dict[str, MemoryProfile] = {
    'easy': MemoryProfile(
        name='easy',
        pairs=6,
        columns=4,
        points=10,
        symbols=("■", "□", "▲", "▼", "◆", "◇"),
    ),
    'medium': MemoryProfile(
        name='medium',
        pairs=8,
        columns=4,
        points=20,
        symbols=("✦", "✧", "✶", "✸", "✹", "✺", "✷", "✴"),
    ),
    'hard': MemoryProfile(
        name='hard',
        pairs=12,
        columns=6,
        points=30,
        symbols=("⌖", "⌬", "⎔", "⎈", "⏣", "⏥", "⌁", "⌂", "⌘", "⎋", "⌗", "⌸"),
    ),
}

# Visual (used by the launcher only)
BACKGROUND_COLOR = (24, 18, 36)
CARD_HIDDEN_COLOR = (70, 60, 110)
CARD_FLIPPED_COLOR = (235, 225, 255)
CARD_MATCHED_COLOR = (110, 210, 150)
CARD_SIZE = 82
CARD_GAP = 10
