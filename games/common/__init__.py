"""
Shared building blocks for hub games.

- game_state: Standard GameState enum
- difficulty: easy/medium/hard order and profile lookup
- base_game: BaseGame class that all games inherit from
"""

from games.common.game_state import GameState
from games.common.difficulty import (
    DIFFICULTY_ORDER,
    get_profile,
    next_difficulty,
)
from games.common.base_game import BaseGame

__all__ = [
    'GameState',
    'BaseGame',
    'DIFFICULTY_ORDER',
    'get_profile',
    'next_difficulty',
]
