"""
Common difficulty support for hub games.

Both games share the fixed level order easy -> medium -> hard. Each game
keeps its own table of immutable profiles keyed by these names; this module
provides lookup and the step to the next level.

Example:
    profile = get_profile(CATCH_PROFILES, 'medium')
    next_difficulty('medium')   # 'hard'
    next_difficulty('hard')     # None - all levels complete
"""
from typing import Dict, List, Optional, TypeVar

T = TypeVar('T')

DIFFICULTY_ORDER: List[str] = ['easy', 'medium', 'hard']


def get_profile(profiles: Dict[str, T], name: str) -> T:
    """
    Look up a difficulty profile by name.

    Args:
        profiles: Dict mapping difficulty names to profile objects
        name: Requested difficulty name

    Returns:
        The profile object

    Raises:
        ValueError: If no profile has that name
    """
    if name in profiles:
        return profiles[name]
    raise ValueError(
        f"Unknown difficulty {name!r}; expected one of: {', '.join(profiles)}"
    )


def next_difficulty(name: str) -> Optional[str]:
    """Difficulty after name, or None when name is the last one."""
    index = DIFFICULTY_ORDER.index(name)
    if index == len(DIFFICULTY_ORDER) - 1:
        return None
    return DIFFICULTY_ORDER[index + 1]

