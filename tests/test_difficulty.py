"""Tests for difficulty profiles and level progression."""

import pytest

from games.common import (
    DIFFICULTY_ORDER,
    get_profile,
    next_difficulty,
)
from games.CatchGame.config import CATCH_PROFILES
from games.MemoryMatrix.config import MEMORY_PROFILES, MemoryProfile


class TestProfiles:
    """Test the profile tables."""

    def test_every_level_has_profiles(self):
        assert list(CATCH_PROFILES) == DIFFICULTY_ORDER
        assert list(MEMORY_PROFILES) == DIFFICULTY_ORDER

    @pytest.mark.parametrize('name,duration,spawn_ms,bad', [
        ('easy', 60, 900, 0.15),
        ('medium', 45, 650, 0.22),
        ('hard', 35, 480, 0.30),
    ])
    def test_catch_pacing(self, name, duration, spawn_ms, bad):
        profile = get_profile(CATCH_PROFILES, name)
        assert profile.duration == duration
        assert profile.spawn_interval_ms == spawn_ms
        assert profile.bad_chance == bad
        assert profile.speed_min < profile.speed_max

    @pytest.mark.parametrize('name,pairs,columns,points', [
        ('easy', 6, 4, 10),
        ('medium', 8, 4, 20),
        ('hard', 12, 6, 30),
    ])
    def test_memory_boards(self, name, pairs, columns, points):
        profile = get_profile(MEMORY_PROFILES, name)
        assert profile.pairs == pairs
        assert profile.columns == columns
        assert profile.points == points
        assert len(set(profile.symbols)) == pairs

    def test_unknown_name_rejected(self):
        with pytest.raises(ValueError):
            get_profile(CATCH_PROFILES, 'extreme')

    def test_profile_needs_enough_symbols(self):
        with pytest.raises(ValueError):
            MemoryProfile(name='tiny', pairs=3, columns=2, points=1, symbols=('a', 'b'))


class TestProgression:
    """Test easy -> medium -> hard ordering."""

    def test_next_difficulty(self):
        assert next_difficulty('easy') == 'medium'
        assert next_difficulty('medium') == 'hard'
        assert next_difficulty('hard') is None
