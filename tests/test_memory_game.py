"""
Memory Matrix Tests

Tests for deck construction, the flip/match state machine, the elapsed
timer and level progression.

Run with: pytest tests/test_memory_game.py -v
"""

import random
from collections import Counter, defaultdict

import pytest

from games.common import GameState
from games.MemoryMatrix import config
from games.MemoryMatrix.config import MEMORY_PROFILES
from games.MemoryMatrix.deck import CardState, build_deck, shuffle
from games.MemoryMatrix.game_mode import MemoryGameMode


@pytest.fixture
def game(scheduler, recorder, rng, quiet_logging):
    return MemoryGameMode(scheduler, recorder=recorder, rng=rng)


def _pairs(game):
    """Card id pairs grouped by symbol, in board order."""
    by_symbol = defaultdict(list)
    for card in game.cards:
        by_symbol[card.symbol].append(card.id)
    return list(by_symbol.values())


def _mismatch(game):
    """Two card ids with different symbols."""
    first = game.cards[0]
    second = next(c for c in game.cards if c.symbol != first.symbol)
    return first.id, second.id


def _clear_board(game):
    for a, b in _pairs(game):
        game.flip(a)
        game.flip(b)


class TestDeck:
    """Test deck construction."""

    @pytest.mark.parametrize('difficulty', ['easy', 'medium', 'hard'])
    @pytest.mark.parametrize('seed', [0, 1, 42, 999])
    def test_every_symbol_twice(self, difficulty, seed):
        profile = MEMORY_PROFILES[difficulty]
        deck = build_deck(profile.symbols, profile.pairs, random.Random(seed))

        counts = Counter(card.symbol for card in deck)
        assert len(deck) == 2 * profile.pairs
        assert len(counts) == profile.pairs
        assert set(counts.values()) == {2}
        assert [card.id for card in deck] == list(range(2 * profile.pairs))
        assert all(card.state == CardState.HIDDEN for card in deck)

    def test_shuffle_is_permutation(self):
        items = list(range(20))
        shuffled = shuffle(list(items), random.Random(3))
        assert sorted(shuffled) == items

    def test_shuffle_reproducible_with_seed(self):
        a = shuffle(list(range(20)), random.Random(1))
        b = shuffle(list(range(20)), random.Random(1))
        assert a == b

    def test_duplicate_symbols_rejected(self):
        with pytest.raises(ValueError):
            build_deck(('x', 'x', 'y'), 2, random.Random(0))


class TestStart:
    """Test level start."""

    @pytest.mark.parametrize('difficulty', ['easy', 'medium', 'hard'])
    def test_fresh_board(self, game, difficulty):
        game.start(difficulty)

        profile = MEMORY_PROFILES[difficulty]
        assert game.state == GameState.RUNNING
        assert len(game.cards) == 2 * profile.pairs
        assert game.total_pairs == profile.pairs
        assert game.columns == profile.columns
        assert game.moves == 0
        assert game.pairs_found == 0
        assert game.progress == 0.0
        assert not game.board_locked

    def test_start_while_running_is_ignored(self, game):
        game.start('easy')
        cards = game.cards

        game.start('hard')

        assert game.difficulty == 'easy'
        assert game.cards is cards

    def test_unknown_difficulty(self, game):
        with pytest.raises(ValueError):
            game.start('extreme')


class TestElapsedTimer:
    """Test the one-second elapsed timer."""

    def test_counts_whole_seconds(self, game, scheduler):
        game.start('easy')
        scheduler.advance(3500)
        assert game.elapsed_seconds == 3

    def test_restart_resets_elapsed(self, game, scheduler):
        game.start('easy')
        scheduler.advance(4000)
        game.reset()

        game.start('easy')
        scheduler.advance(1000)
        assert game.elapsed_seconds == 1


class TestFlip:
    """Test the flip state machine."""

    def test_flip_requires_running(self, game):
        assert not game.flip(0)

    def test_first_flip(self, game):
        game.start('easy')

        assert game.flip(0)
        assert game.cards[0].state == CardState.FLIPPED
        assert game.moves == 0
        assert not game.board_locked

    def test_flipping_flipped_card_is_noop(self, game):
        game.start('easy')
        game.flip(0)

        assert not game.flip(0)
        assert game.moves == 0

    def test_unknown_card_is_noop(self, game):
        game.start('easy')
        assert not game.flip(-1)
        assert not game.flip(len(game.cards))

    def test_match(self, game):
        game.start('easy')
        a, b = _pairs(game)[0]

        game.flip(a)
        assert game.flip(b)

        assert game.cards[a].state == CardState.MATCHED
        assert game.cards[b].state == CardState.MATCHED
        assert game.moves == 1
        assert game.pairs_found == 1
        assert not game.board_locked

    def test_flipping_matched_card_is_noop(self, game):
        game.start('easy')
        a, b = _pairs(game)[0]
        game.flip(a)
        game.flip(b)

        assert not game.flip(a)
        assert game.cards[a].state == CardState.MATCHED

    def test_mismatch_locks_then_hides(self, game, scheduler):
        game.start('easy')
        a, b = _mismatch(game)

        game.flip(a)
        game.flip(b)

        assert game.board_locked
        assert game.moves == 1
        assert len(game.flipped_cards) == 2

        scheduler.advance(config.MISMATCH_DELAY_MS - 1)
        assert game.cards[a].state == CardState.FLIPPED

        scheduler.advance(1)
        assert game.cards[a].state == CardState.HIDDEN
        assert game.cards[b].state == CardState.HIDDEN
        assert not game.board_locked

    def test_no_third_card_while_locked(self, game):
        game.start('easy')
        a, b = _mismatch(game)
        third = next(c.id for c in game.cards if c.id not in (a, b))

        game.flip(a)
        game.flip(b)

        assert not game.flip(third)
        assert game.cards[third].state == CardState.HIDDEN
        assert len(game.flipped_cards) == 2

    def test_pending_hide_ignored_after_restart(self, game, scheduler):
        game.start('easy')
        a, b = _mismatch(game)
        game.flip(a)
        game.flip(b)

        game.reset()
        game.start('easy')
        game.flip(0)
        scheduler.advance(config.MISMATCH_DELAY_MS)

        assert game.cards[0].state == CardState.FLIPPED
        assert not game.board_locked

    def test_progress(self, game):
        game.start('easy')
        a, b = _pairs(game)[0]
        game.flip(a)
        game.flip(b)

        assert game.progress == pytest.approx(1 / 6)


class TestLevelProgression:
    """Test clearing boards and moving through the levels."""

    def test_clear_medium_awards_points(self, game, recorder):
        game.start('medium')
        _clear_board(game)

        assert game.state == GameState.LEVEL_COMPLETE
        assert game.message == "Level completed! Starting next level..."
        assert game.get_score() == 20
        recorder.record.assert_called_once_with(20, game='memory', difficulty='medium')

    def test_clearing_stops_timer(self, game, scheduler):
        game.start('easy')
        scheduler.advance(2000)
        _clear_board(game)

        elapsed = game.elapsed_seconds
        scheduler.advance(1000)

        assert game.elapsed_seconds == elapsed
        assert game.active_timers == 1  # only the level advance

    def test_hard_finishes_all_levels(self, game, scheduler, recorder):
        game.start('hard')
        _clear_board(game)

        assert game.state == GameState.ALL_LEVELS_COMPLETE
        assert game.message == "Congratulations! You finished all levels!"
        recorder.record.assert_called_once_with(30, game='memory', difficulty='hard')
        assert game.active_timers == 0

        scheduler.advance(10_000)
        assert game.state == GameState.ALL_LEVELS_COMPLETE

    def test_flip_ignored_between_levels(self, game):
        game.start('easy')
        _clear_board(game)
        assert not game.flip(0)

    def test_reset_cancels_level_advance(self, game, scheduler):
        game.start('easy')
        _clear_board(game)

        game.reset()
        scheduler.advance(config.LEVEL_ADVANCE_DELAY_MS)

        assert game.state == GameState.IDLE
        assert game.difficulty == 'easy'


class TestEndToEnd:
    """Full levels driven through the scheduler."""

    def test_easy_board_advances_to_medium(self, game, scheduler, recorder):
        game.start('easy')
        seen = []

        for a, b in _pairs(game):
            game.flip(a)
            game.flip(b)
            seen.append(game.pairs_found)
            scheduler.advance(100)

        assert seen == [1, 2, 3, 4, 5, 6]
        assert game.state == GameState.LEVEL_COMPLETE
        recorder.record.assert_called_once_with(10, game='memory', difficulty='easy')

        scheduler.advance(config.LEVEL_ADVANCE_DELAY_MS)

        assert game.state == GameState.RUNNING
        assert game.difficulty == 'medium'
        assert len(game.cards) == 16
        assert game.pairs_found == 0
        assert game.moves == 0

    def test_all_three_levels(self, game, scheduler, recorder):
        game.start('easy')
        for _ in range(3):
            _clear_board(game)
            scheduler.advance(config.LEVEL_ADVANCE_DELAY_MS)

        assert game.state == GameState.ALL_LEVELS_COMPLETE
        assert [c.args[0] for c in recorder.record.call_args_list] == [10, 20, 30]
