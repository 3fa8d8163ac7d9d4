"""
MemoryMatrix Game Mode

Card matching game: flip two cards per turn, keep them when the symbols
match, and clear the board to finish the level. Clearing a level credits
its points and moves on to the next difficulty until hard is done.

Turn flow:
    first flip   -> card FLIPPED, remembered
    second flip  -> moves += 1, board locked, symbols compared
        match    -> both MATCHED, board unlocked at once
        mismatch -> both back to HIDDEN after MISMATCH_DELAY_MS, then unlocked

While the board is locked no card can be flipped, so at most two cards are
ever face-up and unresolved.
"""
import math
from typing import List, Optional

from games.common import BaseGame, GameState, get_profile, next_difficulty
from games.MemoryMatrix import config
from games.MemoryMatrix.config import MemoryProfile, MEMORY_PROFILES
from games.MemoryMatrix.deck import Card, CardState, build_deck
from hub.logging import get_logger

log = get_logger('memory_game')


class MemoryGameMode(BaseGame):
    """Memory game engine.

    State machine: IDLE -> RUNNING -> LEVEL_COMPLETE -> RUNNING (next level)
    or ALL_LEVELS_COMPLETE after the last level.
    """

    NAME = "Memory Matrix"
    SLUG = "memory"
    DESCRIPTION = "Flip cards two at a time and match every pair; levels get bigger as you go."
    VERSION = "1.0.0"
    AUTHOR = "Arcade Hub Team"

    def __init__(self, scheduler, recorder=None, rng=None, difficulty: str = 'easy', **kwargs):
        super().__init__(scheduler, recorder=recorder, rng=rng, difficulty=difficulty, **kwargs)

        self.cards: List[Card] = []
        self.moves = 0
        self.pairs_found = 0
        self.total_pairs = 0
        self.elapsed_seconds = 0
        self.board_locked = False
        self.last_points = 0

        self._first: Optional[Card] = None
        self._second: Optional[Card] = None
        self._started_at_ms = 0.0

    # =========================================================================
    # Read-only views
    # =========================================================================

    @property
    def profile(self) -> MemoryProfile:
        return get_profile(MEMORY_PROFILES, self._difficulty)

    @property
    def columns(self) -> int:
        """Grid width for the current board."""
        return self.profile.columns

    @property
    def progress(self) -> float:
        """Fraction of pairs found, 0.0-1.0."""
        if self.total_pairs == 0:
            return 0.0
        return self.pairs_found / self.total_pairs

    @property
    def flipped_cards(self) -> List[Card]:
        return [c for c in self.cards if c.state == CardState.FLIPPED]

    def get_score(self) -> int:
        return self.last_points

    def get_card(self, card_id: int) -> Optional[Card]:
        if 0 <= card_id < len(self.cards):
            return self.cards[card_id]
        return None

    # =========================================================================
    # Session lifecycle
    # =========================================================================

    def start(self, difficulty: Optional[str] = None) -> None:
        """Start a level; ignored while one is running."""
        if self._state == GameState.RUNNING:
            log.debug("start() ignored: level already running")
            return
        self._begin(difficulty)

    def _begin(self, difficulty: Optional[str]) -> None:
        name = self._select_difficulty(difficulty)
        profile = get_profile(MEMORY_PROFILES, name)

        self.reset()

        self.moves = 0
        self.pairs_found = 0
        self.total_pairs = profile.pairs
        self.elapsed_seconds = 0
        self.board_locked = False
        self.last_points = 0
        self._first = None
        self._second = None
        self.cards = build_deck(profile.symbols, profile.pairs, self._rng)

        self._started_at_ms = self._scheduler.now_ms
        self._state = GameState.RUNNING
        self._every(config.TIMER_INTERVAL_MS, self._on_timer)

        log.info("Level started on %s (%d pairs)", name, profile.pairs)

    def _on_timer(self) -> None:
        if self._state != GameState.RUNNING:
            return
        self._update_elapsed()

    def _update_elapsed(self) -> None:
        self.elapsed_seconds = math.floor((self._scheduler.now_ms - self._started_at_ms) / 1000)

    # =========================================================================
    # Card logic
    # =========================================================================

    def flip(self, card_id: int) -> bool:
        """Reveal a card.

        Returns:
            True if the card was turned face-up, False if the flip was ignored
            (no running level, board locked, unknown card, card not hidden)
        """
        if self._state != GameState.RUNNING or self.board_locked:
            return False
        card = self.get_card(card_id)
        if card is None or card.state != CardState.HIDDEN:
            return False

        card.state = CardState.FLIPPED

        if self._first is None:
            self._first = card
            return True

        self._second = card
        self.moves += 1
        self._check_match()
        return True

    def _check_match(self) -> None:
        self.board_locked = True
        first, second = self._first, self._second

        if first.symbol == second.symbol:
            first.state = CardState.MATCHED
            second.state = CardState.MATCHED
            self.pairs_found += 1
            log.debug("Pair %s found (%d/%d)", first.symbol, self.pairs_found, self.total_pairs)
            self._reset_turn()

            if self.pairs_found == self.total_pairs:
                self._complete_level()
        else:
            self._after(config.MISMATCH_DELAY_MS, self._hide_mismatch)

    def _hide_mismatch(self) -> None:
        if self._state != GameState.RUNNING:
            return
        for card in (self._first, self._second):
            if card is not None and card.state == CardState.FLIPPED:
                card.state = CardState.HIDDEN
        self._reset_turn()

    def _reset_turn(self) -> None:
        self._first = None
        self._second = None
        self.board_locked = False

    # =========================================================================
    # Level progression
    # =========================================================================

    def _complete_level(self) -> None:
        self._update_elapsed()
        self._cancel_activities()
        self._state = GameState.LEVEL_COMPLETE

        profile = self.profile
        self.last_points = profile.points
        log.info("Level %s cleared in %ds and %d moves (+%d)",
                 profile.name, self.elapsed_seconds, self.moves, profile.points)
        self._record(profile.points)

        upcoming = next_difficulty(profile.name)
        if upcoming is None:
            self._state = GameState.ALL_LEVELS_COMPLETE
            self.message = "Congratulations! You finished all levels!"
            return

        self.message = "Level completed! Starting next level..."
        self._after(config.LEVEL_ADVANCE_DELAY_MS, self._advance_level)

    def _advance_level(self) -> None:
        if self._state != GameState.LEVEL_COMPLETE:
            return
        upcoming = next_difficulty(self._difficulty)
        if upcoming is not None:
            self._begin(upcoming)
