"""
Score recording shared by all games.

When a game session finishes, its points are credited to whoever is logged
in: the score is added to their cumulative total and their games-played
count goes up by one. With nobody logged in (or a pointer to an account
that no longer exists) recording is silently skipped.
"""

from typing import Optional

from hub.logging import get_logger, emit_record
from hub.storage import UserStore
from models.user import PlayerStats

log = get_logger('scores')


class ScoreRecorder:
    """Credits finished sessions to the current user."""

    def __init__(self, users: UserStore):
        self._users = users

    def record(self, points: int, game: str = '', difficulty: str = '') -> bool:
        """Add points and one finished game to the current user.

        Args:
            points: Points earned in the finished session
            game: Game slug, for the structured record only
            difficulty: Difficulty name, for the structured record only

        Returns:
            True if a user was credited
        """
        username = self._users.get_current_user()
        if username is None:
            log.debug("No current user; %d points from %s not recorded", points, game or 'game')
            return False

        users = self._users.list_users()
        user = next((u for u in users if u.username == username), None)
        if user is None:
            log.warning("Current user %s is not registered; skipping score update", username)
            return False

        user.score = (user.score or 0) + points
        user.games_played = (user.games_played or 0) + 1
        self._users.save_users(users)

        log.info("%s +%d points (total %d, games %d)",
                 username, points, user.score, user.games_played)
        emit_record('scores', {
            'type': 'game_result',
            'username': username,
            'game': game,
            'difficulty': difficulty,
            'points': points,
            'total_score': user.score,
            'games_played': user.games_played,
        })
        return True

    def get_stats(self) -> Optional[PlayerStats]:
        """Cumulative stats of the current user, or None if nobody is logged in."""
        user = self._users.find_user(self._users.get_current_user())
        if user is None:
            return None
        return PlayerStats(username=user.username, score=user.score, games_played=user.games_played)
