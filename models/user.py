"""
Account data models for the hub.

These models define what the hub persists about players: the registered
user list (with cumulative stats) and the per-username login attempt record
used by the lockout logic.
"""

from typing import Optional

from pydantic import BaseModel, Field, ConfigDict, computed_field, field_validator


class User(BaseModel):
    """A registered player account.

    Stored as part of the ``users`` list. The password is kept in plaintext,
    matching what the login gate compares against.

    Attributes:
        username: Unique, case-sensitive account name
        password: Plaintext password
        score: Cumulative points across all finished games (non-negative)
        games_played: Number of finished games (non-negative), persisted
            under the ``gamesPlayed`` key

    Examples:
        >>> user = User(username='alice', password='secret')
        >>> user.score, user.games_played
        (0, 0)
        >>> User.model_validate({'username': 'bob', 'password': 'x', 'gamesPlayed': 2}).games_played
        2
    """
    username: str
    password: str
    score: int = Field(default=0, ge=0)
    games_played: int = Field(default=0, ge=0, alias='gamesPlayed')

    model_config = ConfigDict(populate_by_name=True)

    @field_validator('score', 'games_played', mode='before')
    @classmethod
    def null_stats_as_zero(cls, v):
        """A stored null counts as no points or games yet."""
        return 0 if v is None else v

    def to_record(self) -> dict:
        """Serialize with the persisted key names."""
        return self.model_dump(by_alias=True)


class LoginAttemptRecord(BaseModel):
    """Consecutive failed logins for one username.

    Attributes:
        attempts: Failed attempts since the last success or lock expiry
        lock_until: Epoch milliseconds after which the lock expires, or None
    """
    attempts: int = Field(default=0, ge=0)
    lock_until: Optional[int] = None

    model_config = ConfigDict(frozen=True)

    def is_locked(self, now_ms: float) -> bool:
        """True while the lock is active."""
        return self.lock_until is not None and now_ms < self.lock_until

    def is_expired(self, now_ms: float) -> bool:
        """True once a lock exists and its window has passed."""
        return self.lock_until is not None and now_ms >= self.lock_until


class PlayerStats(BaseModel):
    """Read-only summary of the current player, as shown by the hub view."""
    username: str
    score: int = 0
    games_played: int = 0

    model_config = ConfigDict(frozen=True)

    @computed_field
    @property
    def average_score(self) -> float:
        """Mean points per finished game (0.0 before the first game)."""
        if self.games_played == 0:
            return 0.0
        return self.score / self.games_played
