"""
Login gate: registration, login with attempt counting, and timed lockout.

Per-username state machine:

    Unlocked(attempts) --wrong password, attempts < max--> Unlocked(attempts + 1)
    Unlocked(max - 1)  --wrong password-->                 Locked(now + lock)
    Locked(until)      --any attempt, now < until-->       Locked(until)  (rejected, not counted)
    Locked(until)      --any attempt, now >= until-->      Unlocked(0), then evaluated
    Unlocked(n)        --correct password-->               Unlocked(0) + current user set

Failures are raised as AuthError subclasses carrying a user-facing message.
None of them is fatal: the caller shows the message and waits for input.

Passwords are stored and compared in plaintext.
"""

import math
import time
from typing import Callable, Optional

from hub import config
from hub.logging import get_logger, emit_record
from hub.scheduler import Scheduler, TimerHandle
from hub.storage import UserStore
from models.user import User, LoginAttemptRecord

log = get_logger('auth')


def wall_clock_ms() -> float:
    """Current epoch time in milliseconds."""
    return time.time() * 1000.0


class AuthError(Exception):
    """Base class for recoverable login gate failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AuthError):
    """A required field was empty."""

    def __init__(self, message: str = "Please fill in all fields"):
        super().__init__(message)


class DuplicateUserError(AuthError):
    """Registration with a username that already exists."""

    def __init__(self, username: str):
        super().__init__("Username already exists")
        self.username = username


class InvalidCredentialsError(AuthError):
    """Wrong username or password, below the lockout threshold."""

    def __init__(self, attempts: int, max_attempts: int):
        super().__init__(f"Invalid credentials ({attempts}/{max_attempts})")
        self.attempts = attempts
        self.max_attempts = max_attempts


class LockedError(AuthError):
    """Login attempts are suspended for this username."""

    def __init__(self, seconds_remaining: int, just_locked: bool = False):
        if just_locked:
            message = f"Too many attempts. Locked for {seconds_remaining} seconds"
        else:
            message = f"Try again in {seconds_remaining} seconds"
        super().__init__(message)
        self.seconds_remaining = seconds_remaining
        self.just_locked = just_locked


class AuthGate:
    """
    Registration and login against a UserStore.

    Args:
        users: Store holding accounts, session pointer and attempt records
        clock: Returns the current epoch time in milliseconds
        max_attempts: Consecutive failures that trigger a lockout
        lock_seconds: Lockout duration
    """

    def __init__(
        self,
        users: UserStore,
        clock: Callable[[], float] = wall_clock_ms,
        max_attempts: int = config.MAX_ATTEMPTS,
        lock_seconds: int = config.LOCK_SECONDS,
    ):
        self._users = users
        self._clock = clock
        self.max_attempts = max_attempts
        self.lock_seconds = lock_seconds

    def register(self, username: str, password: str) -> User:
        """Create an account with zeroed stats.

        Raises:
            ValidationError: username or password empty after trimming
            DuplicateUserError: username already registered
        """
        username = (username or '').strip()
        password = (password or '').strip()
        if not username or not password:
            raise ValidationError()

        users = self._users.list_users()
        if any(u.username == username for u in users):
            log.info("Registration rejected: %s already exists", username)
            raise DuplicateUserError(username)

        user = User(username=username, password=password, score=0, games_played=0)
        users.append(user)
        self._users.save_users(users)
        log.info("Registered %s", username)
        return user

    def login(self, username: str, password: str) -> User:
        """Check credentials and make the user current.

        Raises:
            LockedError: lockout active, or this failure triggered it
            InvalidCredentialsError: wrong credentials below the threshold
        """
        username = (username or '').strip()
        password = (password or '').strip()
        now = self._clock()

        record = self._users.get_attempt_record(username)
        if record.is_expired(now):
            self._users.clear_attempt_record(username)
            record = LoginAttemptRecord()

        if record.is_locked(now):
            raise LockedError(self._remaining(record, now))

        user = next(
            (u for u in self._users.list_users()
             if u.username == username and u.password == password),
            None,
        )
        if user is not None:
            self._users.clear_attempt_record(username)
            self._users.set_current_user(username)
            log.info("Login successful: %s", username)
            return user

        attempts = record.attempts + 1
        if attempts >= self.max_attempts:
            lock_until = int(now + self.lock_seconds * 1000)
            self._users.save_attempt_record(
                username, LoginAttemptRecord(attempts=attempts, lock_until=lock_until))
            log.warning("Locked %s for %ds after %d failed attempts",
                        username, self.lock_seconds, attempts)
            emit_record('auth', {'type': 'lockout', 'username': username,
                                 'attempts': attempts, 'lock_until': lock_until})
            raise LockedError(self.lock_seconds, just_locked=True)

        self._users.save_attempt_record(username, LoginAttemptRecord(attempts=attempts))
        log.info("Invalid credentials for %s (%d/%d)", username, attempts, self.max_attempts)
        raise InvalidCredentialsError(attempts, self.max_attempts)

    def logout(self) -> None:
        """Forget the current user."""
        current = self._users.get_current_user()
        self._users.clear_current_user()
        if current:
            log.info("Logged out %s", current)

    def seconds_remaining(self, username: str) -> int:
        """Whole seconds left on the lockout, derived from the stored expiry."""
        now = self._clock()
        record = self._users.get_attempt_record(username.strip())
        if not record.is_locked(now):
            return 0
        return self._remaining(record, now)

    @staticmethod
    def _remaining(record: LoginAttemptRecord, now: float) -> int:
        return max(0, math.ceil((record.lock_until - now) / 1000.0))

    def start_countdown(
        self,
        username: str,
        scheduler: Scheduler,
        on_tick: Callable[[int], None],
    ) -> Optional[TimerHandle]:
        """
        Report the remaining lockout once per second until it reaches zero.

        Each tick recomputes the value from the stored expiry, so a paused
        host loop catches up instead of drifting.

        Returns:
            The repeating timer, or None when the user is not locked
        """
        remaining = self.seconds_remaining(username)
        if remaining <= 0:
            return None
        on_tick(remaining)

        handle: Optional[TimerHandle] = None

        def tick() -> None:
            left = self.seconds_remaining(username)
            on_tick(left)
            if left <= 0 and handle is not None:
                handle.cancel()

        handle = scheduler.every(config.COUNTDOWN_INTERVAL_MS, tick, label=f"lock_countdown:{username}")
        return handle
