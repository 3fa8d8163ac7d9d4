"""
Local key-value storage and the user store built on top of it.

All persistent hub state lives in one string key-value store:

    users          -> JSON array of {username, password, score, gamesPlayed}
    currentUser    -> username of the logged-in player
    attempts_<u>   -> consecutive failed logins for <u>
    lock_<u>       -> epoch milliseconds when the lockout for <u> expires

Reads never raise for missing or damaged data: absence is an empty list or
None. Writers replace whole values; concurrent writers are not coordinated
and the last write wins.

Usage:
    store = JsonFileStore(Path('~/.local/share/arcade-hub/profile.json'))
    users = UserStore(store)
    users.save_users(users.list_users() + [User(username='alice', password='pw')])
"""

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import TypeAdapter, ValidationError

from hub import config
from hub.logging import get_logger
from models.user import User, LoginAttemptRecord

log = get_logger('storage')

_USER_LIST = TypeAdapter(List[User])


class KeyValueStore(ABC):
    """String key-value persistence interface."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key is absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one."""
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete a key. Missing keys are ignored."""
        pass


class MemoryStore(KeyValueStore):
    """Dict-backed store. Lives as long as the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})
        self.write_count = 0

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
        self.write_count += 1

    def remove(self, key: str) -> None:
        if self._data.pop(key, None) is not None:
            self.write_count += 1

    def keys(self) -> List[str]:
        return list(self._data.keys())


class JsonFileStore(KeyValueStore):
    """
    Store persisted as a single JSON object on disk.

    The file is read once on construction and rewritten after every
    mutation. A missing or unreadable file starts an empty store.

    Args:
        path: JSON file location (parent directories are created on write)
    """

    def __init__(self, path: Path):
        self.path = Path(path).expanduser()
        self._data: Dict[str, str] = self._load()

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            log.warning("Could not read %s (%s); starting empty", self.path, e)
            return {}
        if not isinstance(data, dict):
            log.warning("Ignoring %s: top-level value is not an object", self.path)
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _write(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + '.tmp')
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump(self._data, f, ensure_ascii=False, indent=2)
        tmp_path.replace(self.path)

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
        self._write()

    def remove(self, key: str) -> None:
        if key in self._data:
            del self._data[key]
            self._write()

    @classmethod
    def default(cls) -> 'JsonFileStore':
        """Store at the configured data directory."""
        return cls(config.DATA_DIR / config.STORE_FILE)


def _parse_int(raw: Optional[str]) -> Optional[int]:
    """Parse a stored integer; absent or damaged values become None."""
    if raw is None:
        return None
    try:
        return int(float(raw))
    except (ValueError, OverflowError):
        return None


class UserStore:
    """
    Read-modify-write access to users, the session pointer and login
    attempt records.

    Only UserStore touches the underlying keys; callers get fresh User
    copies from list_users() and hand the whole list back to save_users().
    """

    def __init__(self, store: KeyValueStore):
        self._store = store

    @property
    def store(self) -> KeyValueStore:
        return self._store

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------

    def list_users(self) -> List[User]:
        """All registered users; damaged data reads as no users."""
        raw = self._store.get(config.USERS_KEY)
        if raw is None:
            return []
        try:
            return _USER_LIST.validate_json(raw)
        except ValidationError as e:
            log.warning("Stored user list is unreadable, treating as empty: %s", e.error_count())
            return []

    def save_users(self, users: List[User]) -> None:
        """Replace the whole user list."""
        payload = json.dumps([u.to_record() for u in users], ensure_ascii=False)
        self._store.set(config.USERS_KEY, payload)

    def find_user(self, username: Optional[str]) -> Optional[User]:
        """Exact, case-sensitive lookup."""
        if username is None:
            return None
        for user in self.list_users():
            if user.username == username:
                return user
        return None

    # -------------------------------------------------------------------------
    # Session pointer
    # -------------------------------------------------------------------------

    def get_current_user(self) -> Optional[str]:
        return self._store.get(config.CURRENT_USER_KEY)

    def set_current_user(self, username: str) -> None:
        self._store.set(config.CURRENT_USER_KEY, username)

    def clear_current_user(self) -> None:
        self._store.remove(config.CURRENT_USER_KEY)

    # -------------------------------------------------------------------------
    # Login attempt records
    # -------------------------------------------------------------------------

    def get_attempt_record(self, username: str) -> LoginAttemptRecord:
        """Attempt count and lock expiry; a fresh record when none is stored."""
        attempts = _parse_int(self._store.get(config.ATTEMPTS_KEY_PREFIX + username))
        lock_until = _parse_int(self._store.get(config.LOCK_KEY_PREFIX + username))
        return LoginAttemptRecord(attempts=max(attempts or 0, 0), lock_until=lock_until)

    def save_attempt_record(self, username: str, record: LoginAttemptRecord) -> None:
        self._store.set(config.ATTEMPTS_KEY_PREFIX + username, str(record.attempts))
        if record.lock_until is None:
            self._store.remove(config.LOCK_KEY_PREFIX + username)
        else:
            self._store.set(config.LOCK_KEY_PREFIX + username, str(record.lock_until))

    def clear_attempt_record(self, username: str) -> None:
        self._store.remove(config.ATTEMPTS_KEY_PREFIX + username)
        self._store.remove(config.LOCK_KEY_PREFIX + username)
