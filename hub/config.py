"""
Hub - Configuration loader.

Login gate limits and profile storage location, overridable from a .env
file next to this package or from the process environment.
"""
import os
from pathlib import Path

from dotenv import load_dotenv

from hub.logging import user_data_dir

# Load .env from hub directory
_env_path = Path(__file__).parent / '.env'
load_dotenv(_env_path)


def _get_int(key: str, default: int) -> int:
    """Get integer from environment."""
    return int(os.getenv(key, str(default)))


def _get_path(key: str, default: Path) -> Path:
    """Get path from environment."""
    return Path(os.getenv(key, str(default))).expanduser()


# Login gate
MAX_ATTEMPTS = _get_int('HUB_MAX_ATTEMPTS', 3)
LOCK_SECONDS = _get_int('HUB_LOCK_SECONDS', 60)  # seconds

# Countdown shown while locked out
COUNTDOWN_INTERVAL_MS = 1000

# Profile storage (one JSON file, the local equivalent of a browser profile)
DATA_DIR = _get_path('HUB_DATA_DIR', user_data_dir())
STORE_FILE = os.getenv('HUB_STORE_FILE', 'profile.json')

# Persisted keys
USERS_KEY = 'users'
CURRENT_USER_KEY = 'currentUser'
ATTEMPTS_KEY_PREFIX = 'attempts_'
LOCK_KEY_PREFIX = 'lock_'
