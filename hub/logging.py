"""
Hub logging.

Two outputs share this module:

- Console messages from per-module loggers, printed as ``[module] LEVEL: msg``
  and filtered by a global level plus optional per-module overrides.
- Structured records (finished game results, lockouts) routed by module
  name to a sink. Only modules switched on in the environment get a JSONL
  file; everything else goes to a NullSink or nowhere.

Usage:
    from hub.logging import get_logger, emit_record

    log = get_logger('catch_game')
    log.info("Session started on %s", 'easy')

    emit_record('scores', {'type': 'game_result', 'points': 10})

Environment:
    HUB_LOG_LEVEL=DEBUG                 # default console level
    HUB_LOG_<MODULE>=WARNING            # per-module console level
    HUB_LOG_DIR=/tmp/hub-logs           # where record files go
    HUB_LOGGING_<MODULE>_ENABLED=true   # write that module's records to a file
    HUB_LOGGING_<MODULE>_DIR=/tmp/x     # per-module record directory
"""

import json
import os
import sys
import time
from abc import ABC, abstractmethod
from enum import IntEnum
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, TextIO


class LogLevel(IntEnum):
    TRACE = 5
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50
    OFF = 100


_LEVEL_NAMES = {
    'TRACE': LogLevel.TRACE,
    'DEBUG': LogLevel.DEBUG,
    'INFO': LogLevel.INFO,
    'WARNING': LogLevel.WARNING,
    'WARN': LogLevel.WARNING,
    'ERROR': LogLevel.ERROR,
    'CRITICAL': LogLevel.CRITICAL,
    'OFF': LogLevel.OFF,
}

_TRUE_VALUES = ('1', 'true', 'yes', 'on')

_config: Dict[str, Any] = {
    'default_level': LogLevel.INFO,
    'module_levels': {},    # module -> LogLevel
    'modules': {},          # module -> {'enabled': bool, 'dir': str}
}


def _level_from_string(level_str: str) -> LogLevel:
    """Unknown names fall back to INFO."""
    return _LEVEL_NAMES.get(level_str.upper(), LogLevel.INFO)


# =============================================================================
# Record sinks
# =============================================================================

class LogSink(ABC):
    """Destination for structured records."""

    @abstractmethod
    def emit(self, module: str, record: Dict[str, Any]) -> None:
        """Write one JSON-serializable record."""
        pass

    def close(self) -> None:
        pass


class NullSink(LogSink):
    """Accepts and discards records."""

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        pass


class FileSink(LogSink):
    """
    Appends records as JSON lines, one file per module.

    Files are named ``<session_name>_<module>.jsonl`` and opened on the
    first record. Each record is stamped with ``wall_time`` unless it
    already carries one.
    """

    def __init__(self, log_dir: Optional[str] = None, session_name: Optional[str] = None):
        self.log_dir = Path(log_dir or get_log_dir()).expanduser()
        self.session_name = session_name or time.strftime("%Y%m%d_%H%M%S")
        self._files: Dict[str, TextIO] = {}

    def path_for(self, module: str) -> Path:
        return self.log_dir / f"{self.session_name}_{module}.jsonl"

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        f = self._files.get(module)
        if f is None:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            f = self._files[module] = open(self.path_for(module), 'a', encoding='utf-8')
        f.write(json.dumps({'wall_time': time.time(), **record}, ensure_ascii=False) + "\n")
        f.flush()

    def close(self) -> None:
        for f in self._files.values():
            f.close()
        self._files.clear()


_sinks: Dict[str, LogSink] = {}


def register_sink(module: str, sink: LogSink) -> None:
    """Route module's records to sink, replacing any previous one."""
    previous = _sinks.get(module)
    if previous is not None and previous is not sink:
        previous.close()
    _sinks[module] = sink


def emit_record(module: str, record: Dict[str, Any]) -> bool:
    """
    Send a record to the module's sink.

    Returns:
        True if a sink received it, False if none is registered
    """
    sink = _sinks.get(module)
    if sink is None:
        return False
    sink.emit(module, record)
    return True


def close_all_sinks() -> None:
    for sink in _sinks.values():
        sink.close()
    _sinks.clear()


def create_sink_for_environment(module: str, session_name: Optional[str] = None) -> LogSink:
    """FileSink when HUB_LOGGING_<MODULE>_ENABLED is set, else NullSink."""
    settings = _config['modules'].get(module.lower(), {})
    if not settings.get('enabled', False):
        return NullSink()
    return FileSink(log_dir=settings.get('dir'), session_name=session_name)


# =============================================================================
# Locations
# =============================================================================

def user_data_dir() -> Path:
    """Platform-specific directory for hub data (profile store, logs)."""
    if sys.platform == 'darwin':
        return Path.home() / 'Library' / 'Application Support' / 'ArcadeHub'
    if sys.platform == 'win32':
        return Path(os.environ.get('APPDATA', str(Path.home()))) / 'ArcadeHub'
    xdg_data = os.environ.get('XDG_DATA_HOME', str(Path.home() / '.local' / 'share'))
    return Path(xdg_data) / 'arcade-hub'


def get_log_dir() -> str:
    """HUB_LOG_DIR, or ``logs`` under the user data directory."""
    return os.environ.get('HUB_LOG_DIR') or str(user_data_dir() / 'logs')


# =============================================================================
# Configuration
# =============================================================================

def configure_logging(level: str = 'INFO', modules: Optional[Dict[str, str]] = None) -> None:
    """
    Set console levels.

    Args:
        level: Default level for all modules
        modules: module name -> level overrides
    """
    _config['default_level'] = _level_from_string(level)
    for mod, mod_level in (modules or {}).items():
        _config['module_levels'][mod.lower()] = _level_from_string(mod_level)


def disable_logging() -> None:
    """Silence every console logger."""
    _config['default_level'] = LogLevel.OFF
    _config['module_levels'].clear()


def _load_env_config() -> None:
    for key, value in os.environ.items():
        if key == 'HUB_LOG_LEVEL':
            _config['default_level'] = _level_from_string(value)
        elif key.startswith('HUB_LOGGING_'):
            # HUB_LOGGING_SCORES_ENABLED -> ('scores', 'enabled')
            module, _, setting = key[len('HUB_LOGGING_'):].lower().rpartition('_')
            if not module:
                continue
            settings = _config['modules'].setdefault(module, {})
            if setting == 'enabled':
                settings['enabled'] = value.lower() in _TRUE_VALUES
            elif setting == 'dir':
                settings['dir'] = value
        elif key.startswith('HUB_LOG_') and key != 'HUB_LOG_DIR':
            _config['module_levels'][key[len('HUB_LOG_'):].lower()] = _level_from_string(value)


_load_env_config()


# =============================================================================
# Console loggers
# =============================================================================

class HubLogger:
    """Printf-style leveled logger for one module."""

    def __init__(self, module: str):
        self.module = module
        self._key = module.lower()

    @property
    def level(self) -> LogLevel:
        return _config['module_levels'].get(self._key, _config['default_level'])

    def is_enabled_for(self, level: LogLevel) -> bool:
        return level >= self.level

    def _log(self, level: LogLevel, label: str, msg: str, *args) -> None:
        if not self.is_enabled_for(level):
            return
        if args:
            try:
                msg = msg % args
            except (TypeError, ValueError):
                msg = f"{msg} {args}"
        print(f"[{self.module}] {label}: {msg}")

    def trace(self, msg: str, *args) -> None:
        self._log(LogLevel.TRACE, 'TRACE', msg, *args)

    def debug(self, msg: str, *args) -> None:
        self._log(LogLevel.DEBUG, 'DEBUG', msg, *args)

    def info(self, msg: str, *args) -> None:
        self._log(LogLevel.INFO, 'INFO', msg, *args)

    def warning(self, msg: str, *args) -> None:
        self._log(LogLevel.WARNING, 'WARN', msg, *args)

    def error(self, msg: str, *args) -> None:
        self._log(LogLevel.ERROR, 'ERROR', msg, *args)

    def critical(self, msg: str, *args) -> None:
        self._log(LogLevel.CRITICAL, 'CRIT', msg, *args)


@lru_cache(maxsize=64)
def get_logger(module: str) -> HubLogger:
    """Cached logger for module (e.g. 'auth', 'catch_game')."""
    return HubLogger(module)
