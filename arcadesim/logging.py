"""
arcadesim Logging

Leveled per-module console logging plus structured records for the
simulation.

Console messages go to stderr as ``[module] LEVEL: message`` and use
%-style lazy arguments. Structured records (the session summary written
when a game ends) are handed to a sink registered for their module;
FileSink appends JSONL, NullSink drops everything, and with no sink
registered emit_record() does nothing.

Usage:
    from arcadesim.logging import get_logger, emit_record

    log = get_logger('engine')
    log.debug("Spawned %s", kind)

    emit_record('session', {'type': 'session_end', 'final_score': 12})

Environment:
    ARCADESIM_LOG_LEVEL=DEBUG               default level
    ARCADESIM_LOG_<MODULE>=DEBUG            level for one module
    ARCADESIM_LOG_DIR=./logs                where FileSink writes
    ARCADESIM_LOGGING_<MODULE>_ENABLED=1    turn on records for a module
    ARCADESIM_LOGGING_<MODULE>_DIR=./runs   per-module record directory
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


LEVEL_PREFIX = 'ARCADESIM_LOG_'
SETTINGS_PREFIX = 'ARCADESIM_LOGGING_'


class LogLevel(IntEnum):
    """Console levels, numbered like the standard library's."""
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    OFF = 100


_LEVEL_NAMES = {
    'DEBUG': LogLevel.DEBUG,
    'INFO': LogLevel.INFO,
    'WARN': LogLevel.WARNING,
    'WARNING': LogLevel.WARNING,
    'ERROR': LogLevel.ERROR,
    'OFF': LogLevel.OFF,
}

_config: Dict[str, Any] = {
    'default_level': LogLevel.INFO,
    'module_levels': {},
    'log_dir': None,
    'modules': {},           # module -> {'enabled': bool, 'dir': str}
}


def _level_from_string(name: str) -> LogLevel:
    """Unknown names fall back to INFO."""
    return _LEVEL_NAMES.get(name.upper(), LogLevel.INFO)


# =============================================================================
# Structured record sinks
# =============================================================================

class LogSink(ABC):
    """Destination for structured records."""

    @abstractmethod
    def emit(self, module: str, record: Dict[str, Any]) -> None:
        """Write one JSON-serializable record for a module."""
        pass

    @abstractmethod
    def flush(self) -> None:
        pass

    @abstractmethod
    def close(self) -> None:
        pass


class FileSink(LogSink):
    """
    Appends records to one JSONL file per module.

    Files are named ``<session_name>_<module>.jsonl`` and opened on the
    first record. Each starts with a header line; close() adds a footer.

    Args:
        log_dir: Output directory (default: get_log_dir())
        session_name: File name prefix (default: current timestamp)
    """

    def __init__(self, log_dir: Optional[str] = None, session_name: Optional[str] = None):
        self.log_dir = Path(log_dir) if log_dir else Path(get_log_dir())
        self.session_name = session_name or time.strftime("%Y%m%d_%H%M%S")
        self._files: Dict[str, TextIO] = {}

    def _open(self, module: str) -> TextIO:
        handle = self._files.get(module)
        if handle is None:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            handle = open(self.log_dir / f"{self.session_name}_{module}.jsonl", 'a')
            self._files[module] = handle
            self._write(handle, {
                "type": "header",
                "module": module,
                "session_name": self.session_name,
                "start_time": time.time(),
            })
        return handle

    @staticmethod
    def _write(handle: TextIO, record: Dict[str, Any]) -> None:
        handle.write(json.dumps(record) + "\n")

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        self._write(self._open(module), {'wall_time': time.time(), **record})

    def flush(self) -> None:
        for handle in self._files.values():
            handle.flush()

    def close(self) -> None:
        for module, handle in self._files.items():
            self._write(handle, {"type": "footer", "module": module, "end_time": time.time()})
            handle.close()
        self._files.clear()


class NullSink(LogSink):
    """Accepts and discards records."""

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        pass

    def flush(self) -> None:
        pass

    def close(self) -> None:
        pass


_sinks: Dict[str, LogSink] = {}


def register_sink(module: str, sink: LogSink) -> None:
    """Route a module's records to sink, replacing any earlier one."""
    _sinks[module] = sink


def get_sink(module: str) -> Optional[LogSink]:
    return _sinks.get(module)


def emit_record(module: str, record: Dict[str, Any]) -> bool:
    """
    Hand a structured record to the module's sink.

    Returns:
        True if a sink took the record, False if none is registered
    """
    sink = _sinks.get(module)
    if sink is None:
        return False
    sink.emit(module, record)
    return True


def close_all_sinks() -> None:
    """Close and unregister every sink."""
    for sink in _sinks.values():
        sink.close()
    _sinks.clear()


def get_module_config(module: str) -> Dict[str, Any]:
    """Record settings for a module, empty if none are configured."""
    return _config['modules'].get(module.lower(), {})


def create_sink_for_environment(module: str, session_name: Optional[str] = None) -> LogSink:
    """
    Build the sink the environment asks for.

    A FileSink when ARCADESIM_LOGGING_<MODULE>_ENABLED is true (writing to
    ARCADESIM_LOGGING_<MODULE>_DIR when set), otherwise a NullSink.
    """
    settings = get_module_config(module)
    if not settings.get('enabled', False):
        return NullSink()
    return FileSink(log_dir=settings.get('dir'), session_name=session_name)


# =============================================================================
# Configuration
# =============================================================================

def get_log_dir() -> str:
    """Configured log directory, else the user data directory for arcadesim."""
    if _config['log_dir']:
        return str(Path(_config['log_dir']).expanduser())

    if sys.platform == 'darwin':
        base = Path.home() / 'Library' / 'Application Support'
    elif sys.platform == 'win32':
        base = Path(os.environ.get('APPDATA', str(Path.home())))
    else:
        base = Path(os.environ.get('XDG_DATA_HOME', str(Path.home() / '.local' / 'share')))
    return str(base / 'arcadesim' / 'logs')


def configure_logging(
    level: str = 'INFO',
    modules: Optional[Dict[str, str]] = None,
    log_dir: Optional[str] = None,
) -> None:
    """
    Set logging levels from code.

    Args:
        level: Default level name for every module
        modules: module name -> level name overrides
        log_dir: Directory for FileSink output
    """
    _config['default_level'] = _level_from_string(level)
    for module, module_level in (modules or {}).items():
        _config['module_levels'][module.lower()] = _level_from_string(module_level)
    if log_dir is not None:
        _config['log_dir'] = log_dir


def _parse_setting(value: str) -> Any:
    lower = value.lower()
    if lower in ('true', '1', 'yes', 'on'):
        return True
    if lower in ('false', '0', 'no', 'off'):
        return False
    return value


def _load_env_config() -> None:
    """Read levels and record settings from ARCADESIM_LOG_* / ARCADESIM_LOGGING_*."""
    for key, value in os.environ.items():
        if key.startswith(SETTINGS_PREFIX):
            module, _, setting = key[len(SETTINGS_PREFIX):].lower().partition('_')
            if module and setting:
                _config['modules'].setdefault(module, {})[setting] = _parse_setting(value)
        elif key == 'ARCADESIM_LOG_LEVEL':
            _config['default_level'] = _level_from_string(value)
        elif key == 'ARCADESIM_LOG_DIR':
            _config['log_dir'] = value
        elif key.startswith(LEVEL_PREFIX):
            _config['module_levels'][key[len(LEVEL_PREFIX):].lower()] = _level_from_string(value)


_load_env_config()


# =============================================================================
# Console logger
# =============================================================================

class ArcadeLogger:
    """Leveled stderr logger for one module."""

    def __init__(self, module: str):
        self.module = module
        self._key = module.lower()

    @property
    def level(self) -> LogLevel:
        return _config['module_levels'].get(self._key, _config['default_level'])

    def is_enabled_for(self, level: LogLevel) -> bool:
        return level >= self.level

    def _log(self, level: LogLevel, label: str, msg: str, args: tuple) -> None:
        if not self.is_enabled_for(level):
            return
        if args:
            try:
                msg = msg % args
            except (TypeError, ValueError):
                msg = f"{msg} {args}"
        print(f"[{self.module}] {label}: {msg}", file=sys.stderr)

    def debug(self, msg: str, *args) -> None:
        self._log(LogLevel.DEBUG, 'DEBUG', msg, args)

    def info(self, msg: str, *args) -> None:
        self._log(LogLevel.INFO, 'INFO', msg, args)

    def warning(self, msg: str, *args) -> None:
        self._log(LogLevel.WARNING, 'WARN', msg, args)

    def error(self, msg: str, *args) -> None:
        self._log(LogLevel.ERROR, 'ERROR', msg, args)


@lru_cache(maxsize=64)
def get_logger(module: str) -> ArcadeLogger:
    """Cached logger for a module name, e.g. get_logger('engine')."""
    return ArcadeLogger(module)
