"""Configuration for winlog.

Three-layer config resolution (highest priority wins):
  1. Keyword overrides — passed by the host application
  2. Environment — WINLOG_LEVEL, WINLOG_ENCODING, WINLOG_SHOW_THREAD,
     WINLOG_FORMAT, WINLOG_DATEFMT
  3. Config file — winlog.json in the working directory or a parent

Example winlog.json::

    {"level": "debug", "show_thread": true, "encoding": "utf-8"}
"""

import json
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .errors import InvalidConfiguration
from .handler import DEFAULT_DATEFMT, DEFAULT_FORMAT
from .levels import INFO, Level, parse_level

CONFIG_FILENAME = "winlog.json"
ENV_PREFIX = "WINLOG_"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


@dataclass
class LoggingConfig:
    """Settings handed to LogManager.initialize()."""
    level: Level = INFO
    encoding: Optional[str] = None
    show_thread: bool = False
    fmt: str = DEFAULT_FORMAT
    datefmt: str = DEFAULT_DATEFMT


# ---------------------------------------------------------------------------
# Config file
# ---------------------------------------------------------------------------
def find_config_file(start_dir=None):
    """Walk up from start_dir looking for winlog.json.

    Returns the path if found, None otherwise.
    """
    current = Path(start_dir or os.getcwd()).resolve()
    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def load_json(path):
    """Load a JSON file, returning empty dict on error."""
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


# ---------------------------------------------------------------------------
# Value coercion
# ---------------------------------------------------------------------------
def _parse_bool(key, value):
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise InvalidConfiguration(f"Invalid boolean for {key}: {value!r}")


def _coerce(key, value):
    if key == "level":
        return parse_level(value)
    if key == "show_thread":
        return _parse_bool(key, value)
    return value


def _from_environ(environ: Mapping[str, str]) -> Dict[str, Any]:
    found = {}
    for f in fields(LoggingConfig):
        env_key = ENV_PREFIX + f.name.upper()
        if env_key in environ:
            found[f.name] = environ[env_key]
    return found


# ---------------------------------------------------------------------------
# Config resolution
# ---------------------------------------------------------------------------
def resolve_config(overrides=None, environ=None, path=None, start_dir=None):
    """Resolve a LoggingConfig using three-layer precedence.

    For each field, checks (in order):
      1. overrides dict (None values are ignored)
      2. WINLOG_* environment variables
      3. the JSON config file (explicit path, else found from start_dir)

    Raises:
        InvalidConfiguration: If a level or boolean value is invalid
    """
    if environ is None:
        environ = os.environ
    if path is None:
        path = find_config_file(start_dir)
    file_cfg = load_json(path) if path else {}
    env_cfg = _from_environ(environ)
    overrides = {k: v for k, v in (overrides or {}).items() if v is not None}

    resolved = {}
    for f in fields(LoggingConfig):
        for layer in (overrides, env_cfg, file_cfg):
            if f.name in layer:
                resolved[f.name] = _coerce(f.name, layer[f.name])
                break

    unknown = set(overrides) - {f.name for f in fields(LoggingConfig)}
    if unknown:
        raise InvalidConfiguration(
            f"Unknown config keys: {', '.join(sorted(unknown))}")
    return LoggingConfig(**resolved)


def configure(manager=None, default_stream=None, environ=None, path=None,
              **overrides):
    """Resolve the config and initialize a LogManager with it.

    Args:
        manager: LogManager to initialize (default: process-wide manager)
        default_stream: Sink for the default stream (default: stdout)
        environ: Environment mapping (default: os.environ)
        path: Explicit config file path
        **overrides: LoggingConfig fields that win over env and file

    Returns:
        The LogManager
    """
    from .manager import get_manager

    config = resolve_config(overrides, environ=environ, path=path)
    if manager is None:
        manager = get_manager()
    manager.initialize(
        config.level,
        default_stream,
        config.encoding,
        config.show_thread,
        fmt=config.fmt,
        datefmt=config.datefmt,
    )
    return manager
