"""
winlog — process-wide logging facade with named streams.

A single point through which the components of a host application emit
leveled, optionally localized messages:
- Ordered level vocabulary (SUPPRESS_ALL .. SHOW_ALL) with a cheap gate
- Named output streams with a default-stream fallback
- Lazy, thread-safe, first-call-wins initialization
- Message keys resolved through a pluggable resolver

Public API:
    LogManager          — logging context (guard, registry, dispatch)
    get_manager         — access the process-wide manager
    init_logging        — initialize the process-wide manager
    log                 — resolve a key and log it (process-wide manager)
    log_direct_message  — log pre-formatted text (process-wide manager)
    Level, parse_level  — level vocabulary
    DEFAULT_STREAM      — reserved name of the default stream
    ResourceBundle      — dict-backed message resolver
    configure           — initialize from overrides, env and winlog.json
    trace               — function tracing decorator
"""

from ._version import __version__, __app_name__
from .errors import (
    WinlogError, InvalidConfiguration, ResourceResolutionError, SinkIOFailure,
)
from .levels import (
    Level, parse_level, to_logging_level,
    SUPPRESS_ALL, ERROR, WARNING, INFO, SPEED, DEBUG, FULL_DEBUG, SHOW_ALL,
    MIN, MAX,
)
from .streams import DEFAULT_STREAM, StreamRegistry, wrap_stream
from .handler import RegistryHandler
from .resources import MessageResolver, ResourceBundle
from .manager import (
    LogManager, LOGGER_NAME, get_manager, init_logging, log, log_direct_message,
)
from .config import LoggingConfig, configure, resolve_config
from .trace import trace

__all__ = [
    '__version__', '__app_name__',
    'WinlogError', 'InvalidConfiguration', 'ResourceResolutionError', 'SinkIOFailure',
    'Level', 'parse_level', 'to_logging_level',
    'SUPPRESS_ALL', 'ERROR', 'WARNING', 'INFO', 'SPEED', 'DEBUG', 'FULL_DEBUG',
    'SHOW_ALL', 'MIN', 'MAX',
    'DEFAULT_STREAM', 'StreamRegistry', 'wrap_stream',
    'RegistryHandler',
    'MessageResolver', 'ResourceBundle',
    'LogManager', 'LOGGER_NAME', 'get_manager', 'init_logging', 'log',
    'log_direct_message',
    'LoggingConfig', 'configure', 'resolve_config',
    'trace',
]
