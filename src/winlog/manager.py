"""
LogManager: the winlog facade core.

One LogManager is the process-lifetime logging context. It owns the stream
registry, the verbosity threshold and the underlying stdlib logger, and
guards first-time setup with a shared lock. Every entry point initializes
the manager with defaults (INFO to stdout) if nobody did so explicitly, so
it is always safe to log.

Dispatch path:
    log(level, resolver, key, params)
      -> gate on the underlying logger (disabled: return, resolver untouched)
      -> resolver.resolve(key, params)
      -> optional "[thread] - " prefix
      -> logger.log(..., extra={'stream_name': ...})
      -> RegistryHandler writes to the resolved sink

Messages are routed to the stream named in the call. Unknown names fall back
to the default stream, removed names drop the line.
"""

import logging
import sys
import threading
from typing import Any, Optional, Sequence, TextIO, Tuple, Union

from .handler import DEFAULT_DATEFMT, DEFAULT_FORMAT, RegistryHandler
from .levels import INFO, Level, parse_level, to_logging_level
from .resources import MessageResolver
from .streams import DEFAULT_STREAM, StreamRegistry, wrap_stream

LOGGER_NAME = 'winstone'

LevelSpec = Union[Level, int, str]


def _as_params(params: Any) -> Tuple[Any, ...]:
    """Normalize a single value or a sequence of values to a tuple."""
    if params is None:
        return ()
    if isinstance(params, (list, tuple)):
        return tuple(params)
    return (params,)


class LogManager:
    """Process-wide logging context with a guarded one-time setup.

    Usage::

        manager = LogManager()
        manager.initialize(DEBUG, default_stream=sys.stderr, show_thread=True)
        manager.set_stream('access', open('access.log', 'ab'), encoding='utf-8')
        manager.log(INFO, bundle, 'Server.Started', 8080)
        manager.log_direct_message(ERROR, 'access', 'bad request')
        manager.flush('access')

    Args:
        logger_name: Name of the underlying stdlib logger. Managers sharing
            a name share one logger; the most recently initialized manager
            owns its output.
    """

    def __init__(self, logger_name: str = LOGGER_NAME):
        self.logger_name = logger_name
        self._lock = threading.RLock()
        self._ready = False
        self._threshold: Level = INFO
        self._show_thread = False
        self._streams = StreamRegistry()
        self._logger = logging.getLogger(logger_name)
        self._handler: Optional[RegistryHandler] = None

    # -------------------------------------------------------------------------
    # Initialization guard
    # -------------------------------------------------------------------------

    def initialize(
        self,
        level: LevelSpec = INFO,
        default_stream: Optional[Any] = None,
        encoding: Optional[str] = None,
        show_thread: bool = False,
        *,
        fmt: str = DEFAULT_FORMAT,
        datefmt: str = DEFAULT_DATEFMT,
    ) -> bool:
        """Set up threshold, default stream and handler, once.

        Repeat calls are ignored, including calls racing the first one: the
        ready flag is re-checked inside the lock so only the first caller's
        configuration takes effect.

        Args:
            level: Verbosity threshold (Level, int or name)
            default_stream: Text or byte sink for the default stream
                (default: sys.stdout)
            encoding: Encoding used when default_stream takes bytes
                (default: platform encoding)
            show_thread: Prefix messages with the emitting thread's name
            fmt: logging.Formatter format; %(stream_name)s is available
            datefmt: logging.Formatter date format

        Returns:
            True if this call performed the initialization

        Raises:
            InvalidConfiguration: If level cannot be parsed
        """
        if self._ready:
            return False
        threshold = parse_level(level)
        with self._lock:
            if self._ready:
                return False
            self._threshold = threshold
            self._show_thread = bool(show_thread)
            self._streams = StreamRegistry()
            sink = default_stream if default_stream is not None else sys.stdout
            self._streams.set(DEFAULT_STREAM, wrap_stream(sink, encoding))
            self._install_handler(fmt, datefmt)
            self._logger.setLevel(to_logging_level(threshold))
            self._ready = True
        return True

    def _install_handler(self, fmt: str, datefmt: str) -> None:
        for existing in list(self._logger.handlers):
            if isinstance(existing, RegistryHandler):
                self._logger.removeHandler(existing)
        self._handler = RegistryHandler(self, fmt=fmt, datefmt=datefmt)
        self._logger.addHandler(self._handler)
        self._logger.propagate = False

    def _ensure_ready(self) -> None:
        if not self._ready:
            self.initialize(INFO)

    @property
    def is_ready(self) -> bool:
        return self._ready

    @property
    def verbosity(self) -> Level:
        """Current threshold (INFO before initialization)."""
        return self._threshold

    @property
    def show_thread(self) -> bool:
        return self._show_thread

    @property
    def logger(self) -> logging.Logger:
        """The underlying stdlib logger."""
        return self._logger

    def set_verbosity(self, level: LevelSpec) -> None:
        """Change the threshold, initializing with it if not ready yet."""
        threshold = parse_level(level)
        if not self._ready and self.initialize(threshold):
            return
        with self._lock:
            self._threshold = threshold
            self._logger.setLevel(to_logging_level(threshold))

    # -------------------------------------------------------------------------
    # Stream registry
    # -------------------------------------------------------------------------

    def set_stream(self, name: Optional[str], sink: Optional[Any],
                   encoding: Optional[str] = None) -> None:
        """Register, replace or remove the sink for a stream name.

        Byte sinks are wrapped in an encoder for *encoding* (default:
        platform encoding); text sinks are stored as given. The manager never
        closes a sink. A None name addresses the default stream. A None sink
        removes a named stream, after which lookups return None.
        """
        self._ensure_ready()
        wrapped = wrap_stream(sink, encoding)
        with self._lock:
            self._streams.set(name, wrapped)

    def set_text_stream(self, name: Optional[str], sink: Optional[TextIO]) -> None:
        """set_stream() for a sink that already accepts str."""
        self.set_stream(name, sink)

    def set_byte_stream(self, name: Optional[str], sink: Optional[Any],
                        encoding: Optional[str] = None) -> None:
        """set_stream() for a raw byte sink."""
        self.set_stream(name, sink, encoding)

    def lookup(self, name: Optional[str]) -> Optional[TextIO]:
        """Return the sink for *name*, following the fallback rules."""
        self._ensure_ready()
        with self._lock:
            return self._streams.lookup(name)

    def stream_names(self):
        """Names of registered streams with a live sink."""
        self._ensure_ready()
        with self._lock:
            return self._streams.names()

    def flush(self, name: Optional[str] = DEFAULT_STREAM) -> None:
        """Flush the sink behind *name*. Failures are discarded."""
        stream = self.lookup(name)
        if stream is None:
            return
        flush = getattr(stream, 'flush', None)
        if flush is None:
            return
        try:
            flush()
        except (OSError, ValueError):
            pass

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------

    def is_enabled(self, level: Level) -> bool:
        """Cheap check whether a message at *level* would be written."""
        self._ensure_ready()
        if level <= Level.SUPPRESS_ALL:
            return False
        return self._logger.isEnabledFor(to_logging_level(level))

    def log(
        self,
        level: Level,
        resolver: MessageResolver,
        key: str,
        params: Union[Sequence[Any], Any, None] = None,
        error: Optional[BaseException] = None,
        stream: Optional[str] = None,
    ) -> None:
        """Resolve a message key and write it if *level* is enabled.

        The level gate runs before the resolver is touched, so disabled
        levels cost one comparison however expensive the parameters.

        Args:
            level: Message severity
            resolver: Object with resolve(key, params)
            key: Message key
            params: One value or a list/tuple of positional values
            error: Exception whose traceback is appended
            stream: Target stream name (default stream when None)

        Raises:
            ResourceResolutionError: Propagated from the resolver
            SinkIOFailure: If writing the line failed
        """
        self._ensure_ready()
        if not self.is_enabled(level):
            return
        message = resolver.resolve(key, _as_params(params))
        self._emit(level, message, error, stream)

    def log_direct_message(
        self,
        level: Level,
        stream: Optional[str],
        message: str,
        error: Optional[BaseException] = None,
    ) -> None:
        """Write pre-formatted text, bypassing any resolver."""
        self._ensure_ready()
        if not self.is_enabled(level):
            return
        self._emit(level, message, error, stream)

    def _compose(self, message: str) -> str:
        if self._show_thread:
            return f"[{threading.current_thread().name}] - {message}"
        return message

    def _emit(self, level: Level, message: str,
              error: Optional[BaseException], stream: Optional[str]) -> None:
        self._logger.log(
            to_logging_level(level),
            '%s', self._compose(message),
            exc_info=error,
            extra={'stream_name': stream or DEFAULT_STREAM},
        )


# =============================================================================
# Module-level default manager
# =============================================================================

_manager: Optional[LogManager] = None
_manager_lock = threading.Lock()


def get_manager() -> LogManager:
    """Get the process-wide LogManager, creating it if needed."""
    global _manager
    if _manager is None:
        with _manager_lock:
            if _manager is None:
                _manager = LogManager()
    return _manager


def init_logging(level: LevelSpec = INFO, default_stream: Optional[Any] = None,
                 encoding: Optional[str] = None, show_thread: bool = False,
                 **kwargs: Any) -> LogManager:
    """Initialize the process-wide LogManager.

    Call once at program startup. Later calls leave the first
    configuration in place.

    Returns:
        The process-wide LogManager
    """
    manager = get_manager()
    manager.initialize(level, default_stream, encoding, show_thread, **kwargs)
    return manager


def log(level: Level, resolver: MessageResolver, key: str,
        params: Union[Sequence[Any], Any, None] = None,
        error: Optional[BaseException] = None,
        stream: Optional[str] = None) -> None:
    """LogManager.log() on the process-wide manager."""
    get_manager().log(level, resolver, key, params, error, stream)


def log_direct_message(level: Level, stream: Optional[str], message: str,
                       error: Optional[BaseException] = None) -> None:
    """LogManager.log_direct_message() on the process-wide manager."""
    get_manager().log_direct_message(level, stream, message, error)
