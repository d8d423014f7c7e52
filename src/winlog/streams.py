"""
Named output streams for the winlog facade.

A stream is a named destination mapped to a writable text sink. One sink is
distinguished as the default; it lives in its own slot under the reserved
name DEFAULT_STREAM and is never stored in the mapping.

Lookup rules:
    default name (or None)   ->  default sink
    registered name          ->  its sink
    removed name             ->  None (no fallback)
    never-registered name    ->  default sink

The registry does no locking of its own. LogManager owns the lock and
serializes every access.
"""

import codecs
import io
import locale
from typing import Any, Dict, List, Optional, TextIO

DEFAULT_STREAM = 'Winstone'


def default_encoding() -> str:
    """Return the platform default text encoding."""
    return locale.getpreferredencoding(False)


def is_byte_sink(sink: Any) -> bool:
    """True if *sink* expects bytes rather than str."""
    if isinstance(sink, io.TextIOBase):
        return False
    if isinstance(sink, (io.RawIOBase, io.BufferedIOBase)):
        return True
    return 'b' in getattr(sink, 'mode', '')


def wrap_stream(sink: Any, encoding: Optional[str] = None) -> Optional[TextIO]:
    """Return a text sink for *sink*, wrapping byte sinks in an encoder.

    The wrapper is a codecs StreamWriter: it encodes on write and passes
    flush() through, but never closes the destination it wraps.

    Args:
        sink: Text or byte sink, or None
        encoding: Encoding for byte sinks (default: platform encoding)

    Returns:
        A text sink, or None when *sink* is None
    """
    if sink is None:
        return None
    if not is_byte_sink(sink):
        return sink
    writer_cls = codecs.getwriter(encoding or default_encoding())
    return writer_cls(sink)


class StreamRegistry:
    """Mapping of stream names to sinks plus a separate default slot."""

    def __init__(self, default: Optional[TextIO] = None):
        self._default = default
        # A None value marks a stream that was explicitly removed
        self._streams: Dict[str, Optional[TextIO]] = {}

    @property
    def default(self) -> Optional[TextIO]:
        return self._default

    def set(self, name: Optional[str], sink: Optional[TextIO]) -> None:
        """Register, replace or remove the sink for *name*.

        A None or DEFAULT_STREAM name replaces the default slot. A None sink
        for any other name removes it: later lookups return None instead of
        falling back to the default.
        """
        if name is None or name == DEFAULT_STREAM:
            self._default = sink
        else:
            self._streams[name] = sink

    def lookup(self, name: Optional[str]) -> Optional[TextIO]:
        """Resolve *name* to a sink following the fallback rules."""
        if name is None or name == DEFAULT_STREAM:
            return self._default
        if name in self._streams:
            return self._streams[name]
        return self._default

    def names(self) -> List[str]:
        """Names with a live sink, default excluded."""
        return sorted(n for n, s in self._streams.items() if s is not None)
