"""
Bridge from the underlying stdlib logger to the stream registry.

The LogManager attaches one RegistryHandler to its named logger. Each record
carries the target stream name in ``record.stream_name``; the handler
resolves it through the manager, formats the record and writes one line.
"""

import logging

from .errors import SinkIOFailure
from .streams import DEFAULT_STREAM

DEFAULT_FORMAT = '[%(stream_name)s %(asctime)s] %(levelname)s - %(message)s'
DEFAULT_DATEFMT = '%Y/%m/%d %H:%M:%S'


class RegistryHandler(logging.Handler):
    """Writes records to the sink registered for their stream name.

    Writes are not flushed; callers use LogManager.flush() when timeliness
    matters. A stream that resolves to None (explicitly removed) drops the
    line. Write errors are raised as SinkIOFailure rather than passed to
    Handler.handleError.
    """

    terminator = '\n'

    def __init__(self, manager, fmt: str = DEFAULT_FORMAT,
                 datefmt: str = DEFAULT_DATEFMT):
        super().__init__(level=logging.NOTSET)
        self.manager = manager
        self.setFormatter(logging.Formatter(fmt, datefmt))

    def emit(self, record: logging.LogRecord) -> None:
        name = getattr(record, 'stream_name', None) or DEFAULT_STREAM
        record.stream_name = name
        stream = self.manager.lookup(name)
        if stream is None:
            return
        text = self.format(record)
        try:
            stream.write(text + self.terminator)
        except (OSError, ValueError, TypeError) as e:
            raise SinkIOFailure(f"Could not write to stream '{name}': {e}") from e
