"""Shared test fixtures for the winlog test suite."""

import io
import itertools
import logging

import pytest

from winlog import manager as _manager_mod
from winlog.handler import RegistryHandler
from winlog.manager import LogManager

# Deterministic line layout for assertions: no timestamps
TEST_FORMAT = "%(levelname)s %(stream_name)s %(message)s"

_logger_ids = itertools.count()


# ---------------------------------------------------------------------------
# Resolver stub
# ---------------------------------------------------------------------------
class RecordingResolver:
    """Resolver that records every call.

    Resolves to "key" or "key:p1,p2" so tests can see the parameters.
    """

    def __init__(self):
        self.calls = []

    def resolve(self, key, params=()):
        self.calls.append((key, tuple(params)))
        if not params:
            return key
        return f"{key}:{','.join(str(p) for p in params)}"

    @property
    def count(self):
        return len(self.calls)


class FlushCounter(io.StringIO):
    """StringIO that counts flush() calls."""

    def __init__(self):
        super().__init__()
        self.flushes = 0

    def flush(self):
        self.flushes += 1
        super().flush()


class BrokenSink:
    """Sink whose write() and flush() always fail."""

    def write(self, text):
        raise OSError("disk full")

    def flush(self):
        raise OSError("disk full")


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def buf():
    """A StringIO buffer for capturing output."""
    return io.StringIO()


@pytest.fixture
def resolver():
    """A resolver stub that records its calls."""
    return RecordingResolver()


def _detach(logger_name):
    logger = logging.getLogger(logger_name)
    for h in list(logger.handlers):
        if isinstance(h, RegistryHandler):
            logger.removeHandler(h)


@pytest.fixture
def make_manager():
    """Factory for LogManagers with their own stdlib logger.

    Each manager gets a unique logger name so thresholds and handlers never
    leak between tests.
    """
    names = []

    def _make():
        name = f"winlog.test.{next(_logger_ids)}"
        names.append(name)
        return LogManager(logger_name=name)

    yield _make
    for name in names:
        _detach(name)


@pytest.fixture
def manager(make_manager):
    """A fresh, uninitialized LogManager."""
    return make_manager()


@pytest.fixture
def ready(manager, buf):
    """A LogManager initialized at INFO writing to buf."""
    manager.initialize("info", default_stream=buf, fmt=TEST_FORMAT)
    return manager


@pytest.fixture
def reset_default_manager():
    """Reset the process-wide LogManager singleton around a test."""
    old = _manager_mod._manager
    _manager_mod._manager = None
    yield
    if _manager_mod._manager is not None:
        _detach(_manager_mod._manager.logger_name)
    _manager_mod._manager = old


@pytest.fixture
def flush_sink():
    """A StringIO that counts flush() calls."""
    return FlushCounter()


@pytest.fixture
def broken_sink():
    """A sink that fails on every write and flush."""
    return BrokenSink()
