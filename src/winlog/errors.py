"""Exception hierarchy for winlog."""


class WinlogError(RuntimeError):
    """Base class for all winlog errors."""


class InvalidConfiguration(WinlogError, ValueError):
    """Raised when a verbosity spec or config value cannot be parsed."""


class ResourceResolutionError(WinlogError, KeyError):
    """Raised when a resolver cannot turn a message key into text."""

    def __str__(self):
        # KeyError.__str__ would repr() the message
        return RuntimeError.__str__(self)


class SinkIOFailure(WinlogError):
    """Raised when writing a log line to its destination fails."""
