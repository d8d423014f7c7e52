"""
Function tracing decorator.

Routes trace output through a LogManager at FULL_DEBUG, so tracing follows
the normal verbosity threshold instead of keeping its own switch.
"""

import functools
import inspect
from pathlib import Path

from .levels import FULL_DEBUG


def _short_repr(value):
    if isinstance(value, Path):
        return f"Path('{value}')"
    if isinstance(value, str) and len(value) > 50:
        return f"'{value[:47]}...'"
    if isinstance(value, (list, tuple)) and len(value) > 3:
        return f"[...{len(value)} items...]"
    return repr(value)


def trace(func=None, *, stream=None, manager=None):
    """Decorator to trace function calls via a LogManager.

    Logs entry with arguments, the return value (if not None) and any
    exception (which is re-raised). Nothing is formatted unless FULL_DEBUG
    is enabled.

    Can be used bare (``@trace``) or with options
    (``@trace(stream='trace')``).

    Args:
        stream: Target stream name (default stream when None)
        manager: LogManager to use (default: process-wide manager)
    """
    if func is None:
        return functools.partial(trace, stream=stream, manager=manager)

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        # Lazy import to avoid circular dependency
        from .manager import get_manager

        out = manager if manager is not None else get_manager()
        if not out.is_enabled(FULL_DEBUG):
            return func(*args, **kwargs)

        module = inspect.getmodule(func)
        name = f"{module.__name__ if module else 'unknown'}.{func.__qualname__}"

        args_repr = [_short_repr(a) for a in args]
        args_repr.extend(f"{k}={_short_repr(v)}" for k, v in kwargs.items())
        out.log_direct_message(
            FULL_DEBUG, stream, f"[TRACE] >> {name}({', '.join(args_repr)})")

        try:
            result = func(*args, **kwargs)
        except Exception as e:
            out.log_direct_message(
                FULL_DEBUG, stream, f"[TRACE] !! {name} raised: {type(e).__name__}: {e}")
            raise

        if result is not None:
            out.log_direct_message(
                FULL_DEBUG, stream, f"[TRACE] << {name} returned: {_short_repr(result)}")
        return result

    return wrapper
