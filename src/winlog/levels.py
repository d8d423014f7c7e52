"""
Level vocabulary for the winlog facade.

Levels use the classic Winstone debug scale. The emit rule is the same
single-axis comparison everywhere:

    message.level <= threshold  ->  message is shown

with SUPPRESS_ALL acting as a hard wall on either side: a threshold of
SUPPRESS_ALL shows nothing, and a message tagged SUPPRESS_ALL is never shown.

Level assignments:
    <-- quieter ------------------ default ------------------ louder -->
     0      1      3        5     6      7      8           9
    off    error  warning  info  speed  debug  full_debug  show_all

The underlying stdlib logger works on its own numbers, see
to_logging_level(). Importing this module registers the names SHOW_ALL,
FULL_DEBUG, SPEED and SUPPRESS_ALL for stdlib levels 1, 5, 15 and 60 with
logging.addLevelName. The registration is process-wide, so records from any
other logger at those numbers carry the same names.
"""

import logging
from enum import IntEnum
from typing import Union

from .errors import InvalidConfiguration


class Level(IntEnum):
    """Ordered severities, least to most verbose."""
    SUPPRESS_ALL = 0
    ERROR = 1
    WARNING = 3
    INFO = 5
    SPEED = 6
    DEBUG = 7
    FULL_DEBUG = 8
    SHOW_ALL = 9


SUPPRESS_ALL = Level.SUPPRESS_ALL
ERROR = Level.ERROR
WARNING = Level.WARNING
INFO = Level.INFO
SPEED = Level.SPEED
DEBUG = Level.DEBUG
FULL_DEBUG = Level.FULL_DEBUG
SHOW_ALL = Level.SHOW_ALL

MIN = SUPPRESS_ALL
MAX = SHOW_ALL

# Stdlib logging numbers for each level. SUPPRESS_ALL sits above CRITICAL so
# a logger set to it rejects everything.
_LOGGING_LEVELS = {
    Level.SUPPRESS_ALL: logging.CRITICAL + 10,
    Level.ERROR: logging.ERROR,
    Level.WARNING: logging.WARNING,
    Level.INFO: logging.INFO,
    Level.SPEED: 15,
    Level.DEBUG: logging.DEBUG,
    Level.FULL_DEBUG: 5,
    Level.SHOW_ALL: 1,
}

for _level in (Level.SPEED, Level.FULL_DEBUG, Level.SHOW_ALL, Level.SUPPRESS_ALL):
    logging.addLevelName(_LOGGING_LEVELS[_level], _level.name)

# java.util.logging names and values accepted by parse_level()
_ALIASES = {
    'OFF': Level.SUPPRESS_ALL,
    'NONE': Level.SUPPRESS_ALL,
    'SEVERE': Level.ERROR,
    'WARN': Level.WARNING,
    'CONFIG': Level.INFO,
    'FINE': Level.SPEED,
    'FINER': Level.DEBUG,
    'FINEST': Level.FULL_DEBUG,
    'ALL': Level.SHOW_ALL,
}

_JUL_VALUES = {
    2147483647: Level.SUPPRESS_ALL,
    1000: Level.ERROR,
    900: Level.WARNING,
    800: Level.INFO,
    700: Level.INFO,
    500: Level.SPEED,
    400: Level.DEBUG,
    300: Level.FULL_DEBUG,
    -2147483648: Level.SHOW_ALL,
}


def _from_int(value: int) -> Level:
    if value in _JUL_VALUES:
        return _JUL_VALUES[value]
    if not MIN <= value <= MAX:
        raise InvalidConfiguration(f"Verbosity {value} is outside {int(MIN)}..{int(MAX)}")
    # Floor to the nearest named level (e.g. 4 -> WARNING)
    return max(level for level in Level if level <= value)


def parse_level(spec: Union[Level, int, str]) -> Level:
    """Convert an external verbosity spec into a Level.

    Accepts a Level, an int on the 0..9 scale, a digit string, a level name
    ("debug", "full-debug") or a java.util.logging name or value
    ("FINER", 800).

    Raises:
        InvalidConfiguration: If the spec cannot be interpreted.
    """
    if isinstance(spec, Level):
        return spec
    if isinstance(spec, bool):
        raise InvalidConfiguration(f"Invalid verbosity: {spec!r}")
    if isinstance(spec, int):
        return _from_int(spec)
    if not isinstance(spec, str):
        raise InvalidConfiguration(f"Invalid verbosity: {spec!r}")

    text = spec.strip()
    try:
        value = int(text)
    except ValueError:
        value = None
    if value is not None:
        return _from_int(value)

    name = text.upper().replace('-', '_')
    if name in Level.__members__:
        return Level[name]
    if name in _ALIASES:
        return _ALIASES[name]
    raise InvalidConfiguration(f"Invalid verbosity: {spec!r}")


def to_logging_level(level: Level) -> int:
    """Return the stdlib logging number used for *level*."""
    return _LOGGING_LEVELS[Level(level)]
