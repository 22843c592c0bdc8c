"""Ordered log levels shared by the facade, the dispatcher and the server.

FATAL is an alias of ERROR: the client-side level set has no separate fatal
threshold, so ``is_fatal_enabled()`` and an ERROR threshold behave the same.

Example:
    >>> parse_level("warning") is Level.WARN
    True
    >>> Level.FATAL is Level.ERROR
    True
"""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import Final


class Level(IntEnum):
    TRACE = 5
    DEBUG = 10
    INFO = 20
    WARN = 30
    ERROR = 40
    FATAL = 40  # alias


# Names accepted by parse_level() in addition to the member names
_ALIASES: Final[dict[str, Level]] = {
    "ALL": Level.TRACE,
    "FINEST": Level.TRACE,
    "FINER": Level.TRACE,
    "FINE": Level.DEBUG,
    "CONFIG": Level.INFO,
    "WARNING": Level.WARN,
    "SEVERE": Level.ERROR,
    "CRITICAL": Level.ERROR,
}

_STDLIB_TRACE: Final[int] = 5


def parse_level(value: Level | int | str) -> Level:
    """Coerce a level name or number into a ``Level``.

    Integers are snapped down to the closest defined level, so ``25`` becomes
    INFO. Anything below TRACE is TRACE.

    Raises:
        ValueError: If a name is not recognised.
    """
    if isinstance(value, Level):
        return value
    if isinstance(value, int):
        candidates = [lvl for lvl in Level if lvl <= value]
        return max(candidates) if candidates else Level.TRACE
    name = str(value).strip().upper()
    if name in Level.__members__:
        return Level[name]
    if name in _ALIASES:
        return _ALIASES[name]
    raise ValueError(f"Unknown log level '{value}'")


def to_stdlib(level: Level) -> int:
    """Return the ``logging`` level number for ``level``."""
    if level is Level.TRACE:
        return _STDLIB_TRACE
    return {
        Level.DEBUG: logging.DEBUG,
        Level.INFO: logging.INFO,
        Level.WARN: logging.WARNING,
        Level.ERROR: logging.ERROR,
    }[level]


def from_stdlib(levelno: int) -> Level:
    """Map a ``logging`` level number (including custom ones) to a ``Level``."""
    if levelno >= logging.ERROR:
        return Level.ERROR
    if levelno >= logging.WARNING:
        return Level.WARN
    if levelno >= logging.INFO:
        return Level.INFO
    if levelno >= logging.DEBUG:
        return Level.DEBUG
    return Level.TRACE
