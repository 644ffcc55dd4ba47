"""Where: src/logwire/domain/levels.py
What: Fixed severity levels and case-insensitive lookup by name.
Why: Replace the backend's numeric levels with the standard named set.
"""

from __future__ import annotations

import logging
from enum import IntEnum

from .errors import UnknownLevelError


class Level(IntEnum):
    """Severity levels ordered by rank; higher is more severe."""

    TRACE = 400
    DEBUG = 500
    INFO = 800
    WARNING = 900
    ERROR = 930
    CRITICAL = 970
    FATAL = 1000

    @property
    def rank(self) -> int:
        return int(self)


def lookup(name: str) -> Level:
    """Return the level called ``name`` (case-insensitive).

    Raises:
        UnknownLevelError: If no level has that name.
    """

    try:
        return Level[name.strip().upper()]
    except KeyError:
        raise UnknownLevelError(name) from None


def register_levels() -> None:
    """Teach the backend the name of every level so records render correctly."""

    for level in Level:
        logging.addLevelName(level.rank, level.name)


__all__ = ["Level", "lookup", "register_levels"]
