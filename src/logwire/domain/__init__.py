"""Where: src/logwire/domain/__init__.py
What: Re-export levels, rotation policies, and the error taxonomy.
Why: Let the rest of the package import domain types from one place.
"""

from __future__ import annotations

from .errors import (
    ConfigFileError,
    HandlerIOError,
    InvalidConfigError,
    LoggingError,
    UnknownLevelError,
)
from .levels import Level, lookup, register_levels
from .rotation import DAILY, HOURLY, NEVER, RollPeriod, RotationPolicy, weekly

__all__ = [
    "DAILY",
    "HOURLY",
    "NEVER",
    "ConfigFileError",
    "HandlerIOError",
    "InvalidConfigError",
    "Level",
    "LoggingError",
    "RollPeriod",
    "RotationPolicy",
    "UnknownLevelError",
    "lookup",
    "register_levels",
    "weekly",
]
