"""Logging facade exports.

Where: src/logwire/__init__.py
What: Re-export levels, loggers, handlers, and configuration entry points.
Why: Callers need only ``import logwire`` for everyday use.
"""

from __future__ import annotations

from .config import configure, configure_from_file, configure_tree, load_config
from .domain import (
    DAILY,
    HOURLY,
    NEVER,
    ConfigFileError,
    HandlerIOError,
    InvalidConfigError,
    Level,
    LoggingError,
    RotationPolicy,
    UnknownLevelError,
    lookup,
    weekly,
)
from .logger import Logger, clear_all_handlers, clear_handlers, get_logger, loggers
from .platform import ConsoleHandler, FileHandler, FormatOptions

__all__ = [
    "DAILY",
    "HOURLY",
    "NEVER",
    "ConfigFileError",
    "ConsoleHandler",
    "FileHandler",
    "FormatOptions",
    "HandlerIOError",
    "InvalidConfigError",
    "Level",
    "Logger",
    "LoggingError",
    "RotationPolicy",
    "UnknownLevelError",
    "clear_all_handlers",
    "clear_handlers",
    "configure",
    "configure_from_file",
    "configure_tree",
    "get_logger",
    "load_config",
    "loggers",
    "lookup",
    "weekly",
]
