"""Where: src/logwire/domain/errors.py
What: Exception hierarchy raised by level lookup, configuration, and handlers.
Why: Give callers one taxonomy to catch instead of backend-specific errors.
"""

from __future__ import annotations

from collections.abc import Iterable


class LoggingError(Exception):
    """Base exception for logwire failures."""


class UnknownLevelError(LoggingError):
    """Raised when a level name does not match any registered level."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown log level: {name}")
        self.name: str = name


class InvalidConfigError(LoggingError):
    """Raised when a configuration block cannot be parsed.

    ``keys`` lists the offending configuration keys (or values) so callers can
    report all of them at once.
    """

    def __init__(self, message: str, keys: Iterable[str] = ()) -> None:
        super().__init__(message)
        self.keys: tuple[str, ...] = tuple(keys)


class ConfigFileError(InvalidConfigError):
    """Raised when a configuration file is missing or is not valid TOML."""


class HandlerIOError(LoggingError):
    """Raised when a handler fails to write, open, or rotate its output."""


__all__ = [
    "ConfigFileError",
    "HandlerIOError",
    "InvalidConfigError",
    "LoggingError",
    "UnknownLevelError",
]
