"""Where: src/logwire/logger.py
What: Named, leveled loggers wrapping the standard logging backend, plus their cache.
Why: Give every name exactly one logger object with a resettable baseline.
"""

from __future__ import annotations

import logging
import sys
import threading
from collections.abc import Iterator
from typing import Any, Final, final

from logwire.domain.errors import HandlerIOError
from logwire.domain.levels import Level, register_levels
from logwire.platform.handlers import ConsoleHandler

# Rank below every registered level; the backend treats 0 as "unset".
ACCEPT_ALL: Final[int] = 1

# Guards the cache, handler lists, levels, and record dispatch.
REGISTRY_LOCK: Final[threading.RLock] = threading.RLock()

# Backend alias for the root logger; mapped to "".
ROOT_ALIAS: Final[str] = "root"

# Name of the logger the library reports its own activity to.
INTERNAL_LOGGER_NAME: Final[str] = "logwire"


@final
class Logger:
    """Leveled log emitter bound to one backend logger."""

    def __init__(self, name: str, wrapped: logging.Logger) -> None:
        self.name: str = name
        self._wrapped: logging.Logger = wrapped

    def __repr__(self) -> str:
        level = self.get_level()
        return f"<Logger {self.name or '(root)'} ({level.name if level else 'unset'})>"

    # -- level -----------------------------------------------------------------

    def get_level(self) -> Level | None:
        """Return the level set on this logger, or ``None`` when it has none."""

        try:
            return Level(self._wrapped.level)
        except ValueError:
            return None

    def set_level(self, level: Level | int | None) -> None:
        """Set this logger's threshold; ``None`` inherits the parent's."""

        with REGISTRY_LOCK:
            self._wrapped.setLevel(logging.NOTSET if level is None else int(level))

    def effective_rank(self) -> int:
        """Return the rank of the nearest level set on this logger or an ancestor."""

        return self._wrapped.getEffectiveLevel()

    def is_enabled_for(self, level: Level) -> bool:
        return level.rank >= self.effective_rank()

    # -- handlers --------------------------------------------------------------

    @property
    def handlers(self) -> tuple[logging.Handler, ...]:
        with REGISTRY_LOCK:
            return tuple(self._wrapped.handlers)

    def add_handler(self, handler: logging.Handler) -> None:
        with REGISTRY_LOCK:
            self._wrapped.addHandler(handler)

    def remove_handler(self, handler: logging.Handler) -> None:
        """Detach ``handler``; closing it is left to the caller."""

        with REGISTRY_LOCK:
            self._wrapped.removeHandler(handler)

    def close_handlers(self) -> None:
        """Detach and close every handler attached directly to this logger."""

        with REGISTRY_LOCK:
            for handler in list(self._wrapped.handlers):
                self._wrapped.removeHandler(handler)
                handler.close()

    @property
    def use_parent_handlers(self) -> bool:
        return self._wrapped.propagate

    @use_parent_handlers.setter
    def use_parent_handlers(self, value: bool) -> None:
        with REGISTRY_LOCK:
            self._wrapped.propagate = value

    @property
    def parent(self) -> Logger | None:
        backend_parent = self._wrapped.parent
        if backend_parent is None:
            return None
        if backend_parent is logging.getLogger():
            return get_logger("")
        return get_logger(backend_parent.name)

    # -- emission --------------------------------------------------------------

    def log(self, level: Level, message: Any, *args: Any) -> None:
        """Emit ``message % args`` at ``level`` if the effective level allows it.

        ``message`` may be an exception, in which case the first of ``args`` is
        the message and the exception is attached to the record.

        Raises:
            HandlerIOError: If a handler failed; the other handlers still ran.
        """
        thrown, message, args = _split_thrown(message, args)
        with REGISTRY_LOCK:
            if not self.is_enabled_for(level):
                return
            exc_info = (type(thrown), thrown, thrown.__traceback__) if thrown else None
            record = self._wrapped.makeRecord(
                self.name,
                level.rank,
                "(unknown file)",
                0,
                message,
                args,
                exc_info,
            )
            self._dispatch(record)

    def _dispatch(self, record: logging.LogRecord) -> None:
        failures: list[HandlerIOError] = []
        node: logging.Logger | None = self._wrapped
        while node is not None:
            for handler in node.handlers:
                if record.levelno < handler.level:
                    continue
                try:
                    handler.handle(record)
                except HandlerIOError as exc:
                    failures.append(exc)
            if not node.propagate:
                break
            node = node.parent
        if failures:
            raise failures[0]

    def fatal(self, message: Any, *args: Any) -> None:
        self.log(Level.FATAL, message, *args)

    def critical(self, message: Any, *args: Any) -> None:
        self.log(Level.CRITICAL, message, *args)

    def error(self, message: Any, *args: Any) -> None:
        self.log(Level.ERROR, message, *args)

    def warning(self, message: Any, *args: Any) -> None:
        self.log(Level.WARNING, message, *args)

    def info(self, message: Any, *args: Any) -> None:
        self.log(Level.INFO, message, *args)

    def debug(self, message: Any, *args: Any) -> None:
        self.log(Level.DEBUG, message, *args)

    def trace(self, message: Any, *args: Any) -> None:
        self.log(Level.TRACE, message, *args)


def _split_thrown(
    message: Any, args: tuple[Any, ...]
) -> tuple[BaseException | None, Any, tuple[Any, ...]]:
    if isinstance(message, BaseException):
        if not args:
            return message, str(message), ()
        return message, args[0], args[1:]
    return None, message, args


# -- cache ---------------------------------------------------------------------

_cache: dict[str, Logger] = {}
_initialized: bool = False


def get_logger(name: str | None = None) -> Logger:
    """Return the logger for ``name``, creating and caching it on first use.

    ``""`` names the root logger, and so does ``"root"``. Without a name, the
    caller's module name is used. The first call also puts logging into its
    baseline state (see :func:`clear_all_handlers`).
    """
    if name is None:
        name = sys._getframe(1).f_globals.get("__name__", "")  # pyright: ignore[reportPrivateUsage]
    if name == ROOT_ALIAS:
        name = ""

    with REGISTRY_LOCK:
        _ensure_initialized()
        return _cached(name)


def _cached(name: str) -> Logger:
    logger = _cache.get(name)
    if logger is None:
        logger = Logger(name, logging.getLogger(name))
        logger.use_parent_handlers = True
        _cache[name] = logger
    return logger


def _ensure_initialized() -> None:
    global _initialized
    if not _initialized:
        _initialized = True
        clear_all_handlers()


def internal_logger() -> Logger | None:
    """Return the library's own logger if it was given a level explicitly.

    Internal diagnostics stay out of application sinks unless asked for.
    """
    with REGISTRY_LOCK:
        logger = get_logger(INTERNAL_LOGGER_NAME)
        return logger if logger.get_level() is not None else None


def loggers() -> Iterator[Logger]:
    """Iterate over a snapshot of every logger created so far."""

    with REGISTRY_LOCK:
        snapshot = list(_cache.values())
    return iter(snapshot)


def clear_handlers() -> None:
    """Close all handlers of every cached logger and let each accept everything."""

    global _initialized
    with REGISTRY_LOCK:
        _initialized = True
        _cached("")
        for logger in _cache.values():
            logger.close_handlers()
            logger.set_level(ACCEPT_ALL)


def clear_all_handlers() -> None:
    """Reset logging to its baseline: INFO and above to the console on stderr.

    Every handler is removed from every cached logger, then one console handler
    with an INFO threshold is attached to the root logger.
    """
    with REGISTRY_LOCK:
        clear_handlers()
        console = ConsoleHandler()
        console.setLevel(Level.INFO)
        root = _cached("")
        root.add_handler(console)
        root.set_level(Level.INFO)


register_levels()


__all__ = [
    "ACCEPT_ALL",
    "INTERNAL_LOGGER_NAME",
    "REGISTRY_LOCK",
    "ROOT_ALIAS",
    "Logger",
    "clear_all_handlers",
    "clear_handlers",
    "get_logger",
    "internal_logger",
    "loggers",
]
