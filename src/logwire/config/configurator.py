"""Where: src/logwire/config/configurator.py
What: Parse configuration blocks into logger settings and apply them.
Why: Validate a whole block before touching the logger it describes.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Final

from logwire.domain.errors import InvalidConfigError, UnknownLevelError
from logwire.domain.levels import Level, lookup
from logwire.domain.rotation import NEVER, RotationPolicy
from logwire.logger import REGISTRY_LOCK, Logger, get_logger
from logwire.platform.formatting import DEFAULT_STACK_TRACE_LIMIT, FormatOptions
from logwire.platform.handlers import ConsoleHandler, FileHandler

ALLOWED_KEYS: Final[tuple[str, ...]] = (
    "node",
    "console",
    "filename",
    "roll",
    "utc",
    "truncate",
    "truncate_stack_traces",
    "level",
    "use_parents",
)

DEFAULT_LEVEL: Final[str] = "warning"

_TRUE_STRINGS: Final[frozenset[str]] = frozenset({"true", "yes", "on", "1"})
_FALSE_STRINGS: Final[frozenset[str]] = frozenset({"false", "no", "off", "0"})


@dataclass(slots=True, frozen=True)
class LoggerSettings:
    """Validated contents of one configuration block."""

    node: str = ""
    console: bool = False
    filename: str | None = None
    roll: RotationPolicy = NEVER
    options: FormatOptions = FormatOptions()
    level: Level = Level.WARNING
    use_parents: bool = True

    def build_handlers(self) -> list[logging.Handler]:
        """Create the handlers this block asks for, console first."""

        handlers: list[logging.Handler] = []
        if self.console:
            handlers.append(ConsoleHandler(self.options))
        if self.filename is not None:
            handlers.append(FileHandler(self.filename, self.roll, self.options))
        return handlers


def parse_settings(
    block: Mapping[str, Any], allow_nested_blocks: bool = False
) -> LoggerSettings:
    """Validate ``block`` and convert it into :class:`LoggerSettings`.

    Args:
        block: Mapping of configuration keys to values.
        allow_nested_blocks: Tolerate unknown keys whose values are mappings.

    Raises:
        InvalidConfigError: On unknown keys, bad values, an unknown rolling
            policy, or an unknown level name.
    """
    forbidden = [
        key
        for key, value in block.items()
        if key not in ALLOWED_KEYS and not (allow_nested_blocks and isinstance(value, Mapping))
    ]
    if forbidden:
        raise InvalidConfigError(
            "Unknown logging config attribute(s): " + ", ".join(forbidden),
            keys=forbidden,
        )

    filename = None if block.get("filename") is None else _as_str(block, "filename", "")
    roll = NEVER
    if filename is not None:
        roll = RotationPolicy.from_user_input(_as_str(block, "roll", NEVER.period.value))

    level_name = _as_str(block, "level", DEFAULT_LEVEL)
    try:
        level = lookup(level_name)
    except UnknownLevelError as exc:
        raise InvalidConfigError(str(exc), keys=[level_name]) from exc

    try:
        options = FormatOptions(
            use_utc=_as_bool(block, "utc", False),
            truncate_at=_as_int(block, "truncate", 0),
            truncate_stack_traces_at=_as_int(
                block, "truncate_stack_traces", DEFAULT_STACK_TRACE_LIMIT
            ),
        )
    except ValueError as exc:
        raise InvalidConfigError(f"Invalid truncation setting: {exc}") from exc

    return LoggerSettings(
        node=_as_str(block, "node", ""),
        console=_as_bool(block, "console", False),
        filename=filename,
        roll=roll,
        options=options,
        level=level,
        use_parents=_as_bool(block, "use_parents", True),
    )


def configure(
    block: Mapping[str, Any],
    validate_only: bool = False,
    allow_nested_blocks: bool = False,
) -> Logger:
    """Create (or find) a logger and configure it from ``block``.

    Args:
        block: Configuration block to parse.
        validate_only: Only validate; leave the logger untouched.
        allow_nested_blocks: Treat nested blocks as valid instead of unknown keys.

    Returns:
        Logger: The logger named by the block's ``node`` key.

    Raises:
        InvalidConfigError: If the block is invalid. Nothing is changed then.
    """
    settings = parse_settings(block, allow_nested_blocks)
    logger = get_logger(settings.node)
    if validate_only:
        return logger

    apply_settings(logger, settings)
    return logger


def apply_settings(logger: Logger, settings: LoggerSettings) -> None:
    """Replace the logger's handlers, level, and parent flag with ``settings``."""

    handlers = settings.build_handlers()
    with REGISTRY_LOCK:
        logger.close_handlers()
        for handler in handlers:
            logger.add_handler(handler)
        logger.set_level(settings.level)
        logger.use_parent_handlers = settings.use_parents


def collect_blocks(block: Mapping[str, Any]) -> list[Mapping[str, Any]]:
    """Flatten a configuration tree into its blocks, outermost first."""

    blocks: list[Mapping[str, Any]] = []
    pending: list[Mapping[str, Any]] = [block]
    while pending:
        current = pending.pop(0)
        blocks.append(current)
        pending.extend(value for value in current.values() if isinstance(value, Mapping))
    return blocks


def configure_tree(block: Mapping[str, Any], validate_only: bool = False) -> list[Logger]:
    """Configure a block and every block nested inside it.

    Each nested mapping is a block of its own, normally with its own ``node``.
    Every block is validated before any logger is changed.

    Raises:
        InvalidConfigError: If any block is invalid; no logger is changed.
    """
    plan: list[LoggerSettings] = []
    for current in collect_blocks(block):
        try:
            plan.append(parse_settings(current, allow_nested_blocks=True))
        except InvalidConfigError as exc:
            node = current.get("node", "")
            raise InvalidConfigError(
                f"Invalid logging block for node '{node}': {exc}", keys=exc.keys
            ) from exc

    loggers = [get_logger(settings.node) for settings in plan]
    if validate_only:
        return loggers

    with REGISTRY_LOCK:
        for logger, settings in zip(loggers, plan):
            apply_settings(logger, settings)
    return loggers


def _as_str(block: Mapping[str, Any], key: str, default: str) -> str:
    value = block.get(key, default)
    if isinstance(value, Mapping) or isinstance(value, (list, tuple)):
        raise InvalidConfigError(f"Config attribute '{key}' must be a string", keys=[key])
    return str(value)


def _as_bool(block: Mapping[str, Any], key: str, default: bool) -> bool:
    value = block.get(key, default)
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in _TRUE_STRINGS:
            return True
        if normalized in _FALSE_STRINGS:
            return False
    raise InvalidConfigError(
        f"Config attribute '{key}' must be a boolean, got {value!r}", keys=[key]
    )


def _as_int(block: Mapping[str, Any], key: str, default: int) -> int:
    value = block.get(key, default)
    if isinstance(value, bool):
        raise InvalidConfigError(f"Config attribute '{key}' must be an integer", keys=[key])
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise InvalidConfigError(
        f"Config attribute '{key}' must be an integer, got {value!r}", keys=[key]
    )


__all__ = [
    "ALLOWED_KEYS",
    "LoggerSettings",
    "apply_settings",
    "collect_blocks",
    "configure",
    "configure_tree",
    "parse_settings",
]
