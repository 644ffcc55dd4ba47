"""Where: src/logwire/platform/formatting.py
What: Render log records as prefixed text lines with optional tracebacks.
Why: Console and file handlers must produce identical record layouts.
"""

from __future__ import annotations

import logging
import traceback
from dataclasses import dataclass
from datetime import datetime, timezone
from types import TracebackType
from typing import Final

from typing_extensions import override

ROOT_DISPLAY_NAME: Final[str] = "root"
TRUNCATION_MARKER: Final[str] = "..."
DEFAULT_STACK_TRACE_LIMIT: Final[int] = 30

ExcInfo = tuple[type[BaseException], BaseException, TracebackType | None]


@dataclass(slots=True, frozen=True)
class FormatOptions:
    """Formatting switches shared by every handler kind.

    Attributes:
        use_utc: Render timestamps in UTC instead of local time.
        truncate_at: Maximum message length in characters; 0 disables truncation.
        truncate_stack_traces_at: Maximum traceback frames kept; 0 keeps all.
    """

    use_utc: bool = False
    truncate_at: int = 0
    truncate_stack_traces_at: int = DEFAULT_STACK_TRACE_LIMIT

    def __post_init__(self) -> None:
        if self.truncate_at < 0 or self.truncate_stack_traces_at < 0:
            raise ValueError("Truncation limits must not be negative")


class LogFormatter(logging.Formatter):
    """Format records as ``LEVEL [YYYYMMDD-HH:MM:SS.mmm] name: text`` lines."""

    def __init__(self, options: FormatOptions | None = None) -> None:
        super().__init__()
        self.options: FormatOptions = options or FormatOptions()

    @override
    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        if self.options.use_utc:
            moment = datetime.fromtimestamp(record.created, tz=timezone.utc)
        else:
            moment = datetime.fromtimestamp(record.created)
        return moment.strftime(datefmt or "%Y%m%d-%H:%M:%S") + f".{int(record.msecs):03d}"

    @override
    def format(self, record: logging.LogRecord) -> str:
        prefix = f"{record.levelname} [{self.formatTime(record)}] {record.name or ROOT_DISPLAY_NAME}: "

        message = self.truncate(self.message_text(record))
        lines = message.splitlines() or [""]
        if record.exc_info and record.exc_info[1] is not None:
            lines.extend(self.exception_lines(record.exc_info))  # pyright: ignore[reportArgumentType]
        return "\n".join(prefix + line for line in lines)

    def message_text(self, record: logging.LogRecord) -> str:
        """Interpolate the record's arguments, keeping them raw if they do not fit."""

        try:
            return record.getMessage()
        except (TypeError, ValueError):
            return f"{record.msg} {record.args!r}"

    def truncate(self, message: str) -> str:
        limit = self.options.truncate_at
        if limit and len(message) > limit:
            return message[:limit] + TRUNCATION_MARKER
        return message

    def exception_lines(self, exc_info: ExcInfo) -> list[str]:
        """Render an exception and its ``__cause__`` chain as plain lines.

        Only the innermost ``truncate_stack_traces_at`` frames are kept for each
        exception; the dropped outer frames are summarised by one marker line.
        """

        lines: list[str] = []
        exc: BaseException | None = exc_info[1]
        seen: set[int] = set()
        while exc is not None and id(exc) not in seen:
            seen.add(id(exc))
            if lines:
                lines.append("Caused by:")
            lines.extend(self._single_exception_lines(exc))
            exc = exc.__cause__
        return lines

    def _single_exception_lines(self, exc: BaseException) -> list[str]:
        frames = traceback.extract_tb(exc.__traceback__)
        limit = self.options.truncate_stack_traces_at
        lines: list[str] = []
        if frames:
            lines.append("Traceback (most recent call last):")
            if limit and len(frames) > limit:
                lines.append(f"    (...{len(frames) - limit} more...)")
                frames = traceback.StackSummary.from_list(frames[-limit:])
            for chunk in frames.format():
                lines.extend(chunk.rstrip("\n").splitlines())
        for chunk in traceback.format_exception_only(type(exc), exc):
            lines.extend(chunk.rstrip("\n").splitlines())
        return lines


__all__ = [
    "DEFAULT_STACK_TRACE_LIMIT",
    "FormatOptions",
    "LogFormatter",
]
