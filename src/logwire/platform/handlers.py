"""Where: src/logwire/platform/handlers.py
What: Console and rotating file handlers built on the logging backend.
Why: Surface write and rotation failures instead of printing and moving on.
"""

from __future__ import annotations

import logging
import os
import sys
from io import TextIOWrapper
from pathlib import Path
from typing import Any, ClassVar

from typing_extensions import override

from rich.console import Console, ConsoleRenderable
from rich.logging import RichHandler
from rich.style import Style
from rich.text import Text
from rich.traceback import Traceback

from logwire.domain.errors import HandlerIOError
from logwire.domain.levels import Level
from logwire.domain.rotation import NEVER, RotationPolicy

from .formatting import FormatOptions, LogFormatter


class _RaisingHandlerMixin:
    """Turn backend ``handleError`` calls into :class:`HandlerIOError`."""

    def handleError(self, record: logging.LogRecord) -> None:
        error = sys.exc_info()[1]
        detail = f": {error}" if error is not None else ""
        raise HandlerIOError(
            f"{type(self).__name__} failed to write record from '{record.name}'{detail}"
        ) from error

    @property
    def options(self) -> FormatOptions:
        formatter = getattr(self, "formatter", None)
        if isinstance(formatter, LogFormatter):
            return formatter.options
        return FormatOptions()


class ConsoleHandler(_RaisingHandlerMixin, RichHandler):
    """Write formatted records to standard error through a Rich console."""

    _LEVEL_STYLES: ClassVar[dict[int, Style]] = {
        Level.FATAL: Style(color="red", bold=True, reverse=True),
        Level.CRITICAL: Style(color="red", bold=True),
        Level.ERROR: Style(color="red"),
        Level.WARNING: Style(color="yellow"),
        Level.DEBUG: Style(dim=True),
        Level.TRACE: Style(dim=True, italic=True),
    }

    def __init__(
        self,
        options: FormatOptions | None = None,
        *,
        console: Console | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize the handler.

        Args:
            options: Formatting switches; defaults to :class:`FormatOptions`.
            console: Console to print to. Defaults to one bound to ``sys.stderr``.
            **kwargs: Extra keyword arguments passed to ``RichHandler``.
        """
        kwargs["show_time"] = False
        kwargs["show_path"] = False
        kwargs["show_level"] = False
        kwargs["rich_tracebacks"] = False
        kwargs["markup"] = False
        super().__init__(
            console=console or Console(stderr=True, soft_wrap=True, highlight=False),
            **kwargs,
        )
        self.setFormatter(LogFormatter(options))

    @override
    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        style = self._LEVEL_STYLES.get(record.levelno, Style())
        return Text(message, style=style)

    @override
    def render(
        self,
        *,
        record: logging.LogRecord,
        traceback: Traceback | None,
        message_renderable: ConsoleRenderable,
    ) -> ConsoleRenderable:
        # One record per line; the formatter already carries time, level and name.
        return message_renderable

    def __repr__(self) -> str:
        return f"<ConsoleHandler ({logging.getLevelName(self.level)})>"


class FileHandler(_RaisingHandlerMixin, logging.FileHandler):
    """Append formatted records to a file, rotating on calendar boundaries.

    The file is opened on the first record. When a record arrives after the
    current period's boundary, the file is renamed after the period it was
    opened in and a new file is started at the original path. If the rename or
    the reopen fails the current file stays open, the record is still written
    to it, and :class:`HandlerIOError` is raised once the write is done.
    """

    def __init__(
        self,
        filename: str | os.PathLike[str],
        policy: RotationPolicy = NEVER,
        options: FormatOptions | None = None,
        *,
        encoding: str = "utf-8",
    ) -> None:
        self.path: Path = Path(filename).expanduser().resolve()
        super().__init__(self.path, mode="a", encoding=encoding, delay=True)
        self.policy: RotationPolicy = policy
        self.setFormatter(LogFormatter(options))
        self._opened_at: float | None = None
        self._next_rollover: float | None = None

    @property
    def next_rollover(self) -> float | None:
        return self._next_rollover

    @override
    def _open(self) -> TextIOWrapper:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        return super()._open()

    def should_rollover(self, record: logging.LogRecord) -> bool:
        if self._opened_at is None:
            self._start_period(record.created)
            return False
        return self._next_rollover is not None and record.created >= self._next_rollover

    @override
    def emit(self, record: logging.LogRecord) -> None:
        rotation_error: OSError | None = None
        if self.should_rollover(record):
            try:
                self.do_rollover(record.created)
            except OSError as exc:
                rotation_error = exc
                self._next_rollover = self.policy.next_rollover(
                    record.created, use_utc=self.options.use_utc
                )

        try:
            super().emit(record)
        except OSError as exc:
            raise HandlerIOError(f"Failed to open log file {self.path}: {exc}") from exc

        if rotation_error is not None:
            raise HandlerIOError(
                f"Failed to rotate log file {self.path}: {rotation_error}"
            ) from rotation_error

    def do_rollover(self, now: float) -> Path:
        """Archive the current file and start a new one at :attr:`path`.

        Returns:
            Path: Location of the archived file.

        Raises:
            HandlerIOError: If no record has been written yet.
            OSError: If the file cannot be renamed or reopened. The previous
                stream is left open in that case.
        """
        if self._opened_at is None:
            raise HandlerIOError(f"Cannot rotate {self.path} before the first record")
        archive = _unique_path(
            self.policy.rotated_path(self.path, self._opened_at, use_utc=self.options.use_utc)
        )

        if self.path.exists():
            os.rename(self.path, archive)
        try:
            new_stream = self._open()
        except OSError:
            if archive.exists() and not self.path.exists():
                os.rename(archive, self.path)
            raise

        old_stream = self.stream
        self.stream = new_stream
        if old_stream is not None:
            old_stream.close()
        self._start_period(now)
        return archive

    def _start_period(self, now: float) -> None:
        self._opened_at = now
        self._next_rollover = self.policy.next_rollover(now, use_utc=self.options.use_utc)

    def __repr__(self) -> str:
        return f"<FileHandler {self.path} roll={self.policy.describe()}>"


def _unique_path(candidate: Path) -> Path:
    if not candidate.exists():
        return candidate
    counter = 1
    while True:
        numbered = candidate.with_name(f"{candidate.stem}.{counter}{candidate.suffix}")
        if not numbered.exists():
            return numbered
        counter += 1


__all__ = ["ConsoleHandler", "FileHandler"]
