"""Tests for the shared record formatter."""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone

import pytest

from logwire import FormatOptions, Level
from logwire.platform.formatting import LogFormatter

CREATED = datetime(2026, 10, 19, 10, 15, 30, 250000, tzinfo=timezone.utc).timestamp()


def _record(
    msg: str,
    *args: object,
    name: str = "app",
    level: Level = Level.INFO,
    exc_info: logging._SysExcInfoType | None = None,  # pyright: ignore[reportPrivateUsage]
) -> logging.LogRecord:
    record = logging.LogRecord(
        name=name,
        level=level.rank,
        pathname="test",
        lineno=0,
        msg=msg,
        args=args,
        exc_info=exc_info,
    )
    record.created = CREATED
    record.msecs = 250.0
    return record


def _raise_nested(depth: int) -> None:
    if depth == 0:
        raise ValueError("boom")
    _raise_nested(depth - 1)


def test_format_renders_level_timestamp_name_and_message() -> None:
    formatter = LogFormatter(FormatOptions(use_utc=True))

    line = formatter.format(_record("hello %s", "world"))

    assert line == "INFO [20261019-10:15:30.250] app: hello world"


def test_root_logger_is_named_root() -> None:
    formatter = LogFormatter(FormatOptions(use_utc=True))

    assert formatter.format(_record("up", name="")).startswith("INFO [20261019-10:15:30.250] root: ")


def test_local_timestamps_follow_local_time() -> None:
    formatter = LogFormatter(FormatOptions(use_utc=False))
    expected = datetime.fromtimestamp(CREATED).strftime("%Y%m%d-%H:%M:%S")

    assert f"[{expected}.250]" in formatter.format(_record("x"))


def test_message_truncated_with_marker() -> None:
    formatter = LogFormatter(FormatOptions(use_utc=True, truncate_at=5))

    assert formatter.format(_record("abcdefghij")).endswith("app: abcde...")


def test_zero_truncation_keeps_full_message() -> None:
    formatter = LogFormatter(FormatOptions(use_utc=True, truncate_at=0))

    assert formatter.format(_record("a" * 500)).endswith("a" * 500)


def test_multiline_messages_repeat_prefix() -> None:
    formatter = LogFormatter(FormatOptions(use_utc=True))

    lines = formatter.format(_record("first\nsecond", level=Level.ERROR)).splitlines()

    assert lines == [
        "ERROR [20261019-10:15:30.250] app: first",
        "ERROR [20261019-10:15:30.250] app: second",
    ]


def test_exception_is_rendered_with_traceback() -> None:
    formatter = LogFormatter(FormatOptions(use_utc=True))
    try:
        _raise_nested(0)
    except ValueError:
        record = _record("failed", level=Level.ERROR, exc_info=sys.exc_info())

    text = formatter.format(record)

    assert "app: Traceback (most recent call last):" in text
    assert text.splitlines()[-1].endswith("app: ValueError: boom")
    assert "more..." not in text


def test_stack_trace_truncated_to_innermost_frames() -> None:
    formatter = LogFormatter(FormatOptions(use_utc=True, truncate_stack_traces_at=2))
    try:
        _raise_nested(5)
    except ValueError:
        record = _record("failed", exc_info=sys.exc_info())

    lines = formatter.format(record).splitlines()

    frame_lines = [line for line in lines if line.split(": ", 1)[1].lstrip().startswith("File ")]
    assert len(frame_lines) == 2
    assert any("(...5 more...)" in line for line in lines)


def test_exception_cause_chain_is_rendered() -> None:
    formatter = LogFormatter(FormatOptions(use_utc=True))
    try:
        try:
            _raise_nested(0)
        except ValueError as exc:
            raise RuntimeError("wrapped") from exc
    except RuntimeError:
        record = _record("failed", exc_info=sys.exc_info())

    text = formatter.format(record)

    assert "RuntimeError: wrapped" in text
    assert "app: Caused by:" in text
    assert text.index("RuntimeError: wrapped") < text.index("ValueError: boom")


def test_negative_truncation_rejected() -> None:
    with pytest.raises(ValueError):
        _ = FormatOptions(truncate_at=-1)


def test_mismatched_arguments_are_rendered_raw() -> None:
    line = LogFormatter(FormatOptions(use_utc=True)).format(_record("done", 1))

    assert line == "INFO [20261019-10:15:30.250] app: done (1,)"
