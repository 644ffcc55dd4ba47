"""Shared pytest fixtures restoring the logging baseline around each test."""

from __future__ import annotations

import io
import logging
from collections.abc import Callable, Iterator

import pytest
from rich.console import Console

from logwire import ConsoleHandler, FormatOptions, clear_all_handlers, loggers


@pytest.fixture(autouse=True)
def logging_baseline() -> Iterator[None]:
    """Start and finish every test with only the root console handler attached."""

    clear_all_handlers()
    yield
    clear_all_handlers()
    for logger in loggers():
        logger.use_parent_handlers = True


@pytest.fixture
def memory_console() -> Console:
    """Provide a non-terminal Rich console writing into a string buffer."""

    return Console(file=io.StringIO(), soft_wrap=True, width=80)


@pytest.fixture
def memory_handler(memory_console: Console) -> ConsoleHandler:
    """Console handler whose output can be read back with ``output_of``."""

    return ConsoleHandler(FormatOptions(use_utc=True), console=memory_console)


def output_of(handler: logging.Handler) -> str:
    """Return everything a memory-backed console handler has written."""

    assert isinstance(handler, ConsoleHandler)
    stream = handler.console.file
    assert isinstance(stream, io.StringIO)
    return stream.getvalue()


@pytest.fixture
def read_output() -> Callable[[logging.Handler], str]:
    """Expose ``output_of`` to tests without importing from conftest."""

    return output_of
