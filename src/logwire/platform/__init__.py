"""Handler and formatter exports.

Where: platform/__init__.py
What: Re-export the console and file handlers with their formatter.
Why: Provide a single canonical import path for backend-facing pieces.
"""

from __future__ import annotations

from .formatting import DEFAULT_STACK_TRACE_LIMIT, FormatOptions, LogFormatter
from .handlers import ConsoleHandler, FileHandler

__all__ = [
    "DEFAULT_STACK_TRACE_LIMIT",
    "ConsoleHandler",
    "FileHandler",
    "FormatOptions",
    "LogFormatter",
]
