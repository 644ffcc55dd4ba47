"""Declarative configuration of loggers from mappings and TOML files."""

from __future__ import annotations

from .configurator import (
    ALLOWED_KEYS,
    LoggerSettings,
    apply_settings,
    configure,
    configure_tree,
    parse_settings,
)
from .loader import configure_from_file, load_config

__all__ = [
    "ALLOWED_KEYS",
    "LoggerSettings",
    "apply_settings",
    "configure",
    "configure_from_file",
    "configure_tree",
    "load_config",
    "parse_settings",
]
