"""Shared path utilities for locating logging configuration files.

Resolution order: an explicit path, then the ``LOGWIRE_CONFIG`` environment
variable, then ``logwire.toml`` in the current working directory.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Callable, Final

ENV_CONFIG_PATH: Final[str] = "LOGWIRE_CONFIG"
DEFAULT_CONFIG_NAME: Final[str] = "logwire.toml"


def resolve_overridable_path(
    *,
    explicit_path: Path | str | None,
    env: Mapping[str, str] | None,
    env_var: str | None,
    default_factory: Callable[[], Path],
) -> Path:
    """Resolve a configuration path honoring explicit and environment overrides."""

    if explicit_path is not None:
        return Path(explicit_path).expanduser().resolve()

    mapping = env if env is not None else os.environ
    if env_var:
        candidate = mapping.get(env_var) or ""
        candidate = candidate.strip()
        if candidate:
            return Path(candidate).expanduser().resolve()

    return default_factory().expanduser().resolve()


def default_config_path() -> Path:
    """Get the default configuration file path (``<cwd>/logwire.toml``)."""

    return Path.cwd() / DEFAULT_CONFIG_NAME


def config_path(
    path: Path | str | None = None, env: Mapping[str, str] | None = None
) -> Path:
    """Resolve the configuration file to read."""

    return resolve_overridable_path(
        explicit_path=path,
        env=env,
        env_var=ENV_CONFIG_PATH,
        default_factory=default_config_path,
    )


__all__ = [
    "DEFAULT_CONFIG_NAME",
    "ENV_CONFIG_PATH",
    "config_path",
    "default_config_path",
    "resolve_overridable_path",
]
