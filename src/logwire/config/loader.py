"""Where: src/logwire/config/loader.py
What: Read logging configuration trees from TOML files and apply them.
Why: Let applications keep their logging setup in a config file.
"""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from logwire.domain.errors import ConfigFileError
from logwire.logger import Logger, internal_logger

from .configurator import configure_tree
from .paths import config_path

LOG_SECTION: Final[str] = "log"


def load_config(
    path: Path | str | None = None, *, env: Mapping[str, str] | None = None
) -> dict[str, Any]:
    """Load the logging configuration tree from a TOML document.

    Args:
        path: Optional explicit path to the configuration file.
        env: Optional environment mapping used to resolve the default path.

    Returns:
        dict[str, Any]: The ``[log]`` table, or the whole document when it has
        no such table.

    Raises:
        ConfigFileError: If the file is missing, unreadable, or not valid TOML.
    """
    resolved_path = config_path(path, env)
    try:
        with resolved_path.open("rb") as handle:
            document = tomllib.load(handle)
    except FileNotFoundError as exc:
        raise ConfigFileError(
            f"Logging configuration file not found: {resolved_path}", keys=[str(resolved_path)]
        ) from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigFileError(
            f"Invalid TOML in logging configuration file {resolved_path}: {exc}",
            keys=[str(resolved_path)],
        ) from exc
    except OSError as exc:
        raise ConfigFileError(
            f"Failed to read logging configuration file {resolved_path}: {exc}",
            keys=[str(resolved_path)],
        ) from exc

    section = document.get(LOG_SECTION, document)
    if not isinstance(section, dict):
        raise ConfigFileError(
            f"'{LOG_SECTION}' in {resolved_path} must be a table", keys=[LOG_SECTION]
        )

    diagnostics = internal_logger()
    if diagnostics is not None:
        diagnostics.trace("Loaded logging configuration from %s", resolved_path)
    return section


def configure_from_file(
    path: Path | str | None = None,
    *,
    validate_only: bool = False,
    env: Mapping[str, str] | None = None,
) -> list[Logger]:
    """Load a configuration file and configure every block it describes."""

    return configure_tree(load_config(path, env=env), validate_only=validate_only)


__all__ = ["LOG_SECTION", "configure_from_file", "load_config"]
