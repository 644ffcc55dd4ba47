"""Tests for loading logging configuration from TOML files."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

import pytest

from logwire import (
    ConfigFileError,
    ConsoleHandler,
    FileHandler,
    InvalidConfigError,
    Level,
    configure_from_file,
    get_logger,
    load_config,
)
from logwire.config.paths import ENV_CONFIG_PATH

WriteConfig = Callable[..., Path]
ReadOutput = Callable[[logging.Handler], str]

_TREE = """
[app]
name = "ignored by logwire"

[log]
node = "loaded"
level = "info"

[log.db]
node = "loaded.db"
level = "debug"
use_parents = false
"""


def test_log_table_is_returned(write_config: WriteConfig) -> None:
    tree = load_config(write_config(_TREE))

    assert tree["node"] == "loaded"
    assert tree["db"] == {"node": "loaded.db", "level": "debug", "use_parents": False}
    assert "app" not in tree


def test_document_without_log_table_is_the_tree(write_config: WriteConfig) -> None:
    tree = load_config(write_config('node = "flat"\nconsole = true\n'))

    assert tree == {"node": "flat", "console": True}


def test_environment_variable_locates_file(write_config: WriteConfig) -> None:
    path = write_config(_TREE, "from-env.toml")

    assert load_config(env={ENV_CONFIG_PATH: str(path)})["node"] == "loaded"


def test_working_directory_file_is_the_default(
    portable_cwd: Path, write_config: WriteConfig
) -> None:
    _ = portable_cwd
    _ = write_config(_TREE)

    assert load_config()["node"] == "loaded"


def test_missing_file_raises(tmp_path: Path) -> None:
    missing = tmp_path / "absent.toml"

    with pytest.raises(ConfigFileError) as excinfo:
        _ = load_config(missing)

    assert str(missing) in str(excinfo.value)
    assert isinstance(excinfo.value, InvalidConfigError)


def test_invalid_toml_raises(write_config: WriteConfig) -> None:
    with pytest.raises(ConfigFileError, match="Invalid TOML"):
        _ = load_config(write_config("[log\nnode = 1"))


def test_non_table_log_section_raises(write_config: WriteConfig) -> None:
    with pytest.raises(ConfigFileError, match="must be a table"):
        _ = load_config(write_config('log = "verbose"\n'))


def test_configure_from_file_applies_tree(write_config: WriteConfig, tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "loaded.log"
    path = write_config(
        _TREE.replace('level = "info"', f'level = "info"\nfilename = "{log_file.as_posix()}"\nroll = "hourly"')
    )

    configured = configure_from_file(path)

    assert [logger.name for logger in configured] == ["loaded", "loaded.db"]
    loaded = get_logger("loaded")
    assert loaded.get_level() is Level.INFO
    assert isinstance(loaded.handlers[0], FileHandler)
    assert loaded.handlers[0].policy.describe() == "hourly"
    assert get_logger("loaded.db").use_parent_handlers is False


def test_configure_from_file_validate_only(write_config: WriteConfig) -> None:
    before = get_logger("loaded").get_level()

    _ = configure_from_file(write_config(_TREE), validate_only=True)

    assert get_logger("loaded").get_level() == before
    assert get_logger("loaded.db").use_parent_handlers is True


def test_invalid_block_in_file_changes_nothing(write_config: WriteConfig) -> None:
    path = write_config(_TREE.replace('level = "debug"', 'level = "chatty"'))

    with pytest.raises(InvalidConfigError, match="loaded.db"):
        _ = configure_from_file(path)

    assert get_logger("loaded").get_level() is not Level.INFO


def test_load_reports_to_library_logger_only_when_enabled(
    write_config: WriteConfig, memory_handler: ConsoleHandler, read_output: ReadOutput
) -> None:
    path = write_config(_TREE)
    library = get_logger("logwire")
    library.add_handler(memory_handler)
    library.use_parent_handlers = False

    _ = load_config(path)
    assert read_output(memory_handler) == ""

    library.set_level(Level.TRACE)
    _ = load_config(path)
    assert f"logwire: Loaded logging configuration from {path.resolve()}" in read_output(
        memory_handler
    )
