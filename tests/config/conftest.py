"""Shared pytest fixtures for configuration-focused tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write a TOML document under the temporary directory and return its path."""

    def _write(text: str, name: str = "logwire.toml") -> Path:
        path = tmp_path / name
        _ = path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def portable_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from a temporary working directory without ``LOGWIRE_CONFIG``."""

    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("LOGWIRE_CONFIG", raising=False)
    return tmp_path
