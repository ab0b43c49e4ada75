# tests/conftest.py
"""Pytest configuration with shared fixtures for the linetoggle tests.

Every test runs with the current working directory and ``HOME`` pointed at a
temporary directory, so backups, temporary files, logs and user configuration
never leave ``tmp_path``.
"""

import copy
import logging
from pathlib import Path
from typing import Any, Callable, Generator

import pytest

from linetoggle.core import CodeCommenter, Indenter
from linetoggle.utils.utils import CONFIG_ENV_VAR, DEBUG_ENV_VAR, DEFAULT_CONFIG


@pytest.fixture(autouse=True)
def isolated_workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    """Run each test inside `tmp_path` with a private home directory.

    Yields:
        Path: The working directory, where backup files are written.
    """
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.delenv(DEBUG_ENV_VAR, raising=False)

    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)

    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    yield work

    # setup_logging() replaces the root handlers; put pytest's back.
    for handler in root.handlers:
        if handler not in saved_handlers:
            handler.close()
    root.handlers = saved_handlers
    root.setLevel(saved_level)


@pytest.fixture
def config() -> dict[str, Any]:
    """A private copy of the built-in configuration with file logging off."""
    cfg = copy.deepcopy(DEFAULT_CONFIG)
    cfg["logging"]["log_to_file"] = False
    cfg["logging"]["log_to_console"] = False
    return cfg


@pytest.fixture
def make_file(tmp_path: Path) -> Callable[[str, bytes], Path]:
    """Factory writing source files into a directory separate from the CWD.

    Returns:
        Callable[[str, bytes], Path]: ``make_file(name, content)`` returning
        the created path.
    """
    src_dir = tmp_path / "src"
    src_dir.mkdir()

    def _make(name: str, content: bytes) -> Path:
        path = src_dir / name
        path.write_bytes(content)
        return path

    return _make


@pytest.fixture
def commenter(config: dict[str, Any]) -> CodeCommenter:
    return CodeCommenter(config)


@pytest.fixture
def indenter(config: dict[str, Any]) -> Indenter:
    return Indenter(config)


@pytest.fixture
def backup_of(isolated_workdir: Path) -> Callable[[Path], Path]:
    """Returns the expected backup location for a source file."""

    def _backup(source: Path) -> Path:
        return isolated_workdir / f"backup_toggle_comment_{source.name}"

    return _backup
