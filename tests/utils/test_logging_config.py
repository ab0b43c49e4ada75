# tests/utils/test_logging_config.py
"""Unit tests for logging configuration utility.
=================================================

Tests for the logging setup utility in `linetoggle.utils.logging_config`.

This module verifies that `setup_logging`:
- Creates rotating file handlers for the main log and a separate error log
  when `separate_error_log` is enabled.
- Honors the configured levels for each handler.
- Can disable console logging when `log_to_console` is set to False.
- Lowers the console threshold to DEBUG when LINETOGGLE_DEBUG is set.

The conftest fixtures point HOME and the working directory at a temporary
directory, so no real log files are touched.
"""

import logging
import logging.handlers
from pathlib import Path

import pytest

from linetoggle.utils import logging_config
from linetoggle.utils.utils import DEBUG_ENV_VAR, get_user_config_dir


def test_setup_logging_creates_handlers(tmp_path: Path) -> None:
    """`setup_logging` should add rotating file handlers with proper levels.

    Scenario:
    - Console logging is disabled.
    - Separate error log is requested.
    - File handler level is INFO.

    Assertions:
    - Both a main rotating file handler and a separate error rotating file
      handler are attached to the root logger, in that order.
    - Handler levels match the configuration.
    - error.log lives next to the main log.
    """
    log_file = tmp_path / "logs" / "linetoggle.log"
    logging_config.setup_logging(
        {
            "logging": {
                "file_level": "INFO",
                "console_level": "ERROR",
                "log_to_console": False,
                "log_file": str(log_file),
                "separate_error_log": True,
            }
        }
    )

    root = logging.getLogger()
    assert len(root.handlers) == 2
    assert all(isinstance(h, logging.handlers.RotatingFileHandler) for h in root.handlers)
    assert root.handlers[0].level == logging.INFO
    assert root.handlers[1].level == logging.ERROR
    assert Path(root.handlers[0].baseFilename) == log_file
    assert Path(root.handlers[1].baseFilename) == log_file.parent / "error.log"


def test_default_log_location_is_user_config_dir() -> None:
    logging_config.setup_logging({"logging": {"log_to_console": False}})

    root = logging.getLogger()
    assert len(root.handlers) == 1
    assert Path(root.handlers[0].baseFilename) == get_user_config_dir() / "linetoggle.log"
    assert root.level == logging.DEBUG


def test_console_only_defaults_to_warning() -> None:
    logging_config.setup_logging({"logging": {"log_to_file": False}})

    root = logging.getLogger()
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0], logging.StreamHandler)
    assert root.handlers[0].level == logging.WARNING
    assert root.level == logging.WARNING


def test_debug_env_var_enables_console_diagnostics(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(DEBUG_ENV_VAR, "1")
    logging_config.setup_logging({"logging": {"log_to_file": False, "console_level": "ERROR"}})

    assert logging.getLogger().handlers[0].level == logging.DEBUG


def test_repeated_setup_does_not_duplicate_handlers() -> None:
    config = {"logging": {"log_to_file": False}}
    logging_config.setup_logging(config)
    logging_config.setup_logging(config)
    assert len(logging.getLogger().handlers) == 1


def test_file_records_are_written(tmp_path: Path) -> None:
    log_file = tmp_path / "out.log"
    logging_config.setup_logging({"logging": {"log_to_console": False, "log_file": str(log_file)}})

    logging.getLogger("linetoggle.commit").info("backup written")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert "backup written" in log_file.read_text(encoding="utf-8")
