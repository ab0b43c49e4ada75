# linetoggle/utils/logging_config.py
"""linetoggle.utils.logging_config
=================================

Logging configuration for the linetoggle command-line tool.
It defines the global logger object and a single setup function, `setup_logging`,
which configures application-wide logging handlers and log levels based on a
supplied configuration dictionary.

Features:
    - Rotating file logging for every edit (linetoggle.log in ~/.config/linetoggle).
    - Optional console logging to stderr with configurable log level.
    - Optional separate error log file (error.log) for ERROR and CRITICAL events.
    - Diagnostic mode: the LINETOGGLE_DEBUG environment variable lowers the
      console threshold to DEBUG, exposing non-production diagnostics such as
      temp-file cleanup failures.
    - Automatic creation of log directories, with fallback to the system temp directory on failure.
    - Safe reconfiguration: clears existing handlers to avoid duplicate logs when called multiple times.
    - Never raises exceptions; all errors are reported to stderr and logging continues with best-effort.

Usage:
    >>> from linetoggle.utils import logging_config
    >>> logging_config.setup_logging({"logging": {"console_level": "ERROR"}})

Globals:
    logger: Main application logger ("linetoggle").
"""

import logging
import logging.handlers
import os
import sys
import tempfile
from typing import Any, Optional

from linetoggle.utils.utils import get_user_config_dir, is_debug_enabled


# ======================== Global loggers ========================
# Created at import-time but unconfigured until ``setup_logging()`` attaches handlers.
logger = logging.getLogger("linetoggle")

FILE_FORMAT = "%(asctime)s - %(levelname)-8s - %(name)-20s - %(message)s (%(filename)s:%(lineno)d)"
CONSOLE_FORMAT = "%(levelname)-8s - %(name)-12s - %(message)s"


def _ensure_parent_dir(filename: str) -> str:
    """Creates the directory for `filename`, falling back to the temp dir on failure."""
    log_dir = os.path.dirname(filename)
    if log_dir and not os.path.exists(log_dir):
        try:
            os.makedirs(log_dir)
        except OSError as e_mkdir:
            print(f"Error creating log directory '{log_dir}': {e_mkdir}", file=sys.stderr)
            filename = os.path.join(tempfile.gettempdir(), os.path.basename(filename))
            print(f"Logging to temporary file: '{filename}'", file=sys.stderr)
    return filename


def setup_logging(config: Optional[dict[str, Any]] = None) -> None:
    """Configures application-wide logging handlers and log levels.

    Up to three independent handlers are installed on the root logger:

    1. File handler – rotating linetoggle.log capturing everything from the
       configured `file_level` (default DEBUG) upward.
    2. Console handler – optional `stderr` output whose threshold is
       `console_level` (default WARNING), or DEBUG when ``LINETOGGLE_DEBUG``
       is set to ``1/true/yes``.
    3. Error-file handler – optional rotating error.log that stores only
       ERROR and CRITICAL events, next to linetoggle.log.

    Existing handlers on the root logger are cleared to avoid duplicate
    records when the function is invoked multiple times (e.g. in unit tests).

    Args:
        config (dict | None): Optional application configuration blob.
            Only the ``["logging"]`` sub-section is consulted; recognised keys:

            - ``file_level`` (str): Level for linetoggle.log. Default ``"DEBUG"``.
            - ``console_level`` (str): Level for console output. Default ``"WARNING"``.
            - ``log_to_console`` (bool): Enable the console handler. Default ``True``.
            - ``log_to_file`` (bool): Enable the file handler. Default ``True``.
            - ``log_file`` (str): Path of the main log file. Default
              ``~/.config/linetoggle/linetoggle.log``.
            - ``separate_error_log`` (bool): Whether to create error.log. Default ``False``.

    Notes:
        The function never raises; I/O or permission errors are reported to
        stderr and logging continues with a best-effort configuration.
    """
    if config is None:
        config = {}
    logging_config = config.get("logging", {})
    debug_mode = is_debug_enabled()

    log_file_level_str = str(logging_config.get("file_level", "DEBUG")).upper()
    log_file_level = getattr(logging, log_file_level_str, logging.DEBUG)

    log_filename = logging_config.get("log_file") or str(get_user_config_dir() / "linetoggle.log")
    log_filename = os.path.expanduser(log_filename)

    file_formatter = logging.Formatter(FILE_FORMAT)
    file_handler = None
    if logging_config.get("log_to_file", True):
        log_filename = _ensure_parent_dir(log_filename)
        try:
            file_handler = logging.handlers.RotatingFileHandler(
                log_filename, maxBytes=2 * 1024 * 1024, backupCount=5, encoding="utf-8"
            )
            file_handler.setFormatter(file_formatter)
            file_handler.setLevel(log_file_level)
        except Exception as e_fh:
            print(
                f"Error setting up file logger for '{log_filename}': {e_fh}. File logging may be impaired.",
                file=sys.stderr,
            )

    # Console Handler
    console_handler = None
    if logging_config.get("log_to_console", True):
        console_level_str = str(logging_config.get("console_level", "WARNING")).upper()
        console_log_level = getattr(logging, console_level_str, logging.WARNING)
        if debug_mode:
            console_log_level = logging.DEBUG

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        console_handler.setLevel(console_log_level)

    # Optional Separate Error Log File
    error_file_handler = None
    if logging_config.get("separate_error_log", False):
        error_log_filename = os.path.join(os.path.dirname(log_filename), "error.log")
        try:
            error_log_filename = _ensure_parent_dir(error_log_filename)
            error_file_handler = logging.handlers.RotatingFileHandler(
                error_log_filename,
                maxBytes=1 * 1024 * 1024,
                backupCount=3,
                encoding="utf-8",
            )
            error_file_handler.setFormatter(file_formatter)
            error_file_handler.setLevel(logging.ERROR)
        except Exception as e_efh:
            print(
                f"Error setting up separate error log '{error_log_filename}': {e_efh}.",
                file=sys.stderr,
            )

    # Configure the root logger
    root_logger = logging.getLogger()
    for handler in root_logger.handlers:
        handler.close()
    root_logger.handlers = []  # Clear existing root handlers to avoid duplicates

    if file_handler:
        root_logger.addHandler(file_handler)
    if console_handler:
        root_logger.addHandler(console_handler)
    if error_file_handler:
        root_logger.addHandler(error_file_handler)

    levels = [h.level for h in root_logger.handlers] or [logging.WARNING]
    root_logger.setLevel(min(levels))  # Most verbose level needed by any handler

    logging.debug(
        "Logging setup complete. Root logger level: %s. Diagnostics: %s.",
        logging.getLevelName(root_logger.level),
        "on" if debug_mode else "off",
    )
    if file_handler:
        logging.debug(
            "File logging to '%s' at level: %s.",
            log_filename,
            logging.getLevelName(file_handler.level),
        )
