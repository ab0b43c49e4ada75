# linetoggle/utils/utils.py
"""
linetoggle.utils.utils
======================

Configuration helpers for linetoggle.

Key functionalities include:
- Environment Loading: Reads `~/.config/linetoggle/.env` with python-dotenv so
  `LINETOGGLE_CONFIG` and `LINETOGGLE_DEBUG` can be set persistently.
- Robust Configuration Loading: Starts from a hardcoded, built-in default
  configuration, then recursively merges user settings from
  `~/.config/linetoggle/config.toml` (or the file named by `LINETOGGLE_CONFIG`).
- Helper Utilities: Deep-merging of nested dictionaries.

The tool is always runnable: a missing or corrupted user file falls back to
the embedded defaults.
"""

import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import toml
from dotenv import load_dotenv

logger = logging.getLogger("linetoggle")

CONFIG_ENV_VAR = "LINETOGGLE_CONFIG"
DEBUG_ENV_VAR = "LINETOGGLE_DEBUG"

# Direct, hardcoded representation of the default config.toml.
# It serves as the ultimate fallback, ensuring the tool can ALWAYS start.
DEFAULT_CONFIG: Dict[str, Any] = {
    "logging": {
        "file_level": "DEBUG",
        "console_level": "WARNING",
        "log_to_console": True,
        "log_to_file": True,
        "log_file": "",
        "separate_error_log": False,
    },
    "limits": {
        "max_batch_lines": 512,
        "max_range_lines": 100_000,
        "large_range_warning": 10_000,
        "max_line_length": 1_000_000,
        "max_byte_iterations": 1_000_000_000,
    },
    "indent": {"spaces": 4},
    "backup": {
        "prefix": "backup_toggle_comment_",
        "temp_prefix": "temp_toggle_",
        "directory": "",
    },
    "comments": {
        "tolerate_indent": False,
        "line": {
            "//": ["rs", "c", "cpp", "cc", "cxx", "h", "hpp", "js", "ts", "java", "go", "swift"],
            "#": ["py", "sh", "bash", "toml", "yaml", "yml", "rb", "pl", "r"],
        },
        "block": {
            "c": ["rs", "c", "cpp", "cc", "cxx", "h", "hpp", "js", "ts", "java", "go", "swift"],
            "python": ["py"],
        },
    },
}


# --- Helper Functions ---

def get_user_config_dir() -> Path:
    return Path.home() / ".config" / "linetoggle"


def is_debug_enabled() -> bool:
    """True when `LINETOGGLE_DEBUG` asks for diagnostic (non-production) output."""
    return os.environ.get(DEBUG_ENV_VAR, "").lower() in {"1", "true", "yes"}


def load_environment(dotenv_path: Optional[Path] = None) -> bool:
    """Loads `~/.config/linetoggle/.env` without overriding variables already set.

    Returns:
        True if a file was found and loaded.
    """
    path = dotenv_path or get_user_config_dir() / ".env"
    try:
        if not path.is_file():
            return False
        return load_dotenv(dotenv_path=path, override=False)
    except OSError as e:
        logger.debug(f"Could not read environment file '{path}': {e}")
        return False


def load_config(config_path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Loads and merges configurations, ensuring the tool can always run.

    Precedence for the user file: explicit `config_path`, then the
    `LINETOGGLE_CONFIG` environment variable, then
    `~/.config/linetoggle/config.toml`.
    """
    final_config = copy.deepcopy(DEFAULT_CONFIG)
    logger.debug("Loaded embedded default configuration.")

    if config_path is None:
        config_path = os.environ.get(CONFIG_ENV_VAR) or get_user_config_dir() / "config.toml"
    user_config_path = Path(config_path).expanduser()

    if user_config_path.is_file():
        try:
            user_config = toml.load(user_config_path)
            final_config = deep_merge(final_config, user_config)
            logger.info(f"Successfully loaded and merged user config from {user_config_path}")
        except (toml.TomlDecodeError, OSError) as e:
            logger.error(f"Could not parse user config '{user_config_path}': {e}. Using defaults.")

    return final_config


def deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Recursively merges the `override` dictionary into the `base` dictionary.
    """
    result = base.copy()
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result
