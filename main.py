#!/usr/bin/env python3
# /linetoggle/main.py
"""
linetoggle Main Entry Point
===========================

Runs linetoggle from a source checkout without installing it. It performs:
1) Environment Loading: reads ~/.config/linetoggle/.env early, so
   LINETOGGLE_CONFIG and LINETOGGLE_DEBUG are visible to the config loader.
2) Path Setup: ensures the linetoggle package under src/ is importable.
3) Configuration & Logging: loads config and initializes logging.
4) Application Run: hands the arguments to the CLI and exits with its code.
"""

import logging
import os
import sys
from typing import Any


# --- Step 1: Set up the Python Path ---
project_root = os.path.dirname(os.path.abspath(__file__))
src_dir = os.path.join(project_root, "src")
if src_dir not in sys.path:
    sys.path.insert(0, src_dir)

# --- Step 2: Environment, Configuration and Logging ---
try:
    from linetoggle.utils.logging_config import setup_logging
    from linetoggle.utils.utils import load_config, load_environment

    load_environment()
    config: dict[str, Any] = load_config()
    setup_logging(config)
    logger = logging.getLogger("linetoggle")
except Exception as e:
    print(f"FATAL: Could not initialize configuration or logging system: {e}", file=sys.stderr)
    sys.exit(1)

from linetoggle.cli import main  # noqa: E402


def start() -> None:
    argv = sys.argv[1:]
    # An explicit --config replaces the default file; main() loads it itself.
    explicit_config = any(arg == "--config" or arg.startswith("--config=") for arg in argv)
    exit_code = main(argv) if explicit_config else main(argv, config)
    logger.debug("linetoggle finished with exit code %d", exit_code)
    sys.exit(exit_code)


if __name__ == "__main__":
    start()
