# linetoggle/core/AtomicCommit.py
"""AtomicCommit Module
====================
Backup-then-replace protocol wrapped around every edit.

Sequence for one operation:

1. Copy the original verbatim to ``backup_toggle_comment_<filename>`` in the
   working directory. There is exactly one backup generation; each run
   overwrites it. A failure here aborts before anything else happens.
2. Let the producer write the complete replacement into a process-unique
   temporary file, ``temp_toggle_<pid>_<filename>``, in the same directory.
3. If the producer succeeds, copy the temporary file over the original and
   delete it. A failed delete is logged at DEBUG only.
4. If the producer fails, delete the temporary file and re-raise. The
   original has not been touched.
"""

import logging
import os
import shutil
from pathlib import Path
from typing import Callable, Optional

from linetoggle.core.EditErrors import EditIOError, IoStage


logger = logging.getLogger("linetoggle.commit")

DEFAULT_BACKUP_PREFIX = "backup_toggle_comment_"
DEFAULT_TEMP_PREFIX = "temp_toggle_"

Producer = Callable[[Path], None]


def backup_path_for(
    source_path: Path,
    workdir: Optional[Path] = None,
    prefix: str = DEFAULT_BACKUP_PREFIX,
) -> Path:
    """Deterministic backup location for `source_path` in `workdir` (CWD by default)."""
    return (workdir or Path.cwd()) / f"{prefix}{source_path.name}"


def temp_path_for(
    source_path: Path,
    workdir: Optional[Path] = None,
    prefix: str = DEFAULT_TEMP_PREFIX,
) -> Path:
    return (workdir or Path.cwd()) / f"{prefix}{os.getpid()}_{source_path.name}"


def commit(
    source_path: Path,
    producer: Producer,
    workdir: Optional[Path] = None,
    backup_prefix: str = DEFAULT_BACKUP_PREFIX,
    temp_prefix: str = DEFAULT_TEMP_PREFIX,
) -> Path:
    """Replaces `source_path` with the producer's output, keeping one backup.

    Args:
        source_path: Resolved path of the file being edited.
        producer: Called with the temporary path; must write the complete
            replacement file there or raise.
        workdir: Directory for the backup and temporary files (CWD if None).
        backup_prefix: Filename prefix of the backup.
        temp_prefix: Filename prefix of the temporary file.

    Returns:
        The path of the backup that now holds the pre-edit content.

    Raises:
        EditIOError: With stage BACKUP if the backup copy fails, or stage
            REPLACE if the finished file cannot be copied over the original.
        Exception: Whatever the producer raised, after cleanup.
    """
    backup_path = backup_path_for(source_path, workdir, backup_prefix)
    temp_path = temp_path_for(source_path, workdir, temp_prefix)

    try:
        shutil.copyfile(source_path, backup_path)
    except OSError as exc:
        logger.error("Backup copy failed; the original was not modified.")
        raise EditIOError(IoStage.BACKUP) from exc
    logger.debug("Backup written to %s", backup_path)

    try:
        producer(temp_path)
    except BaseException:
        _discard(temp_path)
        raise

    try:
        shutil.copyfile(temp_path, source_path)
    except OSError as exc:
        _discard(temp_path)
        logger.error("Replacing the original failed; restore it from the backup if needed.")
        raise EditIOError(IoStage.REPLACE) from exc

    _discard(temp_path)
    return backup_path


def _discard(temp_path: Path) -> None:
    try:
        temp_path.unlink(missing_ok=True)
    except OSError as exc:
        # Non-fatal: the edit outcome is already decided.
        logger.debug("Failed to clean up temp file %s: %s", temp_path, exc)
