# linetoggle/core/RangeEditor.py
"""RangeEditor Module
===================
Applies single-line operations to one line, an inclusive range, a batch of
lines, or an explicit list of boundary edits, always as one atomic commit.

A *line operation* is a callable ``op(stream, address) -> Transform``: given
the current file content and a located line it inspects the line (through
`LineClassifier`) and decides the edit. The `RangeEditor` turns a list of
``(line, op)`` pairs into a chain of rewrite steps, so every line is located
and classified against the output of the previous step.

All target lines are validated against the original file before the backup is
written; a request for a missing line never touches the filesystem.
"""

import logging
from functools import partial
from pathlib import Path
from typing import Any, BinaryIO, Callable, Optional, Sequence, Union

from linetoggle.core.AtomicCommit import DEFAULT_BACKUP_PREFIX, DEFAULT_TEMP_PREFIX, commit
from linetoggle.core.EditErrors import (
    InvalidRequestError,
    LineNotFoundError,
    PathError,
    RangeTooLargeError,
    SourceNotFoundError,
)
from linetoggle.core.LineLocator import (
    MAX_BYTE_ITERATIONS,
    LineAddress,
    locate_line,
    open_source,
    total_lines,
)
from linetoggle.core.RewriteEngine import MAX_LINE_LENGTH, Transform, apply_steps, rewrite


logger = logging.getLogger("linetoggle.range")

LineOperation = Callable[[BinaryIO, LineAddress], Transform]

DEFAULT_LIMITS: dict[str, int] = {
    "max_batch_lines": 512,
    "max_range_lines": 100_000,
    "large_range_warning": 10_000,
    "max_line_length": MAX_LINE_LENGTH,
    "max_byte_iterations": MAX_BYTE_ITERATIONS,
}


def normalize_range(first: int, second: int) -> tuple[int, int]:
    """Returns the pair in ascending order: (5, 10) and (10, 5) both give (5, 10)."""
    return min(first, second), max(first, second)


def resolve_source(file_path: Union[str, Path]) -> Path:
    """Canonicalizes `file_path` to an absolute path of an existing regular file.

    Raises:
        SourceNotFoundError: Nothing exists at the path.
        PathError: The path cannot be resolved, is not a regular file, or has
            no filename component.
    """
    try:
        resolved = Path(file_path).expanduser().resolve(strict=True)
    except FileNotFoundError as exc:
        raise SourceNotFoundError() from exc
    except (OSError, RuntimeError) as exc:
        raise PathError() from exc

    if not resolved.is_file() or not resolved.name:
        raise PathError()
    return resolved


class RangeEditor:
    """Runs line operations on a file inside a single backup/replace commit.

    Attributes:
        limits: Effective numeric limits (batch size, range size, warning
            threshold, line length, byte ceiling).
        workdir: Directory for the backup and temporary files; None means the
            current working directory at commit time.
        backup_prefix: Filename prefix of the backup file.
    """

    def __init__(self, config: Optional[dict[str, Any]] = None) -> None:
        config = config or {}
        self.limits = {**DEFAULT_LIMITS, **config.get("limits", {})}
        backup_config = config.get("backup", {})
        directory = backup_config.get("directory") or None
        self.workdir: Optional[Path] = Path(directory).expanduser() if directory else None
        self.backup_prefix: str = backup_config.get("prefix", DEFAULT_BACKUP_PREFIX)
        self.temp_prefix: str = backup_config.get("temp_prefix", DEFAULT_TEMP_PREFIX)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------
    def require_line(self, source: Path, line: int) -> LineAddress:
        """Locates `line` in `source` or raises `LineNotFoundError` with the line count."""
        max_bytes = self.limits["max_byte_iterations"]
        address = locate_line(source, line, max_bytes)
        if address is None:
            raise LineNotFoundError(line, total_lines(source, max_bytes))
        return address

    def check_range_size(self, start: int, end: int) -> None:
        size = end - start + 1
        maximum = self.limits["max_range_lines"]
        if size > maximum:
            raise RangeTooLargeError(size, maximum)
        if size > self.limits["large_range_warning"]:
            logger.warning("Large range (%d lines) - this will be slow.", size)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------
    def _run_step(self, line: int, op: LineOperation, input_path: Path, output_path: Path) -> None:
        address = self.require_line(input_path, line)
        with open_source(input_path) as stream:
            transform = op(stream, address)
        rewrite(
            input_path,
            output_path,
            address,
            transform,
            max_line_length=self.limits["max_line_length"],
            max_bytes=self.limits["max_byte_iterations"],
        )

    def apply(self, source: Path, edits: Sequence[tuple[int, LineOperation]]) -> Path:
        """Applies `edits` in order as one atomic commit.

        Every referenced line must exist in the original file. Later edits see
        the effect of earlier ones, so callers that insert or delete lines
        must order their edits from the bottom of the file up.

        Returns:
            The backup path.
        """
        if not edits:
            raise InvalidRequestError("No lines to edit")

        # Validating the highest line covers every lower one.
        self.require_line(source, max(line for line, _ in edits))

        steps = [partial(self._run_step, line, op) for line, op in edits]
        logger.info("Editing %d line(s) in %s.", len(steps), source.name)
        return commit(
            source,
            partial(apply_steps, source, steps=steps),
            workdir=self.workdir,
            backup_prefix=self.backup_prefix,
            temp_prefix=self.temp_prefix,
        )

    def edit_line(self, source: Path, line: int, op: LineOperation) -> Path:
        return self.apply(source, [(line, op)])

    def edit_range(self, source: Path, start: int, end: int, op: LineOperation) -> Path:
        """Applies `op` to every line of the inclusive range, lowest first.

        Each line is evaluated independently: a mixed range ends with every
        line flipped from its own prior state.
        """
        start, end = normalize_range(start, end)
        self.check_range_size(start, end)
        return self.apply(source, [(line, op) for line in range(start, end + 1)])

    def edit_lines(self, source: Path, lines: Sequence[int], op: LineOperation) -> Path:
        """Applies `op` to an explicit batch of lines, in the order given."""
        if not lines:
            raise InvalidRequestError("No line numbers provided")
        maximum = self.limits["max_batch_lines"]
        if len(lines) > maximum:
            raise RangeTooLargeError(len(lines), maximum)
        return self.apply(source, [(line, op) for line in lines])
