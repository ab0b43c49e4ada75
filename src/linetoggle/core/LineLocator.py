# linetoggle/core/LineLocator.py
"""LineLocator Module
===================
Finds where a zero-indexed line begins by counting newline bytes.

The scan reads the stream in fixed-size chunks and keeps only a running
offset and a newline counter, so no line content is ever buffered. Line 0
always starts at offset 0; line k starts right after the k-th ``\\n``.
Running out of input before that newline is a normal outcome reported as
``None``; the caller decides whether it is an error.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Optional

from linetoggle.core.EditErrors import EditIOError, IoStage


logger = logging.getLogger("linetoggle.locator")

IO_BUFFER_SIZE = 8192

# Hard ceiling on bytes scanned by any single pass over a file.
MAX_BYTE_ITERATIONS = 1_000_000_000


@dataclass(frozen=True)
class LineAddress:
    """A resolved line: its zero-based index and the offset of its first byte."""

    line: int
    offset: int


def _read_chunk(stream: BinaryIO, size: int = IO_BUFFER_SIZE) -> bytes:
    try:
        return stream.read(size)
    except OSError as exc:
        raise EditIOError(IoStage.READ) from exc


def locate(
    stream: BinaryIO, target_line: int, max_bytes: int = MAX_BYTE_ITERATIONS
) -> Optional[int]:
    """Returns the byte offset at which `target_line` begins.

    The stream is consumed from its current position, which is assumed to be
    the start of the file.

    Args:
        stream: A binary stream positioned at offset 0.
        target_line: Zero-indexed line number.
        max_bytes: Scan ceiling; exceeding it is reported as a read failure.

    Returns:
        The offset of the line's first byte, or None when the stream ends
        before `target_line` newlines were seen.

    Raises:
        EditIOError: A read failed or the scan ceiling was exceeded.

    Example:
        For ``b"line 0\\nline 1\\n"``: line 0 → 0, line 1 → 7, line 2 → 14,
        line 3 → None.
    """
    if target_line < 0:
        raise ValueError("target_line must be non-negative")
    if target_line == 0:
        return 0

    newlines_seen = 0
    position = 0
    while True:
        if position >= max_bytes:
            logger.error("Line scan exceeded %d bytes; aborting.", max_bytes)
            raise EditIOError(IoStage.READ)

        chunk = _read_chunk(stream)
        if not chunk:
            return None

        needed = target_line - newlines_seen
        in_chunk = chunk.count(b"\n")
        if in_chunk < needed:
            newlines_seen += in_chunk
            position += len(chunk)
            continue

        # The target newline is inside this chunk; walk to it.
        index = -1
        for _ in range(needed):
            index = chunk.index(b"\n", index + 1)
        return position + index + 1


def count_lines(stream: BinaryIO, max_bytes: int = MAX_BYTE_ITERATIONS) -> int:
    """Counts the lines in `stream`.

    A trailing run of bytes without a terminator counts as a line; an empty
    stream has zero lines.
    """
    lines = 0
    position = 0
    last_byte = b""
    while True:
        if position >= max_bytes:
            raise EditIOError(IoStage.READ)
        chunk = _read_chunk(stream)
        if not chunk:
            break
        lines += chunk.count(b"\n")
        position += len(chunk)
        last_byte = chunk[-1:]
    if last_byte and last_byte != b"\n":
        lines += 1
    return lines


def open_source(path: Path) -> BinaryIO:
    """Opens `path` for binary reading, mapping failures to the open stage."""
    try:
        return open(path, "rb")
    except OSError as exc:
        raise EditIOError(IoStage.OPEN) from exc


def locate_line(
    path: Path, target_line: int, max_bytes: int = MAX_BYTE_ITERATIONS
) -> Optional[LineAddress]:
    """Opens `path` and resolves `target_line` to a `LineAddress`.

    Returns None when the file has no such line. An offset equal to the file
    size (the position right after a final newline) is not a line.
    """
    with open_source(path) as stream:
        offset = locate(stream, target_line, max_bytes)
        if offset is None:
            return None
        if target_line > 0:
            try:
                stream.seek(offset)
            except OSError as exc:
                raise EditIOError(IoStage.READ) from exc
            if not _read_chunk(stream, 1):
                return None
        return LineAddress(target_line, offset)


def total_lines(path: Path, max_bytes: int = MAX_BYTE_ITERATIONS) -> int:
    with open_source(path) as stream:
        return count_lines(stream, max_bytes)
