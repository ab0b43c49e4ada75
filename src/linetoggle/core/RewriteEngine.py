# linetoggle/core/RewriteEngine.py
"""RewriteEngine Module
=====================
Streams a source file into a destination file with exactly one line edited.

Every edit is the same three-part copy:

A. copy all bytes strictly before the target line unchanged;
B. apply a `Transform` to the target line only;
C. copy every remaining byte unchanged.

The engine works on fixed-size chunks and never holds more than one chunk of
the target line in memory; the line's length is only counted, and a line
longer than `MAX_LINE_LENGTH` is rejected. Any failing read, write or flush
aborts the rewrite with an `EditIOError` naming the stage. The destination is
flushed and synced before `rewrite` returns; promoting it over the original is
the job of `AtomicCommit`.

Multi-step edits (ranges, block markers) are expressed as a chain of
single-line steps through `apply_steps`, each step reading the previous
step's output.
"""

import logging
import os
import shutil
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import BinaryIO, Callable, Optional, Sequence

from linetoggle.core.EditErrors import (
    EditIOError,
    IoStage,
    LineNotFoundError,
    LineTooLongError,
)
from linetoggle.core.LineLocator import (
    IO_BUFFER_SIZE,
    MAX_BYTE_ITERATIONS,
    LineAddress,
    open_source,
)


logger = logging.getLogger("linetoggle.rewrite")

# Maximum accepted length of a single line, terminator included.
MAX_LINE_LENGTH = 1_000_000

RewriteStep = Callable[[Path, Path], None]


class TransformKind(Enum):
    PREPEND = "prepend"
    STRIP = "strip"
    DELETE = "delete"
    INSERT_BEFORE = "insert_before"
    INSERT_AFTER = "insert_after"


@dataclass(frozen=True)
class Transform:
    """An edit applied to the target line.

    Attributes:
        kind: What to do with the line.
        payload: Bytes written by PREPEND, or the complete new line (with its
            terminator) written by the INSERT_* kinds.
        keep: STRIP only; bytes copied before the removed span (the
            indentation in front of an indented marker).
        count: STRIP only; bytes removed after `keep`.
    """

    kind: TransformKind
    payload: bytes = b""
    keep: int = 0
    count: int = 0

    @classmethod
    def prepend(cls, payload: bytes) -> "Transform":
        return cls(TransformKind.PREPEND, payload=payload)

    @classmethod
    def strip(cls, count: int, keep: int = 0) -> "Transform":
        return cls(TransformKind.STRIP, keep=keep, count=count)

    @classmethod
    def delete(cls) -> "Transform":
        return cls(TransformKind.DELETE)

    @classmethod
    def insert_before(cls, line: bytes) -> "Transform":
        return cls(TransformKind.INSERT_BEFORE, payload=line)

    @classmethod
    def insert_after(cls, line: bytes) -> "Transform":
        return cls(TransformKind.INSERT_AFTER, payload=line)


class _Writer:
    """Thin wrapper mapping write failures on the destination to `EditIOError`."""

    def __init__(self, handle: BinaryIO) -> None:
        self.handle = handle

    def write(self, data: bytes) -> None:
        if not data:
            return
        try:
            self.handle.write(data)
        except OSError as exc:
            raise EditIOError(IoStage.WRITE) from exc

    def commit(self) -> None:
        try:
            self.handle.flush()
            os.fsync(self.handle.fileno())
        except OSError as exc:
            raise EditIOError(IoStage.FLUSH) from exc


def _read(stream: BinaryIO, size: int) -> bytes:
    try:
        return stream.read(size)
    except OSError as exc:
        raise EditIOError(IoStage.READ) from exc


def _copy_prefix(src: BinaryIO, out: _Writer, address: LineAddress, max_bytes: int) -> None:
    """Part A: copy exactly `address.offset` bytes."""
    if address.offset > max_bytes:
        raise EditIOError(IoStage.READ)
    remaining = address.offset
    while remaining > 0:
        chunk = _read(src, min(IO_BUFFER_SIZE, remaining))
        if not chunk:
            # The file shrank since the line was located.
            raise LineNotFoundError(address.line)
        out.write(chunk)
        remaining -= len(chunk)


def _pass_line(
    src: BinaryIO,
    out: Optional[_Writer],
    line_number: int,
    max_line_length: int,
    consumed: int = 0,
) -> tuple[bool, bytes]:
    """Copies (or, with `out=None`, skips) the rest of the current line.

    Args:
        consumed: Bytes of this line already read by the caller; they count
            toward the length limit.

    Returns:
        A tuple ``(terminated, leftover)``: whether the line ended with
        ``\\n`` and the bytes of the chunk that belong to following lines.
    """
    length = consumed
    while True:
        chunk = _read(src, IO_BUFFER_SIZE)
        if not chunk:
            return False, b""
        index = chunk.find(b"\n")
        line_part = chunk if index < 0 else chunk[: index + 1]
        length += len(line_part)
        if length > max_line_length:
            raise LineTooLongError(line_number, length)
        if out is not None:
            out.write(line_part)
        if index >= 0:
            return True, chunk[index + 1 :]


def _apply_transform(
    src: BinaryIO,
    out: _Writer,
    address: LineAddress,
    transform: Transform,
    max_line_length: int,
) -> bytes:
    """Part B: edit the target line. Returns bytes already read past it."""
    kind = transform.kind
    line = address.line

    if kind in (TransformKind.PREPEND, TransformKind.INSERT_BEFORE):
        out.write(transform.payload)
        _, leftover = _pass_line(src, out, line, max_line_length)
        return leftover

    if kind is TransformKind.STRIP:
        span = transform.keep + transform.count
        head = _read(src, span)
        if len(head) < span or b"\n" in head:
            # Stale classification: never strip across a line terminator.
            logger.error("Strip span on line %d no longer matches the file.", line)
            raise EditIOError(IoStage.READ)
        out.write(head[: transform.keep])
        _, leftover = _pass_line(src, out, line, max_line_length, consumed=len(head))
        return leftover

    if kind is TransformKind.DELETE:
        _, leftover = _pass_line(src, None, line, max_line_length)
        return leftover

    if kind is TransformKind.INSERT_AFTER:
        terminated, leftover = _pass_line(src, out, line, max_line_length)
        if not terminated:
            out.write(b"\n")
        out.write(transform.payload)
        return leftover

    raise ValueError(f"Unsupported transform kind: {kind}")


def _copy_rest(src: BinaryIO, out: _Writer, leftover: bytes, budget: int) -> None:
    """Part C: copy the remainder of the source unchanged."""
    out.write(leftover)
    copied = len(leftover)
    while True:
        if copied >= budget:
            logger.error("Copy exceeded the byte ceiling; aborting rewrite.")
            raise EditIOError(IoStage.READ)
        chunk = _read(src, IO_BUFFER_SIZE)
        if not chunk:
            return
        out.write(chunk)
        copied += len(chunk)


def rewrite(
    source: Path,
    dest: Path,
    address: LineAddress,
    transform: Transform,
    max_line_length: int = MAX_LINE_LENGTH,
    max_bytes: int = MAX_BYTE_ITERATIONS,
) -> None:
    """Writes `dest` as a copy of `source` with one line transformed.

    Args:
        source: File to read.
        dest: File to create or truncate.
        address: Target line, resolved against the current `source` bytes.
        transform: The edit for the target line.
        max_line_length: Longest accepted target line, in bytes.
        max_bytes: Ceiling on bytes copied in parts A and C.

    Raises:
        EditIOError: On any open/create/read/write/flush failure.
        LineNotFoundError: If `source` no longer reaches `address.offset`.
        LineTooLongError: If the target line exceeds `max_line_length`.
    """
    logger.debug(
        "Rewriting line %d (offset %d) with %s.",
        address.line,
        address.offset,
        transform.kind.value,
    )
    with open_source(source) as src:
        try:
            handle = open(dest, "wb")
        except OSError as exc:
            raise EditIOError(IoStage.CREATE) from exc
        with handle:
            out = _Writer(handle)
            _copy_prefix(src, out, address, max_bytes)
            leftover = _apply_transform(src, out, address, transform, max_line_length)
            _copy_rest(src, out, leftover, max_bytes)
            out.commit()


def _remove_quietly(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        logger.debug("Could not remove intermediate file: %s", exc)


def apply_steps(source: Path, dest: Path, steps: Sequence[RewriteStep]) -> None:
    """Chains single-line rewrite steps from `source` into `dest`.

    Each step is called as ``step(input_path, output_path)`` and must locate
    its line against `input_path`, since earlier steps may have shifted or
    changed lines. Intermediate files live next to `dest` and are always
    removed, whether the chain succeeds or not.
    """
    if not steps:
        try:
            shutil.copyfile(source, dest)
        except OSError as exc:
            raise EditIOError(IoStage.WRITE) from exc
        return

    current = source
    intermediates: list[Path] = []
    try:
        for index, step in enumerate(steps):
            is_last = index == len(steps) - 1
            target = dest if is_last else dest.with_name(f"{dest.name}.step{index}")
            if not is_last:
                intermediates.append(target)
            step(current, target)
            if current != source:
                _remove_quietly(current)
            current = target
    finally:
        for path in intermediates:
            _remove_quietly(path)
