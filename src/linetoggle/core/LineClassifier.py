# linetoggle/core/LineClassifier.py
"""LineClassifier Module
======================
Inspects the first bytes of a located line and reports its current state.

All checks read forward from the line's first byte and stop as soon as the
answer is known; the longest read is bounded by the longest candidate
pattern (plus `MAX_SCAN_BYTES` of leading spaces in indent-tolerant mode).
"""

import logging
from dataclasses import dataclass
from typing import BinaryIO

from linetoggle.core.EditErrors import EditIOError, IoStage


logger = logging.getLogger("linetoggle.classifier")

# Upper bound on leading spaces skipped when looking for an indented marker.
MAX_SCAN_BYTES = 64

LINE_TERMINATORS = (b"\r\n", b"\n")


@dataclass(frozen=True)
class TagState:
    """Comment state of one line.

    Attributes:
        tagged: True if the line carries `marker + space`.
        indent: Leading spaces in front of the marker (always 0 at column 0).
        remove_len: Bytes to drop after `indent` to untag the line.
    """

    tagged: bool
    indent: int = 0
    remove_len: int = 0


UNTAGGED = TagState(tagged=False)


def _read_at(stream: BinaryIO, offset: int, size: int) -> bytes:
    try:
        stream.seek(offset)
        return stream.read(size)
    except OSError as exc:
        raise EditIOError(IoStage.READ) from exc


def detect_tag(
    stream: BinaryIO, offset: int, marker: bytes, tolerate_indent: bool = False
) -> TagState:
    """Decides whether the line at `offset` starts with `marker` + one space.

    With `tolerate_indent` the marker may follow up to `MAX_SCAN_BYTES`
    leading spaces, which are reported back so they survive removal.
    Otherwise only column 0 is considered.
    """
    tag = marker + b" "
    window = MAX_SCAN_BYTES + len(tag) if tolerate_indent else len(tag)
    head = _read_at(stream, offset, window)

    indent = 0
    if tolerate_indent:
        while indent < len(head) and indent < MAX_SCAN_BYTES and head[indent : indent + 1] == b" ":
            indent += 1

    if head[indent : indent + len(tag)] == tag:
        return TagState(tagged=True, indent=indent, remove_len=len(tag))
    return UNTAGGED


def matches_full_line(stream: BinaryIO, offset: int, delimiter: bytes) -> bool:
    """True if the whole line at `offset` is exactly `delimiter` + terminator.

    Byte-exact comparison: indentation, trailing spaces or any other content
    disqualify the line, and so does a missing terminator.
    """
    longest = len(delimiter) + max(len(t) for t in LINE_TERMINATORS)
    head = _read_at(stream, offset, longest)
    if not head.startswith(delimiter):
        return False
    rest = head[len(delimiter) :]
    return any(rest.startswith(terminator) for terminator in LINE_TERMINATORS)


def count_leading_spaces(stream: BinaryIO, offset: int, limit: int) -> int:
    """Counts ASCII spaces (never tabs) at the line start, at most `limit`."""
    head = _read_at(stream, offset, limit)
    count = 0
    for byte in head:
        if byte != 0x20:
            break
        count += 1
    return count


def line_terminator(stream: BinaryIO, offset: int, max_line_length: int) -> bytes:
    """Returns the terminator of the line at `offset`: CRLF, LF or b"".

    Scans forward at most `max_line_length` bytes; a longer line is treated
    as LF-terminated for the purpose of choosing a style.
    """
    try:
        stream.seek(offset)
    except OSError as exc:
        raise EditIOError(IoStage.READ) from exc

    scanned = 0
    previous = b""
    while scanned <= max_line_length:
        try:
            chunk = stream.read(4096)
        except OSError as exc:
            raise EditIOError(IoStage.READ) from exc
        if not chunk:
            return b""
        index = chunk.find(b"\n")
        if index >= 0:
            before = chunk[index - 1 : index] if index > 0 else previous
            return b"\r\n" if before == b"\r" else b"\n"
        scanned += len(chunk)
        previous = chunk[-1:]
    logger.debug("Terminator scan stopped after %d bytes; assuming LF.", scanned)
    return b"\n"
