# linetoggle/core/EditErrors.py
"""EditErrors Module
==================
Typed failure taxonomy for every line-editing operation.

Each failure kind is its own exception class carrying only the payload the
caller needs (line numbers, lengths, the I/O stage). The core raises these at
the point of detection and never terminates the process; the CLI layer is the
only place that catches them and maps `exit_code` to the process status.

Messages deliberately stay on one line and never embed filesystem paths or
file contents.
"""

from enum import Enum
from typing import Optional


class IoStage(Enum):
    """The stage of an edit at which an I/O call failed."""

    OPEN = "open"
    CREATE = "create"
    READ = "read"
    WRITE = "write"
    FLUSH = "flush"
    BACKUP = "backup"
    REPLACE = "replace"


class EditError(Exception):
    """Base class for all line-editing failures."""

    exit_code: int = 1

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class InvalidRequestError(EditError):
    exit_code = 1


class SourceNotFoundError(EditError):
    exit_code = 2

    def __init__(self) -> None:
        super().__init__("File not found")


class NoExtensionError(EditError):
    exit_code = 3

    def __init__(self) -> None:
        super().__init__("No file extension")


class UnsupportedExtensionError(EditError):
    exit_code = 4

    def __init__(self, extension: str) -> None:
        super().__init__(f"Unsupported file extension '.{extension}'")
        self.extension = extension


class LineNotFoundError(EditError):
    """The requested zero-indexed line lies beyond the end of the file.

    Attributes:
        requested: The line index the caller asked for.
        file_lines: Number of lines in the file, or None when the scan that
            detected the miss did not count them.
    """

    exit_code = 5

    def __init__(self, requested: int, file_lines: Optional[int] = None) -> None:
        if file_lines is None:
            message = f"Line {requested} not found"
        else:
            message = f"Line {requested} not found (file has {file_lines} lines)"
        super().__init__(message)
        self.requested = requested
        self.file_lines = file_lines


class EditIOError(EditError):
    exit_code = 6

    def __init__(self, stage: IoStage) -> None:
        super().__init__(f"IO error during {stage.value}")
        self.stage = stage


class PathError(EditError):
    exit_code = 7

    def __init__(self) -> None:
        super().__init__("Path error")


class LineTooLongError(EditError):
    exit_code = 8

    def __init__(self, line_number: int, length: int) -> None:
        super().__init__(f"Line {line_number} too long ({length} bytes)")
        self.line_number = line_number
        self.length = length


class InconsistentBlockMarkersError(EditError):
    """Only one of the two block boundary lines carries its delimiter."""

    exit_code = 9

    def __init__(self, start_matched: bool, end_matched: bool) -> None:
        side = "start" if start_matched else "end"
        super().__init__(
            f"Inconsistent block markers (only the {side} delimiter is present)"
        )
        self.start_matched = start_matched
        self.end_matched = end_matched


class RangeTooLargeError(EditError):
    exit_code = 10

    def __init__(self, requested: int, maximum: int) -> None:
        super().__init__(f"Range too large ({requested} lines, maximum {maximum})")
        self.requested = requested
        self.maximum = maximum
