# linetoggle/core/CodeCommenter.py
"""CodeCommenter Module
====================
This module defines the `CodeCommenter` class, which provides the comment
toggling operations of linetoggle: single-line comment markers, `///`
documentation markers, and full-line block delimiters, on one line, an
inclusive range, or a batch of lines.
Key Features:
-------------
- Extension-Aware Commenting: Resolves the comment marker (`//` or `#`) or the
  block delimiter pair (`/* */` or `\"\"\" \"\"\"`) from the file extension.
- Column-0 Toggling: A line is tagged when it starts with the marker followed
  by exactly one space; toggling adds or removes exactly that prefix.
- Flip-Each Ranges: In range and batch mode every line is toggled from its own
  state; a mixed range is not made uniform.
- Block Delimiters: Inserts or removes whole delimiter lines around a range,
  editing the later line first so the earlier line's address stays valid.
Intended Usage:
---------------
The CLI creates one `CodeCommenter` from the loaded configuration and calls
one public method per invocation. All edits go through `RangeEditor`, so each
call is a single backup/replace commit.
"""

import logging
from pathlib import Path
from typing import Any, BinaryIO, Optional, Sequence, Union

from linetoggle.core.CommentMarkers import (
    BlockMarkerPair,
    CommentMarkerKind,
    ExtensionClassifier,
)
from linetoggle.core.EditErrors import InconsistentBlockMarkersError
from linetoggle.core.LineClassifier import detect_tag, line_terminator, matches_full_line
from linetoggle.core.LineLocator import LineAddress, open_source
from linetoggle.core.RangeEditor import (
    LineOperation,
    RangeEditor,
    normalize_range,
    resolve_source,
)
from linetoggle.core.RewriteEngine import Transform


logger = logging.getLogger("linetoggle.commenter")

PathLike = Union[str, Path]


def toggle_operation(marker: CommentMarkerKind, tolerate_indent: bool = False) -> LineOperation:
    """Builds the line operation that flips `marker` on a single line.

    Tagged lines lose `marker + space` (any tolerated indentation in front of
    the marker is kept); every other line gains `marker + space` at column 0.
    """

    def plan(stream: BinaryIO, address: LineAddress) -> Transform:
        state = detect_tag(stream, address.offset, marker.marker, tolerate_indent)
        if state.tagged:
            return Transform.strip(state.remove_len, keep=state.indent)
        return Transform.prepend(marker.tag)

    return plan


def _insert_after(line: bytes) -> LineOperation:
    return lambda stream, address: Transform.insert_after(line)


def _insert_before(line: bytes) -> LineOperation:
    return lambda stream, address: Transform.insert_before(line)


def _delete_line(stream: BinaryIO, address: LineAddress) -> Transform:
    return Transform.delete()


## ================= CodeCommenter Class ====================
class CodeCommenter:
    """Toggles comment markers in source files.

    Attributes:
        editor: The `RangeEditor` that validates, chains and commits edits.
        classifier: Extension lookup for line markers and block delimiters.
        tolerate_indent: Default for indent-tolerant detection of existing
            markers (config ``comments.tolerate_indent``).
    """

    def __init__(
        self,
        config: Optional[dict[str, Any]] = None,
        editor: Optional[RangeEditor] = None,
    ) -> None:
        """Initializes the CodeCommenter.

        Args:
            config: The merged application configuration.
            editor: Optional pre-built `RangeEditor`; one is created from
                `config` when omitted.
        """
        config = config or {}
        self.editor = editor or RangeEditor(config)
        self.classifier = ExtensionClassifier(config)
        self.tolerate_indent: bool = bool(
            config.get("comments", {}).get("tolerate_indent", False)
        )

    # ------------------------------------------------------------------
    # Single-line markers
    # ------------------------------------------------------------------
    def toggle_line_comment(
        self, file_path: PathLike, line: int, tolerate_indent: Optional[bool] = None
    ) -> Path:
        """Toggles the extension's comment marker on one line.

        Args:
            file_path: File to edit.
            line: Zero-indexed line.
            tolerate_indent: Recognise a marker behind leading spaces. Defaults
                to the configured value.

        Returns:
            The path of the backup holding the previous content.

        Example:
            ``fn main() {}`` in a ``.rs`` file becomes ``// fn main() {}``;
            calling again restores it.
        """
        source = resolve_source(file_path)
        marker = self.classifier.line_marker_for(source)
        op = toggle_operation(marker, self._tolerate(tolerate_indent))
        return self.editor.edit_line(source, line, op)

    def toggle_docstring(self, file_path: PathLike, line: int) -> Path:
        """Toggles a `///` documentation marker on one line, for any extension."""
        source = resolve_source(file_path)
        return self.editor.edit_line(source, line, toggle_operation(CommentMarkerKind.TRIPLE_SLASH))

    def toggle_range_comments(
        self,
        file_path: PathLike,
        start: int,
        end: int,
        tolerate_indent: Optional[bool] = None,
    ) -> Path:
        """Flips the comment marker on every line of the inclusive range."""
        source = resolve_source(file_path)
        marker = self.classifier.line_marker_for(source)
        op = toggle_operation(marker, self._tolerate(tolerate_indent))
        return self.editor.edit_range(source, start, end, op)

    def toggle_range_docstrings(self, file_path: PathLike, start: int, end: int) -> Path:
        source = resolve_source(file_path)
        op = toggle_operation(CommentMarkerKind.TRIPLE_SLASH)
        return self.editor.edit_range(source, start, end, op)

    def toggle_lines(
        self,
        file_path: PathLike,
        lines: Sequence[int],
        tolerate_indent: Optional[bool] = None,
    ) -> Path:
        """Flips the comment marker on each listed line, in the given order."""
        source = resolve_source(file_path)
        marker = self.classifier.line_marker_for(source)
        op = toggle_operation(marker, self._tolerate(tolerate_indent))
        return self.editor.edit_lines(source, lines, op)

    def toggle_docstring_lines(self, file_path: PathLike, lines: Sequence[int]) -> Path:
        source = resolve_source(file_path)
        op = toggle_operation(CommentMarkerKind.TRIPLE_SLASH)
        return self.editor.edit_lines(source, lines, op)

    def _tolerate(self, override: Optional[bool]) -> bool:
        return self.tolerate_indent if override is None else override

    # ------------------------------------------------------------------
    # Block delimiters
    # ------------------------------------------------------------------
    def toggle_block_comment(self, file_path: PathLike, start: int, end: int) -> Path:
        """Wraps or unwraps an inclusive line range in block delimiter lines.

        If the first line of the range is exactly the start delimiter and the
        last line is exactly the end delimiter, both lines are deleted.
        If neither is, a start delimiter line is inserted before the range and
        an end delimiter line after it. A range of one line is always wrapped.

        Raises:
            InconsistentBlockMarkersError: Only one boundary carries its
                delimiter.

        Example:
            ``a\\nb\\nc\\n`` with range (0, 2) in a ``.c`` file becomes
            ``/*\\na\\nb\\nc\\n*/\\n``; range (0, 4) then restores it.
        """
        source = resolve_source(file_path)
        pair = self.classifier.block_markers_for(source)
        start, end = normalize_range(start, end)

        start_address = self.editor.require_line(source, start)
        end_address = self.editor.require_line(source, end)

        with open_source(source) as stream:
            remove = start != end and self._detect_block(stream, pair, start_address, end_address)
            terminator = (
                line_terminator(stream, start_address.offset, self.editor.limits["max_line_length"])
                or b"\n"
            )

        # The higher line is edited first so `start` keeps its address.
        if remove:
            logger.debug("Removing %s block delimiters at lines %d and %d.", pair.family, start, end)
            edits = [(end, _delete_line), (start, _delete_line)]
        else:
            logger.debug("Adding %s block delimiters around lines %d-%d.", pair.family, start, end)
            edits = [
                (end, _insert_after(pair.end + terminator)),
                (start, _insert_before(pair.start + terminator)),
            ]
        return self.editor.apply(source, edits)

    @staticmethod
    def _detect_block(
        stream: BinaryIO,
        pair: BlockMarkerPair,
        start_address: LineAddress,
        end_address: LineAddress,
    ) -> bool:
        """Returns True when both boundaries are delimiter lines, False when neither is."""
        start_matched = matches_full_line(stream, start_address.offset, pair.start)
        end_matched = matches_full_line(stream, end_address.offset, pair.end)
        if start_matched != end_matched:
            raise InconsistentBlockMarkersError(start_matched, end_matched)
        return start_matched
