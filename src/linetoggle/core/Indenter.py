# linetoggle/core/Indenter.py
"""Indenter Module
===============
Indent and unindent whole lines by a fixed number of spaces.

Indenting always prepends exactly `spaces` spaces, whatever is already there.
Unindenting removes up to `spaces` leading spaces, never tabs; a line with no
leading spaces is left as is and the call still succeeds.
"""

import logging
from pathlib import Path
from typing import Any, BinaryIO, Optional, Union

from linetoggle.core.LineClassifier import count_leading_spaces
from linetoggle.core.LineLocator import LineAddress
from linetoggle.core.RangeEditor import LineOperation, RangeEditor, resolve_source
from linetoggle.core.RewriteEngine import Transform


logger = logging.getLogger("linetoggle.indent")

INDENT_SPACES = 4


class Indenter:
    """Adds or removes leading spaces on one line or an inclusive range.

    Attributes:
        editor: The `RangeEditor` that validates and commits edits.
        spaces: Indent width (config ``indent.spaces``, default 4).
    """

    def __init__(
        self,
        config: Optional[dict[str, Any]] = None,
        editor: Optional[RangeEditor] = None,
    ) -> None:
        config = config or {}
        self.editor = editor or RangeEditor(config)
        self.spaces: int = int(config.get("indent", {}).get("spaces", INDENT_SPACES))

    def _indent_op(self) -> LineOperation:
        payload = b" " * self.spaces
        return lambda stream, address: Transform.prepend(payload)

    def _unindent_op(self) -> LineOperation:
        def plan(stream: BinaryIO, address: LineAddress) -> Transform:
            found = count_leading_spaces(stream, address.offset, self.spaces)
            if not found:
                logger.debug("Line %d has no leading spaces; nothing to unindent.", address.line)
            return Transform.strip(found)

        return plan

    def indent_line(self, file_path: Union[str, Path], line: int) -> Path:
        source = resolve_source(file_path)
        return self.editor.edit_line(source, line, self._indent_op())

    def unindent_line(self, file_path: Union[str, Path], line: int) -> Path:
        source = resolve_source(file_path)
        return self.editor.edit_line(source, line, self._unindent_op())

    def indent_range(self, file_path: Union[str, Path], start: int, end: int) -> Path:
        source = resolve_source(file_path)
        return self.editor.edit_range(source, start, end, self._indent_op())

    def unindent_range(self, file_path: Union[str, Path], start: int, end: int) -> Path:
        source = resolve_source(file_path)
        return self.editor.edit_range(source, start, end, self._unindent_op())
