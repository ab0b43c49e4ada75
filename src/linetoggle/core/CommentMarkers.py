# linetoggle/core/CommentMarkers.py
"""CommentMarkers Module
======================
Marker families and the extension → family lookup tables.

The lookup tables are built once from the ``[comments]`` section of the
configuration and exposed as read-only mappings. Everything downstream only
ever sees the resolved `CommentMarkerKind` or `BlockMarkerPair`, never the raw
extension string.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional

from linetoggle.core.EditErrors import NoExtensionError, UnsupportedExtensionError


logger = logging.getLogger("linetoggle.markers")


class CommentMarkerKind(Enum):
    """Single-line comment markers. Tagging always uses marker + one space."""

    DOUBLE_SLASH = b"//"
    HASH = b"#"
    TRIPLE_SLASH = b"///"

    @property
    def marker(self) -> bytes:
        return self.value

    @property
    def tag(self) -> bytes:
        """The full prefix written in front of a line: marker plus one space."""
        return self.value + b" "

    @classmethod
    def from_text(cls, text: str) -> "CommentMarkerKind":
        for kind in cls:
            if kind.value == text.encode("ascii"):
                return kind
        raise ValueError(f"Unknown comment marker {text!r}")


@dataclass(frozen=True)
class BlockMarkerPair:
    """Full-line block delimiters, stored without a line terminator."""

    family: str
    start: bytes
    end: bytes


BLOCK_FAMILIES: Mapping[str, BlockMarkerPair] = MappingProxyType(
    {
        "c": BlockMarkerPair("c", b"/*", b"*/"),
        "python": BlockMarkerPair("python", b'"""', b'"""'),
    }
)


def file_extension(path: Path) -> str:
    """Returns the lowercase extension of `path` without the dot.

    Raises:
        NoExtensionError: If the filename has no extension.
    """
    suffix = path.suffix
    if not suffix or suffix == ".":
        raise NoExtensionError()
    return suffix[1:].lower()


class ExtensionClassifier:
    """Maps file extensions to comment marker kinds and block delimiter pairs.

    Both tables are inverted from the configuration layout (marker/family →
    list of extensions) into extension → value maps at construction time and
    never mutated afterwards.

    Attributes:
        line_markers: Read-only map from lowercase extension to marker kind.
        block_markers: Read-only map from lowercase extension to block pair.
    """

    def __init__(self, config: Optional[dict[str, Any]] = None) -> None:
        comments_config = (config or {}).get("comments", {})

        line_table: dict[str, CommentMarkerKind] = {}
        for marker_text, extensions in comments_config.get("line", {}).items():
            try:
                kind = CommentMarkerKind.from_text(marker_text)
            except (ValueError, UnicodeEncodeError):
                logger.warning("Ignoring unknown line marker %r in config.", marker_text)
                continue
            for ext in extensions:
                line_table[str(ext).lower()] = kind

        block_table: dict[str, BlockMarkerPair] = {}
        for family, extensions in comments_config.get("block", {}).items():
            pair = BLOCK_FAMILIES.get(family)
            if pair is None:
                logger.warning("Ignoring unknown block family %r in config.", family)
                continue
            for ext in extensions:
                block_table[str(ext).lower()] = pair

        self.line_markers: Mapping[str, CommentMarkerKind] = MappingProxyType(line_table)
        self.block_markers: Mapping[str, BlockMarkerPair] = MappingProxyType(block_table)

    def line_marker_for(self, path: Path) -> CommentMarkerKind:
        """Resolves the single-line marker for `path` from its extension.

        Raises:
            NoExtensionError: The filename has no extension.
            UnsupportedExtensionError: The extension is not in the table.
        """
        ext = file_extension(path)
        kind = self.line_markers.get(ext)
        if kind is None:
            raise UnsupportedExtensionError(ext)
        return kind

    def block_markers_for(self, path: Path) -> BlockMarkerPair:
        """Resolves the block delimiter pair for `path` from its extension."""
        ext = file_extension(path)
        pair = self.block_markers.get(ext)
        if pair is None:
            raise UnsupportedExtensionError(ext)
        return pair
