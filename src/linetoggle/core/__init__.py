# src/linetoggle/core/__init__.py
"""Public facade for linetoggle.core: re-export main classes from CamelCase modules.

Keeps one-class-per-file module names (CodeCommenter.py, RangeEditor.py, ...),
but provides flat imports for convenience and stability.
"""

# Re-export classes/symbols from CamelCase modules
from .CodeCommenter import CodeCommenter  # noqa: F401
from .CommentMarkers import BlockMarkerPair, CommentMarkerKind, ExtensionClassifier  # noqa: F401
from .EditErrors import EditError, IoStage  # noqa: F401
from .Indenter import Indenter  # noqa: F401
from .RangeEditor import RangeEditor  # noqa: F401


__all__ = [
    "BlockMarkerPair",
    "CodeCommenter",
    "CommentMarkerKind",
    "EditError",
    "ExtensionClassifier",
    "Indenter",
    "IoStage",
    "RangeEditor",
]
