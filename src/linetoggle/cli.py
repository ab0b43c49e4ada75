# linetoggle/cli.py
"""
linetoggle Command Line
=======================

Parses one invocation, dispatches it to `CodeCommenter` or `Indenter`, and
maps the outcome to a single output line and a process exit code.

This is the only place where `EditError` is caught. Exit codes:
0 ok, 1 invalid arguments, 2 file not found, 3 no extension,
4 unsupported extension, 5 line not found, 6 I/O error, 7 path error,
8 line too long, 9 inconsistent block markers, 10 range too large.
"""

import argparse
import logging
import sys
from typing import Any, Callable, Optional, Sequence

from linetoggle import __version__
from linetoggle.core import CodeCommenter, EditError, Indenter
from linetoggle.core.EditErrors import InvalidRequestError
from linetoggle.utils.logging_config import setup_logging
from linetoggle.utils.utils import load_config, load_environment


logger = logging.getLogger("linetoggle")

EXIT_OK = 0

DESCRIPTION = "linetoggle - Toggle comments and indentation in source code files"

EPILOG = """\
Line numbers are 0-indexed. Range and block arguments may be given in
either order.

Comment markers by extension:
  //  rs c cpp cc cxx h hpp js ts java go swift
  #   py sh bash toml yaml yml rb pl r
Block delimiters: /* */ for the // extensions, triple quotes for .py
"""


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors as `InvalidRequestError`."""

    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        raise InvalidRequestError(message)


def _line_number(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid line number: {text!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"line number must be non-negative: {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="linetoggle",
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    modes = parser.add_mutually_exclusive_group()
    modes.add_argument("--rust-doc-string", dest="mode", action="store_const", const="docstring",
                       help="toggle a '/// ' documentation comment on one line")
    modes.add_argument("--block", dest="mode", action="store_const", const="block",
                       help="toggle block delimiter lines around START..END")
    modes.add_argument("--list-basic", dest="mode", action="store_const", const="list_basic",
                       help="toggle the basic comment on every listed line")
    modes.add_argument("--list-docstring", dest="mode", action="store_const", const="list_docstring",
                       help="toggle '/// ' on every listed line")
    modes.add_argument("--indent", dest="mode", action="store_const", const="indent",
                       help="indent one line by 4 spaces")
    modes.add_argument("--unindent", dest="mode", action="store_const", const="unindent",
                       help="remove up to 4 leading spaces from one line")
    modes.add_argument("--indent-range", dest="mode", action="store_const", const="indent_range",
                       help="indent every line of START..END")
    modes.add_argument("--unindent-range", dest="mode", action="store_const", const="unindent_range",
                       help="unindent every line of START..END")
    modes.add_argument("--toggle-range-comment-basic", dest="mode", action="store_const",
                       const="range_basic", help="toggle the basic comment on every line of START..END")
    modes.add_argument("--toggle-range-rust-docstring", dest="mode", action="store_const",
                       const="range_docstring", help="toggle '/// ' on every line of START..END")
    parser.set_defaults(mode="basic")

    parser.add_argument("--indent-tolerant", action="store_true",
                        help="recognise an existing marker behind leading spaces (basic toggles only)")
    parser.add_argument("--config", metavar="PATH", help="use PATH instead of the default config.toml")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("file", help="source file to edit")
    parser.add_argument("lines", nargs="+", type=_line_number, metavar="LINE",
                        help="0-indexed line number(s)")
    return parser


# Number of LINE arguments each mode takes; None means one or more.
_ARITY: dict[str, Optional[int]] = {
    "basic": 1,
    "docstring": 1,
    "indent": 1,
    "unindent": 1,
    "block": 2,
    "indent_range": 2,
    "unindent_range": 2,
    "range_basic": 2,
    "range_docstring": 2,
    "list_basic": None,
    "list_docstring": None,
}

_TOLERANT_MODES = {"basic", "range_basic", "list_basic"}


def _dispatch(args: argparse.Namespace, config: dict[str, Any]) -> str:
    """Runs the requested operation and returns the success message."""
    commenter = CodeCommenter(config)
    indenter = Indenter(config)
    tolerate: Optional[bool] = True if args.indent_tolerant else None
    file_path = args.file
    lines: list[int] = args.lines

    single: dict[str, tuple[Callable[..., Any], str]] = {
        "basic": (lambda p, n: commenter.toggle_line_comment(p, n, tolerate), "toggled comment on"),
        "docstring": (commenter.toggle_docstring, "toggled doc comment on"),
        "indent": (indenter.indent_line, "indented"),
        "unindent": (indenter.unindent_line, "unindented"),
    }
    ranged: dict[str, tuple[Callable[..., Any], str]] = {
        "block": (commenter.toggle_block_comment, "toggled block comment on"),
        "indent_range": (indenter.indent_range, "indented"),
        "unindent_range": (indenter.unindent_range, "unindented"),
        "range_basic": (
            lambda p, a, b: commenter.toggle_range_comments(p, a, b, tolerate),
            "toggled comments on",
        ),
        "range_docstring": (commenter.toggle_range_docstrings, "toggled doc comments on"),
    }

    if args.mode in single:
        func, verb = single[args.mode]
        func(file_path, lines[0])
        return f"Successfully {verb} line {lines[0]}"

    if args.mode in ranged:
        func, verb = ranged[args.mode]
        func(file_path, lines[0], lines[1])
        low, high = min(lines), max(lines)
        return f"Successfully {verb} lines {low}-{high}"

    if args.mode == "list_basic":
        commenter.toggle_lines(file_path, lines, tolerate)
    else:
        commenter.toggle_docstring_lines(file_path, lines)
    return f"Successfully toggled comments on {len(lines)} lines"


def main(argv: Optional[Sequence[str]] = None, config: Optional[dict[str, Any]] = None) -> int:
    """Runs one CLI invocation and returns the exit code.

    Args:
        argv: Arguments without the program name; defaults to ``sys.argv[1:]``.
        config: Pre-loaded configuration. When omitted it is loaded from
            ``--config`` or the default locations, and logging is set up
            from it.
    """
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
        expected = _ARITY[args.mode]
        if expected is not None and len(args.lines) != expected:
            noun = "line number" if expected == 1 else "line numbers"
            raise InvalidRequestError(f"expected {expected} {noun}, got {len(args.lines)}")
        if args.indent_tolerant and args.mode not in _TOLERANT_MODES:
            raise InvalidRequestError("--indent-tolerant only applies to basic comment toggles")

        if config is None:
            config = load_config(args.config)
            setup_logging(config)
        logger.debug("linetoggle %s: mode=%s lines=%s", __version__, args.mode, args.lines)
        message = _dispatch(args, config)
    except EditError as e:
        logger.debug("Edit failed with exit code %d: %s", e.exit_code, e)
        print(f"Error: {e}", file=sys.stderr)
        return e.exit_code

    print(message)
    return EXIT_OK


def start() -> None:
    """Console-script entry point."""
    load_environment()
    sys.exit(main())


if __name__ == "__main__":
    start()
