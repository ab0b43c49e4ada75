# tests/test_cli.py
"""Tests for the `linetoggle` command line: dispatch, output and exit codes."""

from pathlib import Path
from typing import Any, Callable

import pytest

from linetoggle import cli

MakeFile = Callable[[str, bytes], Path]


def run(argv: list[str], config: dict[str, Any]) -> int:
    return cli.main(argv, config)


def test_basic_toggle_prints_success(
    make_file: MakeFile, config: dict[str, Any], capsys: pytest.CaptureFixture[str]
) -> None:
    path = make_file("main.rs", b"fn main() {}\n")

    assert run([str(path), "0"], config) == 0

    out, err = capsys.readouterr()
    assert out.strip() == "Successfully toggled comment on line 0"
    assert err == ""
    assert path.read_bytes() == b"// fn main() {}\n"


@pytest.mark.parametrize(
    ("argv_tail", "content", "expected"),
    [
        (["--rust-doc-string", "{f}", "1"], b"a\nb\n", b"a\n/// b\n"),
        (["--block", "{f}", "1", "0"], b"a\nb\n", b"/*\na\nb\n*/\n"),
        (["--list-basic", "{f}", "0", "1"], b"a\nb\n", b"// a\n// b\n"),
        (["--list-docstring", "{f}", "1"], b"a\nb\n", b"a\n/// b\n"),
        (["--indent", "{f}", "0"], b"a\nb\n", b"    a\nb\n"),
        (["--unindent", "{f}", "0"], b"      a\n", b"  a\n"),
        (["--indent-range", "{f}", "0", "1"], b"a\nb\n", b"    a\n    b\n"),
        (["--unindent-range", "{f}", "1", "0"], b"    a\n    b\n", b"a\nb\n"),
        (["--toggle-range-comment-basic", "{f}", "0", "1"], b"// a\nb\n", b"a\n// b\n"),
        (["--toggle-range-rust-docstring", "{f}", "0", "1"], b"a\nb\n", b"/// a\n/// b\n"),
        (["--indent-tolerant", "{f}", "0"], b"  // a\n", b"  a\n"),
        (["--list-basic", "--indent-tolerant", "{f}", "0", "1"], b"  // a\n  // b\n", b"  a\n  b\n"),
    ],
)
def test_modes(
    make_file: MakeFile,
    config: dict[str, Any],
    argv_tail: list[str],
    content: bytes,
    expected: bytes,
) -> None:
    path = make_file("lib.c", content)
    argv = [str(path) if arg == "{f}" else arg for arg in argv_tail]

    assert run(argv, config) == 0
    assert path.read_bytes() == expected


@pytest.mark.parametrize(
    ("flags", "content", "message"),
    [
        ([], b"a\n", "Successfully toggled comment on line 0"),
        (["--rust-doc-string"], b"a\n", "Successfully toggled doc comment on line 0"),
        (["--indent"], b"a\n", "Successfully indented line 0"),
        (["--unindent"], b"    a\n", "Successfully unindented line 0"),
    ],
)
def test_single_line_messages(
    make_file: MakeFile,
    config: dict[str, Any],
    capsys: pytest.CaptureFixture[str],
    flags: list[str],
    content: bytes,
    message: str,
) -> None:
    path = make_file("lib.c", content)
    assert run([*flags, str(path), "0"], config) == 0
    assert capsys.readouterr().out.strip() == message


def test_range_message_is_normalized(
    make_file: MakeFile, config: dict[str, Any], capsys: pytest.CaptureFixture[str]
) -> None:
    path = make_file("lib.c", b"a\nb\nc\n")
    run(["--block", str(path), "2", "0"], config)
    assert capsys.readouterr().out.strip() == "Successfully toggled block comment on lines 0-2"


@pytest.mark.parametrize(
    "argv",
    [
        ["{f}"],  # no line
        ["{f}", "0", "1"],  # basic takes one line
        ["--block", "{f}", "0"],  # block takes two
        ["{f}", "-1"],
        ["{f}", "x"],
        ["--indent", "--unindent", "{f}", "0"],
        ["--indent-tolerant", "--indent", "{f}", "0"],
        ["--no-such-flag", "{f}", "0"],
    ],
)
def test_invalid_arguments_exit_1(
    make_file: MakeFile, config: dict[str, Any], argv: list[str], capsys: pytest.CaptureFixture[str]
) -> None:
    path = make_file("lib.c", b"a\nb\n")
    argv = [str(path) if arg == "{f}" else arg for arg in argv]

    assert run(argv, config) == 1
    assert "Error:" in capsys.readouterr().err
    assert path.read_bytes() == b"a\nb\n"


def test_no_arguments_exit_1(config: dict[str, Any]) -> None:
    assert run([], config) == 1


@pytest.mark.parametrize(
    ("name", "content", "argv_tail", "code"),
    [
        ("missing.c", None, ["0"], 2),
        ("Makefile", b"a\n", ["0"], 3),
        ("notes.txt", b"a\n", ["0"], 4),
        ("lib.c", b"a\n", ["5"], 5),
        ("lib.c", b"/*\na\nb\n", ["--block", "0", "2"], 9),
        ("lib.c", b"a\n" * 3, ["--list-basic", "0", "1", "2"], 10),
    ],
)
def test_error_exit_codes(
    make_file: MakeFile,
    config: dict[str, Any],
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
    name: str,
    content,
    argv_tail: list[str],
    code: int,
) -> None:
    config["limits"]["max_batch_lines"] = 2
    path = make_file(name, content) if content is not None else tmp_path / name
    flags = [arg for arg in argv_tail if arg.startswith("--")]
    lines = [arg for arg in argv_tail if not arg.startswith("--")]

    assert run([*flags, str(path), *lines], config) == code

    out, err = capsys.readouterr()
    assert out == ""
    assert err.startswith("Error: ")
    assert len(err.strip().splitlines()) == 1


def test_directory_is_path_error(tmp_path: Path, config: dict[str, Any]) -> None:
    directory = tmp_path / "dir.c"
    directory.mkdir()
    assert run([str(directory), "0"], config) == 7


def test_line_too_long_exit_8(make_file: MakeFile, config: dict[str, Any]) -> None:
    config["limits"]["max_line_length"] = 10
    path = make_file("lib.c", b"x" * 20 + b"\n")
    assert run([str(path), "0"], config) == 8
    assert path.read_bytes() == b"x" * 20 + b"\n"


def test_range_too_large_exit_10(make_file: MakeFile, config: dict[str, Any]) -> None:
    config["limits"]["max_range_lines"] = 1
    path = make_file("lib.c", b"a\nb\n")
    assert run(["--indent-range", str(path), "0", "1"], config) == 10


def test_config_flag_loads_file(
    make_file: MakeFile, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cfg = tmp_path / "alt.toml"
    cfg.write_text(
        '[logging]\nlog_to_file = false\nlog_to_console = false\n\n[indent]\nspaces = 1\n',
        encoding="utf-8",
    )
    path = make_file("lib.c", b"a\n")

    assert cli.main(["--config", str(cfg), "--indent", str(path), "0"]) == 0
    assert path.read_bytes() == b" a\n"


def test_version_flag(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--version"])
    assert excinfo.value.code == 0
    assert "linetoggle" in capsys.readouterr().out
