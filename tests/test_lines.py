"""Tests for gostyle.lines: the textual view."""

from gostyle.lines import SourceLine, split_lines


def test_split_lines_numbers_from_one():
    """Lines are numbered from 1 in file order."""
    lines = split_lines(b"package p\n\nfunc f() {}\n")
    assert lines == (
        SourceLine(1, "package p"),
        SourceLine(2, ""),
        SourceLine(3, "func f() {}"),
    )


def test_split_lines_without_trailing_newline():
    """The last line is kept even without a final newline."""
    assert split_lines(b"a\nb") == (SourceLine(1, "a"), SourceLine(2, "b"))


def test_split_lines_crlf():
    """CRLF line endings read like LF."""
    assert split_lines(b"a\r\nb\r\n") == (SourceLine(1, "a"), SourceLine(2, "b"))


def test_split_lines_empty():
    """Empty input has no lines."""
    assert split_lines(b"") == ()


def test_split_lines_invalid_utf8():
    """Invalid UTF-8 is replaced instead of raising."""
    lines = split_lines(b"ok\n\xff\xfe\n")
    assert len(lines) == 2
    assert lines[0].text == "ok"
