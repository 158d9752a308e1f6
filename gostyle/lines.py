# Text view: raw file content as numbered lines for line-oriented rules.

from __future__ import annotations

from typing import NamedTuple


class SourceLine(NamedTuple):
    """One line of a file: 1-based number and text without the line terminator."""

    number: int
    text: str


def split_lines(source: bytes) -> tuple[SourceLine, ...]:
    """
    Split raw source bytes into numbered lines.

    Only ``\\n`` separates lines; a trailing ``\\r`` is dropped so CRLF files
    read the same as LF files. A final newline does not produce an extra empty
    line. Invalid UTF-8 is replaced rather than raising.
    """
    text = source.decode("utf-8", errors="replace")
    if not text:
        return ()
    raw_lines = text.split("\n")
    if raw_lines[-1] == "":
        raw_lines.pop()
    return tuple(
        SourceLine(number, line[:-1] if line.endswith("\r") else line)
        for number, line in enumerate(raw_lines, start=1)
    )
