# Per-file analysis context: file roles, the loaded SourceFile (path, raw bytes,
# structural view) and the read-only RuleContext handed to every rule.
# Unreadable files raise SourceReadError; malformed Go still yields a SourceFile
# whose structure is None so text rules can run on it.

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import NamedTuple, Optional

from tree_sitter import Parser

from gostyle.declarations import FileStructure, parse_structure
from gostyle.lines import SourceLine, split_lines

logger = logging.getLogger(__name__)


class FileRole(str, enum.Enum):
    """What kind of file an input is; decided by discovery from the file name."""

    SOURCE = "source"
    TEST = "test"
    SCHEMA = "schema"

    @property
    def is_go(self) -> bool:
        return self in (FileRole.SOURCE, FileRole.TEST)


class SourceInput(NamedTuple):
    """A located input file tagged with its role."""

    path: Path
    role: FileRole


class SourceReadError(OSError):
    """An input file could not be read."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"cannot read {path}: {reason}")
        self.path = path
        self.reason = reason


class SourceFile:
    """
    One loaded input: path, role, raw bytes and structural view.

    ``structure`` is None for schema files (never parsed) and for Go files
    whose parse failed; ``parse_failed`` tells the two apart.
    """

    def __init__(
        self,
        path: Path,
        role: FileRole,
        source: bytes,
        structure: Optional[FileStructure] = None,
    ) -> None:
        self.path = path
        self.role = role
        self.source = source
        self.structure = structure

    @property
    def parse_failed(self) -> bool:
        return self.role.is_go and self.structure is None

    def __repr__(self) -> str:
        return f"SourceFile(path={self.path!r}, role={self.role.value}, parse_failed={self.parse_failed})"


@dataclass(frozen=True)
class RuleContext:
    """Everything a rule may look at for one file. Rules must not mutate it."""

    path: Path
    role: FileRole
    lines: tuple[SourceLine, ...]
    structure: Optional[FileStructure] = None

    @property
    def is_test_file(self) -> bool:
        return self.role is FileRole.TEST


def build_rule_context(source_file: SourceFile) -> RuleContext:
    """Build both views of a loaded file into a RuleContext."""
    return RuleContext(
        path=source_file.path,
        role=source_file.role,
        lines=split_lines(source_file.source),
        structure=source_file.structure,
    )


def load_source_file(
    path: Path,
    role: FileRole,
    parser: Optional[Parser] = None,
) -> SourceFile:
    """
    Read an input file and, for Go roles, parse its structural view.

    Raises:
        SourceReadError: the file could not be read (missing, permissions).
    """
    try:
        source = path.read_bytes()
    except OSError as e:
        logger.error("Failed to read file %s: %s", path, e)
        raise SourceReadError(path, e.strerror or str(e)) from e

    structure: Optional[FileStructure] = None
    if role.is_go:
        structure = parse_structure(source, parser=parser)
        if structure is None:
            logger.warning("File %s is not valid Go; only line rules will run", path)
        else:
            logger.info(
                "Parsed %s: %d declaration(s), %d function(s)",
                path,
                len(structure.declarations),
                len(structure.functions),
            )

    return SourceFile(path=path, role=role, source=source, structure=structure)
