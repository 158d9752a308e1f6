# Rule interface (abstract base class): defines the contract all rules must implement.
# Concrete rules (naming, docs, testing, patterns, ...) subclass Rule and implement run().

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from typing import Any, Iterable

from gostyle.context import FileRole, RuleContext
from gostyle.findings.models import Diagnostic

# Config is typed as Any to keep rules importable from gostyle.config.
# Contract: config is gostyle.config.Config.

GO_ROLES = frozenset({FileRole.SOURCE, FileRole.TEST})
TEST_ROLES = frozenset({FileRole.TEST})
SCHEMA_ROLES = frozenset({FileRole.SCHEMA})


class View(str, enum.Enum):
    """Which view of a file a rule reads."""

    STRUCTURE = "structure"
    TEXT = "text"


class Rule(ABC):
    """
    Abstract base class for all lint rules.

    Subclasses must define:
    - id: str: unique rule identifier (e.g. "exported-doc")
    - name: str: human-readable rule name
    - view: View: structural rules read context.structure, text rules read context.lines
    - run(context, config) -> list[Diagnostic]: analyze one file

    roles restricts the files a rule sees; Go source and test files by default.
    The engine calls run() at most once per file and never shares state
    between rules.
    """

    id: str
    name: str
    view: View
    roles: frozenset[FileRole] = GO_ROLES

    def applies_to(self, context: RuleContext) -> bool:
        if context.role not in self.roles:
            return False
        if self.view is View.STRUCTURE:
            return context.structure is not None
        return True

    def diagnostic(self, context: RuleContext, line: int, message: str) -> Diagnostic:
        """Build a Diagnostic for this rule in the given file."""
        return Diagnostic(path=context.path, line=line, message=message, rule_id=self.id)

    @abstractmethod
    def run(self, context: RuleContext, config: Any) -> list[Diagnostic]:
        """
        Analyze one file and return any diagnostics.

        Args:
            context: Per-file views (path, role, numbered lines, structure).
            config: Linter config (rule registry and run settings).

        Returns:
            Diagnostics in the order found; an empty list if the file is clean.
        """
        ...


class LineRule(Rule):
    """A text rule that checks each line independently."""

    view = View.TEXT

    def run(self, context: RuleContext, config: Any) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for number, text in context.lines:
            for message in self.check_line(context, text, config):
                diagnostics.append(self.diagnostic(context, number, message))
        return diagnostics

    @abstractmethod
    def check_line(self, context: RuleContext, text: str, config: Any) -> Iterable[str]:
        """Yield a message for each violation on one line."""
        ...
