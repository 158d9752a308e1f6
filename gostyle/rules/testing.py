# Test file conventions: one table-driven entry point behind a TestMain hook,
# helpers that call t.Helper() and start lowercase, and t.Log/t.Logf used with
# the right argument shape.

from __future__ import annotations

import re
from typing import Any, Iterable

from gostyle.context import RuleContext
from gostyle.findings.models import Diagnostic
from gostyle.rules.base import TEST_ROLES, LineRule, Rule, View

TABLE_DRIVEN_REF = "https://go.dev/wiki/TableDrivenTests"

_T_LOG_RE = re.compile(r"^t\.Log\((.*)\)$")
_T_LOGF_RE = re.compile(r"^t\.Logf\((.*)\)$")


def split_top_level_args(args: str) -> list[str]:
    """
    Split a call's argument text on commas outside double-quoted strings.

    >>> split_top_level_args('"a, b", x')
    ['"a, b"', 'x']
    """
    parts: list[str] = []
    in_quotes = False
    escaped = False
    start = 0
    for i, ch in enumerate(args):
        if escaped:
            escaped = False
        elif ch == "\\" and in_quotes:
            escaped = True
        elif ch == '"':
            in_quotes = not in_quotes
        elif ch == "," and not in_quotes:
            parts.append(args[start:i].strip())
            start = i + 1
    parts.append(args[start:].strip())
    return parts


class TableDrivenLayoutRule(Rule):
    """
    A test file has a TestMain(m *testing.M) hook and exactly one Test function,
    written table-driven: it builds a slice/array of cases and ranges over it.
    """

    id = "test-structure"
    name = "Table-driven test layout"
    view = View.STRUCTURE
    roles = TEST_ROLES

    def run(self, context: RuleContext, config: Any) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        has_test_main = False
        entries = []
        for fn in context.structure.functions:
            if fn.body is None:
                continue
            if fn.is_test_main_hook:
                has_test_main = True
            elif fn.is_test_entry:
                entries.append(fn)

        if not has_test_main:
            diagnostics.append(self.diagnostic(context, 0, "missing TestMain function"))

        if not entries:
            diagnostics.append(self.diagnostic(context, 0, "no test functions found"))
            return diagnostics

        if len(entries) > 1:
            diagnostics.append(
                self.diagnostic(
                    context,
                    0,
                    "multiple top-level test functions found; "
                    f"please follow table-driven approach ref: {TABLE_DRIVEN_REF}",
                )
            )
            return diagnostics

        entry = entries[0]
        if not (entry.body.has_table_value() and entry.body.has_range_loop()):
            diagnostics.append(
                self.diagnostic(
                    context,
                    entry.line,
                    f"test function {entry.name} does not follow table-driven test pattern. "
                    f"Please follow table driven approach ref: {TABLE_DRIVEN_REF}",
                )
            )
        return diagnostics


class HelperMarkRule(Rule):
    """Free helper functions taking a named *testing.T must call <t>.Helper()."""

    id = "test-helper"
    name = "Test helper marks itself"
    view = View.STRUCTURE
    roles = TEST_ROLES

    def run(self, context: RuleContext, config: Any) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for fn in context.structure.functions:
            if fn.has_receiver or fn.is_test_entry or fn.body is None:
                continue
            t_name = fn.testing_t_name()
            if t_name is None or fn.body.calls(t_name, "Helper"):
                continue
            diagnostics.append(
                self.diagnostic(
                    context,
                    fn.line,
                    f"test helper function {fn.name} should call {t_name}.Helper()",
                )
            )
        return diagnostics


class HelperNameCaseRule(Rule):
    """Non-test functions in a test file are unexported (start lowercase)."""

    id = "test-func-case"
    name = "Test helper naming"
    view = View.STRUCTURE
    roles = TEST_ROLES

    def run(self, context: RuleContext, config: Any) -> list[Diagnostic]:
        return [
            self.diagnostic(
                context, fn.line, f"test function {fn.name} must start with lowercase letter"
            )
            for fn in context.structure.functions
            if not fn.has_receiver and not fn.is_test_entry and not fn.name[:1].islower()
        ]


class LogArgsRule(LineRule):
    """t.Log takes no format arguments; t.Logf must have some."""

    id = "log-args"
    name = "t.Log / t.Logf arguments"
    roles = TEST_ROLES

    def check_line(self, context: RuleContext, text: str, config: Any) -> Iterable[str]:
        trimmed = text.strip()
        match = _T_LOG_RE.match(trimmed)
        if match and len(split_top_level_args(match.group(1))) > 1:
            yield f"t.Log() should not use multiple arguments: {trimmed}, instead use t.Logf()"
        match = _T_LOGF_RE.match(trimmed)
        if match and len(split_top_level_args(match.group(1))) < 2:
            yield f"t.Logf() must have arguments after format string: {trimmed}, instead use t.Log()"
