"""Tests for gostyle.findings.models.Diagnostic."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from gostyle.findings.models import Diagnostic


def test_render_with_line():
    """Line-level diagnostics render as path:line: message."""
    d = Diagnostic(path=Path("a/b.go"), line=12, message="bad name", rule_id="mixed-caps")
    assert d.render() == "a/b.go:12: bad name"


def test_render_file_level():
    """File-level diagnostics omit the line."""
    d = Diagnostic(path=Path("a/b_test.go"), message="missing TestMain function", rule_id="test-structure")
    assert d.line == 0
    assert d.render() == "a/b_test.go: missing TestMain function"


def test_severity_is_fixed():
    """Every diagnostic is a violation."""
    d = Diagnostic(path=Path("x.go"), line=1, message="m", rule_id="r")
    assert d.severity == "violation"
    with pytest.raises(ValidationError):
        Diagnostic(path=Path("x.go"), line=1, message="m", rule_id="r", severity="warning")


def test_negative_line_rejected():
    """Line numbers cannot be negative."""
    with pytest.raises(ValidationError):
        Diagnostic(path=Path("x.go"), line=-1, message="m", rule_id="r")


def test_diagnostic_is_frozen():
    """Diagnostics are immutable values."""
    d = Diagnostic(path=Path("x.go"), line=1, message="m", rule_id="r")
    with pytest.raises(ValidationError):
        d.line = 2
    assert d == Diagnostic(path=Path("x.go"), line=1, message="m", rule_id="r")
