"""Tests for gostyle.context: SourceFile loading and RuleContext building."""

import logging
from pathlib import Path

import pytest

from gostyle.context import (
    FileRole,
    RuleContext,
    SourceReadError,
    build_rule_context,
    load_source_file,
)


def test_load_source_file_go(tmp_path):
    """A valid Go file is read and gets a structural view."""
    go_file = tmp_path / "main.go"
    go_file.write_bytes(b"package main\n\nfunc main() {}\n")
    source_file = load_source_file(go_file, FileRole.SOURCE)
    assert source_file.path == go_file
    assert source_file.source == b"package main\n\nfunc main() {}\n"
    assert source_file.structure is not None
    assert [f.name for f in source_file.structure.functions] == ["main"]
    assert not source_file.parse_failed


def test_load_source_file_malformed_marks_parse_failure(tmp_path, caplog):
    """Malformed Go still loads, with no structure and a logged warning."""
    go_file = tmp_path / "bad.go"
    go_file.write_bytes(b"package main\n\nfunc main( {\n")
    with caplog.at_level(logging.WARNING):
        source_file = load_source_file(go_file, FileRole.SOURCE)
    assert source_file.structure is None
    assert source_file.parse_failed
    assert "is not valid Go" in caplog.text


def test_load_source_file_schema_is_not_parsed(tmp_path):
    """Schema files only get a textual view and never count as parse failures."""
    proto = tmp_path / "api.proto"
    proto.write_bytes(b'syntax = "proto3";\n')
    source_file = load_source_file(proto, FileRole.SCHEMA)
    assert source_file.structure is None
    assert not source_file.parse_failed


def test_load_source_file_missing_raises(caplog):
    """An unreadable file raises SourceReadError and logs an error."""
    with caplog.at_level(logging.ERROR):
        with pytest.raises(SourceReadError) as excinfo:
            load_source_file(Path("/nonexistent/file.go"), FileRole.SOURCE)
    assert excinfo.value.path == Path("/nonexistent/file.go")
    assert "Failed to read" in caplog.text


def test_build_rule_context(tmp_path):
    """RuleContext carries both views of the file."""
    go_file = tmp_path / "x_test.go"
    go_file.write_bytes(b"package x\n\nfunc helper() {}\n")
    ctx = build_rule_context(load_source_file(go_file, FileRole.TEST))
    assert isinstance(ctx, RuleContext)
    assert ctx.is_test_file
    assert ctx.lines[0].text == "package x"
    assert len(ctx.lines) == 3
    assert ctx.structure is not None


def test_file_role_is_go():
    """Only source and test roles are Go."""
    assert FileRole.SOURCE.is_go
    assert FileRole.TEST.is_go
    assert not FileRole.SCHEMA.is_go
