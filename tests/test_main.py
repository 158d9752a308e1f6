"""Tests for the gostyle CLI."""

from typer.testing import CliRunner

import gostyle.main
from gostyle.config import Config
from gostyle.main import app
from gostyle.rules.base import Rule, View

runner = CliRunner()

CLEAN = """package p

// Add returns the sum of the config values.
func Add(cfg Config) int {
\treturn cfg.A + cfg.B
}
"""

DIRTY = "package p\n\nfunc GetValue() {\n\ttime.Sleep(1)\n}\n"


def test_clean_file_exits_zero(tmp_path):
    """A clean file passes with exit code 0."""
    path = tmp_path / "add.go"
    path.write_text(CLEAN)
    result = runner.invoke(app, [str(path)])
    assert result.exit_code == 0
    assert "All validation checks passed" in result.output
    assert "Validation failed" not in result.output


def test_dirty_directory_exits_one(tmp_path):
    """Violations are listed under a header and the exit code is 1."""
    (tmp_path / "value.go").write_text(DIRTY)
    (tmp_path / "api.proto").write_text("// fix this b/123456789\n")
    result = runner.invoke(app, [str(tmp_path)])
    assert result.exit_code == 1
    lines = result.output.splitlines()
    assert lines[0] == "Validation failed:"
    assert any(line.endswith("api.proto:1: found bare bug ID 123456789, please use full URL like "
                             "https://example.corp.example.com/issues/123456789") for line in lines)
    assert any("value.go:3: function GetValue should not use Get prefix" in line for line in lines)
    assert any("value.go:4: avoid time.Sleep, use gnmi.Watch" in line for line in lines)


def test_parse_failure_reported(tmp_path):
    """A malformed file is reported without crashing the run."""
    path = tmp_path / "bad.go"
    path.write_text("package p\n\nfunc Broken( {\n")
    result = runner.invoke(app, [str(path)])
    assert result.exit_code == 1
    assert "bad.go: failed parsing" in result.output


def test_unsupported_file_is_usage_error(tmp_path):
    """Files that are neither Go nor proto are rejected."""
    path = tmp_path / "notes.txt"
    path.write_text("hello\n")
    result = runner.invoke(app, [str(path)])
    assert result.exit_code == 2


def test_missing_target_is_usage_error(tmp_path):
    """A target that does not exist is rejected by argument validation."""
    result = runner.invoke(app, [str(tmp_path / "missing")])
    assert result.exit_code == 2


def test_pretty_and_jobs(tmp_path):
    """--pretty and --jobs change presentation and scheduling, not the outcome."""
    (tmp_path / "a.go").write_text(DIRTY)
    (tmp_path / "b.go").write_text(CLEAN)
    result = runner.invoke(app, [str(tmp_path), "--pretty", "--jobs", "2"])
    assert result.exit_code == 1
    assert "get-prefix" in result.output
    assert "Summary" in result.output


def test_statement_at_file_scope_is_parse_failure(tmp_path):
    """Go that tree-sitter tolerates but the compiler rejects still fails parsing."""
    path = tmp_path / "stmt.go"
    path.write_text("package p\n\nx := 1\n")
    result = runner.invoke(app, [str(path)])
    assert result.exit_code == 1
    assert "stmt.go: failed parsing" in result.output


class _CrashingRule(Rule):
    id = "crashing"
    name = "Always fails"
    view = View.TEXT

    def run(self, context, config):
        raise RuntimeError("boom")


def test_crashing_rule_fails_the_run(tmp_path, monkeypatch):
    """A rule crash is reported and the exit code is 1 even with no violations."""
    path = tmp_path / "add.go"
    path.write_text(CLEAN)
    monkeypatch.setattr(gostyle.main, "get_default_config", lambda jobs=None: Config(rules=[_CrashingRule()], jobs=jobs))
    result = runner.invoke(app, [str(path)])
    assert result.exit_code == 1
    assert "All validation checks passed" not in result.output
    assert "rule crashing crashed: RuntimeError: boom" in result.output
