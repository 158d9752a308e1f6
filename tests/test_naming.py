"""Unit tests for the naming rules: Get prefix, MixedCaps, redundant names."""

from pathlib import Path

from gostyle.config import get_default_config
from gostyle.context import FileRole, RuleContext
from gostyle.declarations import parse_structure
from gostyle.lines import split_lines
from gostyle.rules.naming import GetPrefixRule, MixedCapsRule, RedundantNameRule


def _run_rule(rule, source: bytes, path: Path = Path("names.go")) -> list:
    """Parse source, build context, run rule, return diagnostics."""
    ctx = RuleContext(
        path=path,
        role=FileRole.SOURCE,
        lines=split_lines(source),
        structure=parse_structure(source),
    )
    return rule.run(ctx, get_default_config())


def test_get_prefix_flagged():
    """Functions starting with Get are flagged, exported or not."""
    source = b"package n\n\nfunc GetName() {}\n\nfunc Getter() {}\n\nfunc getName() {}\n"
    findings = _run_rule(GetPrefixRule(), source)
    assert [f.message for f in findings] == [
        "function GetName should not use Get prefix",
        "function Getter should not use Get prefix",
    ]
    assert [f.line for f in findings] == [3, 5]


def test_mixed_caps_snake_case_function():
    """Snake-case function names break both the underscore and mixedCaps checks."""
    findings = _run_rule(MixedCapsRule(), b"package n\n\nfunc do_thing() {}\n")
    messages = [f.message for f in findings]
    assert messages == [
        "function name 'do_thing' should not use snake_case",
        "unexported function name 'do_thing' should use mixedCaps",
    ]


def test_mixed_caps_acronyms():
    """Id, Url and Http are flagged anywhere in a name."""
    source = b"package n\n\nfunc UserId() {}\n\nvar baseUrl string\n\ntype HttpServer struct{}\n"
    findings = _run_rule(MixedCapsRule(), source)
    assert [(f.line, f.message) for f in findings] == [
        (3, "function name 'UserId' has mis-cased acronym (use ID/URL/HTTP)"),
        (5, "variable name 'baseUrl' has mis-cased acronym (use ID/URL/HTTP)"),
        (7, "type name 'HttpServer' has mis-cased acronym (use ID/URL/HTTP)"),
    ]


def test_mixed_caps_acronym_is_substring_match():
    """The acronym check is a literal substring match, so CandidIdea is flagged."""
    findings = _run_rule(MixedCapsRule(), b"package n\n\nfunc CandidIdea() {}\n")
    assert len(findings) == 1
    assert "mis-cased acronym" in findings[0].message


def test_mixed_caps_exported_snake_type_and_const():
    """Exported types and constants with underscores fail both checks."""
    source = b"package n\n\ntype My_Type struct{}\n\nconst MAX_HOPS = 3\n"
    findings = _run_rule(MixedCapsRule(), source)
    assert [f.message for f in findings] == [
        "type name 'My_Type' should not use snake_case",
        "exported type name 'My_Type' should use MixedCaps",
        "variable name 'MAX_HOPS' should not use snake_case",
        "exported variable name 'MAX_HOPS' should use MixedCaps",
    ]


def test_mixed_caps_unexported_type_only_underscore():
    """Unexported types and variables are only checked for underscores and acronyms."""
    source = b"package n\n\ntype my_type struct{}\n\nvar x_y = 1\n"
    findings = _run_rule(MixedCapsRule(), source)
    assert [f.message for f in findings] == [
        "type name 'my_type' should not use snake_case",
        "variable name 'x_y' should not use snake_case",
    ]


def test_mixed_caps_blank_identifier_ignored():
    """The blank identifier is not a name."""
    findings = _run_rule(MixedCapsRule(), b"package n\n\nvar _ = 1\n")
    assert findings == []


def test_mixed_caps_clean_names():
    """Well-formed names produce nothing."""
    source = b"package n\n\ntype Server struct{}\n\nvar userID int\n\nfunc ServeHTTP() {}\n\nfunc (s *Server) start() {}\n"
    assert _run_rule(MixedCapsRule(), source) == []


def test_redundant_name_flagged():
    """A var whose name contains its simple type name is flagged."""
    source = b"package n\n\nvar nameString string\n\nvar count int\n"
    findings = _run_rule(RedundantNameRule(), source)
    assert len(findings) == 1
    assert findings[0].line == 3
    assert findings[0].message == "variable nameString repeats its type string in name"


def test_redundant_name_case_insensitive():
    """Matching ignores case on both sides."""
    source = b"package n\n\ntype Map struct{}\n\nvar userMAP Map\n"
    findings = _run_rule(RedundantNameRule(), source)
    assert [f.line for f in findings] == [5]


def test_redundant_name_skips_complex_types_consts_and_inferred():
    """Pointer, slice and qualified types, consts and inferred vars are not compared."""
    source = b"""package n

var configPtr *config

var configs []config

var timeDuration time.Duration

const labelString string = "x"

var inferredInt = 3
"""
    assert _run_rule(RedundantNameRule(), source) == []
