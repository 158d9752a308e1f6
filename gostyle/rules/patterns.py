# Banned line patterns: blocking sleeps, piecemeal string concatenation,
# cfgplugin functions not returning gNMI batches, and error string style.
# These only look at raw lines, so they also run on files that failed to parse.

from __future__ import annotations

import re
from typing import Any, Iterable

from gostyle.context import RuleContext
from gostyle.findings.models import Diagnostic
from gostyle.rules.base import LineRule

# Calls whose first string literal is an error/failure message.
ERROR_CALLS = ("errors.New(", "fmt.Errorf(", "t.Error(", "t.Errorf(", "t.Fatal(", "t.Fatalf(")

# gNMI result types a cfgplugin function is expected to return.
CFGPLUGIN_RESULT_TYPES = ("gnmi.SetRequest", "gnmi.Batch")

_STRING_LITERAL_RE = re.compile(r'"(.*?)"')


def first_string_literal(line: str) -> str:
    """Contents of the first double-quoted literal on the line, or ''."""
    match = _STRING_LITERAL_RE.search(line)
    return match.group(1) if match else ""


class BlockingSleepRule(LineRule):
    """time.Sleep in tests and plugins hides races; wait on state instead."""

    id = "blocking-sleep"
    name = "Blocking sleep"

    def check_line(self, context: RuleContext, text: str, config: Any) -> Iterable[str]:
        if "time.Sleep(" in text:
            yield "avoid time.Sleep, use gnmi.Watch"


class StringConcatRule(LineRule):
    id = "string-concat"
    name = "Piecemeal string concatenation"

    def check_line(self, context: RuleContext, text: str, config: Any) -> Iterable[str]:
        if '" + "' in text:
            yield "avoid piecing strings with '+', use fmt.Sprintf or strings.Builder"


class CfgpluginReturnRule(LineRule):
    """Functions under a cfgplugins directory build gnmi.Batch / gnmi.SetRequest objects."""

    id = "cfgplugin-return"
    name = "cfgplugin return type"

    def run(self, context: RuleContext, config: Any) -> list[Diagnostic]:
        if config.cfgplugin_segment not in context.path.parts[:-1]:
            return []
        return super().run(context, config)

    def check_line(self, context: RuleContext, text: str, config: Any) -> Iterable[str]:
        if "func" not in text or "{" not in text:
            return
        if not any(result in text for result in CFGPLUGIN_RESULT_TYPES):
            yield "cfgplugin function should return gnmi Batch/SetRequest"


class ErrorStringsRule(LineRule):
    """Error strings are lowercase and unpunctuated: errors.New("dial failed")."""

    id = "error-strings"
    name = "Error string style"

    def check_line(self, context: RuleContext, text: str, config: Any) -> Iterable[str]:
        if not any(call in text for call in ERROR_CALLS):
            return
        message = first_string_literal(text)
        if not message:
            return
        if message[0].isupper():
            yield "error string should not be capitalized"
        if message.endswith("."):
            yield "error string should not end with '.'"
