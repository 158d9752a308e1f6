# Rule engine: run every applicable rule over one file's views and merge the
# diagnostics. A parse failure is reported once and narrows the file to text
# rules; it never stops the run.

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from gostyle.config import Config, get_enabled_rules
from gostyle.context import RuleContext, SourceFile, build_rule_context
from gostyle.findings.models import Diagnostic
from gostyle.rules.base import Rule, View

logger = logging.getLogger(__name__)

PARSE_FAILURE_ID = "parse-failure"


@dataclass(frozen=True)
class RuleError:
    """A rule that raised while checking a file; its diagnostics are missing."""

    path: Path
    rule_id: str
    reason: str

    def render(self) -> str:
        return f"{self.path}: rule {self.rule_id} crashed: {self.reason}"


def parse_failure(source_file: SourceFile) -> Diagnostic:
    return Diagnostic(path=source_file.path, line=0, message="failed parsing", rule_id=PARSE_FAILURE_ID)


def _run_rules(
    rules: Sequence[Rule],
    context: RuleContext,
    config: Config,
    rule_errors: Optional[List[RuleError]],
) -> list[Diagnostic]:
    diagnostics: list[Diagnostic] = []
    for rule in rules:
        if not rule.applies_to(context):
            continue
        try:
            diagnostics.extend(rule.run(context, config))
        except Exception as e:
            logger.exception("Rule %s failed on %s", rule.id, context.path)
            if rule_errors is not None:
                rule_errors.append(
                    RuleError(path=context.path, rule_id=rule.id, reason=f"{type(e).__name__}: {e}")
                )
    return diagnostics


def analyze_source_file(
    source_file: SourceFile,
    config: Config,
    rule_errors: Optional[List[RuleError]] = None,
) -> list[Diagnostic]:
    """
    Return all diagnostics for one loaded file.

    Order: the parse failure (if any), structural rules in registry order,
    then text rules in registry order. A rule that raises is skipped; when
    rule_errors is given, a RuleError is appended to it for each such rule.
    """
    rules = get_enabled_rules(config)
    context = build_rule_context(source_file)

    diagnostics: list[Diagnostic] = []
    if source_file.parse_failed:
        diagnostics.append(parse_failure(source_file))

    structural = [r for r in rules if r.view is View.STRUCTURE]
    textual = [r for r in rules if r.view is View.TEXT]
    diagnostics.extend(_run_rules(structural, context, config, rule_errors))
    diagnostics.extend(_run_rules(textual, context, config, rule_errors))

    logger.debug("%s: %d diagnostic(s)", source_file.path, len(diagnostics))
    return diagnostics
