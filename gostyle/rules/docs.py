# Doc comment checks: exported functions need a doc comment ending in a period.

from __future__ import annotations

from typing import Any

from gostyle.context import RuleContext
from gostyle.findings.models import Diagnostic
from gostyle.rules.base import Rule, View


class ExportedDocRule(Rule):
    """Exported non-test functions must carry a doc comment that ends with '.'."""

    id = "exported-doc"
    name = "Exported function documentation"
    view = View.STRUCTURE

    def run(self, context: RuleContext, config: Any) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for fn in context.structure.functions:
            if not fn.exported or fn.is_test_entry:
                continue
            if fn.doc is None:
                diagnostics.append(
                    self.diagnostic(
                        context, fn.line, f"exported function {fn.name} must have doc comment"
                    )
                )
            elif not fn.doc.endswith("."):
                diagnostics.append(
                    self.diagnostic(context, fn.line, "function comment should end with '.'")
                )
        return diagnostics
