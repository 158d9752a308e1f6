# Parameter shape: functions taking several plain parameters should accept a
# single config struct instead.

from __future__ import annotations

from typing import Any

from gostyle.context import RuleContext
from gostyle.declarations import FunctionDeclaration, ParameterDeclaration
from gostyle.findings.models import Diagnostic
from gostyle.rules.base import Rule, View


def is_struct_like(param: ParameterDeclaration) -> bool:
    """struct{...} or *struct{...}."""
    return param.type.is_struct() or param.type.is_pointer_to_struct()


def only_framework_params(fn: FunctionDeclaration) -> bool:
    return all(param.type.is_framework_context() for param in fn.parameters)


def loose_param_count(fn: FunctionDeclaration) -> int:
    """Parameter fields that are neither framework context nor struct-like."""
    return sum(
        1
        for param in fn.parameters
        if not param.type.is_framework_context() and not is_struct_like(param)
    )


class StructParamsRule(Rule):
    """More than one loose parameter means a config struct is wanted."""

    id = "struct-params"
    name = "Config struct parameters"
    view = View.STRUCTURE

    def run(self, context: RuleContext, config: Any) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for fn in context.structure.functions:
            if not fn.parameters:
                continue
            if len(fn.parameters) <= 2 and only_framework_params(fn):
                continue
            if loose_param_count(fn) > 1:
                diagnostics.append(
                    self.diagnostic(
                        context,
                        fn.line,
                        f"function {fn.name} has multiple parameters, consider using a single config struct",
                    )
                )
        return diagnostics
