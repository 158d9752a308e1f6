# Naming conventions: no Get accessors, MixedCaps identifiers, and variables
# that do not repeat their type in their name.

from __future__ import annotations

import re
from typing import Any

from gostyle.context import RuleContext
from gostyle.declarations import Declaration, FunctionDeclaration
from gostyle.findings.models import Diagnostic
from gostyle.rules.base import Rule, View

EXPORTED_MIXED_CAPS = re.compile(r"^[A-Z][A-Za-z0-9]*$")
UNEXPORTED_MIXED_CAPS = re.compile(r"^[a-z][A-Za-z0-9]*$")
# Literal substring match: also hits names like "CandidIdea" or "Idle".
BAD_ACRONYMS = re.compile(r"Id|Url|Http")

_SIMPLE_TYPE_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class GetPrefixRule(Rule):
    """Accessor-style names (GetFoo, Getter) are flagged regardless of export status."""

    id = "get-prefix"
    name = "Get prefix"
    view = View.STRUCTURE

    def run(self, context: RuleContext, config: Any) -> list[Diagnostic]:
        return [
            self.diagnostic(context, fn.line, f"function {fn.name} should not use Get prefix")
            for fn in context.structure.functions
            if fn.name.startswith("Get")
        ]


class MixedCapsRule(Rule):
    """Function, type and variable names use MixedCaps and upper-case acronyms."""

    id = "mixed-caps"
    name = "MixedCaps naming"
    view = View.STRUCTURE

    def run(self, context: RuleContext, config: Any) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for decl in context.structure.declarations:
            # the blank identifier is not a name
            if decl.name == "_":
                continue
            for message in self._check(decl):
                diagnostics.append(self.diagnostic(context, decl.line, message))
        return diagnostics

    def _check(self, decl: Declaration) -> list[str]:
        label = decl.label
        name = decl.name
        messages: list[str] = []
        if "_" in name:
            messages.append(f"{label} name {name!r} should not use snake_case")
        if decl.exported:
            if not EXPORTED_MIXED_CAPS.match(name):
                messages.append(f"exported {label} name {name!r} should use MixedCaps")
        elif isinstance(decl, FunctionDeclaration) and not UNEXPORTED_MIXED_CAPS.match(name):
            messages.append(f"unexported {label} name {name!r} should use mixedCaps")
        if BAD_ACRONYMS.search(name):
            messages.append(f"{label} name {name!r} has mis-cased acronym (use ID/URL/HTTP)")
        return messages


class RedundantNameRule(Rule):
    """
    A ``var`` with an explicit type must not repeat that type in its name
    (``var userMap Map``).

    Only simple type names are compared; pointers, slices, qualified and
    generic types are skipped rather than guessed at.
    """

    id = "redundant-name"
    name = "Type repeated in variable name"
    view = View.STRUCTURE

    def run(self, context: RuleContext, config: Any) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for var in context.structure.variables:
            if var.kind != "var" or var.type_name is None:
                continue
            if not _SIMPLE_TYPE_NAME.match(var.type_name):
                continue
            if var.type_name.lower() in var.name.lower():
                diagnostics.append(
                    self.diagnostic(
                        context,
                        var.line,
                        f"variable {var.name} repeats its type {var.type_name} in name",
                    )
                )
        return diagnostics
