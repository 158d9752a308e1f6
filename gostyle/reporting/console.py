# Rich console output: diagnostics grouped per file with a run summary.

from __future__ import annotations

from pathlib import Path
from typing import Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from gostyle.aggregator import RunResult
from gostyle.findings.models import Diagnostic

# Short fix hints per rule (shown with --verbose)
RULE_REMEDIATIONS: dict[str, str] = {
    "exported-doc": "Start the comment with the function name and end it with a period.",
    "get-prefix": "Drop the prefix: Owner() instead of GetOwner().",
    "mixed-caps": "Use MixedCaps and keep acronyms upper-case: userID, ServeHTTP.",
    "struct-params": "Group the parameters into one config struct.",
    "test-structure": "Keep TestMain plus one Test function that ranges over a table of cases.",
    "test-helper": "Call t.Helper() first so failures point at the caller.",
    "blocking-sleep": "Wait on the state you need (gnmi.Watch ... Await) instead of sleeping.",
    "bug-reference": "Link the issue with its full URL.",
}


def _group_by_file(diagnostics: list[Diagnostic]) -> dict[Path, list[Diagnostic]]:
    by_file: dict[Path, list[Diagnostic]] = {}
    for d in diagnostics:
        by_file.setdefault(d.path, []).append(d)
    return by_file


def print_report(
    result: RunResult,
    console: Optional[Console] = None,
    verbose: bool = False,
) -> None:
    """
    Print a run as one table per file followed by a summary panel.
    Files keep input order; rows keep rule order within a file.
    """
    console = console or Console()

    if result.clean:
        console.print(
            Panel(
                f"[green]All validation checks passed[/green] ({len(result.analyzed)} file(s))",
                title="gostyle",
                border_style="green",
                box=box.ROUNDED,
            )
        )
        return

    for path, diagnostics in _group_by_file(result.diagnostics).items():
        console.print()
        console.print(Text(str(path), style="bold cyan"))

        table = Table(show_header=True, header_style="bold magenta", box=box.SIMPLE, padding=(0, 1))
        table.add_column("Line", justify="right", style="dim", width=5)
        table.add_column("Rule", width=18)
        table.add_column("Message", style="white")
        for d in diagnostics:
            table.add_row(str(d.line) if d.line else "-", Text(d.rule_id, style="yellow"), Text(d.message))
        console.print(table)

        if verbose:
            for rule_id in dict.fromkeys(d.rule_id for d in diagnostics):
                hint = RULE_REMEDIATIONS.get(rule_id)
                if hint:
                    console.print(Text(f"  [{rule_id}] {hint}", style="dim"))

    for failure in result.failures:
        console.print(Text(f"unreadable: {failure.render()}", style="bold red"))
    for error in result.rule_errors:
        console.print(Text(f"rule error: {error.render()}", style="bold red"))

    _print_summary(result, console)


def _print_summary(result: RunResult, console: Console) -> None:
    by_rule: dict[str, int] = {}
    for d in result.diagnostics:
        by_rule[d.rule_id] = by_rule.get(d.rule_id, 0) + 1

    total = len(result.diagnostics)
    parts = [f"[bold]{total} violation{'s' if total != 1 else ''}[/bold]"]
    parts.extend(f"{rule_id}: {count}" for rule_id, count in sorted(by_rule.items()))
    if result.failures:
        parts.append(f"[bold red]{len(result.failures)} unreadable[/bold red]")
    if result.rule_errors:
        parts.append(f"[bold red]{len(result.rule_errors)} rule crash(es)[/bold red]")

    console.print()
    console.print(Panel(" | ".join(parts), title="Summary", border_style="yellow", box=box.ROUNDED))
