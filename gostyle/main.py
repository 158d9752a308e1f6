from __future__ import annotations

"""
Typer CLI entry point and orchestration of a lint run.

- Accepts a file or directory path
- Finds .go, _test.go and .proto files (traversal.find_source_files for directories)
- Runs the rule registry from config.py over every file
- Prints "path:line: message" lines (or a Rich report with --pretty)
- Exits 0 when the run is clean, 1 otherwise
"""

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from gostyle.aggregator import RunResult, run_analysis
from gostyle.config import get_default_config
from gostyle.context import SourceInput
from gostyle.reporting.console import print_report
from gostyle.traversal import classify, find_source_files

logger = logging.getLogger(__name__)

app = typer.Typer(help="gostyle - Go source-convention linter for Go and .proto files.")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _collect_inputs(target: Path) -> List[SourceInput]:
    """
    Resolve a target path into tagged inputs.

    - A .go, _test.go or .proto file is analyzed on its own
    - A directory is walked with traversal.find_source_files()
    - Anything else is a usage error
    """
    if target.is_file():
        role = classify(target)
        if role is None:
            raise typer.BadParameter(f"Target file must be a .go or .proto file, got: {target}")
        return [SourceInput(target, role)]

    if target.is_dir():
        inputs = find_source_files(target)
        if not inputs:
            logger.warning("No .go or .proto files found under %s", target)
        return inputs

    raise typer.BadParameter(f"Target path is neither a file nor a directory: {target}")


def _print_diagnostics(result: RunResult) -> None:
    """Print diagnostics one per line, grep-like."""
    if result.diagnostics:
        typer.echo("Validation failed:")
        for d in result.diagnostics:
            typer.echo(f" - {d.render()}")
    for failure in result.failures:
        typer.echo(f"error: cannot read {failure.render()}", err=True)
    for error in result.rule_errors:
        typer.echo(f"error: {error.render()}", err=True)
    if result.clean:
        typer.echo("All validation checks passed ✅")


@app.command()
def analyze(
    target: Path = typer.Argument(
        ...,
        exists=True,
        readable=True,
        resolve_path=True,
        help="Go/.proto file or directory to lint.",
    ),
    jobs: Optional[int] = typer.Option(
        None, "--jobs", "-j", min=1, help="Analyze files on this many worker threads."
    ),
    pretty: bool = typer.Option(False, "--pretty", help="Rich tables instead of plain lines."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging and fix hints."),
) -> None:
    """
    Lint a single file or every .go/.proto file under a directory.

    Exit code 0 when no violations were found, 1 otherwise.
    """
    _configure_logging(verbose)
    config = get_default_config(jobs=jobs)
    inputs = _collect_inputs(target)

    result = run_analysis(inputs, config)

    if pretty:
        print_report(result, verbose=verbose)
    else:
        _print_diagnostics(result)

    raise typer.Exit(code=result.exit_code())


def main() -> None:
    """Entry point for `python -m gostyle.main` and the gostyle script."""
    app()


if __name__ == "__main__":
    main()
