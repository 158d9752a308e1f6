# Run aggregator: load and analyze every input, merge per-file diagnostics in
# input order, and decide the clean/dirty signal for the presentation layer.

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from tree_sitter import Parser

from gostyle.config import Config, get_default_config
from gostyle.context import SourceInput, SourceReadError, load_source_file
from gostyle.engine import RuleError, analyze_source_file
from gostyle.findings.models import Diagnostic
from gostyle.parser import create_parser

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReadFailure:
    """An input that could not be read; reported apart from rule violations."""

    path: Path
    reason: str

    def render(self) -> str:
        return f"{self.path}: {self.reason}"


@dataclass
class RunResult:
    """
    Diagnostics of a whole run, in input order, plus the inputs that could
    not be read and the rules that crashed. Either of the latter makes the
    run dirty: a crashed rule may have hidden violations.
    """

    diagnostics: List[Diagnostic] = field(default_factory=list)
    failures: List[ReadFailure] = field(default_factory=list)
    rule_errors: List[RuleError] = field(default_factory=list)
    analyzed: List[Path] = field(default_factory=list)

    @property
    def clean(self) -> bool:
        return not self.diagnostics and not self.failures and not self.rule_errors

    def exit_code(self) -> int:
        return 0 if self.clean else 1


_FileOutcome = Union[Tuple[List[Diagnostic], List[RuleError]], ReadFailure]


def _analyze_input(
    item: SourceInput,
    config: Config,
    parser: Optional[Parser] = None,
) -> _FileOutcome:
    try:
        source_file = load_source_file(item.path, item.role, parser=parser)
    except SourceReadError as e:
        return ReadFailure(path=e.path, reason=e.reason)
    rule_errors: List[RuleError] = []
    diagnostics = analyze_source_file(source_file, config, rule_errors=rule_errors)
    return diagnostics, rule_errors


def run_analysis(inputs: Sequence[SourceInput], config: Config | None = None) -> RunResult:
    """
    Analyze every input and merge the results.

    With config.jobs > 1 files are analyzed on a thread pool, each worker
    building its own parser; results are still merged in input order, so the
    output does not depend on scheduling.
    """
    if config is None:
        config = get_default_config()

    jobs = config.jobs or 1
    if jobs > 1 and len(inputs) > 1:
        logger.info("Analyzing %d file(s) with %d workers", len(inputs), jobs)
        with ThreadPoolExecutor(max_workers=jobs) as pool:
            outcomes = list(pool.map(lambda item: _analyze_input(item, config), inputs))
    else:
        logger.info("Analyzing %d file(s)", len(inputs))
        parser = create_parser()
        outcomes = [_analyze_input(item, config, parser=parser) for item in inputs]

    result = RunResult()
    for item, outcome in zip(inputs, outcomes):
        if isinstance(outcome, ReadFailure):
            result.failures.append(outcome)
            continue
        diagnostics, rule_errors = outcome
        result.analyzed.append(item.path)
        result.diagnostics.extend(diagnostics)
        result.rule_errors.extend(rule_errors)

    logger.info(
        "Run complete: %d diagnostic(s), %d unreadable file(s), %d rule crash(es)",
        len(result.diagnostics),
        len(result.failures),
        len(result.rule_errors),
    )
    return result
