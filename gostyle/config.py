from __future__ import annotations

"""
Linter configuration: the rule registry and run settings.

Every rule always runs; the registry is an ordered list and that order fixes
the order of diagnostics within a file. Adding a rule means appending it to
get_default_config(), the engine does not change.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from gostyle.rules.base import Rule
from gostyle.rules.bug_refs import BugReferenceRule
from gostyle.rules.docs import ExportedDocRule
from gostyle.rules.naming import GetPrefixRule, MixedCapsRule, RedundantNameRule
from gostyle.rules.params import StructParamsRule
from gostyle.rules.patterns import (
    BlockingSleepRule,
    CfgpluginReturnRule,
    ErrorStringsRule,
    StringConcatRule,
)
from gostyle.rules.testing import (
    HelperMarkRule,
    HelperNameCaseRule,
    LogArgsRule,
    TableDrivenLayoutRule,
)

DEFAULT_CFGPLUGIN_SEGMENT = "cfgplugins"
DEFAULT_ISSUE_URL_BASE = "https://example.corp.example.com/issues/"


@dataclass
class Config:
    """
    Linter configuration.

    rules: ordered registry, structural and text rules mixed.
    jobs: worker threads for the run; None or 1 analyzes files sequentially.
    cfgplugin_segment: directory name marking configuration plugin packages.
    issue_url_base: prefix suggested for bare bug IDs in .proto files.
    """

    rules: Sequence[Rule] = field(default_factory=list)
    jobs: Optional[int] = None
    cfgplugin_segment: str = DEFAULT_CFGPLUGIN_SEGMENT
    issue_url_base: str = DEFAULT_ISSUE_URL_BASE


def default_rules() -> List[Rule]:
    return [
        TableDrivenLayoutRule(),
        ExportedDocRule(),
        GetPrefixRule(),
        HelperMarkRule(),
        HelperNameCaseRule(),
        StructParamsRule(),
        MixedCapsRule(),
        RedundantNameRule(),
        BlockingSleepRule(),
        CfgpluginReturnRule(),
        StringConcatRule(),
        ErrorStringsRule(),
        LogArgsRule(),
        BugReferenceRule(),
    ]


def get_default_config(jobs: Optional[int] = None) -> Config:
    """Return the configuration with every implemented rule registered."""
    return Config(rules=default_rules(), jobs=jobs)


def get_enabled_rules(config: Config | None = None) -> Sequence[Rule]:
    """Return the rule registry from the given config (or the default config)."""
    if config is None:
        config = get_default_config()
    return config.rules
