# Bare bug references in .proto files: "see b/123456789" should be a full issue URL.

from __future__ import annotations

import re
from typing import Any, Iterable

from gostyle.context import RuleContext
from gostyle.rules.base import SCHEMA_ROLES, LineRule

# a word, whitespace, then b/<9 digits>: "sample b/123456789"
BARE_BUG_RE = re.compile(r"\b\w+\s+b/(\d{9})\b")


class BugReferenceRule(LineRule):
    id = "bug-reference"
    name = "Bare bug reference"
    roles = SCHEMA_ROLES

    def check_line(self, context: RuleContext, text: str, config: Any) -> Iterable[str]:
        match = BARE_BUG_RE.search(text)
        if match:
            bug_id = match.group(1)
            yield (
                f"found bare bug ID {bug_id}, please use full URL like "
                f"{config.issue_url_base}{bug_id}"
            )
