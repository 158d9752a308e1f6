# Pydantic data model for lint diagnostics: one violation at a file/line.

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field


class Diagnostic(BaseModel):
    """A single convention violation reported by a rule (e.g. missing doc comment at line 12)."""

    path: Path
    line: int = Field(0, ge=0, description="1-based line number, 0 for file-level diagnostics")
    message: str
    rule_id: str
    severity: Literal["violation"] = "violation"

    model_config = {"frozen": True}

    def render(self) -> str:
        """Format as ``path:line: message`` (line omitted for file-level diagnostics)."""
        if self.line:
            return f"{self.path}:{self.line}: {self.message}"
        return f"{self.path}: {self.message}"
