from enum import Enum
from typing import Optional, Dict, Any

from pydantic import BaseModel, ConfigDict


class Severity(str, Enum):
    """Severity of a finding. Only two levels exist for content-model findings."""
    WARN = "WARN"
    ERROR = "ERROR"


class Diagnostic(BaseModel):
    """
    Data model representing a single positioned finding produced by a rule.

    The `code` is stable across releases so downstream tooling can filter or
    suppress findings by code. `line` and `column` are 1-based and point at
    the offending element (or, for text, at the element holding it).
    """
    model_config = ConfigDict(frozen=True)

    code: str  # e.g., 'CONTENT_NOT_ALLOWED', 'CONTEXT_WRONG_PARENT'
    severity: Severity
    line: int
    column: int

    tag: str = ""  # element the finding is reported on ('#text' for text)
    message: str = ""
    rule: str = "nest"

    def with_severity(self, severity: Severity) -> "Diagnostic":
        """Returns a copy with a different severity (used for config overrides)."""
        return self.model_copy(update={"severity": severity})

    def to_row(self, source: Optional[str] = None) -> Dict[str, Any]:
        """Flattens the diagnostic into a row for tabular export."""
        return {
            "Source": source,
            "Line": self.line,
            "Column": self.column,
            "Severity": self.severity.value,
            "Code": self.code,
            "Tag": self.tag,
            "Message": self.message,
            "Rule": self.rule,
        }
