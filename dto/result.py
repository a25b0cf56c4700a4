"""
Output of a full parse: the best-effort plan plus anything that went wrong
in individual data rows.
"""

from __future__ import annotations

from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from dto.plan import PlanOfStudy


class RowIssue(BaseModel):
    """A field-level error or a warning tied to one sheet row."""

    model_config = {"frozen": True, "alias_generator": to_camel, "populate_by_name": True}

    row: int  # 1-based, as shown in the spreadsheet application
    code: Optional[str] = None
    error: str  # exception class name, e.g. "MalformedCreditsError"
    message: str
    severity: Literal["error", "warning"] = "error"


class ParseResult(BaseModel):
    model_config = {"frozen": True, "alias_generator": to_camel, "populate_by_name": True}

    plan: PlanOfStudy
    issues: Tuple[RowIssue, ...] = ()

    @property
    def errors(self) -> List[RowIssue]:
        return [i for i in self.issues if i.severity == "error"]

    @property
    def warnings(self) -> List[RowIssue]:
        return [i for i in self.issues if i.severity == "warning"]

    @property
    def ok(self) -> bool:
        return not self.errors
