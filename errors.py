"""
Exception taxonomy for Plan of Study parsing.

Structural errors mean the workbook does not follow the expected layout at
all and abort the parse.  Field errors concern a single data row and are
collected by the course builder instead of being raised to the caller.
"""

from __future__ import annotations

from typing import Optional


class PlanOfStudyError(Exception):
    """Base class for everything raised by this package."""


class DecodeError(PlanOfStudyError):
    """The input bytes are not a readable spreadsheet."""


# -------------------------------------------------------------------
# Structural
# -------------------------------------------------------------------


class StructuralError(PlanOfStudyError):
    """The grid does not match the Plan of Study layout."""


class MissingDepartmentCodeError(StructuralError):
    pass


class MissingMetadataError(StructuralError):
    pass


class MissingHeaderError(StructuralError):
    pass


# -------------------------------------------------------------------
# Field level
# -------------------------------------------------------------------


class FieldError(PlanOfStudyError):
    """A malformed value in one data row."""

    def __init__(self, message: str, row: int, code: Optional[str] = None):
        super().__init__(message)
        self.row = row
        self.code = code


class MalformedCreditsError(FieldError):
    pass


class MalformedSemesterError(FieldError):
    pass


class DuplicateCourseCodeWarning(UserWarning):
    """Two data rows share a course code; the later row wins."""


# -------------------------------------------------------------------
# Boundary
# -------------------------------------------------------------------


class SchemaError(PlanOfStudyError):
    """A stored payload matches none of the known plan/link shapes."""


class PlanOfStudyApiError(PlanOfStudyError):
    """The plan-of-study service rejected a request."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
