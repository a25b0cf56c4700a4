"""
CourseBuilder: first pass over the data rows.

Each retained row becomes one ``Course``.  Problems with a single field are
collected as ``RowIssue`` entries and the row is left out, so one bad cell
never costs the rest of the sheet.

Duplicate course codes keep the list unique: the later row replaces the
earlier course at its first position and a warning is recorded.
"""

from __future__ import annotations

import logging
import math
from typing import Dict, List, Tuple

from pydantic import BaseModel

from dto.grid import (
    COL_CODE,
    COL_CREDITS,
    COL_SEMESTERS,
    COL_TITLE,
    COL_TYPE,
    Row,
)
from dto.plan import Course, CourseType, SemesterType
from dto.result import RowIssue
from errors import (
    DuplicateCourseCodeWarning,
    FieldError,
    MalformedCreditsError,
    MalformedSemesterError,
)
from extractors.constants import CODE_SEPARATOR
from extractors.header import NumberedRow
from utils.cells import cell_at, cell_number, cell_text

logger = logging.getLogger(__name__)

_COURSE_TYPES = {t.value: t for t in CourseType}

# Canonical order of terms inside a combined semester value
_TERMS = ("Fall", "Spring", "Summer")


class CourseBuildResult(BaseModel):
    model_config = {"frozen": True}

    courses: Tuple[Course, ...] = ()
    issues: Tuple[RowIssue, ...] = ()


# -------------------------------------------------------------------
# Field coercion
# -------------------------------------------------------------------


def parse_course_type(cell) -> CourseType:
    """Known type names map to themselves; anything else is ``Core``."""
    return _COURSE_TYPES.get(cell_text(cell), CourseType.CORE)


def parse_credits(cell, row: int, code: str):
    value = cell_number(cell)
    if value is None or not math.isfinite(value) or value < 0:
        raise MalformedCreditsError(
            f"Credits for {code} must be a non-negative number, got {cell!r}",
            row=row,
            code=code,
        )
    return value


def parse_semesters(cell, row: int, code: str) -> SemesterType:
    """
    Match a semester cell such as ``"Fall-Spring"``.

    Terms are case-insensitive and may be written in any order; the result
    is always in Fall, Spring, Summer order.
    """
    text = cell_text(cell)
    if not text:
        raise MalformedSemesterError(
            f"Semesters missing for {code}", row=row, code=code
        )

    terms = [t.strip().capitalize() for t in text.split(CODE_SEPARATOR)]
    if len(set(terms)) != len(terms) or not set(terms) <= set(_TERMS):
        raise MalformedSemesterError(
            f"Unrecognised semesters for {code}: {text!r}", row=row, code=code
        )

    canonical = CODE_SEPARATOR.join(t for t in _TERMS if t in terms)
    return SemesterType(canonical)


def build_course(row_number: int, row: Row) -> Course:
    """Build one course; raises a ``FieldError`` subclass on bad fields."""
    code = cell_text(cell_at(row, COL_CODE))
    title = cell_text(cell_at(row, COL_TITLE))
    return Course(
        code=code,
        title=f"{code}: {title}",
        credits=parse_credits(cell_at(row, COL_CREDITS), row_number, code),
        type=parse_course_type(cell_at(row, COL_TYPE)),
        semesters=parse_semesters(cell_at(row, COL_SEMESTERS), row_number, code),
    )


# -------------------------------------------------------------------
# Pass
# -------------------------------------------------------------------


def _issue(exc: FieldError) -> RowIssue:
    return RowIssue(
        row=exc.row,
        code=exc.code,
        error=type(exc).__name__,
        message=str(exc),
    )


def build_courses(rows: List[NumberedRow]) -> CourseBuildResult:
    by_code: Dict[str, Course] = {}
    seen_at: Dict[str, int] = {}
    issues: List[RowIssue] = []

    for row_number, row in rows:
        try:
            course = build_course(row_number, row)
        except FieldError as exc:
            logger.warning("Row %d: %s", row_number, exc)
            issues.append(_issue(exc))
            continue

        previous = by_code.get(course.code)
        if previous is not None:
            message = (
                f"Course code {course.code} on row {row_number} overwrites "
                f"row {seen_at[course.code]}"
            )
            if previous.title != course.title:
                message += f" (title {previous.title!r} -> {course.title!r})"
            logger.warning(message)
            issues.append(
                RowIssue(
                    row=row_number,
                    code=course.code,
                    error=DuplicateCourseCodeWarning.__name__,
                    message=message,
                    severity="warning",
                )
            )

        by_code[course.code] = course
        seen_at[course.code] = row_number

    logger.info(
        "  -> %d course(s), %d issue(s)", len(by_code), len(issues)
    )
    return CourseBuildResult(courses=tuple(by_code.values()), issues=tuple(issues))
