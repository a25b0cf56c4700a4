"""
Plan of Study pipeline.

    bytes ─► load_grid ─► extract_department_code ─┐
                       ├► extract_metadata ────────┤
                       └► locate_header ─► data_rows
                                 ├► build_courses ─┤
                                 └► build_links ───┴► assemble_plan

Structural problems raise immediately.  Field-level problems come back on
the ``ParseResult`` next to the best-effort plan.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence, Union

from dto.plan import Course, CourseLink, Department, MajorMetadata, PlanOfStudy
from dto.result import ParseResult
from extractors.courses import build_courses
from extractors.department import extract_department_code, extract_metadata
from extractors.grid import load_grid
from extractors.header import data_rows, locate_header
from extractors.links import build_links

logger = logging.getLogger(__name__)


def assemble_plan(
    department_id: int,
    metadata: MajorMetadata,
    courses: Sequence[Course],
    links: Sequence[CourseLink],
) -> PlanOfStudy:
    """
    Combine the pipeline outputs.  Link endpoints are not checked against
    the course list; see ``utils.integrity.find_dangling_links``.
    """
    return PlanOfStudy(
        department=Department(id=department_id, name=metadata.department_name),
        major_code=metadata.major_code,
        courses=tuple(courses),
        links=tuple(links),
    )


def parse_plan_of_study(data: bytes) -> ParseResult:
    """Parse the raw bytes of a Plan of Study workbook."""
    grid = load_grid(data)

    department_id = extract_department_code(grid)
    metadata = extract_metadata(grid)
    header_index = locate_header(grid)
    logger.info(
        "Department %d (%s), header on row %d",
        department_id,
        metadata.department_name,
        header_index + 1,
    )

    rows = data_rows(grid, header_index)
    built = build_courses(rows)
    links = build_links(rows)

    plan = assemble_plan(department_id, metadata, built.courses, links)
    return ParseResult(plan=plan, issues=built.issues)


def parse_plan_of_study_file(path: Union[str, Path]) -> ParseResult:
    logger.info("Loading workbook: %s", path)
    return parse_plan_of_study(Path(path).read_bytes())
