"""
LinkResolver: second pass over the data rows.

Column 3 holds prerequisite codes and column 4 corequisite codes, each a
single code or several joined with dashes.  The two lists are zipped by
position only: ``"101-102"`` / ``"201"`` gives (101, 201) and (102, none).
"""

from __future__ import annotations

import logging
from itertools import zip_longest
from typing import List

from dto.grid import COL_CODE, COL_COREQUISITES, COL_PREREQUISITES, Cell, Row
from dto.plan import CourseLink
from extractors.constants import CODE_SEPARATOR, PLACEHOLDER_FRAGMENTS
from extractors.header import NumberedRow
from utils.cells import cell_at, cell_text

logger = logging.getLogger(__name__)


def safe_split(cell: Cell) -> List[str]:
    """Split a dash-joined code cell, dropping empty and placeholder parts."""
    fragments = (f.strip() for f in cell_text(cell).split(CODE_SEPARATOR))
    return [f for f in fragments if f and f not in PLACEHOLDER_FRAGMENTS]


def links_for_row(row: Row) -> List[CourseLink]:
    code = cell_text(cell_at(row, COL_CODE))
    prerequisites = safe_split(cell_at(row, COL_PREREQUISITES))
    corequisites = safe_split(cell_at(row, COL_COREQUISITES))
    return [
        CourseLink(course_code=code, prerequisite_code=pre, corequisite_code=co)
        for pre, co in zip_longest(prerequisites, corequisites)
    ]


def build_links(rows: List[NumberedRow]) -> List[CourseLink]:
    links: List[CourseLink] = []
    for _, row in rows:
        links.extend(links_for_row(row))
    logger.info("  -> %d link(s)", len(links))
    return links
