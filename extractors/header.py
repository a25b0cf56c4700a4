"""
HeaderLocator and the data-row slice that follows the header.
"""

from __future__ import annotations

import logging
from typing import List, Tuple

from dto.grid import COL_CODE, Grid, Row
from errors import MissingHeaderError
from extractors.constants import HEADER_CELLS, REPEATED_HEADER, TOTAL_ROW_PREFIX
from utils.cells import cell_at, cell_text, is_absent

logger = logging.getLogger(__name__)

# (1-based sheet row number, row)
NumberedRow = Tuple[int, Row]


def locate_header(grid: Grid) -> int:
    """Index of the first row starting with exactly Code | Title | Credits."""
    for index, row in enumerate(grid):
        if tuple(cell_at(row, i) for i in range(len(HEADER_CELLS))) == HEADER_CELLS:
            logger.debug("Header row at index %d", index)
            return index
    raise MissingHeaderError(
        "Header row ({}) not found".format(", ".join(HEADER_CELLS))
    )


def is_separator(row: Row) -> bool:
    """
    Blank, "Total ..." and repeated-header rows carry no course.
    """
    first = cell_at(row, COL_CODE)
    if is_absent(first):
        return True
    text = cell_text(first)
    return text.startswith(TOTAL_ROW_PREFIX) or text == REPEATED_HEADER


def data_rows(grid: Grid, header_index: int) -> List[NumberedRow]:
    """
    Rows strictly after the header that describe a course, each paired with
    its 1-based sheet row number for reporting.
    """
    return [
        (index + 1, row)
        for index, row in enumerate(grid)
        if index > header_index and not is_separator(row)
    ]
