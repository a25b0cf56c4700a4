"""
Department identity extraction.

Two independent scans over the same grid:

  - ``extract_department_code`` finds the single-cell title row ending in
    ``-<digits>`` and returns the digits as the department id.
  - ``extract_metadata`` finds the multi-line metadata cell in column 4 and
    returns the department name and major code written inside it.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from dto.grid import COL_METADATA, Grid, Row
from dto.plan import MajorMetadata
from errors import MissingDepartmentCodeError, MissingMetadataError
from extractors.constants import (
    DEPARTMENT_CODE_PATTERN,
    LABEL_DELIMITER,
    MAJOR_CODE_LABEL,
    MAJOR_CODE_LINE,
    MAJOR_CODE_PATTERN,
    MAJOR_CODE_PLACEHOLDER,
    MAJOR_TITLE_LABEL,
    MAJOR_TITLE_LINE,
)
from utils.cells import cell_at, is_absent

logger = logging.getLogger(__name__)


# -------------------------------------------------------------------
# Department code
# -------------------------------------------------------------------


def _department_code_in(row: Row) -> Optional[int]:
    populated = [c for c in row if not is_absent(c)]
    if len(populated) != 1 or not isinstance(populated[0], str):
        return None
    m = DEPARTMENT_CODE_PATTERN.search(populated[0].strip())
    return int(m.group(1)) if m else None


def extract_department_code(grid: Grid) -> int:
    """Return the id from the first single-cell row ending in ``-<digits>``."""
    for row in grid:
        code = _department_code_in(row)
        if code is not None:
            logger.debug("Department code: %d", code)
            return code
    raise MissingDepartmentCodeError(
        "No single-cell row ending in '-<number>' was found"
    )


# -------------------------------------------------------------------
# Metadata cell
# -------------------------------------------------------------------


def split_lines(text: str) -> List[str]:
    """Split a multi-line cell on any newline convention, trimming each line."""
    normalised = text.replace("\r\n", "\n").replace("\r", "\n")
    return [line.strip() for line in normalised.split("\n")]


def _label_value(line: str) -> str:
    return line.partition(LABEL_DELIMITER)[2].strip()


def _major_code(line: str) -> str:
    m = MAJOR_CODE_PATTERN.search(_label_value(line)) or MAJOR_CODE_PATTERN.search(line)
    return m.group(0) if m else MAJOR_CODE_PLACEHOLDER


def _is_metadata_cell(row: Row) -> bool:
    cell = cell_at(row, COL_METADATA)
    return (
        isinstance(cell, str)
        and MAJOR_TITLE_LABEL in cell
        and MAJOR_CODE_LABEL in cell
    )


def extract_metadata(grid: Grid) -> MajorMetadata:
    """
    Read the department name (line 1) and major code (line 3) out of the
    first column-4 cell carrying both the title and code labels.
    """
    row = next((r for r in grid if _is_metadata_cell(r)), None)
    if row is None:
        raise MissingMetadataError(
            f"No row with '{MAJOR_TITLE_LABEL}' and '{MAJOR_CODE_LABEL}' "
            "in its metadata column was found"
        )

    lines = split_lines(row[COL_METADATA])
    if len(lines) <= MAJOR_CODE_LINE:
        raise MissingMetadataError(
            f"Metadata cell has {len(lines)} line(s); the major title and "
            f"major code are expected on lines {MAJOR_TITLE_LINE + 1} and "
            f"{MAJOR_CODE_LINE + 1}"
        )

    name = _label_value(lines[MAJOR_TITLE_LINE])
    if not name:
        raise MissingMetadataError(
            f"Department name missing from line: {lines[MAJOR_TITLE_LINE]!r}"
        )

    major_code = _major_code(lines[MAJOR_CODE_LINE])
    if major_code == MAJOR_CODE_PLACEHOLDER:
        logger.warning(
            "No major code found in %r; using %s",
            lines[MAJOR_CODE_LINE],
            MAJOR_CODE_PLACEHOLDER,
        )
    logger.debug("Department name: %s, major code: %s", name, major_code)
    return MajorMetadata(department_name=name, major_code=major_code)
