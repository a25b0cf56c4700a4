import io
from typing import Callable, List, Sequence

import openpyxl
import pytest

DEPARTMENT_TITLE = "Bachelor of Science in Communication Engineering (TENG)-43"
METADATA_CELL = (
    "Major Title: Communication Engineering\n"
    "Major Type: Bachelor\n"
    "Major Code: TENG12"
)
HEADER = ["Code", "Title", "Credits", "Prerequisites", "Corequisites", "Type", "Semesters"]


def layout(course_rows: Sequence[Sequence]) -> List[List]:
    """Department row, metadata row and header, followed by *course_rows*."""
    return [
        [DEPARTMENT_TITLE],
        [None, None, None, None, METADATA_CELL],
        [],
        HEADER,
        *[list(r) for r in course_rows],
    ]


def xlsx_bytes(rows: Sequence[Sequence], extra_sheets: Sequence[Sequence[Sequence]] = ()) -> bytes:
    wb = openpyxl.Workbook()
    ws = wb.active
    for row in rows:
        ws.append(list(row))
    for index, sheet_rows in enumerate(extra_sheets):
        extra = wb.create_sheet(f"Extra{index}")
        for row in sheet_rows:
            extra.append(list(row))
    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


@pytest.fixture
def make_xlsx() -> Callable[..., bytes]:
    return xlsx_bytes
