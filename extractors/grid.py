"""
GridLoader: decodes an .xlsx binary into a rectangular grid of raw
cell values taken from the first worksheet.

Formula cells resolve to the values Excel cached when the file was last
saved (``data_only=True``).  Workbooks written by tools that never
calculate formulas will therefore read such cells as absent.
"""

from __future__ import annotations

import datetime
import io
import logging
import zipfile

import openpyxl
from openpyxl.utils.exceptions import InvalidFileException

from dto.grid import Cell, Grid
from errors import DecodeError

logger = logging.getLogger(__name__)

# SyntaxError covers both ElementTree.ParseError and lxml.etree.XMLSyntaxError,
# raised when a member of the zip container is not well-formed XML.
_UNREADABLE = (
    zipfile.BadZipFile,
    InvalidFileException,
    KeyError,
    OSError,
    ValueError,
    SyntaxError,
)


def _normalise(value) -> Cell:
    """Coerce an openpyxl cell value into the grid's Cell type."""
    if value is None or isinstance(value, (str, int, float)):
        return value
    if isinstance(value, (datetime.datetime, datetime.date, datetime.time)):
        return value.isoformat()
    return str(value)


def load_grid(data: bytes) -> Grid:
    """
    Return the first worksheet of the workbook in *data* as a list of
    equal-length row tuples.  Later worksheets are ignored.

    Raises ``DecodeError`` if *data* is not a readable workbook.
    """
    try:
        workbook = openpyxl.load_workbook(
            io.BytesIO(data),
            data_only=True,
        )
    except _UNREADABLE as exc:
        raise DecodeError(f"Not a readable spreadsheet: {exc}") from exc

    try:
        if not workbook.worksheets:
            raise DecodeError("Workbook contains no worksheets")
        ws = workbook.worksheets[0]
        logger.info("Reading worksheet: %s", ws.title)

        try:
            rows = [
                tuple(_normalise(v) for v in row)
                for row in ws.iter_rows(values_only=True)
            ]
        except SyntaxError as exc:
            raise DecodeError(f"Unreadable worksheet {ws.title!r}: {exc}") from exc
    finally:
        workbook.close()

    width = max((len(r) for r in rows), default=0)
    grid: Grid = [r + (None,) * (width - len(r)) for r in rows]
    logger.info("  -> %d row(s) x %d column(s)", len(grid), width)
    return grid
