"""
Small helpers for reading untyped grid cells.

Absent cells, empty strings and whitespace-only strings are treated the
same everywhere.
"""

from __future__ import annotations

import math
from typing import Optional, Sequence

from dto.grid import Cell


def cell_at(row: Sequence[Cell], index: int) -> Cell:
    """Return ``row[index]``, or ``None`` past the end of a short row."""
    return row[index] if index < len(row) else None


def cell_text(cell: Cell) -> str:
    """
    Render a cell as trimmed text.

    Integral floats drop their fractional part so a numeric code cell such
    as ``101.0`` reads ``"101"``.
    """
    if cell is None:
        return ""
    if isinstance(cell, float):
        if math.isfinite(cell) and cell.is_integer():
            return str(int(cell))
        return str(cell)
    return str(cell).strip()


def is_absent(cell: Cell) -> bool:
    return cell_text(cell) == ""


def cell_number(cell: Cell) -> Optional[float]:
    """
    Numeric coercion of a cell.

    Returns ``None`` when the cell is absent or does not parse as a
    number.  Booleans are not numbers here.
    """
    if isinstance(cell, bool):
        return None
    if isinstance(cell, (int, float)):
        return cell
    text = cell_text(cell)
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    return int(value) if value.is_integer() else value
