"""
Raw grid types produced by the grid loader.

A grid is the first worksheet flattened to a list of equal-length rows.
Column positions inside a data row are fixed by the Plan of Study layout.
"""

from typing import List, Tuple, Union

Cell = Union[str, int, float, None]
Row = Tuple[Cell, ...]
Grid = List[Row]

# Data-row column positions
COL_CODE = 0
COL_TITLE = 1
COL_CREDITS = 2
COL_PREREQUISITES = 3
COL_COREQUISITES = 4  # also the metadata column above the header
COL_TYPE = 5
COL_SEMESTERS = 6

COL_METADATA = COL_COREQUISITES
