import pytest

from errors import MissingHeaderError
from extractors.header import data_rows, is_separator, locate_header


def test_locates_first_header():
    grid = [
        ("title-1", None, None),
        ("Code", "Title", "Credits"),
        ("A1", "a", 3),
        ("Code", "Title", "Credits"),
    ]
    assert locate_header(grid) == 1


def test_header_match_is_exact():
    grid = [
        ("code", "Title", "Credits"),
        (" Code", "Title", "Credits"),
        ("Code", "Title"),
    ]
    with pytest.raises(MissingHeaderError):
        locate_header(grid)


@pytest.mark.parametrize(
    "row",
    [
        (None, "x", 3),
        ("", "x", 3),
        ("   ", "x", 3),
        ("Total Credits", None, 120),
        ("Total", None, None),
        ("Code", "Title", "Credits"),
    ],
)
def test_separator_rows(row):
    assert is_separator(row)


def test_course_row_is_not_separator():
    assert not is_separator(("COMM101", "Intro", 3))


def test_data_rows_skip_separators_and_number_rows():
    grid = [
        ("Code", "Title", "Credits"),
        ("A1", "a", 3),
        (None, None, None),
        ("Total Credits", None, 3),
        ("B2", "b", 3),
    ]
    rows = data_rows(grid, 0)
    assert [number for number, _ in rows] == [2, 5]
    assert [row[0] for _, row in rows] == ["A1", "B2"]


def test_rows_before_header_are_excluded():
    grid = [
        ("Z9", "before", 3),
        ("Code", "Title", "Credits"),
        ("A1", "a", 3),
    ]
    assert [row[0] for _, row in data_rows(grid, 1)] == ["A1"]
