import re

# Single-cell row such as "Bachelor of Science in ... (TENG)-43"
DEPARTMENT_CODE_PATTERN = re.compile(r"-(\d+)$")

MAJOR_TITLE_LABEL = "Major Title:"
MAJOR_CODE_LABEL = "Major Code:"
LABEL_DELIMITER = ": "
MAJOR_CODE_PATTERN = re.compile(r"TENG\d+")
MAJOR_CODE_PLACEHOLDER = "TENG000"

# 0-based positions of the labelled lines inside the metadata cell
MAJOR_TITLE_LINE = 0
MAJOR_CODE_LINE = 2

HEADER_CELLS = ("Code", "Title", "Credits")

TOTAL_ROW_PREFIX = "Total"
REPEATED_HEADER = "Code"

CODE_SEPARATOR = "-"
# Stray text left behind by older exports for empty list entries
PLACEHOLDER_FRAGMENTS = frozenset({"undefined"})
