from enum import IntEnum

import enum_tools.documentation
from pendulum import datetime

__all__ = [
    "ValueType",
]

# Grid limits
MAX_ROW_COUNT = 1048576
MAX_COL_COUNT = 16384
MAX_SIGNIFICANT_DIGITS = 15

# Sheet defaults
DEFAULT_SHEET_NAME = "sheet1"
REFERENCE_SHEET_NAME = "blort"
DEFAULT_VIEW_VISIBILITY = "visible"
DEFAULT_ROW_HEIGHT = 15.0
DEFAULT_DY_DESCENT = 0.55

# Serial dates count days from this epoch, as spreadsheet packages do
SERIAL_DATE_EPOCH = datetime(1899, 12, 30)
MILLISECONDS_IN_DAY = 24 * 60 * 60 * 1000

# Comparison tolerances
FLOAT_TOLERANCE = 0.00000001
STRICT_DATE_TOLERANCE_MS = 3
LOOSE_DATE_TOLERANCE_MS = 1000

# Profile names
PROFILE_FULL = "full"
PROFILE_REDUCED_MODEL = "reduced-model"
PROFILE_PLAIN_TEXT = "plain-text"

# Alignment values accepted by strict (package) validation
HORIZONTAL_ALIGNMENTS = [
    "left",
    "center",
    "right",
    "fill",
    "justify",
    "centerContinuous",
    "distributed",
]
VERTICAL_ALIGNMENTS = ["top", "middle", "bottom", "distributed", "justify"]
READING_ORDERS = ["rtl", "ltr"]
MAX_TEXT_ROTATION = 90
VERTICAL_TEXT_ROTATION = "vertical"

BORDER_SIDES = ["top", "left", "bottom", "right", "diagonal"]


@enum_tools.documentation.document_enum
class ValueType(IntEnum):
    """
    The type of value held by a cell.

    Merge members report ``MERGE`` whatever the type of their master; a master
    cell that was never given a value reports ``NULL``.
    """

    NULL = 0
    """The cell has no value."""
    MERGE = 1
    """The cell is a member of a merged range and mirrors its master."""
    NUMBER = 2
    """An integer or floating point number."""
    STRING = 3
    """A text string."""
    DATE = 4
    """A date and time."""
    HYPERLINK = 5
    """Link text and a hyperlink target."""
    FORMULA = 6
    """A formula with an optional cached result."""
