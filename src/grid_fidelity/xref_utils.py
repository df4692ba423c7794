import re
from typing import Tuple

from grid_fidelity.exceptions import InvalidAddress

# Cell reference conversion adapted from https://github.com/jmcnamara/XlsxWriter
# Copyright (c) 2013-2021, John McNamara <jmcnamara@cpan.org>
cell_parts = re.compile(r"^([A-Z]+)([1-9][0-9]*)$")
col_parts = re.compile(r"^[A-Z]+$")


def cell_to_rowcol(cell_str: str) -> Tuple[int, int]:
    """
    Convert a cell reference in A1 notation to a row and column.

    Parameters
    ----------
    cell_str:  str
        A1 notation cell reference

    Returns
    -------
    row, col: int, int
        Cell row and column numbers (one indexed).

    Raises
    ------
    InvalidAddress:
        If the reference is not a column name followed by a row number.
    """
    match = cell_parts.match(cell_str) if isinstance(cell_str, str) else None
    if not match:
        msg = f"invalid cell reference {cell_str!r}"
        raise InvalidAddress(msg)

    return int(match.group(2)), name_to_col(match.group(1))


def rowcol_to_cell(row: int, col: int) -> str:
    """
    Convert a row and column cell reference to an A1 style string.

    Parameters
    ----------
    row: int
         The cell row (one indexed).
    col: int
        The cell column (one indexed).

    Returns
    -------
    str:
        A1 style string.
    """
    if row < 1:
        msg = f"row reference {row} below one"
        raise InvalidAddress(msg)

    return col_to_name(col) + str(row)


def col_to_name(col: int) -> str:
    """
    Convert a column number to a column name.

    Parameters
    ----------
    col: int
        The column number (one indexed).

    Returns
    -------
        str:
            Column in A1 notation.
    """
    if col < 1:
        msg = f"column reference {col} below one"
        raise InvalidAddress(msg)

    col_str = ""
    while col:
        # Set remainder from 1 .. 26
        remainder = col % 26

        if remainder == 0:
            remainder = 26

        # Convert the remainder to a character.
        col_letter = chr(ord("A") + remainder - 1)

        # Accumulate the column letters, right to left.
        col_str = col_letter + col_str

        # Get the next order of magnitude.
        col = (col - 1) // 26

    return col_str


def name_to_col(name: str) -> int:
    """Convert a column name such as ``"AA"`` to its column number."""
    if not isinstance(name, str) or not col_parts.match(name):
        msg = f"invalid column reference {name!r}"
        raise InvalidAddress(msg)

    col = 0
    for char in name:
        col = col * 26 + (ord(char) - ord("A") + 1)
    return col


def xl_range(top: int, left: int, bottom: int, right: int) -> str:
    """
    Convert row and column cell references to an A1:B1 range string.

    Parameters
    ----------
    top: int
        The first cell row.
    left: int
        The first cell column.
    bottom: int
        The last cell row.
    right: int
        The last cell column.

    Returns
    -------
    str:
        A1:B1 style range string.
    """
    range1 = rowcol_to_cell(top, left)
    range2 = rowcol_to_cell(bottom, right)

    if range1 == range2:
        return range1
    return range1 + ":" + range2


def range_to_rect(cell_range: str) -> Tuple[int, int, int, int]:
    """
    Convert an A1:B2 range to a normalized ``(top, left, bottom, right)`` rectangle.

    A single cell reference is a one cell range. Corners may be given in any
    order; ``"B3:A2"`` is the same range as ``"A2:B3"``.
    """
    if not isinstance(cell_range, str):
        msg = f"invalid cell range {cell_range!r}"
        raise InvalidAddress(msg)

    refs = cell_range.split(":")
    if len(refs) == 1:
        refs = refs * 2
    elif len(refs) != 2:
        msg = f"invalid cell range {cell_range!r}"
        raise InvalidAddress(msg)

    (row1, col1) = cell_to_rowcol(refs[0])
    (row2, col2) = cell_to_rowcol(refs[1])
    return (min(row1, row2), min(col1, col2), max(row1, row2), max(col1, col2))
