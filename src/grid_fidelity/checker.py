"""Check a document against the reference document under a fidelity profile.

The checks are driven by a table of expectations: one entry per cell
attribute, derived from the fixture data and the features the profile
supports. The random access checker in this module and the streaming checker
in :py:mod:`grid_fidelity.streaming` share the same table.
"""

import logging
from dataclasses import dataclass, replace
from datetime import datetime as builtin_datetime
from datetime import timedelta
from operator import eq
from typing import Any, Callable, Dict, List, Optional, Tuple

import pendulum

from grid_fidelity import __name__ as grid_fidelity_name
from grid_fidelity.constants import (
    DEFAULT_SHEET_NAME,
    DEFAULT_VIEW_VISIBILITY,
    FLOAT_TOLERANCE,
    REFERENCE_SHEET_NAME,
    ValueType,
)
from grid_fidelity.exceptions import StyleMismatch, TypeMismatch, ValueMismatch
from grid_fidelity.fixtures import PAGE_SETUP, SHEET_PROPERTIES, STYLES, TEST_VALUES, VIEWS
from grid_fidelity.interfaces import DocumentView, RowView, SheetView
from grid_fidelity.profiles import FULL, FidelityProfile
from grid_fidelity.xref_utils import cell_to_rowcol, col_to_name

logger = logging.getLogger(grid_fidelity_name)
debug = logger.debug

__all__ = [
    "Expectation",
    "FidelityChecker",
    "RowExpectation",
    "check",
    "expected_cells",
    "expected_masters",
    "expected_rows",
    "expectations_by_row",
]

OUTLINED_ROW = 10
OUTLINED_COLUMN = 10

MISMATCH_ERRORS = {"value": ValueMismatch, "type": TypeMismatch}


def close_to(expected: float, actual) -> bool:
    """Return ``True`` if a number is within floating point tolerance of another."""
    if isinstance(actual, bool) or not isinstance(actual, (int, float)):
        return False
    return abs(actual - expected) < FLOAT_TOLERANCE


class DateWithin:
    """Compare dates allowing for up to ``tolerance_ms`` milliseconds of drift."""

    def __init__(self, tolerance_ms: int) -> None:
        self.tolerance_ms = tolerance_ms

    def __call__(self, expected: builtin_datetime, actual) -> bool:
        if not isinstance(actual, builtin_datetime):
            return False
        # Naive dates are UTC
        delta = pendulum.instance(actual) - pendulum.instance(expected)
        drift = abs(timedelta.total_seconds(delta))
        return drift <= self.tolerance_ms / 1000

    def __repr__(self) -> str:
        return f"DateWithin({self.tolerance_ms}ms)"


@dataclass(frozen=True)
class Expectation:
    """The expected state of one attribute of one cell.

    ``field`` is ``"value"``, ``"type"`` or a style attribute name.
    ``compare(expected, actual)`` returns ``True`` for a match.
    """

    address: str
    field: str
    expected: Any
    compare: Callable[[Any, Any], bool] = eq

    @property
    def row(self) -> int:
        return cell_to_rowcol(self.address)[0]

    @property
    def col(self) -> int:
        return cell_to_rowcol(self.address)[1]

    def verify(self, row: Optional[RowView]) -> None:
        """Check the expectation against a row, which may be missing.

        Raises
        ------
        ValueMismatch, TypeMismatch, StyleMismatch:
            If the cell's attribute does not match.
        """
        cell = row.find_cell(self.col) if row is not None else None
        if cell is None:
            actual = ValueType.NULL if self.field == "type" else None
        else:
            actual = getattr(cell, self.field)
        if not self.compare(self.expected, actual):
            error = MISMATCH_ERRORS.get(self.field, StyleMismatch)
            raise error(self.address, self.field, self.expected, actual)


@dataclass(frozen=True)
class RowExpectation:
    """The expected state of an attribute of a row, such as its height."""

    row: int
    field: str
    expected: Any

    def verify(self, row: Optional[RowView]) -> None:
        actual = getattr(row, self.field) if row is not None else None
        if actual != self.expected:
            raise StyleMismatch(f"{self.row}:{self.row}", self.field, self.expected, actual)


def _value_and_type(address, value, value_type, compare=eq) -> List[Expectation]:
    return [
        Expectation(address, "value", value, compare),
        Expectation(address, "type", value_type),
    ]


def expected_cells(profile: FidelityProfile) -> List[Expectation]:
    """
    Return the expectations for every cell of the reference document.

    Parameters
    ----------
    profile: FidelityProfile
        The features the document's representation preserves.

    Returns
    -------
    List[Expectation]:
        The expectations in row order.
    """
    fonts = STYLES["fonts"]
    borders = STYLES["borders"]
    fills = STYLES["fills"]
    date_within = DateWithin(profile.date_tolerance_ms)
    formulas = TEST_VALUES["formulas"]
    hyperlink = TEST_VALUES["hyperlink"]
    date = TEST_VALUES["date"]

    cells = []
    cells += _value_and_type("A1", TEST_VALUES["num"], ValueType.NUMBER)
    cells += _value_and_type("B1", TEST_VALUES["str"], ValueType.STRING)
    cells += _value_and_type("C1", date, ValueType.DATE, date_within)
    if profile.supports_formulas:
        cells += _value_and_type("D1", formulas[0], ValueType.FORMULA)
        cells += _value_and_type("E1", formulas[1], ValueType.FORMULA)
        cells += _value_and_type("F1", hyperlink, ValueType.HYPERLINK)
    else:
        cells += _value_and_type("D1", formulas[0].result, ValueType.NUMBER)
        cells += _value_and_type("E1", None, ValueType.NULL)
        cells += _value_and_type("F1", hyperlink.hyperlink, ValueType.STRING)
    cells += _value_and_type("G1", TEST_VALUES["str2"], ValueType.STRING)

    cells += _value_and_type("A2", 5, ValueType.NUMBER)
    if profile.supports_merges:
        cells += _value_and_type("B2", 5, ValueType.MERGE)
        cells += _value_and_type("C2", None, ValueType.NULL)
        cells += _value_and_type("D2", None, ValueType.MERGE)
        cells += _value_and_type("A3", 5, ValueType.MERGE)
        cells += _value_and_type("B3", 5, ValueType.MERGE)
        cells += _value_and_type("C3", None, ValueType.MERGE)
        cells += _value_and_type("D3", None, ValueType.MERGE)

    if profile.supports_styles:
        cells += [
            Expectation("A4", "num_fmt", TEST_VALUES["num_fmt1"]),
            Expectation("A4", "type", ValueType.NUMBER),
            Expectation("A4", "border", borders["thin"]),
            Expectation("C4", "num_fmt", TEST_VALUES["num_fmt2"]),
            Expectation("C4", "type", ValueType.NUMBER),
            Expectation("C4", "border", borders["double_red"]),
            Expectation("E4", "border", borders["thick_rainbow"]),
        ]

        for col, font in [
            ("A", fonts["arial_black_ui14"]),
            ("B", fonts["broadway_red_outline20"]),
            ("C", fonts["comic_sans_ud_b16"]),
        ]:
            cells += _value_and_type(f"{col}5", TEST_VALUES["str"], ValueType.STRING)
            cells.append(Expectation(f"{col}5", "font", font))

        for address, value, value_type, compare, num_fmt, font in [
            ("D5", 1.6, ValueType.NUMBER, close_to, "num_fmt1", "arial_black_ui14"),
            ("E5", 1.6, ValueType.NUMBER, close_to, "num_fmt2", "broadway_red_outline20"),
            ("F5", date, ValueType.DATE, date_within, "num_fmt_date", "comic_sans_ud_b16"),
        ]:
            cells += _value_and_type(address, value, value_type, compare)
            cells.append(Expectation(address, "num_fmt", TEST_VALUES[num_fmt]))
            cells.append(Expectation(address, "font", fonts[font]))

        for col, alignment in enumerate(STYLES["alignments"], start=1):
            address = f"{col_to_name(col)}6"
            cells.append(Expectation(address, "value", alignment["text"]))
            cells.append(Expectation(address, "alignment", alignment["alignment"]))

    if profile.check_bad_alignments:
        for col, alignment in enumerate(STYLES["bad_alignments"], start=1):
            address = f"{col_to_name(col)}7"
            cells.append(Expectation(address, "value", alignment["text"]))
            cells.append(Expectation(address, "alignment", None))

    if profile.supports_styles:
        for col, fill in enumerate(
            ["blue_white_h_grad", "red_dark_vertical", "red_green_dark_trellis", "rgb_path_grad"],
            start=1,
        ):
            cells.append(Expectation(f"{col_to_name(col)}8", "fill", fills[fill]))

    return cells


def expected_rows(profile: FidelityProfile) -> List[RowExpectation]:
    """Return the expectations for row level attributes of the reference document."""
    if not profile.supports_styles:
        return []
    return [
        RowExpectation(5, "height", None),
        RowExpectation(6, "height", 42),
        RowExpectation(8, "height", 40),
    ]


def expected_masters(profile: FidelityProfile) -> List[Tuple[str, str]]:
    """Return ``(address, master address)`` pairs for cells whose master is checked."""
    masters = [("A2", "A2")]
    if profile.supports_merges:
        masters += [(x, "A2") for x in ["A3", "B2", "B3"]]
        masters += [(x, "C2") for x in ["C2", "D2", "C3", "D3"]]
    return masters


def expectations_by_row(
    profile: FidelityProfile,
) -> Dict[int, Tuple[List[Expectation], List[RowExpectation]]]:
    """Return the cell and row expectations grouped by row number, in row order."""
    rows = {}
    for expectation in expected_cells(profile):
        rows.setdefault(expectation.row, ([], []))[0].append(expectation)
    for expectation in expected_rows(profile):
        rows.setdefault(expectation.row, ([], []))[1].append(expectation)
    return {number: rows[number] for number in sorted(rows)}


class FidelityChecker:
    """
    Check documents against the reference document.

    Parameters
    ----------
    profile: FidelityProfile, optional, default: ``FULL``
        The features the document's representation preserves.

    Example
    -------

    .. code-block:: python

        >>> doc = build_reference_document()
        >>> FidelityChecker(REDUCED_MODEL).check(doc)
    """

    def __init__(self, profile: FidelityProfile = FULL) -> None:
        self.profile = profile
        self._rows = expectations_by_row(profile)
        self._masters = expected_masters(profile)

    def check(self, document: DocumentView) -> None:
        """
        Check a document, stopping at the first mismatch.

        The document is only inspected; no rows or cells are created.

        Raises
        ------
        ValueMismatch:
            If a value, a view, a sheet property or a merge master differs, or if
            the reference sheet is missing.
        TypeMismatch:
            If the type of a cell's value differs.
        StyleMismatch:
            If a style attribute or row height differs.
        """
        profile = self.profile
        debug("check: profile=%s, rows=%d", profile.name, len(self._rows))

        if profile.supports_views:
            self._check_views(document)

        sheet_name = REFERENCE_SHEET_NAME if profile.preserves_sheet_names else DEFAULT_SHEET_NAME
        sheet = document.get_sheet(sheet_name)
        if sheet is None:
            raise ValueMismatch("document", "sheet", sheet_name, None)

        if profile.supports_sheet_properties:
            self._check_sheet_properties(sheet)

        for number, (cells, rows) in self._rows.items():
            row = sheet.find_row(number)
            for expectation in cells:
                expectation.verify(row)
            for expectation in rows:
                expectation.verify(row)

        for address, master_address in self._masters:
            self._check_master(sheet, address, master_address)

    def _check_views(self, document: DocumentView) -> None:
        expected = [replace(view, visibility=DEFAULT_VIEW_VISIBILITY) for view in VIEWS]
        actual = list(document.views)
        if actual != expected:
            raise ValueMismatch("document", "views", expected, actual)

    def _check_sheet_properties(self, sheet: SheetView) -> None:
        column_name = col_to_name(OUTLINED_COLUMN)
        outlines = [
            (f"{column_name}:{column_name}", sheet.find_column(OUTLINED_COLUMN)),
            (f"{OUTLINED_ROW}:{OUTLINED_ROW}", sheet.find_row(OUTLINED_ROW)),
        ]
        for address, outline in outlines:
            for field, expected in [("outline_level", 1), ("collapsed", True)]:
                actual = getattr(outline, field) if outline is not None else None
                if actual != expected:
                    raise ValueMismatch(address, field, expected, actual)

        if sheet.properties != SHEET_PROPERTIES:
            raise ValueMismatch(sheet.name, "properties", SHEET_PROPERTIES, sheet.properties)
        if sheet.page_setup != PAGE_SETUP:
            raise ValueMismatch(sheet.name, "page_setup", PAGE_SETUP, sheet.page_setup)

    def _check_master(self, sheet: SheetView, address: str, master_address: str) -> None:
        cell = sheet.find_cell(address)
        expected = sheet.find_cell(master_address)
        actual = cell.master if cell is not None else None
        if expected is None or actual is not expected:
            raise ValueMismatch(address, "master", master_address, _address_of(actual))


def _address_of(cell) -> Optional[str]:
    return cell.address if cell is not None else None


def check(document: DocumentView, profile: FidelityProfile = FULL) -> None:
    """
    Check a document against the reference document.

    Parameters
    ----------
    document: DocumentView
        A built, or decoded, document.
    profile: FidelityProfile, optional, default: ``FULL``
        The features the document's representation preserves.

    Raises
    ------
    FidelityError:
        A :py:class:`~grid_fidelity.exceptions.ValueMismatch`,
        :py:class:`~grid_fidelity.exceptions.TypeMismatch` or
        :py:class:`~grid_fidelity.exceptions.StyleMismatch` for the first
        attribute that does not match.
    """
    FidelityChecker(profile).check(document)
