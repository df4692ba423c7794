import logging
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Tuple, Union

from grid_fidelity import __name__ as grid_fidelity_name
from grid_fidelity.cell import Cell
from grid_fidelity.constants import (
    DEFAULT_DY_DESCENT,
    DEFAULT_ROW_HEIGHT,
    DEFAULT_VIEW_VISIBILITY,
    MAX_COL_COUNT,
    MAX_ROW_COUNT,
)
from grid_fidelity.containers import ItemsList
from grid_fidelity.exceptions import InvalidAddress, OverlappingMergeError, RowCommittedError
from grid_fidelity.styles import Color
from grid_fidelity.xref_utils import cell_to_rowcol, name_to_col, range_to_rect, xl_range

logger = logging.getLogger(grid_fidelity_name)
debug = logger.debug

__all__ = [
    "Column",
    "Document",
    "PageMargins",
    "PageSetup",
    "Row",
    "Sheet",
    "SheetProperties",
    "WorkbookView",
]


@dataclass
class SheetProperties:
    """Sheet level properties.

    The outline levels are raised automatically when a row or column is given
    a deeper outline level.
    """

    tab_color: Optional[Color] = None
    outline_level_col: int = 0
    outline_level_row: int = 0
    default_row_height: float = DEFAULT_ROW_HEIGHT
    dy_descent: float = DEFAULT_DY_DESCENT

    def __post_init__(self):
        self.tab_color = Color.from_dict(self.tab_color)

    @classmethod
    def from_dict(cls, data: Union[dict, "SheetProperties", None]):
        if data is None:
            return cls()
        if isinstance(data, SheetProperties):
            return replace(data)
        return cls(**data)


@dataclass(frozen=True)
class PageMargins:
    left: float = 0.7
    right: float = 0.7
    top: float = 0.75
    bottom: float = 0.75
    header: float = 0.3
    footer: float = 0.3


@dataclass
class PageSetup:
    """Print settings for a sheet. Compared as a whole; not otherwise interpreted."""

    margins: PageMargins = field(default_factory=PageMargins)
    orientation: str = "portrait"
    paper_size: Optional[int] = None
    horizontal_dpi: int = 4294967295
    vertical_dpi: int = 4294967295
    fit_to_page: bool = False
    fit_to_width: int = 1
    fit_to_height: int = 1
    scale: int = 100
    page_order: str = "downThenOver"
    black_and_white: bool = False
    draft: bool = False
    cell_comments: str = "None"
    errors: str = "displayed"
    show_row_col_headers: bool = False
    show_grid_lines: bool = False
    horizontal_centered: bool = False
    vertical_centered: bool = False
    first_page_number: Optional[int] = None
    print_area: Optional[str] = None
    print_titles_row: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.margins, dict):
            self.margins = PageMargins(**self.margins)

    @classmethod
    def from_dict(cls, data: Union[dict, "PageSetup", None]):
        if data is None:
            return cls()
        if isinstance(data, PageSetup):
            return replace(data)
        return cls(**data)


@dataclass
class WorkbookView:
    """A document window. ``visibility`` is ``"visible"`` unless set otherwise."""

    x: int = 0
    y: int = 0
    width: int = 10000
    height: int = 20000
    first_sheet: int = 0
    active_tab: int = 0
    visibility: str = DEFAULT_VIEW_VISIBILITY

    @classmethod
    def from_dict(cls, data: Union[dict, "WorkbookView"]):
        if isinstance(data, WorkbookView):
            return replace(data)
        return cls(**data)


class Column:
    """.. NOTE::
    Do not instantiate directly. Columns are created by :py:meth:`~grid_fidelity.Sheet.column`.
    """

    def __init__(self, sheet: "Sheet", number: int) -> None:
        self._sheet = sheet
        self.number = number
        self.width = None
        self._outline_level = 0
        self._collapsed = None

    @property
    def outline_level(self) -> int:
        """int: The column's outline level, ``0`` if not outlined."""
        return self._outline_level

    @outline_level.setter
    def outline_level(self, value: int) -> None:
        self._outline_level = value
        properties = self._sheet.properties
        properties.outline_level_col = max(properties.outline_level_col, value)

    @property
    def collapsed(self) -> bool:
        """bool: ``True`` if the column is outlined at or below the sheet's outline level."""
        if self._collapsed is not None:
            return self._collapsed
        level = self._outline_level
        return bool(level) and level >= self._sheet.properties.outline_level_col

    @collapsed.setter
    def collapsed(self, value: bool) -> None:
        self._collapsed = value


class Row:
    """.. NOTE::
    Do not instantiate directly. Rows are created by :py:meth:`~grid_fidelity.Sheet.row`.
    """

    def __init__(self, sheet: "Sheet", number: int) -> None:
        self._sheet = sheet
        self.number = number
        self.committed = False
        self._cells = {}
        self._height = None
        self._outline_level = 0
        self._collapsed = None

    def __repr__(self) -> str:
        return f"<Row {self._sheet.name}!{self.number}>"

    def cell(self, col: Union[int, str]) -> Cell:
        """
        Return a cell in the row, creating it if it does not exist.

        Parameters
        ----------
        col: int | str
            The column number (one indexed) or column name, e.g. ``"B"``.
        """
        col = self._sheet._validate_col(col)
        if col not in self._cells:
            self._cells[col] = Cell(self, col)
        return self._cells[col]

    def find_cell(self, col: Union[int, str]) -> Optional[Cell]:
        """Return a cell in the row, or ``None`` if it has not been created."""
        return self._cells.get(self._sheet._validate_col(col))

    @property
    def cells(self) -> List[Cell]:
        """List[Cell]: The row's cells in column order."""
        return [self._cells[col] for col in sorted(self._cells)]

    @property
    def values(self) -> list:
        """list: Cell values indexed by column number; index 0 is always ``None``."""
        if not self._cells:
            return []
        values = [None] * (max(self._cells) + 1)
        for col, cell in self._cells.items():
            values[col] = cell.value
        return values

    @property
    def height(self) -> Optional[float]:
        """float | None: The row height in points, or ``None`` for the default height."""
        return self._height

    @height.setter
    def height(self, value: Optional[float]) -> None:
        self._check_uncommitted()
        self._height = value

    @property
    def outline_level(self) -> int:
        """int: The row's outline level, ``0`` if not outlined."""
        return self._outline_level

    @outline_level.setter
    def outline_level(self, value: int) -> None:
        self._check_uncommitted()
        self._outline_level = value
        properties = self._sheet.properties
        properties.outline_level_row = max(properties.outline_level_row, value)

    @property
    def collapsed(self) -> bool:
        """bool: ``True`` if the row is outlined at or below the sheet's outline level."""
        if self._collapsed is not None:
            return self._collapsed
        level = self._outline_level
        return bool(level) and level >= self._sheet.properties.outline_level_row

    @collapsed.setter
    def collapsed(self, value: bool) -> None:
        self._check_uncommitted()
        self._collapsed = value

    def commit(self) -> None:
        """Close this row, and every open row above it, for further changes.

        Streaming producers emit rows as they are committed. Creating empty
        cells in a committed row is still allowed so that readers can look up
        cells that were never written.
        """
        self._sheet._commit_rows(self.number)

    def _check_uncommitted(self) -> None:
        if self.committed:
            raise RowCommittedError(f"cannot modify row {self.number}: row is committed")


class Sheet:
    """.. NOTE::
    Do not instantiate directly. Sheets are created by
    :py:meth:`~grid_fidelity.Document.add_sheet`.
    """

    def __init__(
        self,
        document: "Document",
        name: str,
        properties: Union[SheetProperties, dict, None] = None,
        page_setup: Union[PageSetup, dict, None] = None,
    ) -> None:
        self._document = document
        self._name = name
        self._rows: Dict[int, Row] = {}
        self._columns: Dict[int, Column] = {}
        self._merges: Dict[str, Tuple[int, int, int, int]] = {}
        self.properties = properties
        self.page_setup = page_setup

    def __repr__(self) -> str:
        return f"<Sheet {self._name}>"

    @property
    def name(self) -> str:
        """str: The sheet's name."""
        return self._name

    @property
    def properties(self) -> SheetProperties:
        """SheetProperties: Outline levels, tab color and row defaults."""
        return self._properties

    @properties.setter
    def properties(self, value: Union[SheetProperties, dict, None]) -> None:
        self._properties = SheetProperties.from_dict(value)

    @property
    def page_setup(self) -> PageSetup:
        """PageSetup: The sheet's print settings."""
        return self._page_setup

    @page_setup.setter
    def page_setup(self, value: Union[PageSetup, dict, None]) -> None:
        self._page_setup = PageSetup.from_dict(value)

    @property
    def rows(self) -> List[Row]:
        """List[Row]: The rows that exist, in row order."""
        return [self._rows[number] for number in sorted(self._rows)]

    @property
    def columns(self) -> List[Column]:
        """List[Column]: The columns that exist, in column order."""
        return [self._columns[number] for number in sorted(self._columns)]

    def row(self, number: int) -> Row:
        """Return a row, creating it if it does not exist.

        Raises
        ------
        InvalidAddress:
            If the row number is outside the grid.
        """
        number = self._validate_row(number)
        if number not in self._rows:
            self._rows[number] = Row(self, number)
        return self._rows[number]

    def find_row(self, number: int) -> Optional[Row]:
        """Return a row, or ``None`` if it has not been created."""
        return self._rows.get(self._validate_row(number))

    def column(self, number: Union[int, str]) -> Column:
        """Return a column by number or name, creating it if it does not exist."""
        number = self._validate_col(number)
        if number not in self._columns:
            self._columns[number] = Column(self, number)
        return self._columns[number]

    def find_column(self, number: Union[int, str]) -> Optional[Column]:
        """Return a column, or ``None`` if it has not been created."""
        return self._columns.get(self._validate_col(number))

    def cell(self, *args) -> Cell:
        """
        Return a single cell, creating it if it does not exist.

        The ``cell()`` method supports two forms of notation to designate the position
        of cells: **Row-column** notation and **A1** notation:

        .. code-block:: python

            (1, 1)      # Row-column notation.
            ("A1")      # The same cell in A1 notation.

        Creating a cell does not create any other cells in the same row or
        column, nor any rows between existing rows.

        Raises
        ------
        InvalidAddress:
            If the cell reference is malformed or outside the grid.
        """
        (row, col) = self._cell_coords(*args)
        return self.row(row).cell(col)

    def find_cell(self, *args) -> Optional[Cell]:
        """Return a single cell, or ``None`` if it has not been created."""
        (row, col) = self._cell_coords(*args)
        row = self._rows.get(row)
        return row.find_cell(col) if row is not None else None

    @property
    def merges(self) -> List[str]:
        """List[str]: The merged ranges of the sheet in A1 notation.

        Example
        -------

        .. code-block:: python

            >>> sheet.merge_cells("A2:B3")
            >>> sheet.merges
            ['A2:B3']
        """
        return sorted(self._merges, key=lambda x: self._merges[x])

    def merge_cells(self, *args) -> None:
        """
        Merge a rectangular range of cells.

        The range can be given as ``"A2:B3"``, as two corner references
        ``("A2", "B3")`` or as ``(top, left, bottom, right)`` numbers. The
        top-left cell becomes the master and keeps its value and style. Every
        other cell in the range is created if necessary, loses its own value
        and mirrors the master.

        Raises
        ------
        OverlappingMergeError:
            If the range intersects a range that is already merged.
        RowCommittedError:
            If any row in the range is committed.
        """
        rect = self._merge_rect(*args)
        requested = xl_range(*rect)
        for existing, other in self._merges.items():
            if _intersects(rect, other):
                raise OverlappingMergeError(existing, requested)

        (top, left, bottom, right) = rect
        for number in range(top, bottom + 1):
            self.row(number)._check_uncommitted()

        master = self.cell(top, left)
        for row in range(top, bottom + 1):
            for col in range(left, right + 1):
                if (row, col) != (top, left):
                    self.cell(row, col)._merge(master)
        self._merges[requested] = rect
        debug("merge_cells: %s: master=%s, type=%s", requested, master.address, master.type.name)

    def unmerge_cells(self, *args) -> None:
        """
        Split a merged range back into individual cells.

        Former members become empty cells.

        Raises
        ------
        KeyError:
            If the range is not a merged range of the sheet.
        """
        rect = self._merge_rect(*args)
        requested = xl_range(*rect)
        if requested not in self._merges:
            raise KeyError(f"'{requested}' is not a merged range")

        (top, left, bottom, right) = rect
        for row in range(top, bottom + 1):
            for col in range(left, right + 1):
                self.cell(row, col)._unmerge()
        del self._merges[requested]
        debug("unmerge_cells: %s", requested)

    def commit(self) -> None:
        """Commit every row of the sheet."""
        if self._rows:
            self._commit_rows(max(self._rows))

    def _commit_rows(self, number: int) -> None:
        for row_number in sorted(self._rows):
            if row_number > number:
                break
            row = self._rows[row_number]
            if not row.committed:
                row.committed = True
                debug("commit: %s row %d", self._name, row_number)

    def _merge_rect(self, *args) -> Tuple[int, int, int, int]:
        if len(args) == 1:
            rect = range_to_rect(args[0])
        elif len(args) == 2:
            rect = range_to_rect(f"{args[0]}:{args[1]}")
        elif len(args) == 4:
            (top, bottom) = (self._validate_row(args[0]), self._validate_row(args[2]))
            (left, right) = (self._validate_col(args[1]), self._validate_col(args[3]))
            rect = (min(top, bottom), min(left, right), max(top, bottom), max(left, right))
        else:
            raise InvalidAddress("invalid cell range " + str(args))

        if rect[0] == rect[2] and rect[1] == rect[3]:
            raise ValueError(f"cannot merge single cell {xl_range(*rect)}")
        return rect

    def _cell_coords(self, *args) -> Tuple[int, int]:
        if len(args) == 1 and isinstance(args[0], str):
            (row, col) = cell_to_rowcol(args[0])
        elif len(args) != 2:
            raise InvalidAddress("invalid cell reference " + str(args))
        else:
            (row, col) = args
        return (self._validate_row(row), self._validate_col(col))

    def _validate_row(self, number: int) -> int:
        if not isinstance(number, int) or isinstance(number, bool):
            raise InvalidAddress(f"invalid row reference {number!r}")
        if number < 1:
            raise InvalidAddress(f"row {number} below one")
        if number > MAX_ROW_COUNT:
            raise InvalidAddress(f"{number} exceeds maximum row {MAX_ROW_COUNT}")
        return number

    def _validate_col(self, number: Union[int, str]) -> int:
        if isinstance(number, str):
            number = name_to_col(number)
        elif not isinstance(number, int) or isinstance(number, bool):
            raise InvalidAddress(f"invalid column reference {number!r}")
        if number < 1:
            raise InvalidAddress(f"column {number} below one")
        if number > MAX_COL_COUNT:
            raise InvalidAddress(f"{number} exceeds maximum column {MAX_COL_COUNT}")
        return number


def _intersects(rect1: Tuple[int, int, int, int], rect2: Tuple[int, int, int, int]) -> bool:
    return not (
        rect1[2] < rect2[0] or rect2[2] < rect1[0] or rect1[3] < rect2[1] or rect2[3] < rect1[1]
    )


class Document:
    """
    Create an instance of a new, empty document.

    .. code-block:: python

        doc = Document()
        sheet = doc.add_sheet("blort")
        sheet.cell("A1").value = 7
        doc.views = [{"x": 1, "y": 2, "width": 10000, "height": 20000}]
    """

    def __init__(self) -> None:
        self._sheets = ItemsList("sheet")
        self._views: List[WorkbookView] = []

    @property
    def sheets(self) -> ItemsList:
        """ItemsList[:class:`Sheet`]: The sheets in the document, by index or name."""
        return self._sheets

    @property
    def views(self) -> List[WorkbookView]:
        """List[:class:`WorkbookView`]: The document's windows."""
        return self._views

    @views.setter
    def views(self, value: List[Union[WorkbookView, dict]]) -> None:
        self._views = [WorkbookView.from_dict(x) for x in value]

    def add_sheet(
        self,
        sheet_name: Optional[str] = None,
        properties: Union[SheetProperties, dict, None] = None,
        page_setup: Union[PageSetup, dict, None] = None,
    ) -> Sheet:
        """
        Add a new sheet to the document.

        If no sheet name is provided, the next available numbered sheet
        will be generated in the series ``sheet1``, ``sheet2``, etc.

        Raises
        ------
        IndexError:
            If the sheet name already exists in the document.
        """
        if sheet_name is not None:
            if sheet_name in self._sheets:
                raise IndexError(f"sheet '{sheet_name}' already exists")
        else:
            sheet_num = 1
            while f"sheet{sheet_num}" in self._sheets:
                sheet_num += 1
            sheet_name = f"sheet{sheet_num}"

        sheet = Sheet(self, sheet_name, properties=properties, page_setup=page_setup)
        self._sheets.append(sheet)
        return sheet

    def get_sheet(self, sheet_name: str) -> Optional[Sheet]:
        """Return the named sheet, or ``None`` if there is no such sheet."""
        return self._sheets.get(sheet_name)

    def commit(self) -> None:
        """Commit every row of every sheet."""
        for sheet in self._sheets:
            sheet.commit()
