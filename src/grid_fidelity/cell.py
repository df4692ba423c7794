import logging
from dataclasses import dataclass
from datetime import datetime as builtin_datetime
from typing import Any, Optional, Tuple, Union
from warnings import warn

import sigfig
from pendulum import DateTime
from pendulum import instance as pendulum_instance

from grid_fidelity import __name__ as grid_fidelity_name
from grid_fidelity.constants import MAX_SIGNIFICANT_DIGITS, ValueType
from grid_fidelity.exceptions import GridWarning, RowCommittedError
from grid_fidelity.styles import (
    STYLE_ATTRS,
    Alignment,
    Border,
    Font,
    GradientFill,
    PatternFill,
    fill_from_dict,
)
from grid_fidelity.xref_utils import rowcol_to_cell

logger = logging.getLogger(grid_fidelity_name)
debug = logger.debug

__all__ = [
    "Cell",
    "Formula",
    "Hyperlink",
]


@dataclass(frozen=True)
class Formula:
    """A formula and, if one has been calculated, its cached result.

    .. code-block:: python

        sheet.cell("D1").value = Formula("A1", result=7)
    """

    formula: str
    result: Any = None


@dataclass(frozen=True)
class Hyperlink:
    """Link text displayed in a cell and the target of the link."""

    text: str
    hyperlink: str


class CellValue:
    """Typed storage for the value of a single cell."""

    _type = ValueType.NULL

    def __init__(self, value=None) -> None:
        self._value = value

    @property
    def type(self) -> ValueType:
        return self._type

    @property
    def value(self):
        return self._value


class NullValue(CellValue):
    _type = ValueType.NULL

    def __init__(self) -> None:
        super().__init__(None)


class NumberValue(CellValue):
    _type = ValueType.NUMBER


class StringValue(CellValue):
    _type = ValueType.STRING


class DateValue(CellValue):
    _type = ValueType.DATE

    @property
    def value(self) -> DateTime:
        return self._value


class FormulaValue(CellValue):
    _type = ValueType.FORMULA

    @property
    def value(self) -> Formula:
        return self._value


class HyperlinkValue(CellValue):
    _type = ValueType.HYPERLINK

    @property
    def value(self) -> Hyperlink:
        return self._value


class MergeValue(CellValue):
    """Value of a merge member: a handle on the master cell's position.

    The member's own value is discarded; reads resolve through the master.
    """

    _type = ValueType.MERGE

    def __init__(self, master_ref: Tuple[int, int]) -> None:
        super().__init__(None)
        self.master_ref = master_ref


def _value_from(value) -> CellValue:
    if value is None:
        return NullValue()
    elif isinstance(value, str):
        return StringValue(value)
    elif isinstance(value, bool):
        raise ValueError("Can't determine cell type from type bool")
    elif isinstance(value, int):
        return NumberValue(value)
    elif isinstance(value, float):
        rounded_value = sigfig.round(value, sigfigs=MAX_SIGNIFICANT_DIGITS, warn=False)
        if rounded_value != value:
            warn(
                f"'{value}' rounded to {MAX_SIGNIFICANT_DIGITS} significant digits",
                RuntimeWarning,
                stacklevel=3,
            )
        return NumberValue(rounded_value)
    elif isinstance(value, (DateTime, builtin_datetime)):
        return DateValue(pendulum_instance(value))
    elif isinstance(value, Formula):
        return FormulaValue(value)
    elif isinstance(value, Hyperlink):
        return HyperlinkValue(value)
    else:
        raise ValueError("Can't determine cell type from type " + type(value).__name__)


class Cell:
    """.. NOTE::
    Do not instantiate directly. Cells are created by :py:meth:`~grid_fidelity.Sheet.cell`
    and :py:meth:`~grid_fidelity.Row.cell`.
    """

    def __init__(self, row: object, col: int) -> None:
        self._row = row
        self.col = col
        self._value = NullValue()
        self._num_fmt = None
        self._font = None
        self._border = None
        self._fill = None
        self._alignment = None

    def __str__(self) -> str:
        return f"{self.address}: type={self.type.name}, value={self.value!r}"

    def __repr__(self) -> str:
        return f"<Cell {self._row._sheet.name}!{self.address}>"

    @property
    def row(self) -> int:
        """int: The cell's row number (one indexed)."""
        return self._row.number

    @property
    def address(self) -> str:
        """str: The cell's position in A1 notation."""
        return rowcol_to_cell(self._row.number, self.col)

    @property
    def type(self) -> ValueType:
        """ValueType: The type of the cell's value.

        Merge members are always ``ValueType.MERGE``.
        """
        return self._value.type

    @property
    def value(self):
        """The value of the cell.

        Values of merge members are those of their master cell. Assigning to a
        merge member assigns to the master.

        Raises
        ------
        ValueError:
            If the cell type cannot be determined from the assigned value.
        RowCommittedError:
            If the cell's row has been committed.
        """
        if isinstance(self._value, MergeValue):
            return self.master.value
        return self._value.value

    @value.setter
    def value(self, value) -> None:
        if isinstance(self._value, MergeValue):
            self.master.value = value
            return
        self._check_uncommitted()
        self._value = _value_from(value)

    @property
    def master(self) -> "Cell":
        """Cell: The master of the cell's merged range, or the cell itself."""
        if isinstance(self._value, MergeValue):
            return self._row._sheet.cell(*self._value.master_ref)
        return self

    @property
    def is_merged(self) -> bool:
        """bool: ``True`` if the cell is a merge member (the master is not)."""
        return isinstance(self._value, MergeValue)

    @property
    def num_fmt(self) -> Optional[str]:
        """str | None: The cell's number format string."""
        return self._num_fmt

    @num_fmt.setter
    def num_fmt(self, value: Optional[str]) -> None:
        if value is not None and not isinstance(value, str):
            raise TypeError("number format must be a string")
        self._check_uncommitted()
        self._num_fmt = value

    @property
    def font(self) -> Optional[Font]:
        """Font | None: The cell's font."""
        return self._font

    @font.setter
    def font(self, value: Union[Font, dict, None]) -> None:
        self._check_uncommitted()
        self._font = Font.from_dict(value)

    @property
    def border(self) -> Optional[Border]:
        """Border | None: The cell's border."""
        return self._border

    @border.setter
    def border(self, value: Union[Border, dict, None]) -> None:
        self._check_uncommitted()
        self._border = Border.from_dict(value)

    @property
    def fill(self) -> Union[PatternFill, GradientFill, None]:
        """PatternFill | GradientFill | None: The cell's background fill."""
        return self._fill

    @fill.setter
    def fill(self, value: Union[PatternFill, GradientFill, dict, None]) -> None:
        self._check_uncommitted()
        self._fill = fill_from_dict(value)

    @property
    def alignment(self) -> Optional[Alignment]:
        """Alignment | None: The cell's text alignment."""
        return self._alignment

    @alignment.setter
    def alignment(self, value: Union[Alignment, dict, None]) -> None:
        self._check_uncommitted()
        self._alignment = Alignment.from_dict(value)

    @property
    def style(self) -> dict:
        """dict: The style attributes that are set on the cell."""
        return {
            attr: getattr(self, attr) for attr in STYLE_ATTRS if getattr(self, attr) is not None
        }

    def _copy_style(self, cell: "Cell") -> None:
        for attr in STYLE_ATTRS:
            setattr(self, "_" + attr, getattr(cell, attr))

    def _merge(self, master: "Cell") -> None:
        self._check_uncommitted()
        if not isinstance(self._value, (NullValue, MergeValue)):
            warn(
                f"{self.address}: value discarded by merge with {master.address}",
                GridWarning,
                stacklevel=3,
            )
        self._value = MergeValue((master.row, master.col))
        self._copy_style(master)

    def _unmerge(self) -> None:
        self._check_uncommitted()
        if isinstance(self._value, MergeValue):
            self._value = NullValue()

    def _check_uncommitted(self) -> None:
        if self._row.committed:
            msg = f"cannot modify {self.address}: row {self._row.number} is committed"
            raise RowCommittedError(msg)
