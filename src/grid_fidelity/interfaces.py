"""Read-only views of a document used by the fidelity checkers.

The grid model, documents decoded by the codecs and streamed row snapshots
all satisfy these protocols, so the checkers never depend on how a document
was produced.
"""

from typing import Iterable, List, Optional, Protocol, Union

from grid_fidelity.constants import ValueType


class CellView(Protocol):
    row: int
    col: int

    @property
    def address(self) -> str: ...

    @property
    def type(self) -> ValueType: ...

    @property
    def value(self): ...

    @property
    def num_fmt(self) -> Optional[str]: ...

    @property
    def font(self): ...

    @property
    def border(self): ...

    @property
    def fill(self): ...

    @property
    def alignment(self): ...


class RowView(Protocol):
    number: int

    @property
    def height(self) -> Optional[float]: ...

    def find_cell(self, col: Union[int, str]) -> Optional[CellView]: ...


class MasteredCellView(CellView, Protocol):
    @property
    def master(self) -> CellView: ...


class ColumnView(Protocol):
    number: int

    @property
    def outline_level(self) -> int: ...

    @property
    def collapsed(self) -> bool: ...


class OutlinedRowView(RowView, Protocol):
    @property
    def outline_level(self) -> int: ...

    @property
    def collapsed(self) -> bool: ...


class SheetView(Protocol):
    @property
    def name(self) -> str: ...

    @property
    def properties(self): ...

    @property
    def page_setup(self): ...

    def find_row(self, number: int) -> Optional[OutlinedRowView]: ...

    def find_column(self, number: Union[int, str]) -> Optional[ColumnView]: ...

    def find_cell(self, *args) -> Optional[MasteredCellView]: ...


class DocumentView(Protocol):
    @property
    def views(self) -> List: ...

    @property
    def sheets(self) -> Iterable[SheetView]: ...

    def get_sheet(self, sheet_name: str) -> Optional[SheetView]: ...
