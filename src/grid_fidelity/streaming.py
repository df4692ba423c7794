"""Deliver a sheet as an ordered stream of row events and check the stream.

A stream is a sequence of :py:class:`RowEvent` objects with strictly
increasing row numbers followed by a single :py:class:`StreamEnd`. Each event
carries immutable snapshots of the row's cells, so a consumer never holds a
reference into the producer's rows.

.. code-block:: python

    >>> doc = build_reference_document()
    >>> check_stream(iter_row_events(doc.sheets[0]), REDUCED_MODEL)
"""

import asyncio
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import AsyncIterable, AsyncIterator, Iterable, Iterator, List, Mapping, Optional, Union

from grid_fidelity import __name__ as grid_fidelity_name
from grid_fidelity.cell import Cell
from grid_fidelity.checker import expectations_by_row
from grid_fidelity.constants import ValueType
from grid_fidelity.document import Row, Sheet
from grid_fidelity.exceptions import IncompleteStream, StreamOrderError
from grid_fidelity.profiles import FULL, FidelityProfile
from grid_fidelity.styles import Alignment, Border, Font, GradientFill, PatternFill
from grid_fidelity.xref_utils import name_to_col, rowcol_to_cell

logger = logging.getLogger(grid_fidelity_name)
debug = logger.debug

__all__ = [
    "CellSnapshot",
    "RowEvent",
    "StreamEnd",
    "StreamingFidelityChecker",
    "aiter_row_events",
    "check_stream",
    "check_stream_async",
    "iter_row_events",
    "snapshot_row",
]


@dataclass(frozen=True)
class CellSnapshot:
    """The resolved value, type and style of a cell at the time it was streamed.

    Merge members carry their master's value and the ``MERGE`` type, but no
    reference to the master.
    """

    row: int
    col: int
    type: ValueType = ValueType.NULL
    value: object = None
    num_fmt: Optional[str] = None
    font: Optional[Font] = None
    border: Optional[Border] = None
    fill: Union[PatternFill, GradientFill, None] = None
    alignment: Optional[Alignment] = None

    @property
    def address(self) -> str:
        return rowcol_to_cell(self.row, self.col)

    @classmethod
    def from_cell(cls, cell: Cell) -> "CellSnapshot":
        return cls(
            row=cell.row,
            col=cell.col,
            type=cell.type,
            value=cell.value,
            num_fmt=cell.num_fmt,
            font=cell.font,
            border=cell.border,
            fill=cell.fill,
            alignment=cell.alignment,
        )


@dataclass(frozen=True)
class RowEvent:
    """A row delivered by a stream: its number, height and cell snapshots by column."""

    number: int
    height: Optional[float] = None
    cells: Mapping[int, CellSnapshot] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "cells", MappingProxyType(dict(self.cells)))

    def find_cell(self, col: Union[int, str]) -> Optional[CellSnapshot]:
        if isinstance(col, str):
            col = name_to_col(col)
        return self.cells.get(col)


@dataclass(frozen=True)
class StreamEnd:
    """The terminal event of a row stream."""


def snapshot_row(row: Row) -> RowEvent:
    """Return a row event holding snapshots of every cell of a row."""
    return RowEvent(
        number=row.number,
        height=row.height,
        cells={cell.col: CellSnapshot.from_cell(cell) for cell in row.cells},
    )


def iter_row_events(sheet: Sheet) -> Iterator[Union[RowEvent, StreamEnd]]:
    """
    Stream the rows of a sheet.

    Parameters
    ----------
    sheet: Sheet
        The sheet to stream. Each row is snapshotted as it is reached, so
        rows must not be modified while the stream is consumed.

    Yields
    ------
    RowEvent | StreamEnd:
        One event per row in row order, then ``StreamEnd``.
    """
    for row in sheet.rows:
        yield snapshot_row(row)
    yield StreamEnd()


async def aiter_row_events(sheet: Sheet) -> AsyncIterator[Union[RowEvent, StreamEnd]]:
    """Stream the rows of a sheet asynchronously, yielding control between rows."""
    for event in iter_row_events(sheet):
        yield event
        await asyncio.sleep(0)


class _StreamState:
    """Progress through one stream: the last row seen and the rows not yet checked."""

    def __init__(self, expected: dict) -> None:
        self._expected = expected
        self._pending: List[int] = list(expected)
        self._skipped: List[int] = []
        self._last_row = 0
        self._ended = False

    def receive(self, event) -> None:
        if self._ended:
            raise StreamOrderError(f"event {event!r} received after end of stream")
        if isinstance(event, StreamEnd):
            self._end()
            return

        number = event.number
        if number <= self._last_row:
            raise StreamOrderError(f"row {number} received after row {self._last_row}")
        while self._pending and self._pending[0] < number:
            self._skipped.append(self._pending.pop(0))
        if self._pending and self._pending[0] == number:
            self._pending.pop(0)
            self._verify(number, event)
        self._last_row = number

    def finish(self) -> None:
        if not self._ended:
            raise IncompleteStream(f"stream ended after row {self._last_row} without end event")

    def _end(self) -> None:
        # Rows that never arrived must satisfy their expectations as empty rows
        for number in self._skipped + self._pending:
            self._verify(number, None)
        self._skipped = []
        self._pending = []
        self._ended = True
        debug("stream: end after row %d", self._last_row)

    def _verify(self, number: int, event: Optional[RowEvent]) -> None:
        (cells, rows) = self._expected[number]
        debug("stream: row %d: %d expectations", number, len(cells) + len(rows))
        for expectation in cells:
            expectation.verify(event)
        for expectation in rows:
            expectation.verify(event)


class StreamingFidelityChecker:
    """
    Check a stream of row events against the reference document.

    Each row is checked against that row's expectations as it arrives, using
    only the event's own cells. Sheet level properties, views and merge
    masters cannot be observed in a stream and are not checked.

    Parameters
    ----------
    profile: FidelityProfile, optional, default: ``FULL``
        The features the stream's representation preserves.
    """

    def __init__(self, profile: FidelityProfile = FULL) -> None:
        self.profile = profile
        self._expected = expectations_by_row(profile)

    def check(self, events: Iterable) -> None:
        """
        Consume and check a stream of row events.

        Raises
        ------
        FidelityError:
            For the first cell or row attribute that does not match.
        StreamOrderError:
            If row numbers do not strictly increase or an event follows ``StreamEnd``.
        IncompleteStream:
            If the events run out before ``StreamEnd``.
        """
        state = _StreamState(self._expected)
        for event in events:
            state.receive(event)
        state.finish()

    async def check_async(self, events: AsyncIterable) -> None:
        """Consume and check an asynchronous stream of row events, one event at a time."""
        state = _StreamState(self._expected)
        async for event in events:
            state.receive(event)
        state.finish()


def check_stream(events: Iterable, profile: FidelityProfile = FULL) -> None:
    """Check a stream of row events. See :py:meth:`StreamingFidelityChecker.check`."""
    StreamingFidelityChecker(profile).check(events)


async def check_stream_async(events: AsyncIterable, profile: FidelityProfile = FULL) -> None:
    """Check an asynchronous stream of row events."""
    await StreamingFidelityChecker(profile).check_async(events)
