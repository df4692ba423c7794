"""Reference encodings of a document for each fidelity profile.

These are simple stand-ins for real spreadsheet formats that lose
information the way the formats they represent do:

* :py:class:`PackageCodec` (``full``): JSON text. Dates are stored as serial
  day numbers and alignments that fail validation are dropped.
* :py:class:`ModelCodec` (``reduced-model``): a plain dict that keeps
  everything, including invalid alignments.
* :py:class:`CsvCodec` (``plain-text``): CSV text of the first sheet. Only
  values survive, formulas as their results and hyperlinks as their targets,
  and dates to the second.
"""

import csv
import json
import logging
import re
from dataclasses import asdict
from datetime import datetime as builtin_datetime
from datetime import timedelta, timezone
from io import StringIO
from typing import Iterator, Union

import pendulum
from dateutil.parser import parse

from grid_fidelity import __name__ as grid_fidelity_name
from grid_fidelity.cell import Formula, Hyperlink, _value_from
from grid_fidelity.constants import (
    MILLISECONDS_IN_DAY,
    PROFILE_FULL,
    PROFILE_PLAIN_TEXT,
    PROFILE_REDUCED_MODEL,
    SERIAL_DATE_EPOCH,
    ValueType,
)
from grid_fidelity.document import Document, Row, Sheet, WorkbookView
from grid_fidelity.streaming import CellSnapshot, RowEvent, StreamEnd
from grid_fidelity.styles import STYLE_ATTRS, style_to_dict

logger = logging.getLogger(grid_fidelity_name)
debug = logger.debug

__all__ = [
    "CsvCodec",
    "ModelCodec",
    "PackageCodec",
    "codec_for",
    "csv_row_events",
]

CSV_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

INTEGER_REGEX = re.compile(r"^-?\d+$")
FLOAT_REGEX = re.compile(r"^-?(\d+\.\d*|\.\d+|\d+)([eE][-+]?\d+)?$")
DATE_REGEX = re.compile(r"^\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}(:\d{2}(\.\d+)?)?(Z|[-+]\d{2}:?\d{2})?$")


class ModelCodec:
    """Encode documents as plain dicts of values and style attributes."""

    profile_name = PROFILE_REDUCED_MODEL

    def dumps(self, document: Document) -> dict:
        """Return a dict holding everything in the document."""
        return {
            "views": [asdict(view) for view in document.views],
            "sheets": [self._dump_sheet(sheet) for sheet in document.sheets],
        }

    def loads(self, data: dict) -> Document:
        """Return a new document decoded from the output of :py:meth:`dumps`."""
        doc = Document()
        doc.views = [WorkbookView.from_dict(x) for x in data["views"]]
        for sheet_data in data["sheets"]:
            self._load_sheet(doc, sheet_data)
        return doc

    def _dump_sheet(self, sheet: Sheet) -> dict:
        debug("%s: dump sheet '%s'", self.profile_name, sheet.name)
        return {
            "name": sheet.name,
            "properties": asdict(sheet.properties),
            "page_setup": asdict(sheet.page_setup),
            "columns": [
                {"number": col.number, "width": col.width, "outline_level": col.outline_level}
                for col in sheet.columns
            ],
            "rows": [self._dump_row(row) for row in sheet.rows],
            "merges": sheet.merges,
        }

    def _dump_row(self, row: Row) -> dict:
        return {
            "number": row.number,
            "height": row.height,
            "outline_level": row.outline_level,
            # Merge members are recreated by merging
            "cells": [self._dump_cell(cell) for cell in row.cells if not cell.is_merged],
        }

    def _dump_cell(self, cell) -> dict:
        data = {"col": cell.col, "type": cell.type.name, "value": self._dump_value(cell)}
        if cell.num_fmt is not None:
            data["num_fmt"] = cell.num_fmt
        styles = {
            "font": cell.font,
            "border": cell.border,
            "fill": cell.fill,
            "alignment": self._dump_alignment(cell),
        }
        for attr, style in styles.items():
            if style is not None:
                data[attr] = style_to_dict(style)
        return data

    def _dump_value(self, cell):
        value = cell.value
        if cell.type == ValueType.DATE:
            return self._dump_date(value)
        elif cell.type == ValueType.FORMULA:
            return {"formula": value.formula, "result": value.result}
        elif cell.type == ValueType.HYPERLINK:
            return {"text": value.text, "hyperlink": value.hyperlink}
        return value

    def _dump_date(self, value):
        return value

    def _dump_alignment(self, cell):
        return cell.alignment

    def _load_sheet(self, doc: Document, data: dict) -> None:
        sheet = doc.add_sheet(
            data["name"], properties=data["properties"], page_setup=data["page_setup"]
        )
        for col_data in data["columns"]:
            column = sheet.column(col_data["number"])
            column.width = col_data["width"]
            column.outline_level = col_data["outline_level"]
        for row_data in data["rows"]:
            row = sheet.row(row_data["number"])
            row.height = row_data["height"]
            row.outline_level = row_data["outline_level"]
            for cell_data in row_data["cells"]:
                self._load_cell(row, cell_data)
        for merge in data["merges"]:
            sheet.merge_cells(merge)
        debug("%s: loaded sheet '%s': %d rows", self.profile_name, sheet.name, len(sheet.rows))

    def _load_cell(self, row: Row, data: dict) -> None:
        cell = row.cell(data["col"])
        cell.value = self._load_value(ValueType[data["type"]], data["value"])
        for attr in STYLE_ATTRS:
            if attr in data:
                setattr(cell, attr, data[attr])

    def _load_value(self, value_type: ValueType, value):
        if value_type == ValueType.DATE:
            return self._load_date(value)
        elif value_type == ValueType.FORMULA:
            return Formula(**value)
        elif value_type == ValueType.HYPERLINK:
            return Hyperlink(**value)
        return value

    def _load_date(self, value):
        return value


class PackageCodec(ModelCodec):
    """Encode documents as JSON text, the way a strict spreadsheet package does.

    Dates become serial day numbers counted from 30 December 1899, which
    loses precision below a millisecond. Alignments are validated as they are
    written and invalid alignments are not written at all.
    """

    profile_name = PROFILE_FULL

    def dumps(self, document: Document) -> str:
        return json.dumps(super().dumps(document))

    def loads(self, data: Union[str, bytes]) -> Document:
        return super().loads(json.loads(data))

    def _dump_date(self, value) -> float:
        delta = pendulum.instance(value) - SERIAL_DATE_EPOCH
        return timedelta.total_seconds(delta) * 1000 / MILLISECONDS_IN_DAY

    def _load_date(self, value: float):
        milliseconds = round(value * MILLISECONDS_IN_DAY)
        return SERIAL_DATE_EPOCH + pendulum.duration(milliseconds=milliseconds)

    def _dump_alignment(self, cell):
        alignment = cell.alignment
        if alignment is not None:
            errors = alignment.validate()
            if errors:
                debug("%s: %s: alignment dropped: %s", self.profile_name, cell.address, errors)
                return None
        return alignment


def _format_csv_value(value) -> str:
    if value is None:
        return ""
    elif isinstance(value, Formula):
        return _format_csv_value(value.result)
    elif isinstance(value, Hyperlink):
        return value.hyperlink
    elif isinstance(value, builtin_datetime):
        return pendulum.instance(value).in_timezone("UTC").strftime(CSV_DATE_FORMAT)
    return str(value)


def _parse_date(text: str) -> pendulum.DateTime:
    value = parse(text)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return pendulum.instance(value)


def _parse_csv_value(text: str):
    """Return a CSV field as the value it most likely held."""
    if text == "":
        return None
    elif INTEGER_REGEX.match(text):
        return int(text)
    elif FLOAT_REGEX.match(text):
        return float(text)
    elif DATE_REGEX.match(text):
        try:
            return _parse_date(text)
        except (ValueError, OverflowError):
            return text
    return text


def _iter_csv_records(text: str):
    lineno = 1
    try:
        for record in csv.reader(StringIO(text), dialect="excel"):
            yield (lineno, record)
            lineno += 1
    except csv.Error as e:
        msg = f"line {lineno}: {e.args[0]}"
        raise RuntimeError(msg) from e


class CsvCodec:
    """Encode the first sheet of a document as CSV text.

    Decoding creates a document with a single sheet named ``sheet1`` and
    guesses the type of each field: integers, floats and ISO 8601 dates are
    recognized and everything else is a string. Empty fields are empty cells.
    """

    profile_name = PROFILE_PLAIN_TEXT

    def dumps(self, document: Document) -> str:
        output = StringIO()
        writer = csv.writer(output, dialect="excel")
        if len(document.sheets) > 0:
            sheet = document.sheets[0]
            last_row = max([row.number for row in sheet.rows], default=0)
            for number in range(1, last_row + 1):
                row = sheet.find_row(number)
                values = row.values[1:] if row is not None else []
                writer.writerow([_format_csv_value(value) for value in values])
            debug("%s: dump sheet '%s': %d rows", self.profile_name, sheet.name, last_row)
        return output.getvalue()

    def loads(self, data: str) -> Document:
        doc = Document()
        sheet = doc.add_sheet()
        for (number, record) in _iter_csv_records(data):
            for col, text in enumerate(record, start=1):
                value = _parse_csv_value(text)
                if value is not None:
                    sheet.cell(number, col).value = value
        debug("%s: loaded sheet '%s': %d rows", self.profile_name, sheet.name, len(sheet.rows))
        return doc


def csv_row_events(text: str) -> Iterator[Union[RowEvent, StreamEnd]]:
    """
    Stream CSV text as row events, parsing one record at a time.

    Empty records produce no event. The stream ends with ``StreamEnd``.
    """
    for (number, record) in _iter_csv_records(text):
        cells = {}
        for col, field in enumerate(record, start=1):
            value = _parse_csv_value(field)
            if value is not None:
                cell_value = _value_from(value)
                cells[col] = CellSnapshot(number, col, cell_value.type, cell_value.value)
        if cells:
            yield RowEvent(number, cells=cells)
    yield StreamEnd()


CODECS = {
    codec.profile_name: codec for codec in [PackageCodec(), ModelCodec(), CsvCodec()]
}


def codec_for(profile_name: str):
    """Return the codec for a profile name.

    Raises
    ------
    KeyError:
        If no codec encodes documents for the profile.
    """
    if profile_name not in CODECS:
        raise KeyError(f"no codec for profile '{profile_name}'")
    return CODECS[profile_name]
