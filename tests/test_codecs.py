import json

import pendulum
import pytest

from grid_fidelity import (
    CsvCodec,
    Document,
    Formula,
    Hyperlink,
    ModelCodec,
    PackageCodec,
    RowEvent,
    StreamEnd,
    ValueType,
    codec_for,
    csv_row_events,
)
from grid_fidelity.fixtures import STYLES, TEST_VALUES

CSV_ROW_1 = ",".join(
    [
        "7",
        '"Hello, World!"',
        "2016-05-19T12:34:56Z",
        "7",
        "",
        "http://www.link.com",
        '"<a href=""www.whatever.com"">Talk to the H&amp;</a>"',
    ]
)


def test_codec_for():
    assert isinstance(codec_for("full"), PackageCodec)
    assert isinstance(codec_for("reduced-model"), ModelCodec)
    assert isinstance(codec_for("plain-text"), CsvCodec)
    with pytest.raises(KeyError) as e:
        _ = codec_for("xlsx")
    assert "no codec for profile 'xlsx'" in str(e.value)


def test_model_codec(reference_document):
    data = ModelCodec().dumps(reference_document)
    sheet = data["sheets"][0]
    assert sheet["name"] == "blort"
    assert sheet["merges"] == ["A2:B3", "C2:D3"]
    assert [x["number"] for x in sheet["rows"]] == [1, 2, 3, 4, 5, 6, 7, 8, 10]
    assert [x["col"] for x in sheet["rows"][2]["cells"]] == []
    assert sheet["rows"][0]["cells"][3] == {
        "col": 4,
        "type": "FORMULA",
        "value": {"formula": "A1", "result": 7},
    }
    assert sheet["rows"][6]["cells"][0]["alignment"] == {"horizontal": "nowhere"}

    doc = ModelCodec().loads(data)
    sheet = doc.sheets[0]
    assert sheet.cell("A7").alignment == STYLES["bad_alignments"][0]["alignment"]
    assert sheet.cell("C1").value == TEST_VALUES["date"]
    assert sheet.cell("F1").value == Hyperlink("www.link.com", "http://www.link.com")
    assert sheet.cell("B3").master is sheet.cell("A2")
    assert not sheet.row(1).committed


def test_package_dates(reference_document):
    codec = PackageCodec()
    text = codec.dumps(reference_document)
    data = json.loads(text)
    serial = data["sheets"][0]["rows"][0]["cells"][2]["value"]
    assert int(serial) == 42509
    assert serial == pytest.approx(42509.52426839, abs=1e-8)

    date = codec.loads(text).sheets[0].cell("C1").value
    assert isinstance(date, pendulum.DateTime)
    assert abs((date - TEST_VALUES["date"]).total_seconds()) < 0.001


def test_package_drops_bad_alignments(reference_document):
    data = json.loads(PackageCodec().dumps(reference_document))
    bad_row = data["sheets"][0]["rows"][6]
    assert [x["value"] for x in bad_row["cells"]] == [x["text"] for x in STYLES["bad_alignments"]]
    assert all("alignment" not in x for x in bad_row["cells"])
    good_row = data["sheets"][0]["rows"][5]
    assert all("alignment" in x for x in good_row["cells"])


def test_package_keeps_sheet_properties(reference_document):
    sheet = PackageCodec().loads(PackageCodec().dumps(reference_document)).sheets[0]
    assert sheet.properties == reference_document.sheets[0].properties
    assert sheet.page_setup == reference_document.sheets[0].page_setup
    assert sheet.column(10).outline_level == 1
    assert sheet.row(10).collapsed


def test_csv_dumps(reference_document):
    lines = CsvCodec().dumps(reference_document).split("\r\n")
    assert lines[0] == CSV_ROW_1
    assert lines[1] == "5,5,,"
    assert lines[2] == "5,5,,"
    assert lines[8] == ""

    assert CsvCodec().dumps(Document()) == ""


def test_csv_gaps():
    doc = Document()
    sheet = doc.add_sheet("data")
    sheet.cell("B3").value = Formula("A1", result=2.5)
    doc.add_sheet("ignored").cell("A1").value = "ignored"
    assert CsvCodec().dumps(doc) == "\r\n\r\n,2.5\r\n"


def test_csv_loads():
    text = '7,-1.5,"Hello, World!",,2016-05-19T12:34:56Z,2016-05-19 12:34,1e3,2016-13-45T00:00\r\n'
    sheet = CsvCodec().loads(text).sheets[0]
    assert sheet.name == "sheet1"
    assert sheet.cell("A1").value == 7
    assert sheet.cell("B1").value == -1.5
    assert sheet.cell("C1").value == "Hello, World!"
    assert sheet.find_cell("D1") is None
    assert sheet.cell("E1").type == ValueType.DATE
    assert sheet.cell("E1").value == pendulum.datetime(2016, 5, 19, 12, 34, 56)
    assert sheet.cell("F1").value == pendulum.datetime(2016, 5, 19, 12, 34)
    assert sheet.cell("G1").value == 1000.0
    assert sheet.cell("H1").value == "2016-13-45T00:00"


def test_csv_errors():
    with pytest.raises(RuntimeError) as e:
        _ = CsvCodec().loads("a,b\r\n" + "x" * 200000 + "\r\n")
    assert str(e.value).startswith("line 2: ")


def test_csv_row_events(reference_document):
    events = list(csv_row_events(CsvCodec().dumps(reference_document)))
    assert isinstance(events[-1], StreamEnd)
    assert [x.number for x in events[:-1]] == [1, 2, 3, 4, 5, 6, 7, 8, 10]

    row_1 = events[0]
    assert isinstance(row_1, RowEvent)
    assert row_1.find_cell("A").type == ValueType.NUMBER
    assert row_1.find_cell("C").type == ValueType.DATE
    assert row_1.find_cell("E") is None
    assert row_1.find_cell("F").value == "http://www.link.com"
    assert row_1.height is None

    assert list(csv_row_events("")) == [StreamEnd()]
