import pytest
from pytest_check import check

from grid_fidelity import (
    Document,
    GridWarning,
    InvalidAddress,
    OverlappingMergeError,
    RowCommittedError,
    ValueType,
)


def test_merge_with_value(empty_sheet):
    sheet = empty_sheet
    sheet.cell("A2").value = 5
    sheet.merge_cells("A2:B3")

    master = sheet.cell("A2")
    assert master.type == ValueType.NUMBER
    assert master.master is master
    assert not master.is_merged
    for address in ["A3", "B2", "B3"]:
        check.equal(sheet.cell(address).value, 5)
        check.equal(sheet.cell(address).type, ValueType.MERGE)
        check.is_(sheet.cell(address).master, master)
        check.is_true(sheet.cell(address).is_merged)


def test_merge_without_value(empty_sheet):
    sheet = empty_sheet
    sheet.merge_cells("C2:D3")

    master = sheet.cell("C2")
    assert master.type == ValueType.NULL
    assert master.value is None
    assert master.master is master
    for address in ["D2", "C3", "D3"]:
        check.is_none(sheet.cell(address).value)
        check.equal(sheet.cell(address).type, ValueType.MERGE)
        check.is_(sheet.cell(address).master, master)


def test_merge_forms(empty_sheet):
    sheet = empty_sheet
    sheet.merge_cells("B3:A2")
    sheet.merge_cells("C2", "D3")
    sheet.merge_cells(5, 1, 6, 4)
    assert sheet.merges == ["A2:B3", "C2:D3", "A5:D6"]
    assert sheet.cell("B3").master is sheet.cell("A2")
    assert sheet.cell("D6").master is sheet.cell("A5")


def test_members_discard_values(empty_sheet):
    sheet = empty_sheet
    sheet.cell("A2").value = 5
    sheet.cell("B3").value = "lost"
    with pytest.warns(GridWarning, match="B3: value discarded by merge with A2"):
        sheet.merge_cells("A2:B3")
    assert sheet.cell("B3").value == 5

    sheet.unmerge_cells("A2:B3")
    assert sheet.cell("A2").value == 5
    assert sheet.cell("B3").value is None
    assert sheet.cell("B3").type == ValueType.NULL


def test_member_values_forward_to_master(empty_sheet):
    sheet = empty_sheet
    sheet.merge_cells("C2:D3")
    sheet.cell("D3").value = "Hello"
    assert sheet.cell("C2").value == "Hello"
    assert sheet.cell("C2").type == ValueType.STRING
    assert sheet.cell("D2").value == "Hello"
    assert sheet.cell("D3").type == ValueType.MERGE

    sheet.cell("C2").value = None
    assert sheet.cell("D2").value is None
    assert sheet.cell("C2").type == ValueType.NULL


def test_members_copy_master_style(empty_sheet):
    sheet = empty_sheet
    sheet.cell("A2").value = 5
    sheet.cell("A2").num_fmt = "# ?/?"
    sheet.cell("A2").font = {"name": "Arial", "size": 14}
    sheet.merge_cells("A2:B3")
    assert sheet.cell("B3").num_fmt == "# ?/?"
    assert sheet.cell("B3").font == sheet.cell("A2").font
    assert sheet.cell("B3").border is None


def test_overlapping_merges(empty_sheet):
    sheet = empty_sheet
    sheet.merge_cells("A1:B2")
    with pytest.raises(OverlappingMergeError) as e:
        sheet.merge_cells("B2:C3")
    assert e.value.existing == "A1:B2"
    assert e.value.requested == "B2:C3"
    assert "cannot merge B2:C3: overlaps merged range A1:B2" in str(e.value)

    with pytest.raises(OverlappingMergeError):
        sheet.merge_cells("A1:B2")

    sheet.merge_cells("C1:D2")
    sheet.merge_cells("A3:B4")
    assert sheet.merges == ["A1:B2", "C1:D2", "A3:B4"]


def test_merge_errors(empty_sheet):
    sheet = empty_sheet
    with pytest.raises(ValueError) as e:
        sheet.merge_cells("A1")
    assert "cannot merge single cell A1" in str(e.value)

    with pytest.raises(ValueError):
        sheet.merge_cells("B2:B2")

    with pytest.raises(InvalidAddress):
        sheet.merge_cells("A1:B")

    with pytest.raises(InvalidAddress):
        sheet.merge_cells(1, 2, 3)

    with pytest.raises(KeyError) as e:
        sheet.unmerge_cells("A1:B2")
    assert "'A1:B2' is not a merged range" in str(e.value)
    assert sheet.merges == []


def test_merge_committed_rows(empty_sheet):
    sheet = empty_sheet
    sheet.cell("A1").value = 1
    sheet.row(1).commit()
    with pytest.raises(RowCommittedError):
        sheet.merge_cells("A1:B2")
    assert sheet.merges == []
    assert sheet.find_cell("B2") is None


def test_unmerge(empty_sheet):
    sheet = empty_sheet
    sheet.cell("A2").value = 5
    sheet.merge_cells("A2:B3")
    sheet.unmerge_cells("B3:A2")
    assert sheet.merges == []
    for address in ["A3", "B2", "B3"]:
        check.equal(sheet.cell(address).type, ValueType.NULL)
        check.is_(sheet.cell(address).master, sheet.cell(address))
    sheet.merge_cells("A2:C3")
    assert sheet.cell("C3").value == 5


def test_merges_per_sheet():
    doc = Document()
    sheet1 = doc.add_sheet()
    sheet2 = doc.add_sheet()
    sheet1.merge_cells("A1:B2")
    sheet2.merge_cells("A1:B2")
    assert sheet1.cell("B2").master is sheet1.cell("A1")
    assert sheet2.cell("B2").master is sheet2.cell("A1")
