import pytest
from pytest_check import check

from grid_fidelity.exceptions import InvalidAddress
from grid_fidelity.xref_utils import (
    cell_to_rowcol,
    col_to_name,
    name_to_col,
    range_to_rect,
    rowcol_to_cell,
    xl_range,
)


def test_cell_names():
    assert rowcol_to_cell(1, 1) == "A1"
    assert rowcol_to_cell(10, 10) == "J10"
    assert rowcol_to_cell(3, 27) == "AA3"
    assert cell_to_rowcol("A1") == (1, 1)
    assert cell_to_rowcol("J10") == (10, 10)
    assert cell_to_rowcol("XFD1048576") == (1048576, 16384)


def test_col_names():
    assert col_to_name(1) == "A"
    assert col_to_name(26) == "Z"
    assert col_to_name(27) == "AA"
    assert col_to_name(52) == "AZ"
    assert col_to_name(53) == "BA"
    assert col_to_name(702) == "ZZ"
    assert col_to_name(703) == "AAA"
    assert name_to_col("ZZ") == 702
    assert name_to_col("AAA") == 703


def test_round_trip():
    for row in [1, 2, 9, 10, 99, 1000, 1048576]:
        for col in list(range(1, 60)) + [701, 702, 703, 16384]:
            check.equal(cell_to_rowcol(rowcol_to_cell(row, col)), (row, col))


def test_ranges():
    assert xl_range(2, 1, 3, 2) == "A2:B3"
    assert xl_range(3, 3, 3, 3) == "C3"
    assert range_to_rect("A2:B3") == (2, 1, 3, 2)
    assert range_to_rect("B3:A2") == (2, 1, 3, 2)
    assert range_to_rect("A3:B2") == (2, 1, 3, 2)
    assert range_to_rect("C3") == (3, 3, 3, 3)


@pytest.mark.parametrize(
    "address",
    ["", "A", "1", "A0", "A01", "a1", "1A", "A1B", " A1", "A-1", "A1:B2", None, 11],
)
def test_invalid_addresses(address):
    with pytest.raises(InvalidAddress) as e:
        _ = cell_to_rowcol(address)
    assert "invalid cell reference" in str(e.value)


def test_range_exceptions():
    with pytest.raises(InvalidAddress) as e:
        _ = rowcol_to_cell(0, 1)
    assert "row reference 0 below one" in str(e.value)

    with pytest.raises(InvalidAddress) as e:
        _ = rowcol_to_cell(1, -2)
    assert "column reference -2 below one" in str(e.value)

    with pytest.raises(InvalidAddress) as e:
        _ = col_to_name(0)
    assert "column reference 0 below one" in str(e.value)

    with pytest.raises(InvalidAddress) as e:
        _ = name_to_col("a")
    assert "invalid column reference 'a'" in str(e.value)

    with pytest.raises(InvalidAddress) as e:
        _ = range_to_rect("A1:B2:C3")
    assert "invalid cell range 'A1:B2:C3'" in str(e.value)


def test_invalid_address_is_index_error():
    with pytest.raises(IndexError):
        _ = cell_to_rowcol("A0")
