import logging

from grid_fidelity import __name__ as grid_fidelity_name
from grid_fidelity.constants import REFERENCE_SHEET_NAME
from grid_fidelity.document import Document
from grid_fidelity.fixtures import PAGE_SETUP, SHEET_PROPERTIES, STYLES, TEST_VALUES, VIEWS

logger = logging.getLogger(grid_fidelity_name)
debug = logger.debug

__all__ = ["build_reference_document"]


def build_reference_document(include_bad_alignments: bool = True) -> Document:
    """
    Build the reference document.

    The document has one sheet, ``"blort"``, containing exactly one instance
    of every value type, style attribute and structural feature that
    :py:func:`~grid_fidelity.check` inspects. Rows are committed as they are
    completed so that the document can also be streamed.

    Parameters
    ----------
    include_bad_alignments: bool, optional, default: ``True``
        Add row 7, whose cells use alignments that strict packages reject.

    Returns
    -------
    Document:
        The reference document.
    """
    doc = Document()
    doc.views = VIEWS

    sheet = doc.add_sheet(REFERENCE_SHEET_NAME, properties=SHEET_PROPERTIES, page_setup=PAGE_SETUP)

    sheet.cell("J10").value = 1
    sheet.column(10).outline_level = 1
    sheet.row(10).outline_level = 1

    sheet.cell("A1").value = TEST_VALUES["num"]
    sheet.cell("B1").value = TEST_VALUES["str"]
    sheet.cell("C1").value = TEST_VALUES["date"]
    sheet.cell("D1").value = TEST_VALUES["formulas"][0]
    sheet.cell("E1").value = TEST_VALUES["formulas"][1]
    sheet.cell("F1").value = TEST_VALUES["hyperlink"]
    sheet.cell("G1").value = TEST_VALUES["str2"]
    sheet.row(1).commit()

    # Merged square with a number value
    sheet.cell("A2").value = 5
    sheet.merge_cells("A2:B3")

    # Merged square with no value
    sheet.merge_cells("C2:D3")
    sheet.row(3).commit()

    _add_number_formats(sheet.row(4))
    _add_fonts(sheet.row(5))
    _add_alignments(sheet.row(6), STYLES["alignments"], height=42)
    if include_bad_alignments:
        _add_alignments(sheet.row(7), STYLES["bad_alignments"])
    sheet.row(7).commit()
    _add_fills(sheet.row(8))

    debug("build_reference_document: %d rows", len(sheet.rows))
    return doc


def _add_number_formats(row):
    borders = STYLES["borders"]
    for col, num_fmt, border in [
        ("A", TEST_VALUES["num_fmt1"], borders["thin"]),
        ("C", TEST_VALUES["num_fmt2"], borders["double_red"]),
        ("E", None, borders["thick_rainbow"]),
    ]:
        cell = row.cell(col)
        cell.value = 1.5
        cell.num_fmt = num_fmt
        cell.border = border
    row.commit()


def _add_fonts(row):
    fonts = STYLES["fonts"]
    row.cell("A").value = TEST_VALUES["str"]
    row.cell("A").font = fonts["arial_black_ui14"]
    row.cell("B").value = TEST_VALUES["str"]
    row.cell("B").font = fonts["broadway_red_outline20"]
    row.cell("C").value = TEST_VALUES["str"]
    row.cell("C").font = fonts["comic_sans_ud_b16"]

    row.cell("D").value = 1.6
    row.cell("D").num_fmt = TEST_VALUES["num_fmt1"]
    row.cell("D").font = fonts["arial_black_ui14"]

    row.cell("E").value = 1.6
    row.cell("E").num_fmt = TEST_VALUES["num_fmt2"]
    row.cell("E").font = fonts["broadway_red_outline20"]

    row.cell("F").value = TEST_VALUES["date"]
    row.cell("F").num_fmt = TEST_VALUES["num_fmt_date"]
    row.cell("F").font = fonts["comic_sans_ud_b16"]
    row.commit()


def _add_alignments(row, alignments, height=None):
    if height is not None:
        row.height = height
    for col, alignment in enumerate(alignments, start=1):
        cell = row.cell(col)
        cell.value = alignment["text"]
        cell.alignment = alignment["alignment"]
    row.commit()


def _add_fills(row):
    fills = STYLES["fills"]
    row.height = 40
    for col, (text, fill) in enumerate(
        [
            ("Blue White Horizontal Gradient", fills["blue_white_h_grad"]),
            ("Red Dark Vertical", fills["red_dark_vertical"]),
            ("Red Green Dark Trellis", fills["red_green_dark_trellis"]),
            ("RGB Path Gradient", fills["rgb_path_grad"]),
        ],
        start=1,
    ):
        row.cell(col).value = text
        row.cell(col).fill = fill
    row.commit()
