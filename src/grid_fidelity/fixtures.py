"""Reference values and styles used to build and check the reference document.

The data is read from JSON files shipped in ``grid_fidelity/data`` and
converted into the value and style objects the grid model uses.
"""

import json
from importlib.resources import files

import pendulum

from grid_fidelity.cell import Formula, Hyperlink
from grid_fidelity.document import PageSetup, SheetProperties, WorkbookView
from grid_fidelity.styles import Alignment, Border, Font, fill_from_dict

DATA_DIR = files("grid_fidelity") / "data"


def _load(filename: str):
    return json.loads((DATA_DIR / filename).read_text(encoding="utf-8"))


def _fix_values(values: dict) -> dict:
    values["date"] = pendulum.parse(values["date"])
    values["formulas"] = [Formula(**x) for x in values["formulas"]]
    values["hyperlink"] = Hyperlink(**values["hyperlink"])
    return values


def _fix_styles(styles: dict) -> dict:
    return {
        "fonts": {k: Font.from_dict(v) for k, v in styles["fonts"].items()},
        "borders": {k: Border.from_dict(v) for k, v in styles["borders"].items()},
        "fills": {k: fill_from_dict(v) for k, v in styles["fills"].items()},
        "alignments": [
            {"text": x["text"], "alignment": Alignment.from_dict(x["alignment"])}
            for x in styles["alignments"]
        ],
        "bad_alignments": [
            {"text": x["text"], "alignment": Alignment.from_dict(x["alignment"])}
            for x in styles["bad_alignments"]
        ],
    }


TEST_VALUES = _fix_values(_load("test-values.json"))
STYLES = _fix_styles(_load("test-styles.json"))
SHEET_PROPERTIES = SheetProperties.from_dict(_load("sheet-properties.json"))
PAGE_SETUP = PageSetup.from_dict(_load("page-setup.json"))
VIEWS = [WorkbookView.from_dict(x) for x in _load("workbook-views.json")]
