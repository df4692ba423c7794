import pytest
from pytest_check import check

from grid_fidelity import (
    Alignment,
    Border,
    BorderEdge,
    Color,
    Font,
    GradientFill,
    GradientStop,
    PatternFill,
    fill_from_dict,
    style_to_dict,
)
from grid_fidelity.fixtures import STYLES


def test_colors():
    assert Color(argb="FF00FF00") == Color.from_dict({"argb": "FF00FF00"})
    assert Color(theme=1, tint=-0.5).argb is None
    assert Color.from_dict(None) is None

    with pytest.raises(TypeError) as e:
        _ = Color(argb="FF00FF")
    assert "argb must be an 8 digit hex string" in str(e.value)

    with pytest.raises(ValueError):
        _ = Color(argb="GGGGGGGG")


def test_fonts():
    font = Font.from_dict({"name": "Arial Black", "size": 14, "color": {"argb": "FF0000FF"}})
    assert font.color == Color(argb="FF0000FF")
    assert font.bold is None
    assert Font.from_dict(font) is font

    with pytest.raises(TypeError) as e:
        _ = Font(name=14)
    assert "font name must be a string" in str(e.value)

    with pytest.raises(TypeError) as e:
        _ = Font(size="large")
    assert "size must be a number of points" in str(e.value)


def test_borders():
    border = Border.from_dict(
        {"top": {"style": "thin"}, "diagonal": {"style": "dashed", "color": {"argb": "FFFF0000"}}}
    )
    assert border.top == BorderEdge("thin")
    assert border.diagonal.color == Color(argb="FFFF0000")
    assert border.left is None
    assert style_to_dict(border) == {
        "top": {"style": "thin"},
        "diagonal": {"style": "dashed", "color": {"argb": "FFFF0000"}},
    }


def test_fills():
    pattern = fill_from_dict(
        {"type": "pattern", "pattern": "darkVertical", "fg_color": {"argb": "FFFF0000"}}
    )
    assert isinstance(pattern, PatternFill)
    assert pattern.fg_color == Color(argb="FFFF0000")
    assert style_to_dict(pattern) == {
        "type": "pattern",
        "pattern": "darkVertical",
        "fg_color": {"argb": "FFFF0000"},
    }

    gradient = fill_from_dict(
        {
            "type": "gradient",
            "gradient": "angle",
            "degree": 0,
            "stops": [
                {"position": 0, "color": {"argb": "FF0000FF"}},
                {"position": 1, "color": {"argb": "FFFFFFFF"}},
            ],
        }
    )
    assert isinstance(gradient, GradientFill)
    assert gradient.stops[1] == GradientStop(1, Color(argb="FFFFFFFF"))
    assert fill_from_dict(style_to_dict(gradient)) == gradient
    assert fill_from_dict(None) is None

    with pytest.raises(TypeError) as e:
        _ = fill_from_dict({"type": "texture"})
    assert "invalid fill type 'texture'" in str(e.value)

    with pytest.raises(TypeError) as e:
        _ = GradientFill(gradient="spiral")
    assert "gradient must be 'angle' or 'path'" in str(e.value)


def test_valid_alignments():
    for alignment in STYLES["alignments"]:
        check.equal(alignment["alignment"].validate(), [], alignment["text"])
        check.is_true(alignment["alignment"].is_valid)


def test_invalid_alignments():
    errors = {x["text"]: x["alignment"].validate() for x in STYLES["bad_alignments"]}
    assert errors == {
        "Nowhere": ["invalid horizontal alignment 'nowhere'"],
        "Dead Centre": ["invalid vertical alignment 'dead-centre'"],
        "Rotate 91": ["invalid text rotation 91"],
        "Rotate -91": ["invalid text rotation -91"],
        "Indent -1": ["invalid indent -1"],
        "Upside Down": ["invalid reading order 'upside-down'"],
    }
    assert not Alignment(wrap_text="yes").is_valid
    assert not Alignment(text_rotation="sideways").is_valid
    assert Alignment(text_rotation="vertical").is_valid


def test_cell_styles(empty_sheet):
    cell = empty_sheet.cell("A1")
    assert cell.style == {}
    cell.num_fmt = "# ?/?"
    cell.font = {"name": "Comic Sans MS", "size": 16, "underline": "double", "bold": True}
    cell.border = STYLES["borders"]["thin"]
    cell.fill = {"type": "pattern", "pattern": "darkTrellis"}
    cell.alignment = {"horizontal": "nowhere"}
    assert cell.font == Font(name="Comic Sans MS", size=16, underline="double", bold=True)
    assert cell.fill == PatternFill("darkTrellis")
    assert cell.alignment == Alignment(horizontal="nowhere")
    assert list(cell.style.keys()) == ["num_fmt", "font", "border", "fill", "alignment"]

    cell.fill = None
    assert "fill" not in cell.style
