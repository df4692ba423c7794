from dataclasses import asdict, dataclass, field
from typing import List, Optional, Union

from grid_fidelity.constants import (
    BORDER_SIDES,
    HORIZONTAL_ALIGNMENTS,
    MAX_TEXT_ROTATION,
    READING_ORDERS,
    VERTICAL_ALIGNMENTS,
    VERTICAL_TEXT_ROTATION,
)

__all__ = [
    "Alignment",
    "Border",
    "BorderEdge",
    "Color",
    "Font",
    "GradientFill",
    "GradientStop",
    "PatternFill",
    "STYLE_ATTRS",
    "fill_from_dict",
    "style_to_dict",
]

STYLE_ATTRS = ["num_fmt", "font", "border", "fill", "alignment"]


def _drop_none(value):
    if isinstance(value, dict):
        return {k: _drop_none(v) for k, v in value.items() if v is not None}
    if isinstance(value, list):
        return [_drop_none(v) for v in value]
    return value


def style_to_dict(style) -> Union[dict, None]:
    """Return a style object as a plain dict, omitting unset attributes."""
    if style is None:
        return None
    data = _drop_none(asdict(style))
    if isinstance(style, (PatternFill, GradientFill)):
        data["type"] = style.type
    return data


@dataclass(frozen=True)
class Color:
    """An ARGB color such as ``FF00FF00``, or a theme color index and tint."""

    argb: Optional[str] = None
    theme: Optional[int] = None
    tint: Optional[float] = None

    def __post_init__(self):
        if self.argb is not None:
            if not isinstance(self.argb, str) or len(self.argb) != 8:
                msg = "argb must be an 8 digit hex string"
                raise TypeError(msg)
            int(self.argb, 16)

    @classmethod
    def from_dict(cls, data: Optional[dict]):
        if data is None:
            return None
        if isinstance(data, Color):
            return data
        return cls(**data)


@dataclass(frozen=True)
class Font:
    """Font attributes of a cell. Attributes left as ``None`` are unset."""

    name: Optional[str] = None
    size: Optional[float] = None
    family: Optional[int] = None
    scheme: Optional[str] = None
    charset: Optional[int] = None
    color: Optional[Color] = None
    bold: Optional[bool] = None
    italic: Optional[bool] = None
    underline: Optional[Union[bool, str]] = None
    strike: Optional[bool] = None
    outline: Optional[bool] = None
    vert_align: Optional[str] = None

    def __post_init__(self):
        if self.name is not None and not isinstance(self.name, str):
            msg = "font name must be a string"
            raise TypeError(msg)
        if self.size is not None and not isinstance(self.size, (int, float)):
            msg = "size must be a number of points"
            raise TypeError(msg)
        object.__setattr__(self, "color", Color.from_dict(self.color))

    @classmethod
    def from_dict(cls, data: Optional[dict]):
        if data is None or isinstance(data, Font):
            return data
        return cls(**data)


@dataclass(frozen=True)
class BorderEdge:
    style: str
    color: Optional[Color] = None

    def __post_init__(self):
        object.__setattr__(self, "color", Color.from_dict(self.color))

    @classmethod
    def from_dict(cls, data: Optional[dict]):
        if data is None or isinstance(data, BorderEdge):
            return data
        return cls(**data)


@dataclass(frozen=True)
class Border:
    """The edges of a cell border.

    Parameters
    ----------
    top, left, bottom, right, diagonal: BorderEdge, optional
        Line style and color of each edge, or ``None`` for no line.
    diagonal_up, diagonal_down: bool, optional
        Which diagonals the ``diagonal`` edge is drawn on.
    """

    top: Optional[BorderEdge] = None
    left: Optional[BorderEdge] = None
    bottom: Optional[BorderEdge] = None
    right: Optional[BorderEdge] = None
    diagonal: Optional[BorderEdge] = None
    diagonal_up: Optional[bool] = None
    diagonal_down: Optional[bool] = None

    def __post_init__(self):
        for side in BORDER_SIDES:
            object.__setattr__(self, side, BorderEdge.from_dict(getattr(self, side)))

    @classmethod
    def from_dict(cls, data: Optional[dict]):
        if data is None or isinstance(data, Border):
            return data
        return cls(**data)


@dataclass(frozen=True)
class PatternFill:
    pattern: str
    fg_color: Optional[Color] = None
    bg_color: Optional[Color] = None

    type = "pattern"

    def __post_init__(self):
        object.__setattr__(self, "fg_color", Color.from_dict(self.fg_color))
        object.__setattr__(self, "bg_color", Color.from_dict(self.bg_color))


@dataclass(frozen=True)
class GradientStop:
    position: float
    color: Color

    def __post_init__(self):
        object.__setattr__(self, "color", Color.from_dict(self.color))


@dataclass(frozen=True)
class GradientFill:
    """A gradient fill.

    ``angle`` gradients run at ``degree`` degrees; ``path`` gradients radiate
    from ``center``, a dict of ``left`` and ``top`` offsets between 0 and 1.
    """

    gradient: str
    stops: List[GradientStop] = field(default_factory=list)
    degree: Optional[float] = None
    center: Optional[dict] = None

    type = "gradient"

    def __post_init__(self):
        if self.gradient not in ["angle", "path"]:
            msg = "gradient must be 'angle' or 'path'"
            raise TypeError(msg)
        stops = [
            x if isinstance(x, GradientStop) else GradientStop(**x) for x in self.stops or []
        ]
        object.__setattr__(self, "stops", stops)


def fill_from_dict(data: Optional[dict]) -> Union[PatternFill, GradientFill, None]:
    """Create a fill from a dict whose ``type`` key selects pattern or gradient."""
    if data is None or isinstance(data, (PatternFill, GradientFill)):
        return data
    data = dict(data)
    fill_type = data.pop("type", "pattern")
    if fill_type == "pattern":
        return PatternFill(**data)
    elif fill_type == "gradient":
        return GradientFill(**data)
    msg = f"invalid fill type '{fill_type}'"
    raise TypeError(msg)


@dataclass(frozen=True)
class Alignment:
    """Text alignment of a cell.

    Alignments are stored as given. Packages that write alignments strictly
    call :py:meth:`validate` and drop alignments that have errors.
    """

    horizontal: Optional[str] = None
    vertical: Optional[str] = None
    wrap_text: Optional[bool] = None
    shrink_to_fit: Optional[bool] = None
    indent: Optional[int] = None
    reading_order: Optional[str] = None
    text_rotation: Optional[Union[int, str]] = None

    @classmethod
    def from_dict(cls, data: Optional[dict]):
        if data is None or isinstance(data, Alignment):
            return data
        return cls(**data)

    def validate(self) -> List[str]:
        """Return a list of reasons the alignment is invalid, empty if valid."""
        errors = []
        if self.horizontal is not None and self.horizontal not in HORIZONTAL_ALIGNMENTS:
            errors.append(f"invalid horizontal alignment '{self.horizontal}'")
        if self.vertical is not None and self.vertical not in VERTICAL_ALIGNMENTS:
            errors.append(f"invalid vertical alignment '{self.vertical}'")
        for attr in ["wrap_text", "shrink_to_fit"]:
            if getattr(self, attr) is not None and not isinstance(getattr(self, attr), bool):
                errors.append(f"{attr} must be boolean")
        if self.indent is not None and (
            isinstance(self.indent, bool) or not isinstance(self.indent, int) or self.indent < 0
        ):
            errors.append(f"invalid indent {self.indent!r}")
        if self.reading_order is not None and self.reading_order not in READING_ORDERS:
            errors.append(f"invalid reading order '{self.reading_order}'")
        rotation = self.text_rotation
        if rotation is not None and rotation != VERTICAL_TEXT_ROTATION:
            if (
                isinstance(rotation, bool)
                or not isinstance(rotation, int)
                or abs(rotation) > MAX_TEXT_ROTATION
            ):
                errors.append(f"invalid text rotation {rotation!r}")
        return errors

    @property
    def is_valid(self) -> bool:
        return len(self.validate()) == 0

