"""
Intermediate presentation model.

Element parsers produce these objects from the normalized XML; converters
consume them. Geometry stays in EMU here; pixels only exist in the
converted output.
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import ClassVar, Optional, Union


class Alignment(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    JUSTIFY = "justify"


class LineDash(str, Enum):
    # Dotted outlines are reported as DASHED at this layer
    NONE = "none"
    SOLID = "solid"
    DASHED = "dashed"


@dataclass(frozen=True)
class ResolvedColor:
    hex: str
    # Only set when an alpha modifier left the color partially transparent
    opacity: Optional[float] = None

    def merged(self) -> str:
        """``#RRGGBB``, or ``#RRGGBBAA`` when an opacity is attached."""
        if self.opacity is None:
            return self.hex
        return f"{self.hex}{round(self.opacity * 255):02X}"


@dataclass(frozen=True)
class NoFill:
    pass


@dataclass(frozen=True)
class SolidFill:
    color: ResolvedColor


@dataclass(frozen=True)
class GradientStop:
    # 0-100
    position: float
    color: ResolvedColor


@dataclass(frozen=True)
class GradientFill:
    stops: tuple[GradientStop, ...]
    angle: float = 0.0


@dataclass(frozen=True)
class ImageFill:
    rel_id: str
    media_key: str


FillSource = Union[NoFill, SolidFill, GradientFill, ImageFill]


@dataclass(frozen=True)
class Stroke:
    color: Optional[str] = None
    # points
    width: float = 1.0
    dash: LineDash = LineDash.SOLID


@dataclass
class Transform:
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0
    rotation: float = 0.0
    flip_h: bool = False
    flip_v: bool = False


@dataclass
class Run:
    text: str = ""
    bold: bool = False
    italic: bool = False
    underline: bool = False
    strikethrough: bool = False
    size: Optional[float] = None
    font: Optional[str] = None
    color: Optional[str] = None


@dataclass
class Paragraph:
    runs: list[Run] = field(default_factory=list)
    alignment: Optional[Alignment] = None
    bullet: bool = False
    level: Optional[int] = None

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)


@dataclass
class Element:
    id: str
    transform: Transform = field(default_factory=Transform)
    name: Optional[str] = None
    z_order: int = 0

    kind: ClassVar[str] = "element"

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ShapeElement(Element):
    preset: str = "rect"
    adjustment: Optional[int] = None
    fill: Optional[FillSource] = None
    stroke: Optional[Stroke] = None

    kind: ClassVar[str] = "shape"


@dataclass
class TextElement(Element):
    paragraphs: list[Paragraph] = field(default_factory=list)
    placeholder_type: Optional[str] = None

    kind: ClassVar[str] = "text"

    @property
    def text(self) -> str:
        return "\n".join(paragraph.text for paragraph in self.paragraphs)


@dataclass
class ImageElement(Element):
    rel_id: str = ""
    media_key: str = ""

    kind: ClassVar[str] = "image"


@dataclass
class VideoElement(Element):
    rel_id: str = ""
    media_key: str = ""
    poster_key: Optional[str] = None

    kind: ClassVar[str] = "video"


@dataclass
class AudioElement(Element):
    rel_id: str = ""
    media_key: str = ""

    kind: ClassVar[str] = "audio"


@dataclass
class LineElement(Element):
    start: tuple[int, int] = (0, 0)
    end: tuple[int, int] = (0, 0)
    stroke: Optional[Stroke] = None

    kind: ClassVar[str] = "line"


@dataclass
class ChartElement(Element):
    chart_type: str = "column"
    rel_id: str = ""
    chart_path: Optional[str] = None

    kind: ClassVar[str] = "chart"


@dataclass
class TableCell:
    text: str = ""
    col_span: int = 1
    row_span: int = 1
    # hMerge/vMerge continuation cells are covered by a spanning neighbour
    merged: bool = False
    fill: Optional[str] = None
    bold: bool = False
    italic: bool = False
    color: Optional[str] = None
    font_size: Optional[float] = None
    alignment: Optional[Alignment] = None


@dataclass
class TableElement(Element):
    rows: list[list[TableCell]] = field(default_factory=list)
    column_widths: list[int] = field(default_factory=list)
    row_heights: list[int] = field(default_factory=list)

    kind: ClassVar[str] = "table"


@dataclass
class GroupElement(Element):
    children: list[Element] = field(default_factory=list)

    kind: ClassVar[str] = "group"


IntermediateElement = Union[
    ShapeElement,
    TextElement,
    ImageElement,
    VideoElement,
    AudioElement,
    LineElement,
    ChartElement,
    TableElement,
    GroupElement,
]


@dataclass
class MediaItem:
    data: bytes
    content_type: str
    path: str = ""


@dataclass
class ThemeInfo:
    # accent1..accent6, '#RRGGBB'
    accent_colors: list[str] = field(default_factory=list)
    major_font: Optional[str] = None
    minor_font: Optional[str] = None


@dataclass
class Slide:
    index: int
    id: str
    path: str = ""
    elements: list[IntermediateElement] = field(default_factory=list)
    background: Optional[FillSource] = None
    notes: Optional[str] = None
    layout_path: Optional[str] = None


@dataclass
class Presentation:
    slides: list[Slide] = field(default_factory=list)
    media: dict[str, MediaItem] = field(default_factory=dict)
    # EMU
    slide_width: int = 9144000
    slide_height: int = 6858000
    theme: ThemeInfo = field(default_factory=ThemeInfo)
    warnings: list = field(default_factory=list)
