"""
Data models for the HTML-to-design-tree compiler.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


HEADING_TAGS = ('h1', 'h2', 'h3', 'h4', 'h5', 'h6')


@dataclass(frozen=True)
class RawElement:
    """
    One element found by the tag scanner, before any styling is applied.
    """
    tag_name: str
    attributes: Dict[str, str] = field(default_factory=dict)
    text_content: str = ""
    children: Tuple["RawElement", ...] = ()

    @property
    def classes(self) -> List[str]:
        """Class tokens in the order the ``class`` attribute lists them."""
        return self.attributes.get('class', '').split()

    @property
    def element_id(self) -> Optional[str]:
        return self.attributes.get('id') or None


@dataclass(frozen=True)
class StyleRule:
    """A CSS rule: an opaque selector string and its declarations."""
    selector: str
    properties: Dict[str, str]


@dataclass
class StyledElement:
    """
    A RawElement paired with its effective (cascaded) style.
    """
    element: RawElement
    style: Dict[str, str]
    children: List["StyledElement"] = field(default_factory=list)

    @property
    def tag_name(self) -> str:
        return self.element.tag_name

    @property
    def attributes(self) -> Dict[str, str]:
        return self.element.attributes

    @property
    def text_content(self) -> str:
        return self.element.text_content


@dataclass(frozen=True)
class RGB:
    """Colour with channels normalised to [0, 1]."""
    r: float
    g: float
    b: float

    def to_dict(self) -> Dict[str, float]:
        return {'r': self.r, 'g': self.g, 'b': self.b}


@dataclass(frozen=True)
class Shadow:
    """Drop shadow descriptor produced from a ``box-shadow`` value."""
    offset_x: float
    offset_y: float
    radius: float
    color: RGB
    alpha: float = 0.1
    visible: bool = True
    blend_mode: str = "NORMAL"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': 'DROP_SHADOW',
            'offset': {'x': self.offset_x, 'y': self.offset_y},
            'radius': self.radius,
            'color': dict(self.color.to_dict(), a=self.alpha),
            'visible': self.visible,
            'blendMode': self.blend_mode,
        }


class NodeVariant(str, Enum):
    CONTAINER = "container"
    TEXT = "text"
    BUTTON = "button"
    INPUT = "input"
    IMAGE = "image"
    LIST = "list"
    LIST_ITEM = "list_item"


class LayoutMode(str, Enum):
    MANUAL = "manual"
    VERTICAL_STACK = "vertical_stack"
    HORIZONTAL_STACK = "horizontal_stack"
    AUTO_LAYOUT_FLEX = "auto_layout_flex"


class Direction(str, Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class Alignment(str, Enum):
    MIN = "min"
    CENTER = "center"
    MAX = "max"
    SPACE_BETWEEN = "space_between"


@dataclass
class LayoutPolicy:
    """
    How a node positions its children.

    ``direction`` and the alignments are only meaningful for auto-layout
    flex; stacks imply their direction and always align to MIN.
    """
    mode: LayoutMode = LayoutMode.MANUAL
    direction: Optional[Direction] = None
    main_align: Alignment = Alignment.MIN
    cross_align: Alignment = Alignment.MIN
    gap: float = 0.0

    @property
    def is_flex(self) -> bool:
        return self.mode == LayoutMode.AUTO_LAYOUT_FLEX

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {'mode': self.mode.value, 'gap': self.gap}
        if self.mode == LayoutMode.AUTO_LAYOUT_FLEX:
            data['direction'] = self.direction.value if self.direction else None
            data['mainAlign'] = self.main_align.value
            data['crossAlign'] = self.cross_align.value
        return data


@dataclass
class Geometry:
    """Position relative to the parent node plus size, in pixels."""
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0


@dataclass
class Padding:
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0
    left: float = 0.0

    @classmethod
    def uniform(cls, value: float) -> "Padding":
        return cls(value, value, value, value)

    @property
    def horizontal(self) -> float:
        return self.left + self.right

    @property
    def vertical(self) -> float:
        return self.top + self.bottom


@dataclass
class CornerRadii:
    top_left: float = 0.0
    top_right: float = 0.0
    bottom_right: float = 0.0
    bottom_left: float = 0.0

    @classmethod
    def uniform(cls, value: float) -> "CornerRadii":
        return cls(value, value, value, value)

    @property
    def is_uniform(self) -> bool:
        return self.top_left == self.top_right == self.bottom_right == self.bottom_left

    @property
    def max_radius(self) -> float:
        return max(self.top_left, self.top_right, self.bottom_right, self.bottom_left)


@dataclass
class Typography:
    font_family: str = "Inter"
    font_size: float = 16.0
    font_style: str = "Regular"  # Regular / Medium / SemiBold / Bold
    color: RGB = RGB(0.11, 0.11, 0.11)
    text_align: str = "LEFT"  # LEFT / CENTER / RIGHT / JUSTIFIED
    line_height_percent: float = 140.0

    @property
    def line_height_px(self) -> float:
        return self.font_size * self.line_height_percent / 100

    @property
    def is_bold(self) -> bool:
        return self.font_style in ("Bold", "SemiBold")


@dataclass
class ResolvedStyle:
    """Appearance of a node after every CSS value has been interpreted."""
    fills: List[RGB] = field(default_factory=list)
    strokes: List[RGB] = field(default_factory=list)
    stroke_weight: float = 0.0
    corner_radii: CornerRadii = field(default_factory=CornerRadii)
    padding: Padding = field(default_factory=Padding)
    effects: List[Shadow] = field(default_factory=list)
    typography: Optional[Typography] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            'fills': [c.to_dict() for c in self.fills],
            'strokes': [c.to_dict() for c in self.strokes],
            'strokeWeight': self.stroke_weight,
            'cornerRadii': [self.corner_radii.top_left, self.corner_radii.top_right,
                            self.corner_radii.bottom_right, self.corner_radii.bottom_left],
            'padding': [self.padding.top, self.padding.right,
                        self.padding.bottom, self.padding.left],
            'effects': [e.to_dict() for e in self.effects],
        }
        if self.typography is not None:
            t = self.typography
            data['typography'] = {
                'fontFamily': t.font_family,
                'fontSize': t.font_size,
                'fontStyle': t.font_style,
                'color': t.color.to_dict(),
                'textAlign': t.text_align,
                'lineHeightPercent': t.line_height_percent,
            }
        return data


@dataclass
class DesignNode:
    """
    Host-agnostic output node: one visual element with resolved geometry and style.
    """
    variant: NodeVariant
    name: str
    tag_name: str = ""
    geometry: Geometry = field(default_factory=Geometry)
    layout: LayoutPolicy = field(default_factory=LayoutPolicy)
    style: ResolvedStyle = field(default_factory=ResolvedStyle)
    children: List["DesignNode"] = field(default_factory=list)
    text: Optional[str] = None  # Text content, button caption or placeholder
    marker: Optional[str] = None  # List item bullet / number
    src: Optional[str] = None  # For images
    alt: Optional[str] = None  # For images
    absolute_x: float = 0.0
    absolute_y: float = 0.0

    @property
    def width(self):
        """Alias for geometry.width."""
        return self.geometry.width

    @property
    def height(self):
        """Alias for geometry.height."""
        return self.geometry.height

    def is_text(self):
        return self.variant == NodeVariant.TEXT

    def is_container(self):
        return self.variant == NodeVariant.CONTAINER

    def walk(self):
        """Yield this node and every descendant, depth-first in source order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            'variant': self.variant.value,
            'name': self.name,
            'tagName': self.tag_name,
            'geometry': {
                'x': self.geometry.x,
                'y': self.geometry.y,
                'width': self.geometry.width,
                'height': self.geometry.height,
            },
            'absolute': {'x': self.absolute_x, 'y': self.absolute_y},
            'layout': self.layout.to_dict(),
            'style': self.style.to_dict(),
            'children': [child.to_dict() for child in self.children],
        }
        for key in ('text', 'marker', 'src', 'alt'):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data
