#!/usr/bin/env python3
"""
Design-tree emitter: turns StyledElements into DesignNodes.

Dispatch is by tag name. Children are always emitted and sized before their
parent so the layout engine can size containers bottom-up.
"""

import logging
from typing import Dict, List, Optional

from .css_utils import CSSParser, get_declared_value
from .layout_engine import LayoutEngine
from .models import (
    HEADING_TAGS,
    CornerRadii,
    DesignNode,
    NodeVariant,
    Padding,
    ResolvedStyle,
    StyledElement,
    Typography,
)
from .style_values import (
    finite_or,
    parse_border,
    parse_box_edges,
    parse_box_shadow,
    parse_color,
    parse_corner_radii,
    parse_font_size,
    parse_line_height,
    parse_number,
    parse_size,
)

logger = logging.getLogger(__name__)

TEXT_TAGS = HEADING_TAGS + ('p', 'span')
INLINE_TEXT_TAGS = ('strong', 'b', 'em', 'i', 'small', 'label', 'a')
INPUT_TAGS = ('input', 'textarea')
LIST_TAGS = ('ul', 'ol')

CORNER_PROPERTIES = (
    'border-top-left-radius',
    'border-top-right-radius',
    'border-bottom-right-radius',
    'border-bottom-left-radius',
)
PADDING_SIDES = ('padding-top', 'padding-right', 'padding-bottom', 'padding-left')

TEXT_ALIGN = {
    'left': 'LEFT',
    'start': 'LEFT',
    'center': 'CENTER',
    'right': 'RIGHT',
    'end': 'RIGHT',
    'justify': 'JUSTIFIED',
}

LIST_NAMES = {'ul': 'Unordered List', 'ol': 'Ordered List'}


def font_style_for(tag_name: str, font_weight: Optional[str]) -> str:
    """
    Map a CSS ``font-weight`` (and the tag's semantics) to a font style name.

    Headings and ``strong``/``b`` are always Bold. ``em``/``i`` become Medium
    since the target family ships no italic.
    """
    style = 'Regular'
    if font_weight:
        weight = font_weight.strip().lower()
        number = parse_number(weight)
        if weight in ('bold', 'bolder') or (number is not None and number >= 700):
            style = 'Bold'
        elif weight in ('500', 'medium'):
            style = 'Medium'
        elif number is not None and number >= 600:
            style = 'SemiBold'

    if tag_name in HEADING_TAGS or tag_name in ('strong', 'b'):
        style = 'Bold'
    elif tag_name in ('em', 'i'):
        style = 'Medium'
    return style


class DesignTreeEmitter:
    """
    Builds DesignNodes from styled elements.

    A failure while emitting one element is logged, recorded in
    :attr:`warnings` and the element is skipped; siblings still emit.
    """

    def __init__(self, theme: str = "default", debug: bool = False,
                 css_parser: Optional[CSSParser] = None, layout_engine: Optional[LayoutEngine] = None):
        self.theme = theme
        self.debug = debug
        self.css_parser = css_parser or CSSParser(theme)
        self.layout_engine = layout_engine or LayoutEngine(theme, debug, css_parser=self.css_parser)
        self.warnings: List[str] = []

        parser = self.css_parser
        self.font_family = parser.get_font_family()
        self.font_sizes = parser.get_font_sizes()
        self.line_height_percent = parser.get_number_value('line-height') * 100

        self.text_color = parser.get_color_value('text-color')
        self.list_text_color = parser.get_color_value('list-text-color')
        self.brand_color = parser.get_color_value('brand-color')
        self.button_text_color = parser.get_color_value('button-text-color')
        self.input_fill = parser.get_color_value('input-fill')
        self.input_stroke = parser.get_color_value('input-stroke')
        self.placeholder_color = parser.get_color_value('placeholder-color')
        self.image_fill = parser.get_color_value('image-fill')
        self.image_stroke = parser.get_color_value('image-stroke')
        self.border_color = parser.get_color_value('border-color')

        self.button_size = (parser.get_px_value('button-width'), parser.get_px_value('button-height'))
        self.button_radius = parser.get_px_value('button-radius')
        self.button_font_size = parser.get_px_value('button-font-size')
        self.input_size = (parser.get_px_value('input-width'), parser.get_px_value('input-height'))
        self.textarea_height = parser.get_px_value('textarea-height')
        self.input_radius = parser.get_px_value('input-radius')
        self.input_inset = parser.get_px_value('input-inset')
        self.input_font_size = parser.get_px_value('input-font-size')
        self.image_size = (parser.get_px_value('image-width'), parser.get_px_value('image-height'))
        self.list_width = parser.get_px_value('list-width')
        self.list_item_width = parser.get_px_value('list-item-width')

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def emit_tree(self, elements: List[StyledElement]) -> List[DesignNode]:
        """Emit a forest of top-level elements, resetting :attr:`warnings`."""
        self.warnings = []
        return self.emit_children(elements)

    def emit_children(self, elements: List[StyledElement]) -> List[DesignNode]:
        nodes = []
        for element in elements:
            node = self.try_emit(element)
            if node is not None:
                nodes.append(node)
        return nodes

    def try_emit(self, element: StyledElement, marker: Optional[str] = None) -> Optional[DesignNode]:
        """Emit one element, or record a warning and return None on failure."""
        try:
            if marker is not None:
                return self.create_list_item_node(element, marker)
            return self.emit(element)
        except Exception as e:
            self.warn(f"Failed to create <{element.tag_name}> node: {e}")
            return None

    def warn(self, message: str) -> None:
        logger.warning(f"⚠️ {message}")
        self.warnings.append(message)

    def emit(self, element: StyledElement) -> DesignNode:
        """Dispatch *element* to the node builder for its tag."""
        tag = element.tag_name

        if tag in TEXT_TAGS or (tag in INLINE_TEXT_TAGS and not element.children):
            return self.create_text_node(element)
        if tag == 'button':
            return self.create_button_node(element)
        if tag in INPUT_TAGS:
            return self.create_input_node(element)
        if tag == 'img':
            return self.create_image_node(element)
        if tag in LIST_TAGS:
            return self.create_list_node(element)
        if tag == 'li':
            return self.create_list_item_node(element, '•')
        return self.create_container_node(element)

    # ------------------------------------------------------------------
    # Shared style helpers
    # ------------------------------------------------------------------

    def apply_basic_styles(self, style: ResolvedStyle, css: Dict[str, str]) -> None:
        """
        Interpret the box styles every box-like node supports.

        Background fill, corner radii, border stroke, box shadow and padding.
        Values that do not resolve are skipped.
        """
        background = get_declared_value(css, 'background-color', 'background')
        if background:
            color = parse_color(background)
            if color is not None:
                style.fills = [color]
            else:
                logger.debug(f"Unresolvable background '{background}', no fill applied")

        if css.get('border-radius'):
            style.corner_radii = parse_corner_radii(css['border-radius'])
        elif any(css.get(name) for name in CORNER_PROPERTIES):
            style.corner_radii = CornerRadii(*(parse_size(css.get(name)) for name in CORNER_PROPERTIES))

        if css.get('border') or css.get('border-width'):
            width, shorthand_color = parse_border(css.get('border'))
            if css.get('border-width'):
                width = parse_size(css['border-width'])
            color = parse_color(css.get('border-color')) or shorthand_color or self.border_color
            if width > 0:
                style.strokes = [color]
                style.stroke_weight = finite_or(width)

        shadow = parse_box_shadow(css.get('box-shadow'))
        if shadow is not None:
            style.effects = [shadow]
        elif css.get('box-shadow'):
            logger.debug(f"Unsupported box-shadow '{css['box-shadow']}', no effect applied")

        if css.get('padding'):
            style.padding = parse_box_edges(css['padding'])
        if any(css.get(name) for name in PADDING_SIDES):
            padding = style.padding
            style.padding = Padding(*(
                parse_size(css[name]) if css.get(name) else current
                for name, current in zip(PADDING_SIDES, (padding.top, padding.right, padding.bottom, padding.left))
            ))

    def resolve_typography(self, element: StyledElement, default_size: float,
                           font_style: str = 'Regular', color=None, text_align: str = 'LEFT') -> Typography:
        """Typography from the element's CSS, falling back to the given defaults."""
        css = element.style

        font_size = default_size
        if css.get('font-size'):
            size = parse_font_size(css['font-size'])
            if size > 0:
                font_size = size

        resolved_color = parse_color(css.get('color')) or color or self.text_color
        align = TEXT_ALIGN.get((css.get('text-align') or '').strip().lower(), text_align)
        line_height = parse_line_height(css.get('line-height'), font_size)
        if line_height is None:
            line_height = self.line_height_percent

        return Typography(
            font_family=self.font_family,
            font_size=finite_or(font_size, default_size),
            font_style=font_style,
            color=resolved_color,
            text_align=align,
            line_height_percent=finite_or(line_height, self.line_height_percent),
        )

    # ------------------------------------------------------------------
    # Node builders
    # ------------------------------------------------------------------

    def create_text_node(self, element: StyledElement) -> DesignNode:
        tag = element.tag_name
        node = DesignNode(
            variant=NodeVariant.TEXT,
            name=tag.upper(),
            tag_name=tag,
            text=element.text_content.strip() or tag.upper(),
        )
        node.style.typography = self.resolve_typography(
            element,
            self.font_sizes.get(tag, 16.0),
            font_style=font_style_for(tag, element.style.get('font-weight')),
        )
        self.layout_engine.size_text(node, element)
        return node

    def create_button_node(self, element: StyledElement) -> DesignNode:
        node = DesignNode(
            variant=NodeVariant.BUTTON,
            name='Button',
            tag_name='button',
            text=element.text_content.strip() or 'Button',
        )
        css = element.style
        self.apply_basic_styles(node.style, css)

        if not node.style.fills:
            node.style.fills = [self.brand_color]
        if not css.get('border-radius') and not any(css.get(name) for name in CORNER_PROPERTIES):
            node.style.corner_radii = CornerRadii.uniform(self.button_radius)

        node.style.typography = self.resolve_typography(
            element, self.button_font_size, font_style='Medium',
            color=self.button_text_color, text_align='CENTER',
        )
        # Caption colour comes from the theme unless the button sets one
        if not parse_color(css.get('color')):
            node.style.typography.color = self.button_text_color

        self.layout_engine.size_box(node, element, *self.button_size)
        return node

    def create_input_node(self, element: StyledElement) -> DesignNode:
        tag = element.tag_name
        is_textarea = tag == 'textarea'
        node = DesignNode(
            variant=NodeVariant.INPUT,
            name='Textarea' if is_textarea else 'Input',
            tag_name=tag,
            text=element.attributes.get('placeholder') or element.text_content.strip() or 'Enter text...',
        )
        css = element.style
        self.apply_basic_styles(node.style, css)

        if not node.style.fills:
            node.style.fills = [self.input_fill]
        if not css.get('border-radius') and not any(css.get(name) for name in CORNER_PROPERTIES):
            node.style.corner_radii = CornerRadii.uniform(self.input_radius)
        # Field outline is always the theme stroke
        node.style.strokes = [self.input_stroke]
        node.style.stroke_weight = 1.0
        node.style.padding = Padding.uniform(self.input_inset)

        node.style.typography = self.resolve_typography(
            element, self.input_font_size, color=self.placeholder_color,
        )
        if not parse_color(css.get('color')):
            node.style.typography.color = self.placeholder_color

        width, height = self.input_size
        if is_textarea:
            height = self.textarea_height
        self.layout_engine.size_box(node, element, width, height)
        return node

    def create_image_node(self, element: StyledElement) -> DesignNode:
        attributes = element.attributes
        node = DesignNode(
            variant=NodeVariant.IMAGE,
            name='Image Placeholder',
            tag_name='img',
            src=attributes.get('src') or None,
            alt=attributes.get('alt') or None,
        )
        self.apply_basic_styles(node.style, element.style)
        node.style.fills = [self.image_fill]
        node.style.strokes = [self.image_stroke]
        node.style.stroke_weight = 1.0

        default_width, default_height = self.image_size
        width = parse_number(attributes.get('width'))
        height = parse_number(attributes.get('height'))
        self.layout_engine.size_box(
            node, element,
            int(width) if width and width > 0 else default_width,
            int(height) if height and height > 0 else default_height,
        )
        return node

    def create_list_node(self, element: StyledElement) -> DesignNode:
        tag = element.tag_name
        node = DesignNode(variant=NodeVariant.LIST, name=LIST_NAMES[tag], tag_name=tag)
        self.apply_basic_styles(node.style, element.style)

        for index, child in enumerate(element.children, start=1):
            marker = f"{index}." if tag == 'ol' else '•'
            item = self.try_emit(child, marker=marker)
            if item is not None:
                node.children.append(item)

        self.layout_engine.finalize_list(node, element, self.list_width)
        return node

    def create_list_item_node(self, element: StyledElement, marker: str) -> DesignNode:
        node = DesignNode(
            variant=NodeVariant.LIST_ITEM,
            name='List Item',
            tag_name=element.tag_name,
            text=element.text_content.strip() or 'List item',
            marker=marker,
        )
        self.apply_basic_styles(node.style, element.style)
        node.style.typography = self.resolve_typography(
            element, self.font_sizes.get('li', 16.0), color=self.list_text_color,
        )
        self.layout_engine.size_list_item(node, element, self.list_item_width)
        return node

    def create_container_node(self, element: StyledElement) -> DesignNode:
        tag = element.tag_name
        node = DesignNode(variant=NodeVariant.CONTAINER, name=tag.upper(), tag_name=tag)
        self.apply_basic_styles(node.style, element.style)

        node.layout = self.layout_engine.classify(element)
        node.style.padding = self.layout_engine.container_padding(element, node.layout, node.style.padding)

        node.children = self.emit_children(element.children)

        # A leaf container keeps its own text as a label
        if not element.children and element.text_content.strip():
            node.text = element.text_content.strip()
            node.style.typography = self.resolve_typography(
                element, 16.0, font_style=font_style_for(tag, element.style.get('font-weight')),
            )

        self.layout_engine.finalize_container(node, element)

        if self.debug:
            logger.info(f"🧱 {node.name}: {node.layout.mode.value}, {len(node.children)} children")
        return node
