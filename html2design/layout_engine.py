#!/usr/bin/env python3
"""Layout translator: layout policy, sizing and positioning of design nodes."""

import logging
import math
from typing import Dict, List, Optional, Tuple

from .css_utils import CSSParser
from .models import (
    Alignment,
    DesignNode,
    Direction,
    LayoutMode,
    LayoutPolicy,
    Padding,
    StyledElement,
)
from .style_values import finite_or, parse_size

logger = logging.getLogger(__name__)

BLOCK_TAGS = ('div', 'section', 'article')
WIDE_TAGS = ('header', 'footer', 'nav')
FLEX_DISPLAYS = ('flex', 'inline-flex')
PADDING_PROPERTIES = ('padding', 'padding-top', 'padding-right', 'padding-bottom', 'padding-left')

JUSTIFY_CONTENT = {
    'center': Alignment.CENTER,
    'flex-end': Alignment.MAX,
    'end': Alignment.MAX,
    'space-between': Alignment.SPACE_BETWEEN,
    # Closest approximation available to a single-axis stack
    'space-around': Alignment.SPACE_BETWEEN,
    'space-evenly': Alignment.SPACE_BETWEEN,
}

ALIGN_ITEMS = {
    'center': Alignment.CENTER,
    'flex-end': Alignment.MAX,
    'end': Alignment.MAX,
    # No stretch sizing is modelled, fall back to start
    'stretch': Alignment.MIN,
}


def _css(style: Dict[str, str], name: str) -> str:
    return (style.get(name) or '').strip().lower()


class LayoutEngine:
    """
    Decides how each container lays out its children and sizes every node.

    Sizing is bottom-up: a container is finalized only after all of its
    children have final sizes, and it assigns its children's positions
    (relative to itself) at that point. Canvas-absolute positions are
    assigned in one top-down pass by :meth:`assign_absolute_positions` once
    the whole tree is sized.
    """

    def __init__(self, theme: str = "default", debug: bool = False, css_parser: Optional[CSSParser] = None):
        self.theme = theme
        self.debug = debug
        self.css_parser = css_parser or CSSParser(theme)

        # Cache frequently used values
        get_px = self.css_parser.get_px_value
        self.container_width = get_px('container-width')
        self.wide_container_width = get_px('wide-container-width')
        self.default_heights = {
            'header': get_px('header-height'),
            'nav': get_px('header-height'),
            'footer': get_px('footer-height'),
        }
        self.block_gap = get_px('block-gap')
        self.block_padding = get_px('block-padding')
        self.manual_offset = get_px('manual-offset')
        self.manual_gap = get_px('manual-gap')
        self.manual_min_height = get_px('manual-min-height')
        self.flex_gap = get_px('flex-gap')
        self.flex_padding = get_px('flex-padding')
        self.list_gap = get_px('list-gap')
        self.list_item_height = get_px('list-item-height')
        self.list_marker_offset = get_px('list-marker-offset')
        self.page_gap = get_px('page-gap')
        self.char_width_ratio = self.css_parser.get_number_value('char-width-ratio')

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    def classify(self, element: StyledElement) -> LayoutPolicy:
        """
        Pick exactly one layout policy for a container element.

        ``display: flex`` gives auto-layout flex, ``div``/``section``/``article``
        give a vertical stack, anything else is manually positioned.
        """
        style = element.style

        if _css(style, 'display') in FLEX_DISPLAYS:
            direction = Direction.HORIZONTAL
            if _css(style, 'flex-direction') in ('column', 'column-reverse'):
                direction = Direction.VERTICAL

            gap = self.flex_gap
            if style.get('gap'):
                gap = finite_or(parse_size(style['gap']), self.flex_gap)

            return LayoutPolicy(
                mode=LayoutMode.AUTO_LAYOUT_FLEX,
                direction=direction,
                main_align=JUSTIFY_CONTENT.get(_css(style, 'justify-content'), Alignment.MIN),
                cross_align=ALIGN_ITEMS.get(_css(style, 'align-items'), Alignment.MIN),
                gap=gap,
            )

        if element.tag_name in BLOCK_TAGS:
            return LayoutPolicy(mode=LayoutMode.VERTICAL_STACK, gap=self.block_gap)

        return LayoutPolicy(mode=LayoutMode.MANUAL, gap=self.manual_gap)

    def container_padding(self, element: StyledElement, policy: LayoutPolicy, declared: Padding) -> Padding:
        """
        Padding a container actually lays out with.

        Flex containers honour declared CSS padding (default from the theme);
        stacks and manual containers use the fixed theme inset.
        """
        if policy.is_flex:
            if any(element.style.get(name) for name in PADDING_PROPERTIES):
                return Padding(*(finite_or(v) for v in (declared.top, declared.right, declared.bottom, declared.left)))
            return Padding.uniform(self.flex_padding)
        if policy.mode == LayoutMode.VERTICAL_STACK:
            return Padding.uniform(self.block_padding)
        return Padding.uniform(self.manual_offset)

    # ------------------------------------------------------------------
    # Size resolution helpers
    # ------------------------------------------------------------------

    @staticmethod
    def explicit_size(style: Dict[str, str], name: str) -> Optional[float]:
        """Positive pixel value of a declared size property, else None."""
        if not style.get(name):
            return None
        value = finite_or(parse_size(style[name]))
        return value if value > 0 else None

    def default_width(self, tag_name: str) -> float:
        return self.wide_container_width if tag_name in WIDE_TAGS else self.container_width

    def resolve_width(self, style: Dict[str, str], default: float) -> float:
        """Explicit ``width`` wins, else *default*; ``max-width`` only caps."""
        width = self.explicit_size(style, 'width')
        if width is not None:
            return width
        return self.cap_width(style, finite_or(default))

    def cap_width(self, style: Dict[str, str], width: float) -> float:
        max_width = self.explicit_size(style, 'max-width')
        if max_width is not None and width > max_width:
            return max_width
        return width

    def raise_height(self, style: Dict[str, str], height: float) -> float:
        """``min-height`` raises a computed height and never lowers it."""
        min_height = self.explicit_size(style, 'min-height')
        if min_height is not None and height < min_height:
            return min_height
        return height

    def resolve_height(self, style: Dict[str, str], default: float) -> float:
        height = self.explicit_size(style, 'height')
        if height is not None:
            return height
        return self.raise_height(style, finite_or(default))

    def estimate_text_size(self, text: str, font_size: float, line_height: float,
                           max_width: Optional[float] = None) -> Tuple[float, float]:
        """
        Best-effort text box estimate without font metrics.

        Width is characters times a theme ratio of the font size; text wider
        than *max_width* wraps onto more lines. Renderers with real metrics
        are free to re-flow.
        """
        if not text:
            return 0.0, 0.0
        natural_width = len(text) * font_size * self.char_width_ratio
        width = natural_width
        if max_width is not None and max_width > 0 and natural_width > max_width:
            width = max_width
        lines = max(1, math.ceil(natural_width / width)) if width > 0 else 1
        return finite_or(width), finite_or(lines * line_height)

    # ------------------------------------------------------------------
    # Leaf sizing
    # ------------------------------------------------------------------

    def size_text(self, node: DesignNode, element: StyledElement) -> None:
        """Size a text node from its content, typography and declared sizes."""
        style = element.style
        typography = node.style.typography
        explicit_width = self.explicit_size(style, 'width')
        max_width = explicit_width or self.cap_width(style, self.container_width)

        width, height = self.estimate_text_size(
            node.text or '', typography.font_size, typography.line_height_px, max_width
        )
        if explicit_width is not None:
            width = explicit_width

        node.geometry.width = finite_or(width)
        node.geometry.height = finite_or(self.resolve_height(style, height))

    def size_box(self, node: DesignNode, element: StyledElement,
                 default_width: float, default_height: float) -> None:
        """Size a fixed-size control (button, input, image) with CSS overrides."""
        node.geometry.width = finite_or(self.resolve_width(element.style, default_width), default_width)
        node.geometry.height = finite_or(self.resolve_height(element.style, default_height), default_height)

    def size_list_item(self, node: DesignNode, element: StyledElement, default_width: float) -> None:
        typography = node.style.typography
        width = self.resolve_width(element.style, default_width)
        _, text_height = self.estimate_text_size(
            node.text or '', typography.font_size, typography.line_height_px,
            max(width - self.list_marker_offset, 1.0),
        )
        node.layout = LayoutPolicy(mode=LayoutMode.HORIZONTAL_STACK, gap=self.list_marker_offset)
        node.geometry.width = finite_or(width)
        node.geometry.height = finite_or(
            self.resolve_height(element.style, max(self.list_item_height, text_height))
        )

    # ------------------------------------------------------------------
    # Container sizing
    # ------------------------------------------------------------------

    def _text_content_size(self, node: DesignNode, inner_width: Optional[float]) -> Tuple[float, float]:
        """Size of a childless container's own text label, if it has one."""
        if node.children or not node.text or node.style.typography is None:
            return 0.0, 0.0
        typography = node.style.typography
        return self.estimate_text_size(node.text, typography.font_size, typography.line_height_px, inner_width)

    def finalize_container(self, node: DesignNode, element: StyledElement) -> None:
        """
        Size *node* and position its (already sized) children.

        Args:
            node: Container whose ``layout`` and ``style.padding`` are set
            element: The styled element the node was built from
        """
        policy = node.layout
        if policy.is_flex:
            self._finalize_flex(node, element)
        elif policy.mode == LayoutMode.VERTICAL_STACK:
            self._finalize_stack(node, element)
        else:
            self._finalize_manual(node, element)

        if self.debug:
            logger.debug(
                f"📐 {node.name} [{policy.mode.value}] {node.geometry.width:.0f}x{node.geometry.height:.0f} "
                f"with {len(node.children)} children"
            )

    def _finalize_flex(self, node: DesignNode, element: StyledElement) -> None:
        style = element.style
        policy = node.layout
        padding = node.style.padding
        children = node.children
        horizontal = policy.direction == Direction.HORIZONTAL

        explicit_width = self.explicit_size(style, 'width')
        explicit_height = self.explicit_size(style, 'height')

        if children:
            gaps = policy.gap * (len(children) - 1)
            if horizontal:
                content_width = sum(c.width for c in children) + gaps
                content_height = max(c.height for c in children)
            else:
                content_width = max(c.width for c in children)
                content_height = sum(c.height for c in children) + gaps
        else:
            inner = explicit_width - padding.horizontal if explicit_width else None
            content_width, content_height = self._text_content_size(node, inner)

        if explicit_width is not None:
            width = explicit_width
        else:
            width = self.cap_width(style, content_width + padding.horizontal)
        height = explicit_height if explicit_height is not None else content_height + padding.vertical
        height = self.raise_height(style, height)

        node.geometry.width = finite_or(width)
        node.geometry.height = finite_or(height)

        if not children:
            return

        inner_width = max(node.geometry.width - padding.horizontal, 0.0)
        inner_height = max(node.geometry.height - padding.vertical, 0.0)
        inner_main, inner_cross = (inner_width, inner_height) if horizontal else (inner_height, inner_width)
        main_sizes = [c.width if horizontal else c.height for c in children]
        free = max(inner_main - sum(main_sizes) - policy.gap * (len(children) - 1), 0.0)

        spacing = policy.gap
        cursor = 0.0
        if policy.main_align == Alignment.CENTER:
            cursor = free / 2
        elif policy.main_align == Alignment.MAX:
            cursor = free
        elif policy.main_align == Alignment.SPACE_BETWEEN and len(children) > 1:
            spacing = policy.gap + free / (len(children) - 1)

        for child, main_size in zip(children, main_sizes):
            cross_size = child.height if horizontal else child.width
            cross_free = max(inner_cross - cross_size, 0.0)
            if policy.cross_align == Alignment.CENTER:
                cross = cross_free / 2
            elif policy.cross_align == Alignment.MAX:
                cross = cross_free
            else:
                cross = 0.0

            if horizontal:
                child.geometry.x = padding.left + cursor
                child.geometry.y = padding.top + cross
            else:
                child.geometry.x = padding.left + cross
                child.geometry.y = padding.top + cursor
            cursor += main_size + spacing

    def _stack_children(self, children: List[DesignNode], x: float, y: float, gap: float) -> float:
        """Place children top-down from (x, y); return the stacked content height."""
        start = y
        for index, child in enumerate(children):
            if index:
                y += gap
            child.geometry.x = x
            child.geometry.y = y
            y += child.height
        return y - start

    def _finalize_stack(self, node: DesignNode, element: StyledElement) -> None:
        style = element.style
        padding = node.style.padding
        width = self.resolve_width(style, self.default_width(element.tag_name))

        if node.children:
            content_height = self._stack_children(node.children, padding.left, padding.top, node.layout.gap)
        else:
            _, content_height = self._text_content_size(node, width - padding.horizontal)

        # Stacks hug their content; an explicit height does not apply
        height = self.raise_height(style, content_height + padding.vertical)

        node.geometry.width = finite_or(width)
        node.geometry.height = finite_or(height)

    def _finalize_manual(self, node: DesignNode, element: StyledElement) -> None:
        style = element.style
        padding = node.style.padding
        width = self.resolve_width(style, self.default_width(element.tag_name))

        if node.children:
            content_height = self._stack_children(node.children, padding.left, padding.top, node.layout.gap)
            height = max(content_height + padding.vertical, self.manual_min_height)
        else:
            _, text_height = self._text_content_size(node, width - padding.horizontal)
            height = text_height + padding.vertical if text_height else 0.0

        height = max(height, self.default_heights.get(element.tag_name, 0.0))
        explicit_height = self.explicit_size(style, 'height')
        if explicit_height is not None:
            height = explicit_height
        height = self.raise_height(style, height)

        node.geometry.width = finite_or(width)
        node.geometry.height = finite_or(height)

    def finalize_list(self, node: DesignNode, element: StyledElement, default_width: float) -> None:
        """Stack list items top-down with the list gap and size the list around them."""
        style = element.style
        node.layout = LayoutPolicy(mode=LayoutMode.MANUAL, gap=self.list_gap)
        width = self.resolve_width(style, default_width)

        if node.children:
            height = self._stack_children(node.children, 0.0, 0.0, self.list_gap)
        else:
            height = self.manual_min_height

        explicit_height = self.explicit_size(style, 'height')
        if explicit_height is not None:
            height = explicit_height

        node.geometry.width = finite_or(width)
        node.geometry.height = finite_or(self.raise_height(style, height))

    # ------------------------------------------------------------------
    # Canvas placement
    # ------------------------------------------------------------------

    def arrange_page(self, nodes: List[DesignNode]) -> None:
        """
        Stack top-level nodes on the canvas and assign absolute positions.

        Must run after every node in every tree has its final size.
        """
        y = 0.0
        for node in nodes:
            node.geometry.x = 0.0
            node.geometry.y = y
            y += node.height + self.page_gap
        self.assign_absolute_positions(nodes)

    def assign_absolute_positions(self, nodes: List[DesignNode],
                                  origin_x: float = 0.0, origin_y: float = 0.0) -> None:
        """Top-down pass turning parent-relative positions into canvas coordinates."""
        for node in nodes:
            node.absolute_x = origin_x + node.geometry.x
            node.absolute_y = origin_y + node.geometry.y
            self.assign_absolute_positions(node.children, node.absolute_x, node.absolute_y)
