#!/usr/bin/env python3
"""
PowerPoint renderer: materialises a compiled design tree onto one slide.

This is a reference renderer. It draws every node at its absolute position
as a rectangle and/or textbox; it does not try to reproduce auto-layout.
"""

import logging
import os
from typing import List, Optional, Union

from pptx import Presentation
from pptx.dml.color import RGBColor
from pptx.enum.shapes import MSO_SHAPE
from pptx.enum.text import MSO_ANCHOR, PP_ALIGN
from pptx.util import Inches, Pt

from .compiler import CompileResult
from .css_utils import CSSParser
from .models import RGB, DesignNode, NodeVariant

logger = logging.getLogger(__name__)

# PowerPoint refuses slides larger than 56 inches on either side
MAX_SLIDE_PX = 56 * 96

ALIGNMENTS = {
    'LEFT': PP_ALIGN.LEFT,
    'CENTER': PP_ALIGN.CENTER,
    'RIGHT': PP_ALIGN.RIGHT,
    'JUSTIFIED': PP_ALIGN.JUSTIFY,
}


# Helper function to convert pixels to inches
def px(pixels):
    return Inches(pixels / 96)


def to_rgb_color(color: RGB) -> RGBColor:
    return RGBColor(*(max(0, min(255, round(c * 255))) for c in (color.r, color.g, color.b)))


class PPTXRenderer:
    """
    Renderer for converting design trees to a PowerPoint slide.
    """

    def __init__(self, theme: str = "default", debug: bool = False):
        """Initialize the PowerPoint renderer with theme support."""
        self.theme = theme
        self.debug = debug
        self.css_parser = CSSParser(theme)
        self.slide_dimensions = self.css_parser.get_slide_dimensions()
        self.canvas_color = self.css_parser.get_color_value('canvas-color')

    def slide_size_px(self, nodes: List[DesignNode]):
        """Theme slide size, grown to fit the content bounds (capped at 56in)."""
        padding = self.slide_dimensions['padding_px']
        width = self.slide_dimensions['width_px']
        height = self.slide_dimensions['height_px']
        for node in nodes:
            for descendant in node.walk():
                width = max(width, descendant.absolute_x + descendant.width + 2 * padding)
                height = max(height, descendant.absolute_y + descendant.height + 2 * padding)
        return min(width, MAX_SLIDE_PX), min(height, MAX_SLIDE_PX)

    def render(self, result: Union[CompileResult, List[DesignNode]], output_path: str) -> str:
        """
        Render a compiled design tree to a PowerPoint presentation.

        Args:
            result: CompileResult (or its list of top-level nodes)
            output_path: Path where the PPTX file should be saved

        Returns:
            The path the presentation was saved to
        """
        nodes = result.nodes if isinstance(result, CompileResult) else list(result)

        prs = Presentation()
        width_px, height_px = self.slide_size_px(nodes)
        prs.slide_width = px(width_px)
        prs.slide_height = px(height_px)

        slide = prs.slides.add_slide(prs.slide_layouts[6])  # Blank layout
        fill = slide.background.fill
        fill.solid()
        fill.fore_color.rgb = to_rgb_color(self.canvas_color)

        offset = self.slide_dimensions['padding_px']
        count = 0
        for node in nodes:
            for descendant in node.walk():
                self._add_node_to_slide(slide, descendant, offset)
                count += 1

        directory = os.path.dirname(output_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        prs.save(output_path)

        if self.debug:
            logger.info(f"🖼️ Rendered {count} nodes on a {width_px:.0f}x{height_px:.0f}px slide")
        return output_path

    def _add_node_to_slide(self, slide, node: DesignNode, offset: float) -> None:
        left = offset + node.absolute_x
        top = offset + node.absolute_y
        width = max(node.width, 1)
        height = max(node.height, 1)

        if not node.is_text():
            self._add_box(slide, node, left, top, width, height)

        if not node.text:
            return

        typography = node.style.typography
        if node.variant == NodeVariant.LIST_ITEM:
            if node.marker:
                self._add_text(slide, node.marker, node, left, top, node.layout.gap, height)
            self._add_text(slide, node.text, node, left + node.layout.gap, top,
                           max(width - node.layout.gap, 1), height)
        elif node.variant == NodeVariant.INPUT:
            inset = node.style.padding
            anchor = MSO_ANCHOR.TOP if node.tag_name == 'textarea' else MSO_ANCHOR.MIDDLE
            self._add_text(slide, node.text, node, left + inset.left, top + inset.top,
                           max(width - inset.horizontal, 1), max(height - inset.vertical, 1), anchor)
        elif node.variant == NodeVariant.BUTTON:
            self._add_text(slide, node.text, node, left, top, width, height, MSO_ANCHOR.MIDDLE)
        elif typography is not None:
            padding = node.style.padding
            self._add_text(slide, node.text, node, left + padding.left, top + padding.top,
                           max(width - padding.horizontal, 1), max(height - padding.vertical, 1))

    def _add_box(self, slide, node: DesignNode, left, top, width, height) -> None:
        style = node.style
        if not style.fills and not style.strokes:
            return

        radius = style.corner_radii.max_radius
        shape_type = MSO_SHAPE.ROUNDED_RECTANGLE if radius > 0 else MSO_SHAPE.RECTANGLE
        shape = slide.shapes.add_shape(shape_type, px(left), px(top), px(width), px(height))
        shape.name = node.name
        if radius > 0:
            # Adjustment is a fraction of the shorter side, at most half of it
            shape.adjustments[0] = min(radius / min(width, height), 0.5)

        if style.fills:
            shape.fill.solid()
            shape.fill.fore_color.rgb = to_rgb_color(style.fills[0])
        else:
            shape.fill.background()

        if style.strokes and style.stroke_weight > 0:
            shape.line.color.rgb = to_rgb_color(style.strokes[0])
            shape.line.width = Pt(style.stroke_weight)
        else:
            shape.line.fill.background()  # no border

        if style.effects and self.debug:
            logger.debug(f"Drop shadow on {node.name} is not rendered")

    def _add_text(self, slide, text: str, node: DesignNode, left, top, width, height,
                  anchor: Optional[MSO_ANCHOR] = None) -> None:
        typography = node.style.typography
        textbox = slide.shapes.add_textbox(px(left), px(top), px(width), px(height))
        text_frame = textbox.text_frame
        text_frame.margin_left = 0
        text_frame.margin_right = 0
        text_frame.margin_top = 0
        text_frame.margin_bottom = 0
        text_frame.word_wrap = True
        if anchor is not None:
            text_frame.vertical_anchor = anchor

        paragraph = text_frame.paragraphs[0]
        paragraph.space_before = Pt(0)
        paragraph.space_after = Pt(0)
        if typography is None:
            paragraph.text = text
            return

        paragraph.alignment = ALIGNMENTS.get(typography.text_align, PP_ALIGN.LEFT)
        paragraph.line_spacing = typography.line_height_percent / 100

        run = paragraph.add_run()
        run.text = text
        font = run.font
        # 1 px is rendered as 1 pt, the same convention the slide fonts use
        font.size = Pt(round(typography.font_size * 2) / 2)
        font.name = typography.font_family
        font.bold = typography.is_bold
        font.color.rgb = to_rgb_color(typography.color)
