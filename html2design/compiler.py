#!/usr/bin/env python3
"""
Compiler facade that ties together the parser, cascade, emitter and layout engine.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from .cascade import resolve_tree
from .css_utils import CSSParser, build_rule_table, extract_style_rules
from .emitter import DesignTreeEmitter
from .errors import EmptyInputError, NoElementsFoundError, NothingRenderedError
from .html_parser import HtmlParser
from .layout_engine import LayoutEngine
from .models import DesignNode, StyledElement, StyleRule

logger = logging.getLogger(__name__)


@dataclass
class CompileResult:
    """Design tree for one document plus everything that went wrong on the way."""
    nodes: List[DesignNode] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    rules: List[StyleRule] = field(default_factory=list)

    def walk(self):
        """Yield every node of every top-level tree, depth-first."""
        for node in self.nodes:
            yield from node.walk()

    def to_dict(self) -> Dict[str, Any]:
        return {
            'nodes': [node.to_dict() for node in self.nodes],
            'warnings': list(self.warnings),
        }


class DesignCompiler:
    """
    Compiles HTML documents into positioned design trees.

    One instance can compile any number of documents; nothing but the theme
    values is shared between calls.
    """

    def __init__(self, theme: str = "default", debug: bool = False):
        self.theme = theme
        self.debug = debug

        self.css_parser = CSSParser(theme)
        self.html_parser = HtmlParser(debug=debug)
        self.layout_engine = LayoutEngine(theme, debug, css_parser=self.css_parser)
        self.emitter = DesignTreeEmitter(
            theme, debug, css_parser=self.css_parser, layout_engine=self.layout_engine
        )

    def compile(self, html_text: str) -> CompileResult:
        """
        Compile *html_text* into a design tree.

        Args:
            html_text: Full HTML document (``<style>`` blocks and inline styles allowed)

        Returns:
            CompileResult with top-level nodes in source order

        Raises:
            EmptyInputError: If the document is blank
            NoElementsFoundError: If no element could be found
            NothingRenderedError: If every top-level element failed
        """
        if not html_text or not html_text.strip():
            raise EmptyInputError()

        # Style blocks are read before the scanner strips them
        rules = extract_style_rules(html_text)
        rule_table = build_rule_table(rules)
        if self.debug:
            logger.info(f"🎨 Extracted {len(rules)} CSS rules ({len(rule_table)} selectors)")

        elements = self.html_parser.parse_html_string(html_text)
        if not elements:
            raise NoElementsFoundError()

        warnings: List[str] = []
        styled: List[StyledElement] = []
        for element in elements:
            try:
                styled.append(resolve_tree(element, rule_table))
            except Exception as e:
                message = f"Style resolution failed for <{element.tag_name}>, using defaults: {e}"
                logger.warning(f"⚠️ {message}")
                warnings.append(message)
                styled.append(StyledElement(element=element, style={}))

        nodes = self.emitter.emit_tree(styled)
        warnings.extend(self.emitter.warnings)

        if not nodes:
            raise NothingRenderedError(
                f"None of the {len(elements)} top-level elements could be rendered", warnings
            )

        self.layout_engine.arrange_page(nodes)

        if self.debug:
            total = sum(1 for node in nodes for _ in node.walk())
            logger.info(f"✅ Compiled {total} design nodes ({len(warnings)} warnings)")

        return CompileResult(nodes=nodes, warnings=warnings, rules=rules)


def compile_html(html_text: str, *, theme: str = "default", debug: bool = False) -> CompileResult:
    """Compile one HTML document with a fresh :class:`DesignCompiler`."""
    return DesignCompiler(theme=theme, debug=debug).compile(html_text)
