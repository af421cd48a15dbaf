"""
Centralized CSS utilities.

Two unrelated CSS sources flow through this module:

* theme CSS (``themes/<name>.css``), read by :class:`CSSParser` for layout and
  appearance defaults;
* the ``<style>`` blocks of the document being compiled, turned into
  :class:`StyleRule` objects by :func:`extract_style_rules`.
"""
import logging
import re
from typing import Dict, List, Optional

from .models import RGB, StyleRule
from .style_values import parse_color
from .theme_loader import get_css

logger = logging.getLogger(__name__)

STYLE_BLOCK_RE = re.compile(r'<style[^>]*>([\s\S]*?)</style>', re.IGNORECASE)
CSS_COMMENT_RE = re.compile(r'/\*[\s\S]*?\*/')

FONT_SIZE_TAGS = ('h1', 'h2', 'h3', 'h4', 'h5', 'h6', 'p', 'span', 'small', 'strong', 'em', 'li')


class CSSParser:
    """
    Theme CSS reader.

    Extracts ``:root`` custom properties and per-tag default font sizes from a
    theme. Results are cached per instance.
    """

    def __init__(self, theme: str = "default"):
        self.theme = theme
        self.css_content = get_css(theme)
        self._css_vars = None
        self._font_sizes = None

    def get_css_variables(self) -> Dict[str, str]:
        """Extract all CSS variables from :root section. Cached for performance."""
        if self._css_vars is not None:
            return self._css_vars

        content = CSS_COMMENT_RE.sub('', self.css_content)
        root_match = re.search(r':root\s*\{([^}]+)\}', content, re.DOTALL)
        if not root_match:
            raise ValueError(f"No :root section found in theme '{self.theme}'")

        variable_pattern = r'--([^:]+):\s*([^;]+);'
        css_vars = re.findall(variable_pattern, root_match.group(1))
        self._css_vars = {name.strip(): value.strip() for name, value in css_vars}

        return self._css_vars

    def get_raw_value(self, variable_name: str) -> str:
        """Get raw CSS variable value."""
        value = self.get_css_variables().get(variable_name)
        if not value:
            raise ValueError(f"CSS variable '--{variable_name}' not found in theme '{self.theme}'")
        return value

    def get_px_value(self, variable_name: str) -> float:
        """Get pixel value from CSS variable."""
        value = self.get_raw_value(variable_name)
        px_match = re.search(r'(-?\d+(?:\.\d+)?)px', value)
        if not px_match:
            raise ValueError(f"CSS variable '--{variable_name}' is not a pixel value: {value}")
        return float(px_match.group(1))

    def get_number_value(self, variable_name: str) -> float:
        """Get a unitless number (line-height, ratios) from CSS variable."""
        value = self.get_raw_value(variable_name)
        try:
            return float(value)
        except ValueError:
            raise ValueError(f"CSS variable '--{variable_name}' is not a number: {value}") from None

    def get_color_value(self, variable_name: str) -> RGB:
        """Get a colour from CSS variable."""
        value = self.get_raw_value(variable_name)
        color = parse_color(value)
        if color is None:
            raise ValueError(f"CSS variable '--{variable_name}' is not a colour: {value}")
        return color

    def get_font_family(self) -> str:
        return self.get_raw_value('font-family').strip('\'"')

    def get_font_sizes(self) -> Dict[str, float]:
        """Extract default font sizes per text tag. Cached for performance."""
        if self._font_sizes is not None:
            return self._font_sizes

        font_sizes = {}
        for tag in FONT_SIZE_TAGS:
            pattern = rf'(?<![\w.#-]){tag}\s*{{[^}}]*font-size:\s*(\d+(?:\.\d+)?)px'
            match = re.search(pattern, self.css_content, re.IGNORECASE | re.DOTALL)
            if match:
                font_sizes[tag] = float(match.group(1))

        self._font_sizes = font_sizes
        return font_sizes

    def get_slide_dimensions(self) -> Dict[str, float]:
        """Extract canvas/slide dimensions from CSS variables."""
        width_px = self.get_px_value('slide-width')
        height_px = self.get_px_value('slide-height')

        return {
            'width_px': width_px,
            'height_px': height_px,
            'padding_px': self.get_px_value('slide-padding'),
            'width_inches': width_px / 96,  # 96 DPI standard
            'height_inches': height_px / 96,
        }


# ---------------------------------------------------------------------------
# Document CSS rule extraction
# ---------------------------------------------------------------------------

def parse_declarations(block: str) -> Dict[str, str]:
    """
    Parse a declaration block (rule body or inline ``style`` attribute).

    Splits on ``;`` then on the first ``:``; property names are lowercased,
    both sides trimmed. Entries without a colon, or with an empty name or
    value, are ignored. A repeated property keeps its last value.
    """
    properties: Dict[str, str] = {}
    if not block:
        return properties

    for declaration in block.split(';'):
        if ':' not in declaration:
            continue
        prop, value = declaration.split(':', 1)
        prop = prop.strip().lower()
        value = value.strip()
        if prop and value:
            properties[prop] = value

    return properties


def _find_block_end(css: str, open_index: int) -> int:
    """Index of the brace closing the block opened at *open_index*, or -1."""
    depth = 0
    for index in range(open_index, len(css)):
        char = css[index]
        if char == '{':
            depth += 1
        elif char == '}':
            depth -= 1
            if depth == 0:
                return index
    return -1


def parse_css_rules(css: str) -> List[StyleRule]:
    """
    Parse ``selector { declarations }`` runs from a stylesheet body.

    Braces are matched in pairs, so at-rules with nested blocks (``@media``,
    ``@keyframes``...) are skipped whole rather than corrupting later rules.
    """
    rules: List[StyleRule] = []
    css = CSS_COMMENT_RE.sub('', css)
    position = 0

    while True:
        open_index = css.find('{', position)
        if open_index == -1:
            break

        close_index = _find_block_end(css, open_index)
        selector = css[position:open_index].strip()

        if close_index == -1:
            logger.debug(f"Unterminated CSS block after '{selector}', ignoring the rest")
            break

        position = close_index + 1

        if not selector:
            continue
        if selector.startswith('@'):
            logger.debug(f"Skipping CSS at-rule '{selector}'")
            continue

        rules.append(StyleRule(selector=selector, properties=parse_declarations(css[open_index + 1:close_index])))

    return rules


def extract_style_rules(html: str) -> List[StyleRule]:
    """
    Collect every rule from every ``<style>`` block, in document order.

    Every occurrence is kept; see :func:`build_rule_table` for the
    selector-keyed view used by the cascade.
    """
    rules: List[StyleRule] = []
    for css_content in STYLE_BLOCK_RE.findall(html or ''):
        rules.extend(parse_css_rules(css_content))
    return rules


def build_rule_table(rules: List[StyleRule]) -> Dict[str, Dict[str, str]]:
    """
    Key rules by selector text.

    A later rule for the same selector replaces the earlier one completely;
    properties are not merged here. Per-property merging only happens across
    different selectors, during cascade resolution.
    """
    table: Dict[str, Dict[str, str]] = {}
    for rule in rules:
        table[rule.selector] = dict(rule.properties)
    return table


def extract_css_styles(html: str) -> Dict[str, Dict[str, str]]:
    """Shortcut: selector table for every ``<style>`` block of *html*."""
    return build_rule_table(extract_style_rules(html))


def get_declared_value(style: Dict[str, str], *names: str) -> Optional[str]:
    """First non-empty value among *names* in an effective style."""
    for name in names:
        value = style.get(name)
        if value:
            return value
    return None
