"""
Cascade resolver: merge every style source that applies to one element.

Selector matching is string based, not a selector AST, and specificity is
approximated by a fixed source order (lowest first):

1. universal selector ``*``
2. tag selector
3. for each class in ``class`` attribute order: ``.cls``, then every
   compound class selector (``.a.b``) whose classes are all on the element
4. ``#id``
5. ``tag:hover``, applied unconditionally since no interaction state exists
6. loose descendant selectors: any selector with a space and no ``.``/``#``
   whose last token is the tag name (ancestors are not checked)
7. the inline ``style`` attribute

Each source is overlaid property by property: a later source overwrites the
properties it names and leaves the rest alone.
"""
import logging
from typing import Dict, List

from .css_utils import parse_declarations
from .models import RawElement, StyledElement

logger = logging.getLogger(__name__)

RuleTable = Dict[str, Dict[str, str]]


def _compound_class_tokens(selector: str) -> List[str]:
    """Class tokens of a pure compound class selector like ``.a.b``, else []."""
    if not selector.startswith('.') or any(c in selector for c in ' >+~#:[,*'):
        return []
    tokens = [token for token in selector.split('.') if token]
    return tokens if len(tokens) > 1 else []


def _is_loose_descendant_selector(selector: str) -> bool:
    return ' ' in selector and '.' not in selector and '#' not in selector


def resolve_style(element: RawElement, rule_table: RuleTable) -> Dict[str, str]:
    """
    Compute the effective style of *element*.

    Args:
        element: Element to style
        rule_table: Selector to properties mapping from ``build_rule_table``

    Returns:
        A fresh property mapping (never shared with other elements)
    """
    combined: Dict[str, str] = {}
    tag_name = element.tag_name

    if '*' in rule_table:
        combined.update(rule_table['*'])

    if tag_name in rule_table:
        combined.update(rule_table[tag_name])

    classes = element.classes
    if classes:
        class_set = set(classes)
        for class_name in classes:
            class_selector = f".{class_name}"
            if class_selector in rule_table:
                combined.update(rule_table[class_selector])

            for selector, properties in rule_table.items():
                tokens = _compound_class_tokens(selector)
                if class_name in tokens and class_set.issuperset(tokens):
                    combined.update(properties)

    element_id = element.element_id
    if element_id and f"#{element_id}" in rule_table:
        combined.update(rule_table[f"#{element_id}"])

    hover_selector = f"{tag_name}:hover"
    if hover_selector in rule_table:
        combined.update(rule_table[hover_selector])

    for selector, properties in rule_table.items():
        if _is_loose_descendant_selector(selector) and selector.split()[-1] == tag_name:
            combined.update(properties)

    combined.update(parse_declarations(element.attributes.get('style', '')))

    return combined


def resolve_tree(element: RawElement, rule_table: RuleTable) -> StyledElement:
    """Resolve *element* and its descendants depth-first, preserving child order."""
    return StyledElement(
        element=element,
        style=resolve_style(element, rule_table),
        children=[resolve_tree(child, rule_table) for child in element.children],
    )
