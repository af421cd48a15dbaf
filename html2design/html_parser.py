#!/usr/bin/env python3
"""
Structural HTML parser: tag scanner and attribute parser.

The scanner is regex based and dependency free. It pairs each opening tag
with the first closing tag of the same name, so an unclosed ``<div>`` followed
by a sibling ``<div>`` mis-pairs. That is an accepted approximation, not
something to repair here.
"""

import logging
import re
from html import unescape
from typing import Dict, List

from .models import RawElement

logger = logging.getLogger(__name__)

COMMENT_RE = re.compile(r'<!--[\s\S]*?-->')
SCRIPT_RE = re.compile(r'<script[\s\S]*?</script>', re.IGNORECASE)
STYLE_RE = re.compile(r'<style[\s\S]*?</style>', re.IGNORECASE)
BODY_RE = re.compile(r'<body[^>]*>([\s\S]*?)</body>', re.IGNORECASE)

# name, attribute text, then either a self-close or everything up to the
# first closing tag with the same name
TAG_RE = re.compile(r'<(\w+)([^>]*?)(?:\s*/\s*>|>([\s\S]*?)</\1\s*>)', re.IGNORECASE)

ATTR_RE = re.compile(
    r'''([^\s"'=<>/]+)(?:\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'=<>`]+)))?'''
)

STRIP_TAGS_RE = re.compile(r'<[^>]*>')
WHITESPACE_RE = re.compile(r'\s+')

VOID_TAGS = (
    'area', 'base', 'br', 'col', 'embed', 'hr', 'img', 'input',
    'link', 'meta', 'param', 'source', 'track', 'wbr',
)
VOID_TAG_RE = re.compile(
    r'<(' + '|'.join(VOID_TAGS) + r')\b([^>]*?)\s*/?\s*>', re.IGNORECASE
)

# Tags that never produce a visual node
SKIPPED_TAGS = {
    'script', 'style', 'head', 'title', 'meta', 'link', 'base',
    'br', 'wbr', 'template', 'noscript',
}


def parse_attributes(attributes_str: str) -> Dict[str, str]:
    """
    Turn a raw attribute string into a mapping.

    Keys are lowercased and unique (the last occurrence wins). Boolean
    attributes such as ``disabled`` map to an empty string.
    """
    attributes: Dict[str, str] = {}
    if not attributes_str:
        return attributes

    for match in ATTR_RE.finditer(attributes_str):
        name = match.group(1).lower()
        value = next((g for g in match.group(2, 3, 4) if g is not None), '')
        attributes[name] = unescape(value)

    return attributes


def extract_text_content(html: str) -> str:
    """Strip every tag from *html*, unescape entities and collapse whitespace."""
    text = STRIP_TAGS_RE.sub('', html)
    return WHITESPACE_RE.sub(' ', unescape(text)).strip()


def strip_non_structural(html: str) -> str:
    """Remove comments, scripts and style blocks before structural scanning."""
    html = COMMENT_RE.sub('', html)
    html = SCRIPT_RE.sub('', html)
    html = STYLE_RE.sub('', html)
    return html


def close_void_tags(html: str) -> str:
    """Rewrite ``<input ...>`` style void tags as self-closing ``<input ... />``."""
    return VOID_TAG_RE.sub(lambda m: f"<{m.group(1)}{m.group(2)} />", html)


def scan_elements(html: str) -> List[RawElement]:
    """
    Return the ordered elements found at the current nesting level of *html*.

    Each match's inner content is scanned recursively for its children.
    Malformed markup never raises; the worst case is an empty list.
    """
    elements: List[RawElement] = []

    for match in TAG_RE.finditer(html):
        tag_name = match.group(1).lower()
        if tag_name in SKIPPED_TAGS:
            continue

        content = match.group(3) or ''
        elements.append(RawElement(
            tag_name=tag_name,
            attributes=parse_attributes(match.group(2)),
            text_content=extract_text_content(content),
            children=tuple(scan_elements(content)),
        ))

    return elements


class HtmlParser:
    """
    Tag scanner front-end: cleans a document and produces the RawElement forest.
    """

    def __init__(self, debug: bool = False):
        self.debug = debug

    def parse_html_string(self, html: str) -> List[RawElement]:
        """
        Parse a full HTML document.

        Scanning is restricted to the ``<body>`` content when a body exists,
        otherwise the whole remaining text is scanned.

        Args:
            html: Raw HTML document text

        Returns:
            Top-level RawElements in source order (possibly empty)
        """
        if not html:
            return []

        html = strip_non_structural(html)

        body_match = BODY_RE.search(html)
        if body_match:
            html = body_match.group(1)
        elif self.debug:
            logger.info("No <body> found, scanning the whole document")

        html = close_void_tags(html)
        elements = scan_elements(html)

        if self.debug:
            logger.info(f"🔎 Found {len(elements)} top-level elements")

        return elements
