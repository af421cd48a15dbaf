"""Test tag dispatch and style interpretation in the design-tree emitter."""

import pytest

from html2design import compile_html
from html2design.emitter import font_style_for
from html2design.models import RGB, CornerRadii, NodeVariant, Padding

BRAND = RGB(0, 122 / 255, 1)
WHITE = RGB(1, 1, 1)


def first_node(html, **kwargs):
    return compile_html(html, **kwargs).nodes[0]


class TestFontStyle:
    def test_weights(self):
        assert font_style_for('p', None) == 'Regular'
        assert font_style_for('p', 'bold') == 'Bold'
        assert font_style_for('p', '800') == 'Bold'
        assert font_style_for('p', '600') == 'SemiBold'
        assert font_style_for('p', '500') == 'Medium'
        assert font_style_for('p', 'normal') == 'Regular'

    def test_semantic_tags_override_weight(self):
        assert font_style_for('h2', '300') == 'Bold'
        assert font_style_for('strong', None) == 'Bold'
        assert font_style_for('em', 'bold') == 'Medium'


class TestTextNodes:
    def test_heading_defaults(self):
        node = first_node("<h1>Welcome</h1>")
        assert node.variant == NodeVariant.TEXT
        assert node.text == 'Welcome'
        typography = node.style.typography
        assert typography.font_size == 48
        assert typography.font_style == 'Bold'
        assert typography.color == RGB(0x1C / 255, 0x1C / 255, 0x1C / 255)
        assert typography.line_height_percent == pytest.approx(140)

    def test_css_overrides(self):
        node = first_node(
            '<p style="font-size:2em;color:#00f;text-align:center;line-height:24px;font-weight:600">Hi</p>'
        )
        typography = node.style.typography
        assert typography.font_size == 32
        assert typography.color == RGB(0, 0, 1)
        assert typography.text_align == 'CENTER'
        assert typography.line_height_percent == pytest.approx(75)
        assert typography.font_style == 'SemiBold'

    def test_empty_text_falls_back_to_tag_name(self):
        assert first_node("<p></p>").text == 'P'

    def test_text_absorbs_nested_elements(self):
        node = first_node("<p>Hello <strong>bold</strong> world</p>")
        assert node.variant == NodeVariant.TEXT
        assert node.children == []
        assert node.text == 'Hello bold world'

    def test_inline_tags(self):
        assert first_node('<a href="#">Link</a>').variant == NodeVariant.TEXT
        assert first_node('<em>Note</em>').style.typography.font_style == 'Medium'
        wrapper = first_node('<a href="#"><span>Icon</span></a>')
        assert wrapper.variant == NodeVariant.CONTAINER
        assert wrapper.children[0].variant == NodeVariant.TEXT


class TestControls:
    def test_button_defaults(self):
        node = first_node("<button>Go</button>")
        assert node.variant == NodeVariant.BUTTON
        assert (node.width, node.height) == (120, 40)
        assert node.style.fills == [BRAND]
        assert node.style.corner_radii == CornerRadii.uniform(8)
        assert node.text == 'Go'
        assert node.style.typography.color == WHITE
        assert node.style.typography.font_style == 'Medium'
        assert node.style.typography.text_align == 'CENTER'

    def test_button_styled(self):
        node = first_node('<button style="background-color:#ff0000;border-radius:0;width:200px"></button>')
        assert node.style.fills == [RGB(1, 0, 0)]
        assert node.style.corner_radii == CornerRadii.uniform(0)
        assert node.width == 200
        assert node.text == 'Button'

    def test_input_and_textarea(self):
        node = first_node('<input type="email" placeholder="Email">')
        assert node.variant == NodeVariant.INPUT
        assert (node.width, node.height) == (280, 44)
        assert node.text == 'Email'
        assert node.style.strokes == [RGB(0xD1 / 255, 0xD1 / 255, 0xD6 / 255)]
        assert node.style.stroke_weight == 1

        area = first_node('<textarea>Hello</textarea>')
        assert (area.width, area.height) == (280, 80)
        assert area.text == 'Hello'
        assert first_node('<input>').text == 'Enter text...'

    def test_input_stroke_ignores_css_border(self):
        node = first_node('<input style="border:3px solid red;background:#fff">')
        assert node.style.strokes == [RGB(0xD1 / 255, 0xD1 / 255, 0xD6 / 255)]
        assert node.style.stroke_weight == 1
        assert node.style.fills == [WHITE]

    def test_image_sizes(self):
        node = first_node('<img src="a.png" alt="A" width="320" height="240">')
        assert node.variant == NodeVariant.IMAGE
        assert (node.width, node.height) == (320, 240)
        assert (node.src, node.alt) == ('a.png', 'A')

        assert (first_node('<img src="a.png">').width, first_node('<img src="a.png">').height) == (200, 150)
        styled = first_node('<img src="a.png" width="320" height="240" style="width:100px">')
        assert (styled.width, styled.height) == (100, 240)


class TestLists:
    def test_ordered_list(self):
        node = first_node("<ol><li>One</li><li>Two</li></ol>")
        assert node.variant == NodeVariant.LIST
        assert node.name == 'Ordered List'
        assert [c.marker for c in node.children] == ['1.', '2.']
        assert [c.text for c in node.children] == ['One', 'Two']
        assert [(c.width, c.height) for c in node.children] == [(280, 24), (280, 24)]
        assert [c.geometry.y for c in node.children] == [0, 32]
        assert (node.width, node.height) == (300, 56)

    def test_unordered_and_empty_lists(self):
        node = first_node("<ul><li>A</li></ul>")
        assert node.children[0].marker == '•'
        assert first_node("<ul></ul>").height == 100

    def test_stray_list_item(self):
        node = first_node("<li>Loose</li>")
        assert node.variant == NodeVariant.LIST_ITEM
        assert node.marker == '•'


class TestBasicStyles:
    def test_box_styles(self):
        node = first_node(
            '<div style="background:#fff;border:2px solid #000;border-radius:4px 8px;'
            'box-shadow:0 2px 4px rgba(0,0,0,.3)"></div>'
        )
        assert node.style.fills == [WHITE]
        assert node.style.strokes == [RGB(0, 0, 0)]
        assert node.style.stroke_weight == 2
        assert node.style.corner_radii == CornerRadii(4, 8, 4, 8)
        assert len(node.style.effects) == 1
        assert node.style.effects[0].alpha == 0.1

    def test_border_width_uses_default_colour(self):
        node = first_node('<div style="border-width:3px"></div>')
        assert node.style.strokes == [RGB(0xDD / 255, 0xDD / 255, 0xDD / 255)]
        assert node.style.stroke_weight == 3

    def test_unresolvable_background_is_skipped(self):
        node = first_node('<div style="background:linear-gradient(red, blue)"></div>')
        assert node.style.fills == []

    def test_flex_padding_from_css(self):
        node = first_node('<div style="display:flex;padding:10px 4px"></div>')
        assert node.style.padding == Padding(10, 4, 10, 4)

    def test_block_padding_is_fixed(self):
        node = first_node('<section style="padding:2px"></section>')
        assert node.style.padding == Padding.uniform(20)

    def test_individual_corner_radii(self):
        node = first_node('<div style="border-top-left-radius:6px"></div>')
        assert node.style.corner_radii == CornerRadii(6, 0, 0, 0)


def test_leaf_container_keeps_text_label():
    node = first_node("<div>Hello</div>")
    assert node.is_container()
    assert node.text == 'Hello'
    assert node.height == pytest.approx(16 * 1.4 + 40)


def test_compact_theme_changes_defaults():
    node = first_node("<button>Go</button>", theme="compact")
    assert node.variant == NodeVariant.BUTTON
    assert first_node("<section></section>", theme="compact").style.padding == Padding.uniform(12)
