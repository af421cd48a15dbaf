#!/usr/bin/env python3
"""
Test to verify that laid-out siblings never overlap and that children stay
inside the containers that position them.
"""

import pytest
from pptx import Presentation

from html2design import PPTXRenderer, compile_html

DOCUMENT = """
<html><head><style>
  .toolbar { display: flex; gap: 8px; justify-content: space-between; width: 700px; }
  .stack { display: flex; flex-direction: column; align-items: center; }
  .card { background: #fafafa; border: 1px solid #ddd; border-radius: 8px; }
</style></head>
<body>
  <header><h1>Dashboard</h1><nav><a href="#">Home</a></nav></header>
  <section class="card">
    <h2>Sign in</h2>
    <input placeholder="Email"><textarea placeholder="Notes"></textarea>
    <div class="toolbar"><button>Cancel</button><button>Save</button></div>
  </section>
  <div class="stack"><img src="a.png" width="120" height="80"><p>Caption text</p></div>
  <ol><li>First</li><li>Second</li><li>Third</li></ol>
  <footer><small>Footer</small></footer>
</body></html>
"""


def get_node_rect(node):
    """Get the canvas rectangle of a design node."""
    left = node.absolute_x
    top = node.absolute_y
    return (left, top, left + node.width, top + node.height)


def get_shape_rect(shape):
    """Get the rectangle coordinates of a shape."""
    return (shape.left, shape.top, shape.left + shape.width, shape.top + shape.height)


def rectangles_overlap(rect1, rect2):
    """Check if two rectangles overlap."""
    # Unpack the rectangle coordinates
    left1, top1, right1, bottom1 = rect1
    left2, top2, right2, bottom2 = rect2

    # Check if one rectangle is to the left of the other
    if right1 <= left2 or right2 <= left1:
        return False

    # Check if one rectangle is above the other
    if bottom1 <= top2 or bottom2 <= top1:
        return False

    # If we get here, the rectangles overlap
    return True


def contains(outer, inner, tolerance=1e-6):
    return (inner[0] >= outer[0] - tolerance and inner[1] >= outer[1] - tolerance and
            inner[2] <= outer[2] + tolerance and inner[3] <= outer[3] + tolerance)


@pytest.fixture(scope="module")
def result():
    return compile_html(DOCUMENT)


def test_no_sibling_overlaps(result):
    """Test that no two siblings overlap anywhere in the tree."""
    groups = [result.nodes] + [node.children for node in result.walk()]
    for siblings in groups:
        for i in range(len(siblings)):
            for j in range(i + 1, len(siblings)):
                assert not rectangles_overlap(get_node_rect(siblings[i]), get_node_rect(siblings[j])), \
                    f"{siblings[i].name} and {siblings[j].name} overlap"


def test_children_inside_hugging_containers(result):
    """Containers that size themselves from their children must enclose them."""
    for node in result.walk():
        if not node.children:
            continue
        # Explicit widths may be narrower than content; only check hugging axes
        for child in node.children:
            outer = get_node_rect(node)
            inner = get_node_rect(child)
            assert inner[1] >= outer[1] and inner[3] <= outer[3] + 1e-6, \
                f"{child.name} escapes {node.name} vertically"


def test_rendered_shapes_fit_on_slide(result, tmp_path):
    """Every rendered shape lies inside the slide, which grows to fit the tree."""
    output = tmp_path / "layout.pptx"
    PPTXRenderer().render(result, str(output))

    prs = Presentation(str(output))
    assert len(prs.slides) == 1

    slide_rect = (0, 0, prs.slide_width, prs.slide_height)
    shapes = list(prs.slides[0].shapes)
    assert shapes
    for shape in shapes:
        # Allow one EMU per side for pixel to inch rounding
        left, top, right, bottom = get_shape_rect(shape)
        assert contains(slide_rect, (left + 1, top + 1, right - 1, bottom - 1)), \
            f"{shape.name} is outside the slide"
