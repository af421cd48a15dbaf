"""End-to-end tests for compile_html and the compiler error contract."""

import json
from pathlib import Path

import pytest

from html2design import (
    CompileError,
    DesignCompiler,
    EmptyInputError,
    NoElementsFoundError,
    NothingRenderedError,
    compile_html,
)
from html2design.models import Direction, LayoutMode, NodeVariant


def test_flex_scenario():
    result = compile_html('<div style="display:flex;gap:8px"><button>Go</button><span>Label</span></div>')

    assert len(result.nodes) == 1
    container = result.nodes[0]
    assert container.variant == NodeVariant.CONTAINER
    assert container.layout.mode == LayoutMode.AUTO_LAYOUT_FLEX
    assert container.layout.direction == Direction.HORIZONTAL
    assert container.layout.gap == 8
    assert [c.variant for c in container.children] == [NodeVariant.BUTTON, NodeVariant.TEXT]
    assert result.warnings == []


def test_flex_children_positions(flex_document):
    container = compile_html(flex_document).nodes[0]
    first, second = container.children

    # padding 5, gap 10, two 120x40 buttons
    assert (first.geometry.x, first.geometry.y) == (5, 5)
    assert (second.geometry.x, second.geometry.y) == (135, 5)
    assert (container.width, container.height) == (260, 50)


def test_rules_are_returned(flex_document):
    result = compile_html(flex_document)
    assert [rule.selector for rule in result.rules] == ['.box']


def test_just_text_has_no_elements():
    with pytest.raises(NoElementsFoundError):
        compile_html("just text")


def test_empty_body_has_no_elements():
    with pytest.raises(NoElementsFoundError):
        compile_html("<html><body>   </body></html>")


@pytest.mark.parametrize("html", ["", "   \n\t"])
def test_blank_input(html):
    with pytest.raises(EmptyInputError):
        compile_html(html)


def test_errors_are_value_errors():
    with pytest.raises(ValueError):
        compile_html("")
    assert issubclass(NothingRenderedError, CompileError)


def test_absolute_positions_follow_page_stacking():
    result = compile_html("<div><p>a</p></div><div><p>b</p></div>")
    first, second = result.nodes

    assert (first.absolute_x, first.absolute_y) == (0, 0)
    assert second.absolute_y == pytest.approx(first.height + 40)
    paragraph = second.children[0]
    assert paragraph.absolute_x == 20
    assert paragraph.absolute_y == pytest.approx(second.absolute_y + 20)


def test_per_element_failure_is_skipped_with_warning(monkeypatch):
    compiler = DesignCompiler()

    def boom(element):
        raise RuntimeError("broken image")

    monkeypatch.setattr(compiler.emitter, 'create_image_node', boom)
    result = compiler.compile('<div><img src="x.png"><p>still here</p></div>')

    container = result.nodes[0]
    assert [c.variant for c in container.children] == [NodeVariant.TEXT]
    assert len(result.warnings) == 1
    assert 'img' in result.warnings[0]
    assert 'broken image' in result.warnings[0]


def test_nothing_rendered(monkeypatch):
    compiler = DesignCompiler()
    monkeypatch.setattr(compiler.emitter, 'create_button_node', lambda element: 1 / 0)

    with pytest.raises(NothingRenderedError) as excinfo:
        compiler.compile('<button>A</button><button>B</button>')
    assert len(excinfo.value.warnings) == 2


def test_cascade_failure_falls_back_to_empty_style(monkeypatch):
    def failing_resolve(element, rule_table):
        raise KeyError("bad rule")

    monkeypatch.setattr("html2design.compiler.resolve_tree", failing_resolve)
    result = compile_html('<style>div { background: red; }</style><div><p>x</p></div>')

    node = result.nodes[0]
    assert node.variant == NodeVariant.CONTAINER
    assert node.children == []
    assert node.style.fills == []
    assert len(result.warnings) == 1


def test_compile_is_deterministic():
    html = """
    <style>.card { display: flex; justify-content: space-between; width: 500px; }</style>
    <section><h2>Title</h2><div class="card"><button>A</button><img src="a.png"></div>
    <ul><li>One</li><li>Two</li></ul></section>
    """
    first = json.dumps(compile_html(html).to_dict(), sort_keys=True)
    second = json.dumps(compile_html(html).to_dict(), sort_keys=True)
    assert first == second


def test_tree_shape_is_preserved():
    html = "<section><p>a</p><div><span>b</span><em>c</em></div><button>d</button></section>"
    section = compile_html(html).nodes[0]
    assert len(section.children) == 3
    assert len(section.children[1].children) == 2
    assert [n.tag_name for n in section.walk()] == ['section', 'p', 'div', 'span', 'em', 'button']


def test_to_dict_is_json_serialisable(flex_document):
    data = compile_html(flex_document).to_dict()
    text = json.dumps(data)
    assert '"variant": "button"' in text
    assert data['nodes'][0]['layout']['mode'] == 'auto_layout_flex'


def test_example_landing_page_compiles_cleanly():
    html = (Path(__file__).resolve().parents[2] / "examples" / "landing_page.html").read_text(encoding="utf-8")
    result = compile_html(html)

    assert result.warnings == []
    assert [n.tag_name for n in result.nodes] == ['header', 'section', 'section', 'form', 'ol', 'footer']
    features = result.nodes[2]
    assert features.layout.mode == LayoutMode.AUTO_LAYOUT_FLEX
    assert len(features.children) == 3
