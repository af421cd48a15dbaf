"""Test the PowerPoint reference renderer by reopening the written deck."""

from pptx import Presentation
from pptx.enum.shapes import MSO_SHAPE

from html2design import PPTXRenderer, compile_html
from html2design.pptx_renderer import px


def render(html, tmp_path, name="out.pptx", **kwargs):
    output = tmp_path / name
    PPTXRenderer(**kwargs).render(compile_html(html), str(output))
    return Presentation(str(output))


def all_text(prs):
    return [shape.text_frame.text for shape in prs.slides[0].shapes if shape.has_text_frame and shape.text_frame.text]


def test_single_slide_with_theme_size(tmp_path):
    prs = render("<h1>Hello</h1>", tmp_path)
    assert len(prs.slides) == 1
    assert prs.slide_width == px(1280)
    assert prs.slide_height == px(720)
    assert 'Hello' in all_text(prs)


def test_button_renders_box_and_caption(tmp_path):
    prs = render("<button>Go</button>", tmp_path)
    shapes = list(prs.slides[0].shapes)

    box = next(s for s in shapes if s.name == 'Button')
    assert box.auto_shape_type == MSO_SHAPE.ROUNDED_RECTANGLE
    assert str(box.fill.fore_color.rgb) == '007AFF'
    assert 'Go' in all_text(prs)


def test_text_formatting(tmp_path):
    prs = render('<h2 style="color:#ff0000">Title</h2>', tmp_path)
    textbox = next(s for s in prs.slides[0].shapes if s.has_text_frame and s.text_frame.text == 'Title')
    run = textbox.text_frame.paragraphs[0].runs[0]
    assert run.font.bold is True
    assert run.font.size.pt == 36
    assert str(run.font.color.rgb) == 'FF0000'


def test_list_items_render_markers(tmp_path):
    prs = render("<ol><li>One</li><li>Two</li></ol>", tmp_path)
    texts = all_text(prs)
    assert '1.' in texts and '2.' in texts
    assert 'One' in texts and 'Two' in texts


def test_unfilled_containers_draw_no_box(tmp_path):
    prs = render("<section><p>Only text</p></section>", tmp_path)
    names = [s.name for s in prs.slides[0].shapes]
    assert 'SECTION' not in names
    assert len(names) == 1


def test_slide_grows_to_fit_content(tmp_path):
    prs = render('<img src="wide.png" width="2000" height="100">', tmp_path)
    # 2000px image plus 40px slide padding on both sides
    assert prs.slide_width == px(2080)


def test_output_directory_is_created(tmp_path):
    output = tmp_path / "nested" / "deck.pptx"
    path = PPTXRenderer().render(compile_html("<p>x</p>"), str(output))
    assert path == str(output)
    assert output.exists()
