"""Test the regex tag scanner and attribute parser."""

from html2design.html_parser import HtmlParser, close_void_tags, parse_attributes, scan_elements


def test_parse_attributes_quoting_styles():
    attrs = parse_attributes(' class="a b" id=main data-v=\'q\' disabled')
    assert attrs == {'class': 'a b', 'id': 'main', 'data-v': 'q', 'disabled': ''}


def test_parse_attributes_lowercases_keys_and_last_wins():
    attrs = parse_attributes(' CLASS="first" class="second" title="Tom &amp; Jerry"')
    assert attrs['class'] == 'second'
    assert attrs['title'] == 'Tom & Jerry'


def test_parse_html_restricts_to_body():
    html = (
        "<html><head><title>Ignored</title></head>"
        "<body><div class='c'><p>Hi &amp; bye</p><input placeholder=\"Name\"></div></body></html>"
    )
    elements = HtmlParser().parse_html_string(html)

    assert len(elements) == 1
    div = elements[0]
    assert div.tag_name == 'div'
    assert div.classes == ['c']
    assert [child.tag_name for child in div.children] == ['p', 'input']
    assert div.children[0].text_content == 'Hi & bye'
    assert div.children[1].attributes['placeholder'] == 'Name'
    # Text content includes nested element text
    assert div.text_content == 'Hi & bye'


def test_comments_scripts_and_styles_are_stripped():
    html = (
        "<!-- <div>hidden</div> -->"
        "<script>var s = '<div>nope</div>';</script>"
        "<style>p { color: red; }</style>"
        "<p>ok</p>"
    )
    elements = HtmlParser().parse_html_string(html)
    assert [e.tag_name for e in elements] == ['p']
    assert elements[0].text_content == 'ok'


def test_non_visual_tags_are_skipped_without_body():
    html = "<head><title>T</title><meta charset='utf-8'></head><h1>Title</h1>"
    elements = HtmlParser().parse_html_string(html)
    assert [e.tag_name for e in elements] == ['h1']


def test_whitespace_is_collapsed():
    elements = scan_elements("<p>\n   Hello\n\t  world   </p>")
    assert elements[0].text_content == 'Hello world'


def test_void_tags_without_slash_are_kept():
    assert close_void_tags('<img src="a.png">') == '<img src="a.png" />'
    elements = scan_elements(close_void_tags('<div><img src="a.png"><hr><p>x</p></div>'))
    assert [c.tag_name for c in elements[0].children] == ['img', 'hr', 'p']


def test_child_order_is_preserved():
    elements = scan_elements("<ul><li>1</li><li>2</li><li>3</li></ul>")
    assert [c.text_content for c in elements[0].children] == ['1', '2', '3']


def test_plain_text_yields_no_elements():
    assert HtmlParser().parse_html_string("just text") == []
    assert HtmlParser().parse_html_string("") == []


def test_malformed_markup_does_not_raise():
    elements = HtmlParser().parse_html_string("<div><p>unclosed <span>x</div>")
    assert isinstance(elements, list)
