import pytest

from blogpipe.render import highlight_css, markdown_to_html, write_text


@pytest.mark.parametrize("text", ["", None, "   \n"])
def test_empty_input_renders_nothing(text):
    assert markdown_to_html(text) == ""


def test_heading():
    html = markdown_to_html("# Hi")

    assert html.startswith("<h1")
    assert "Hi</h1>" in html


def test_fenced_code_is_highlighted():
    html = markdown_to_html("```python\ndef greet():\n    return 1\n```\n")

    assert 'class="codehilite"' in html
    assert "<span" in html


def test_raw_html_passes_through():
    html = markdown_to_html('<div class="note">Keep <b>me</b></div>\n\nText')

    assert '<div class="note">Keep <b>me</b></div>' in html


def test_tables():
    html = markdown_to_html("| a | b |\n|---|---|\n| 1 | 2 |\n")

    assert "<table>" in html
    assert "<td>2</td>" in html


def test_highlight_css_targets_codehilite():
    css = highlight_css()

    assert ".codehilite" in css


def test_write_text_replaces_content(tmp_path):
    target = tmp_path / "out" / "file.txt"
    write_text(target, "first")
    write_text(target, "second")

    assert target.read_text(encoding="utf-8") == "second"
    assert [path.name for path in target.parent.iterdir()] == ["file.txt"]
