from quiz_player.core.markdown_math_renderer import MarkdownMathRenderer, renderer


def test_fragment_renders_markdown():
    assert renderer.render_fragment("**bold**") == "<p><strong>bold</strong></p>\n"


def test_fragment_escapes_raw_html():
    html = renderer.render_fragment("<script>alert(1)</script>")
    assert "<script>" not in html
    assert "&lt;script&gt;" in html


def test_empty_fragment_has_placeholder():
    assert renderer.render_fragment("   ") == "<p><em>No content provided.</em></p>"


def test_inline_has_no_paragraph():
    assert renderer.render_inline(" *x* ") == "<em>x</em>"


def test_math_delimiters_survive_for_mathjax():
    assert "$a^2$" in renderer.render_inline("$a^2$")


def test_full_document_escapes_title_and_loads_mathjax():
    document = MarkdownMathRenderer().render_full_document("Text", title="<Quiz>", font_size=18)
    assert "<title>&lt;Quiz&gt;</title>" in document
    assert "mathjax" in document
    assert "font-size: 18pt" in document
    assert "<p>Text</p>" in document
