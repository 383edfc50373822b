"""Markdown + LaTeX rendering helpers shared by the Qt window and the web player.

Architecture note:
    Prompts and options are converted to HTML here and MathJax typesets any
    ``$...$`` math when the page is displayed. Raw HTML in quiz files is not
    passed through: quiz files come from wherever the catalog points, so
    markup is escaped rather than trusted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import html

from markdown_it import MarkdownIt

_MATHJAX_SCRIPT = (
    "https://cdn.jsdelivr.net/npm/mathjax@3/es5/tex-mml-chtml.js"
)


@dataclass(slots=True)
class MarkdownMathRenderer:
    """Converts markdown-with-math into HTML fragments or full documents."""

    enable_html: bool = False
    _markdown: MarkdownIt = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._markdown = (
            MarkdownIt("commonmark", {"html": self.enable_html})
            .enable("table")
            .enable("strikethrough")
        )

    def render_fragment(self, markdown_text: str) -> str:
        """Render a markdown string into an HTML fragment."""

        sanitized = markdown_text.strip() or ""
        if not sanitized:
            return "<p><em>No content provided.</em></p>"
        return self._markdown.render(sanitized)

    def render_inline(self, markdown_text: str) -> str:
        """Render a single line (an option or a label) without paragraph tags."""

        return self._markdown.renderInline(markdown_text.strip())

    def wrap_with_mathjax(self, body_html: str, title: str = "QuizPlayer", font_size: int = 14) -> str:
        """Wrap a fragment inside a minimal HTML document that loads MathJax."""

        return f"""<!doctype html>
<html lang=\"ta\">
  <head>
    <meta charset=\"utf-8\" />
    <title>{html.escape(title)}</title>
    <style>
      body {{ font-family: 'Noto Sans Tamil', 'Segoe UI', system-ui, sans-serif; margin: 0; padding: 0.5rem; }}
      .question-html {{ font-size: {font_size}pt; line-height: 1.5; }}
    </style>
    <script>
      window.MathJax = {{ tex: {{ inlineMath: [['$','$']], displayMath: [['$$','$$']] }}, svg: {{ fontCache: 'global' }} }};
    </script>
    <script defer src=\"{_MATHJAX_SCRIPT}\"></script>
  </head>
  <body>
    <div class=\"question-html\">{body_html}</div>
  </body>
</html>"""

    def render_full_document(self, markdown_text: str, title: str = "QuizPlayer", font_size: int = 14) -> str:
        """Convenience wrapper to render markdown and embed MathJax."""

        fragment = self.render_fragment(markdown_text)
        return self.wrap_with_mathjax(fragment, title=title, font_size=font_size)


renderer = MarkdownMathRenderer()
# Shared instance; MarkdownIt.render keeps no per-call state, so the uvicorn
# thread and the Qt thread can both use it.
