"""Question rendering utilities for the player's question pane."""

from __future__ import annotations

from quiz_player.core.markdown_math_renderer import renderer
from quiz_player.core.models import QuestionView


def render_question_document(view: QuestionView, font_size: int = 14) -> str:
    """Render the prompt of ``view`` as a standalone HTML document.

    Options are not part of the document; the window shows them as buttons.

    Args:
        view: The question to show
        font_size: Font size in points for the prompt text (default 14)

    Returns:
        HTML string ready for display in QWebEngineView
    """
    return renderer.render_full_document(view.prompt, title=view.title or "QuizPlayer", font_size=font_size)


def format_option_caption(label: str, text: str) -> str:
    """Plain-text button caption for an option, e.g. ``"(அ). Chennai"``."""
    return f"{label}. {text}" if text else f"{label}."
