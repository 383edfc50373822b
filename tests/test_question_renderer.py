import pytest

pytest.importorskip("PySide6.QtWebEngineWidgets")

from quiz_player.core.models import QuestionView  # noqa: E402
from quiz_player.ui.question_renderer import format_option_caption, render_question_document  # noqa: E402


def test_option_caption():
    assert format_option_caption("(அ)", "Chennai") == "(அ). Chennai"
    assert format_option_caption("(ஆ)", "") == "(ஆ)."


def test_question_document_contains_prompt_only():
    view = QuestionView(
        position=0,
        total=1,
        title="Maths",
        prompt="What is $1 + 1$?",
        options=(("(அ)", "Two"),),
        chosen_index=None,
        is_correct=False,
    )
    document = render_question_document(view, font_size=20)
    assert "What is $1 + 1$?" in document
    assert "Two" not in document
    assert "<title>Maths</title>" in document
    assert "font-size: 20pt" in document
