"""Qt UI components for the quiz player."""

from .dialog_helpers import confirm_switch_quiz, show_error, show_info
from .player_main_window import PlayerMainWindow
from .question_renderer import format_option_caption, render_question_document

__all__ = [
    "PlayerMainWindow",
    "confirm_switch_quiz",
    "format_option_caption",
    "render_question_document",
    "show_error",
    "show_info",
]
