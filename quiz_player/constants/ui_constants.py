"""Qt UI constants used across widgets."""

WINDOW_TITLE: str = "QuizPlayer"
STATE_REFRESH_INTERVAL_MS: int = 1000
DEFAULT_UI_FONT_SIZE: int = 10
DEFAULT_QUESTION_FONT_SIZE: int = 14
MIN_FONT_SIZE: int = 8
MAX_FONT_SIZE: int = 32

SETTINGS_BUTTON: str = "Settings"
ABOUT_BUTTON: str = "About"
HELP_BUTTON: str = "Help"
