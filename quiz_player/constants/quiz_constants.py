"""Quiz-related constants shared across UI and core layers."""

DEFAULT_CATALOG_FILE: str = "quiz-list.json"
DEFAULT_LANGUAGE: str = "ta"
SUPPORTED_LANGUAGES: tuple[str, ...] = ("ta", "en")
DEFAULT_QUIZ_TITLE: str = "Quiz"
UNRESOLVED_CORRECT_INDEX: int = -1

# Labels shown before each option; options past the last label use "(n)".
OPTION_LABELS: tuple[str, ...] = ("(அ)", "(ஆ)", "(இ)", "(ஈ)", "(உ)")

QUIZ_FINISHED_EVENT: str = "quiz-finished"
LEGACY_RESULT_EVENT: str = "save-quiz-result"
