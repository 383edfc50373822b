"""Conversion of loosely-shaped quiz records into :class:`Question` objects.

Accepted record shape (every key optional, first alias found wins):

    {
        "question" | "q": "Prompt text (markdown + LaTeX)",
        "answerOptions" | "options" | "choices": [
            "plain option text",
            {"text" | "label": "...", "isCorrect" | "correct": true, "rationale": "..."},
        ],
        "answer": 1,             # numeric index, overrides the option flags
        "explanation": "...",
    }

Nothing downstream of this module looks at raw records again.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
import logging

from quiz_player.constants.messages import get_message
from quiz_player.constants.quiz_constants import UNRESOLVED_CORRECT_INDEX
from quiz_player.core.models import Option, Question
from quiz_player.core.text_sanitizer import sanitize_text

logger = logging.getLogger(__name__)

_PROMPT_KEYS = ("question", "q")
_OPTION_LIST_KEYS = ("answerOptions", "options", "choices")
_OPTION_TEXT_KEYS = ("text", "label")
_CORRECT_FLAG_KEYS = ("isCorrect", "correct")


def normalize_question(
    raw: object,
    *,
    missing_prompt: str | None = None,
    missing_explanation: str | None = None,
) -> Question:
    """Extract a canonical question from ``raw``. Pure; never raises."""
    if missing_prompt is None:
        missing_prompt = get_message("question_missing")
    if missing_explanation is None:
        missing_explanation = get_message("explanation_missing")

    if not isinstance(raw, Mapping):
        logger.warning("Skipping malformed question record of type %s", type(raw).__name__)
        return Question(prompt=missing_prompt, options=(), explanation=missing_explanation)

    prompt = sanitize_text(_first_truthy(raw, _PROMPT_KEYS)) or missing_prompt
    options = tuple(_parse_option(item) for item in _raw_options(raw))
    correct_index = _resolve_correct_index(raw, options)

    explanation = sanitize_text(raw.get("explanation"))
    if not explanation and 0 <= correct_index < len(options):
        explanation = options[correct_index].rationale
    if not explanation:
        explanation = missing_explanation

    return Question(
        prompt=prompt,
        options=options,
        correct_index=correct_index,
        explanation=explanation,
    )


def normalize_questions(
    records: Sequence[object],
    *,
    missing_prompt: str | None = None,
    missing_explanation: str | None = None,
) -> list[Question]:
    return [
        normalize_question(
            record,
            missing_prompt=missing_prompt,
            missing_explanation=missing_explanation,
        )
        for record in records
    ]


def _first_truthy(record: Mapping, keys: Sequence[str]) -> object:
    for key in keys:
        value = record.get(key)
        if value:
            return value
    return None


def _raw_options(record: Mapping) -> list[object]:
    # The first alias holding a list wins, even an empty one.
    for key in _OPTION_LIST_KEYS:
        value = record.get(key)
        if isinstance(value, (list, tuple)):
            return list(value)
    return []


def _parse_option(item: object) -> Option:
    if isinstance(item, str):
        return Option(text=sanitize_text(item))
    if isinstance(item, Mapping):
        return Option(
            text=sanitize_text(_first_truthy(item, _OPTION_TEXT_KEYS)),
            is_correct=any(bool(item.get(key)) for key in _CORRECT_FLAG_KEYS),
            rationale=sanitize_text(item.get("rationale")),
        )
    return Option(text="")


def _resolve_correct_index(record: Mapping, options: tuple[Option, ...]) -> int:
    answer = record.get("answer")
    if _is_number(answer):
        if float(answer).is_integer() and 0 <= answer < len(options):
            return int(answer)
        logger.warning(
            "Numeric answer %r does not point at one of %d options; treating as unresolved",
            answer,
            len(options),
        )
        return UNRESOLVED_CORRECT_INDEX

    for index, option in enumerate(options):
        if option.is_correct:
            return index
    return UNRESOLVED_CORRECT_INDEX


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
