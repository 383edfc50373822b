"""Localized status and label text for the quiz player.

Tamil is the default; English is kept complete so it can stand in for any
missing Tamil entry.
"""

from __future__ import annotations

import logging

from quiz_player.constants.quiz_constants import DEFAULT_LANGUAGE

logger = logging.getLogger(__name__)

_FALLBACK_LANGUAGE = "en"

MESSAGES: dict[str, dict[str, str]] = {
    "ta": {
        "category_fallback": "பிரிவு",
        "select_quiz": "— வினாடி–வினாவைத் தேர்ந்தெடுக்கவும் —",
        "question_missing": "வினா கிடைக்கவில்லை.",
        "explanation_missing": "விளக்கம் வழங்கப்படவில்லை.",
        "explanation_label": "விளக்கம்",
        "catalog_load_failed": "⚠️ வினாடி–வினா பட்டியலை ஏற்ற முடியவில்லை: {reason}",
        "quiz_loading": "📥 வினாக்களை ஏற்றுகிறது…",
        "quiz_load_failed": "⚠️ வினாக்களை ஏற்ற முடியவில்லை: {reason}",
        "progress": "வினா {current} / {total}",
        "note_read_and_answer": "🧾 வினாவை படித்து பதிலளிக்கவும்.",
        "note_choose_answer": "🧾 வினாவை படித்து சரியான விடையைத் தேர்ந்தெடுக்கவும்.",
        "note_already_answered": "✅❌ நீங்கள் ஏற்கனவே பதிலளித்த வினா.",
        "note_correct": "✅ சரியான விடை!",
        "note_wrong": "❌ தவறான விடை.",
        "no_options": "விருப்பங்கள் இல்லை.",
        "result_score": "மதிப்பெண்: {score} / {total}",
        "result_percentage": "விழுக்காடு: {percentage}%",
        "previous": "முந்தைய",
        "next": "அடுத்து",
        "finish": "முடி",
    },
    "en": {
        "category_fallback": "Category",
        "select_quiz": "— Select a quiz —",
        "question_missing": "Question not found.",
        "explanation_missing": "No explanation provided.",
        "explanation_label": "Explanation",
        "catalog_load_failed": "⚠️ Could not load the quiz list: {reason}",
        "quiz_loading": "📥 Loading questions…",
        "quiz_load_failed": "⚠️ Could not load the questions: {reason}",
        "progress": "Question {current} / {total}",
        "note_read_and_answer": "🧾 Read the question and answer it.",
        "note_choose_answer": "🧾 Read the question and choose the correct answer.",
        "note_already_answered": "✅❌ You have already answered this question.",
        "note_correct": "✅ Correct answer!",
        "note_wrong": "❌ Wrong answer.",
        "no_options": "No options available.",
        "result_score": "Score: {score} / {total}",
        "result_percentage": "Percentage: {percentage}%",
        "previous": "Previous",
        "next": "Next",
        "finish": "Finish",
    },
}


def get_message(key: str, language: str = DEFAULT_LANGUAGE, **fields: object) -> str:
    """Return the localized text for ``key`` with ``fields`` substituted.

    Unknown languages and missing entries fall back to English; an unknown key
    is returned as-is so a typo shows up on screen instead of crashing.
    """
    template = MESSAGES.get(language, {}).get(key)
    if template is None:
        template = MESSAGES[_FALLBACK_LANGUAGE].get(key)
    if template is None:
        logger.warning("No message registered for key %r", key)
        return key
    return template.format(**fields) if fields else template
