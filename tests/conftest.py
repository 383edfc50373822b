"""Shared fixtures for the quiz player tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from quiz_player.core.models import Option, Question


@pytest.fixture
def make_question():
    """Factory for normalized questions with ``option_count`` options."""

    def factory(correct_index: int = 0, option_count: int = 3, prompt: str = "Prompt") -> Question:
        options = tuple(
            Option(text=f"Option {i}", is_correct=(i == correct_index)) for i in range(option_count)
        )
        return Question(
            prompt=prompt,
            options=options,
            correct_index=correct_index,
            explanation=f"Because of option {correct_index}",
        )

    return factory


@pytest.fixture
def three_questions(make_question) -> list[Question]:
    return [make_question(0, prompt="First"), make_question(1, prompt="Second"), make_question(2, prompt="Third")]


@pytest.fixture
def quiz_dir(tmp_path: Path) -> Path:
    """A catalog with two quizzes on disk, one valid and one without questions."""
    catalog = [
        {
            "category": "கணிதம்",
            "quizzes": [
                {"file": "maths.json", "title": "Maths basics"},
                {"file": "empty.json", "title": "Empty quiz"},
            ],
        },
        {"category": "Unused", "quizzes": [{"title": "No file"}]},
    ]
    maths = {
        "questions": [
            {
                "question": "What is $2 + 2$?",
                "answerOptions": [
                    {"text": "3", "rationale": "Too small"},
                    {"text": "4", "isCorrect": True, "rationale": "Two pairs make four."},
                ],
            },
            {"q": "Capital of Tamil Nadu?", "options": ["Madurai", "Chennai"], "answer": 1},
        ]
    }
    (tmp_path / "quiz-list.json").write_text(json.dumps(catalog, ensure_ascii=False), encoding="utf-8")
    (tmp_path / "maths.json").write_text(json.dumps(maths), encoding="utf-8")
    (tmp_path / "empty.json").write_text(json.dumps({"questions": []}), encoding="utf-8")
    return tmp_path
