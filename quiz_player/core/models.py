"""Domain models for the quiz player."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from quiz_player.constants.quiz_constants import UNRESOLVED_CORRECT_INDEX


@dataclass(frozen=True, slots=True)
class Option:
    """One selectable choice of a question."""

    text: str
    is_correct: bool = False
    rationale: str = ""


@dataclass(frozen=True, slots=True)
class Question:
    """Normalized multiple-choice question; never changes after normalization."""

    prompt: str
    options: tuple[Option, ...]
    correct_index: int = UNRESOLVED_CORRECT_INDEX
    explanation: str = ""

    @property
    def has_options(self) -> bool:
        return bool(self.options)

    @property
    def has_correct_answer(self) -> bool:
        return 0 <= self.correct_index < len(self.options)

    def is_correct_choice(self, choice_index: int) -> bool:
        return self.has_correct_answer and choice_index == self.correct_index


@dataclass(slots=True)
class AnswerState:
    """Per-question answer record. ``chosen_index`` is written at most once."""

    chosen_index: int | None = None
    is_correct: bool = False

    @property
    def is_answered(self) -> bool:
        return self.chosen_index is not None

    def record(self, choice_index: int, is_correct: bool) -> bool:
        """Store the choice if none is stored yet. Returns True if it was stored."""
        if self.is_answered:
            return False
        self.chosen_index = choice_index
        self.is_correct = is_correct
        return True

    def snapshot(self) -> AnswerState:
        return AnswerState(chosen_index=self.chosen_index, is_correct=self.is_correct)


class SessionStatus(Enum):
    """Lifecycle of a quiz session."""

    LOADING = auto()
    IN_PROGRESS = auto()
    COMPLETED = auto()


@dataclass(frozen=True, slots=True)
class QuestionView:
    """Read-only snapshot of the current question for presentation layers.

    ``correct_index`` and ``explanation`` stay hidden until the question is
    answered.
    """

    position: int
    total: int
    title: str
    prompt: str
    options: tuple[tuple[str, str], ...]
    chosen_index: int | None = None
    is_correct: bool = False
    correct_index: int | None = None
    explanation: str | None = None

    @property
    def is_answered(self) -> bool:
        return self.chosen_index is not None

    @property
    def selectable(self) -> bool:
        return bool(self.options) and not self.is_answered

    @property
    def is_first(self) -> bool:
        return self.position == 0

    @property
    def is_last(self) -> bool:
        return self.position == self.total - 1


@dataclass(frozen=True, slots=True)
class QuizResult:
    """Final score of a session, created once the session completes."""

    title: str
    score: int
    total: int
    percentage: int

    def as_payload(self) -> dict[str, object]:
        return {
            "title": self.title,
            "score": self.score,
            "total": self.total,
            "percentage": self.percentage,
        }


@dataclass(frozen=True, slots=True)
class CatalogEntry:
    """A quiz listed in the catalog: where to load it from and what to call it."""

    identifier: str
    title: str
    category: str


@dataclass(frozen=True, slots=True)
class CatalogCategory:
    """A named group of catalog entries, in catalog order."""

    name: str
    entries: tuple[CatalogEntry, ...] = field(default_factory=tuple)
