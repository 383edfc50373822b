"""Service for walking one quiz attempt: navigation, answer locking, scoring."""

from __future__ import annotations

from collections.abc import Sequence
import logging

from quiz_player.constants.quiz_constants import OPTION_LABELS
from quiz_player.core.models import AnswerState, Question, QuestionView, SessionStatus

logger = logging.getLogger(__name__)


class QuizSessionError(Exception):
    """Base class for misuse of the session API by its caller."""


class EmptyQuizError(QuizSessionError):
    """Raised when a session is started without any questions."""


class NoActiveSessionError(QuizSessionError):
    """Raised when the session is queried before it has been started."""


class SessionCompletedError(QuizSessionError):
    """Raised when the session is navigated or answered after it completed."""


def option_label(index: int) -> str:
    if 0 <= index < len(OPTION_LABELS):
        return OPTION_LABELS[index]
    return f"({index + 1})"


class QuizSession:
    """Manages the state of a single attempt at a quiz.

    The session moves ``LOADING -> IN_PROGRESS -> COMPLETED``. Each question
    gets one :class:`AnswerState`; the first submission for a question is final
    and later ones are ignored. Navigation only moves ``position``.
    """

    def __init__(self) -> None:
        self._status: SessionStatus = SessionStatus.LOADING
        self._questions: list[Question] = []
        self._answers: list[AnswerState] = []
        self._position: int = 0
        self._score: int = 0
        self._title: str = ""

    def start(self, questions: Sequence[Question], title: str) -> None:
        if not questions:
            raise EmptyQuizError("Quiz must contain at least one question.")

        self._questions = list(questions)
        self._answers = [AnswerState() for _ in self._questions]
        self._position = 0
        self._score = 0
        self._title = title
        self._status = SessionStatus.IN_PROGRESS
        logger.debug("Session started: %r with %d questions", title, len(self._questions))

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def title(self) -> str:
        return self._title

    @property
    def position(self) -> int:
        return self._position

    @property
    def score(self) -> int:
        return self._score

    @property
    def question_count(self) -> int:
        return len(self._questions)

    def is_active(self) -> bool:
        return self._status is not SessionStatus.LOADING

    def is_completed(self) -> bool:
        return self._status is SessionStatus.COMPLETED

    def answered_count(self) -> int:
        return sum(1 for answer in self._answers if answer.is_answered)

    def answer_states(self) -> list[AnswerState]:
        """Return copies of every question's answer state, in question order."""
        return [answer.snapshot() for answer in self._answers]

    def current_question(self) -> tuple[Question, AnswerState]:
        self._require_active()
        return self._questions[self._position], self._answers[self._position].snapshot()

    def view(self) -> QuestionView:
        self._require_active()
        question = self._questions[self._position]
        answer = self._answers[self._position]
        answered = answer.is_answered
        return QuestionView(
            position=self._position,
            total=len(self._questions),
            title=self._title,
            prompt=question.prompt,
            options=tuple(
                (option_label(index), option.text) for index, option in enumerate(question.options)
            ),
            chosen_index=answer.chosen_index,
            is_correct=answer.is_correct,
            correct_index=question.correct_index if answered else None,
            explanation=question.explanation if answered else None,
        )

    def submit_answer(self, choice_index: int) -> AnswerState:
        """Record ``choice_index`` for the current question unless already answered.

        Out-of-range choices are recorded as wrong. Questions without options
        cannot be answered, so the submission is ignored.
        """
        self._require_active()
        if self._status is SessionStatus.COMPLETED:
            raise SessionCompletedError("Quiz is already finished; answers are locked.")

        question = self._questions[self._position]
        answer = self._answers[self._position]
        if not question.has_options:
            logger.info("Ignoring answer for question %d: it has no options", self._position + 1)
            return answer.snapshot()

        is_correct = question.is_correct_choice(choice_index)
        if answer.record(choice_index, is_correct) and is_correct:
            self._score += 1
        return answer.snapshot()

    def advance(self) -> QuestionView | None:
        """Move to the next question, or complete the session from the last one.

        Returns ``None`` when the move completed the session.
        """
        self._require_in_progress()
        if self._position < len(self._questions) - 1:
            self._position += 1
            return self.view()

        self._status = SessionStatus.COMPLETED
        return None

    def retreat(self) -> QuestionView:
        self._require_in_progress()
        if self._position > 0:
            self._position -= 1
        return self.view()

    def end(self) -> None:
        """Complete the session early; unanswered questions stay unanswered."""
        self._require_active()
        self._status = SessionStatus.COMPLETED

    def _require_active(self) -> None:
        if self._status is SessionStatus.LOADING:
            raise NoActiveSessionError("No quiz has been started.")

    def _require_in_progress(self) -> None:
        self._require_active()
        if self._status is SessionStatus.COMPLETED:
            raise SessionCompletedError("Quiz is already finished.")
