"""Service for turning a session's answers into its final result."""

from __future__ import annotations

from quiz_player.constants.quiz_constants import DEFAULT_QUIZ_TITLE
from quiz_player.core.models import QuizResult
from quiz_player.core.services.quiz_session import NoActiveSessionError, QuizSession


def percentage_of(score: int, total: int) -> int:
    """Whole-number percentage with halves rounded up (1 of 8 gives 13)."""
    if total <= 0:
        return 0
    return (200 * score + total) // (2 * total)


def finish(session: QuizSession) -> QuizResult:
    """Snapshot the session's score. Does not modify the session.

    May be called before every question is answered; the unanswered ones count
    as wrong and ``total`` stays the full question count.
    """
    if not session.is_active():
        raise NoActiveSessionError("No quiz has been started.")

    total = session.question_count
    return QuizResult(
        title=session.title or DEFAULT_QUIZ_TITLE,
        score=session.score,
        total=total,
        percentage=percentage_of(session.score, total),
    )
