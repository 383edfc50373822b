"""Business logic for the quiz player shared between the web and Qt front ends."""

from __future__ import annotations

from collections.abc import Sequence
import json
import logging
from threading import Lock

from quiz_player.constants.messages import get_message
from quiz_player.constants.quiz_constants import DEFAULT_LANGUAGE, QUIZ_FINISHED_EVENT
from quiz_player.core.capabilities import (
    ActivityMonitor,
    NullActivityMonitor,
    NullResultsRenderer,
    ResultsRenderer,
    has_results_renderer,
)
from quiz_player.core.models import (
    AnswerState,
    CatalogCategory,
    Question,
    QuestionView,
    QuizResult,
    SessionStatus,
)
from quiz_player.core.question_normalizer import normalize_questions
from quiz_player.core.quiz_source import CatalogLoadError, QuizLoadError, QuizSource, parse_catalog
from quiz_player.core.services.catalog_repository import CatalogRepository
from quiz_player.core.services.quiz_session import EmptyQuizError, QuizSession
from quiz_player.core.services.result_aggregator import finish
from quiz_player.core.services.result_notifier import ResultListener, ResultNotifier
from quiz_player.core.text_sanitizer import sanitize_text

logger = logging.getLogger(__name__)


class QuizController:
    """Facade over the catalog, the live quiz session, and result delivery.

    Owns exactly one :class:`QuizSession` at a time; loading a quiz replaces it
    wholesale. Quiz loads are tagged with a generation number so a slow load
    that finishes after a newer one was requested is thrown away.
    """

    def __init__(
        self,
        source: QuizSource | None = None,
        *,
        results_renderer: ResultsRenderer | None = None,
        activity_monitor: ActivityMonitor | None = None,
        notifier: ResultNotifier | None = None,
        language: str = DEFAULT_LANGUAGE,
    ) -> None:
        self._lock = Lock()

        # Services
        self._source = source or QuizSource()
        self._catalog = CatalogRepository()
        self._session = QuizSession()
        self._notifier = notifier or ResultNotifier()

        # Capabilities
        self._results_renderer: ResultsRenderer = results_renderer or NullResultsRenderer()
        self._activity: ActivityMonitor = activity_monitor or NullActivityMonitor()

        self._language = language
        self._selection_enabled: bool = False
        self._status_message: str = ""
        self._note_message: str = ""
        self._result: QuizResult | None = None
        self._load_generation: int = 0
        self._current_identifier: str | None = None

    # --- Settings & capabilities ---

    @property
    def language(self) -> str:
        with self._lock:
            return self._language

    def set_language(self, language: str) -> None:
        with self._lock:
            self._language = language

    def set_results_renderer(self, renderer: ResultsRenderer | None) -> None:
        with self._lock:
            self._results_renderer = renderer or NullResultsRenderer()

    def uses_custom_results_renderer(self) -> bool:
        with self._lock:
            return has_results_renderer(self._results_renderer)

    def subscribe_results(self, listener: ResultListener, event: str = QUIZ_FINISHED_EVENT) -> None:
        with self._lock:
            self._notifier.subscribe(listener, event)

    def unsubscribe_results(self, listener: ResultListener, event: str = QUIZ_FINISHED_EVENT) -> None:
        with self._lock:
            self._notifier.unsubscribe(listener, event)

    # --- Catalog ---

    async def load_catalog(self) -> bool:
        """Fetch the catalog. On failure quiz selection is disabled; never raises."""
        try:
            categories = await self._source.fetch_catalog()
        except CatalogLoadError as exc:
            logger.warning("Error loading quiz list: %s", exc)
            with self._lock:
                self._selection_enabled = False
                self._status_message = self._message("catalog_load_failed", reason=str(exc))
            return False

        with self._lock:
            self._catalog.load_categories(categories)
            self._selection_enabled = True
            self._status_message = ""
        logger.info("Categorized quiz list loaded")
        return True

    async def refresh_catalog(self) -> bool:
        return await self.load_catalog()

    def replace_catalog(self, raw: object) -> bool:
        """Install catalog data pushed from elsewhere (an uploader, another window).

        Accepts decoded JSON or a JSON string. Returns False when the data holds
        no usable quizzes; the caller should then :meth:`refresh_catalog`.
        """
        if isinstance(raw, (str, bytes)):
            try:
                raw = json.loads(raw or "[]")
            except ValueError:
                logger.warning("Ignoring pushed catalog: not valid JSON")
                return False

        with self._lock:
            categories = parse_catalog(raw, category_fallback=self._message("category_fallback"))
            if not categories:
                return False
            self._catalog.load_categories(categories)
            self._selection_enabled = True
            self._status_message = ""
        logger.info("Quiz list replaced with %d pushed categories", len(categories))
        return True

    def catalog_categories(self) -> list[CatalogCategory]:
        with self._lock:
            return self._catalog.get_categories()

    @property
    def selection_enabled(self) -> bool:
        with self._lock:
            return self._selection_enabled

    # --- Quiz loading ---

    def begin_quiz_load(self, identifier: str) -> int:
        """Mark a new load as the wanted one and return its generation token."""
        with self._lock:
            self._load_generation += 1
            self._status_message = self._message("quiz_loading")
            logger.debug("Quiz load %d requested for %s", self._load_generation, identifier)
            return self._load_generation

    def is_current_load(self, token: int) -> bool:
        with self._lock:
            return token == self._load_generation

    async def load_quiz(self, identifier: str, title: str | None = None) -> bool:
        """Fetch a quiz and start a fresh session for it.

        Returns False if the load failed (the status message says why and the
        previous session is kept) or was overtaken by a newer load.
        """
        self._activity.user_activity()
        token = self.begin_quiz_load(identifier)
        try:
            records = await self._source.fetch_quiz(identifier)
        except QuizLoadError as exc:
            with self._lock:
                if token != self._load_generation:
                    logger.info("Ignoring failure of superseded quiz load %s", identifier)
                    return False
                self._status_message = self._message("quiz_load_failed", reason=str(exc))
            logger.warning("Quiz load error for %s: %s", identifier, exc)
            return False

        return self.complete_quiz_load(token, identifier, records, title)

    def complete_quiz_load(
        self,
        token: int,
        identifier: str,
        records: Sequence[object],
        title: str | None = None,
    ) -> bool:
        """Start the session for fetched ``records`` unless ``token`` is stale."""
        with self._lock:
            if token != self._load_generation:
                logger.info("Discarding stale quiz load %d for %s", token, identifier)
                return False

            questions = normalize_questions(
                records,
                missing_prompt=self._message("question_missing"),
                missing_explanation=self._message("explanation_missing"),
            )
            quiz_title = sanitize_text(
                self._catalog.title_for(identifier) or title or identifier
            )
            try:
                self._install_locked(questions, quiz_title)
            except EmptyQuizError as exc:
                self._status_message = self._message("quiz_load_failed", reason=str(exc))
                logger.warning("Quiz %s has no questions", identifier)
                return False
            self._current_identifier = identifier
            question_count = len(questions)

        self._activity.quiz_started(question_count)
        logger.info("Quiz loaded: %s (%d questions)", identifier, question_count)
        return True

    def install_session(self, questions: Sequence[Question], title: str) -> QuestionView:
        """Start a session from already-normalized questions.

        Supersedes any load still in flight. Raises ``EmptyQuizError`` for an
        empty list, leaving the current session in place.
        """
        with self._lock:
            self._install_locked(questions, sanitize_text(title))
            self._load_generation += 1
            self._current_identifier = None
            view = self._session.view()
        self._activity.quiz_started(len(questions))
        return view

    def _install_locked(self, questions: Sequence[Question], title: str) -> None:
        session = QuizSession()
        session.start(questions, title)
        self._session = session
        self._result = None
        self._status_message = ""
        self._note_message = self._message("note_read_and_answer")

    # --- User actions ---

    def select_answer(self, choice_index: int) -> QuestionView:
        self._activity.user_activity()
        with self._lock:
            question, before = self._session.current_question()
            after = self._session.submit_answer(choice_index)
            self._note_message = self._answer_note(question, before, after)
            return self._session.view()

    def next_question(self) -> QuestionView | None:
        """Move forward; on the last question this finishes the quiz and returns None."""
        self._activity.user_activity()
        with self._lock:
            view = self._session.advance()
            if view is not None:
                self._note_message = self._navigation_note(view)
                return view
            result = self._record_result_locked()
        self._deliver(result)
        return None

    def previous_question(self) -> QuestionView:
        self._activity.user_activity()
        with self._lock:
            view = self._session.retreat()
            self._note_message = self._navigation_note(view)
            return view

    def finish_now(self) -> QuizResult:
        """End the quiz immediately and return its result.

        Calling again after the quiz finished returns the same result without
        notifying anyone a second time.
        """
        self._activity.user_activity()
        with self._lock:
            if self._result is not None:
                return self._result
            self._session.end()
            result = self._record_result_locked()
        self._deliver(result)
        return result

    def _record_result_locked(self) -> QuizResult:
        result = finish(self._session)
        self._result = result
        logger.info(
            "Quiz finished: %s scored %d/%d (%d%%)",
            result.title,
            result.score,
            result.total,
            result.percentage,
        )
        return result

    def _deliver(self, result: QuizResult) -> None:
        with self._lock:
            renderer = self._results_renderer
            notifier = self._notifier
        if has_results_renderer(renderer):
            try:
                renderer.show_results(result.score, result.total, result.title)
            except Exception:  # noqa: BLE001 - a broken renderer must not block the result event
                logger.exception("Custom results renderer failed")
        notifier.publish(result)

    # --- Read-only state ---

    def has_active_session(self) -> bool:
        with self._lock:
            return self._session.is_active()

    @property
    def session_status(self) -> SessionStatus:
        with self._lock:
            return self._session.status

    def current_view(self) -> QuestionView:
        with self._lock:
            return self._session.view()

    def answer_states(self) -> list[AnswerState]:
        with self._lock:
            return self._session.answer_states()

    @property
    def score(self) -> int:
        with self._lock:
            return self._session.score

    @property
    def result(self) -> QuizResult | None:
        with self._lock:
            return self._result

    @property
    def current_identifier(self) -> str | None:
        with self._lock:
            return self._current_identifier

    @property
    def status_message(self) -> str:
        with self._lock:
            return self._status_message

    @property
    def note_message(self) -> str:
        with self._lock:
            return self._note_message

    def progress_text(self) -> str:
        with self._lock:
            if not self._session.is_active():
                return ""
            return self._message(
                "progress",
                current=self._session.position + 1,
                total=self._session.question_count,
            )

    def message(self, key: str, **fields: object) -> str:
        """Localized text in the controller's current language."""
        with self._lock:
            return self._message(key, **fields)

    # --- Helpers ---

    def _message(self, key: str, **fields: object) -> str:
        return get_message(key, self._language, **fields)

    def _answer_note(self, question: Question, before: AnswerState, after: AnswerState) -> str:
        if not question.has_options:
            return self._message("no_options")
        if before.is_answered:
            return self._message("note_already_answered")
        return self._message("note_correct" if after.is_correct else "note_wrong")

    def _navigation_note(self, view: QuestionView) -> str:
        if not view.options:
            return self._message("no_options")
        if view.is_answered:
            return self._message("note_already_answered")
        return self._message("note_choose_answer")
