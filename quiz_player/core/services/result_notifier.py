"""Service for announcing finished quizzes to interested listeners."""

from __future__ import annotations

from collections.abc import Callable
import logging

from quiz_player.constants.quiz_constants import LEGACY_RESULT_EVENT, QUIZ_FINISHED_EVENT
from quiz_player.core.models import QuizResult

logger = logging.getLogger(__name__)

ResultListener = Callable[[dict[str, object]], None]


class ResultNotifier:
    """Keeps listeners per event name and hands them result payloads."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[ResultListener]] = {}

    def subscribe(self, listener: ResultListener, event: str = QUIZ_FINISHED_EVENT) -> None:
        self._listeners.setdefault(event, []).append(listener)

    def unsubscribe(self, listener: ResultListener, event: str = QUIZ_FINISHED_EVENT) -> None:
        listeners = self._listeners.get(event, [])
        if listener in listeners:
            listeners.remove(listener)

    def publish(self, result: QuizResult) -> None:
        """Send the payload under the standard event and again under the legacy name."""
        payload = result.as_payload()
        for event in (QUIZ_FINISHED_EVENT, LEGACY_RESULT_EVENT):
            for listener in list(self._listeners.get(event, [])):
                try:
                    listener(dict(payload))
                except Exception:  # noqa: BLE001 - one bad listener must not starve the rest
                    logger.exception("Result listener %r failed for %s", listener, event)
