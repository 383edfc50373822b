"""Optional host capabilities the controller calls into.

Each capability has a do-nothing default so the controller never has to check
whether one was supplied.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ResultsRenderer(Protocol):
    """Shows a finished quiz's result in place of the default display."""

    def show_results(self, score: int, total: int, title: str) -> None: ...


@runtime_checkable
class ActivityMonitor(Protocol):
    """Receives quiz lifecycle and user activity hooks, e.g. for idle timers."""

    def quiz_started(self, question_count: int) -> None: ...

    def user_activity(self) -> None: ...


class NullResultsRenderer:
    def show_results(self, score: int, total: int, title: str) -> None:
        return None


class NullActivityMonitor:
    def quiz_started(self, question_count: int) -> None:
        return None

    def user_activity(self) -> None:
        return None


def has_results_renderer(renderer: ResultsRenderer | None) -> bool:
    return renderer is not None and not isinstance(renderer, NullResultsRenderer)
