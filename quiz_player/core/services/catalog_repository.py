"""Service for holding the catalog of available quizzes."""

from __future__ import annotations

from collections.abc import Sequence

from quiz_player.core.models import CatalogCategory, CatalogEntry


class CatalogRepository:
    """Stores the categorized quiz list and answers lookups against it."""

    def __init__(self) -> None:
        self._categories: list[CatalogCategory] = []
        self._entries_by_identifier: dict[str, CatalogEntry] = {}

    def load_categories(self, categories: Sequence[CatalogCategory]) -> None:
        """Replace the current catalog."""
        self._categories = list(categories)
        self._entries_by_identifier = {}
        for category in self._categories:
            for entry in category.entries:
                # First listing wins when a quiz appears in several categories.
                self._entries_by_identifier.setdefault(entry.identifier, entry)

    def get_categories(self) -> list[CatalogCategory]:
        return list(self._categories)

    def find_entry(self, identifier: str) -> CatalogEntry | None:
        return self._entries_by_identifier.get(identifier)

    def title_for(self, identifier: str) -> str | None:
        entry = self.find_entry(identifier)
        return entry.title if entry else None
