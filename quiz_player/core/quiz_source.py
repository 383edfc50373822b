"""Loading of the quiz catalog and of individual quizzes.

Catalog format (``quiz-list.json``)::

    [
        {"category": "Maths", "quizzes": [
            {"file": "maths/basics.json", "title": "Basics"},
            {"path": "maths/algebra.json", "name": "Algebra"},
            {"url": "https://example.org/geometry.json"}
        ]}
    ]

Quiz format: either a bare list of question records or ``{"questions": [...]}``;
see :mod:`quiz_player.core.question_normalizer` for the record shape.

Identifiers are resolved against the catalog's location, so a catalog served
over HTTP can list relative paths and a catalog on disk can list sibling files.

Architecture note:
    This module is the only place that performs I/O. Every failure leaves here
    as :class:`CatalogLoadError` or :class:`QuizLoadError`, so callers never
    have to know whether a quiz came from disk or from the network.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
import json
import logging
from pathlib import Path
from urllib.parse import urljoin

import httpx

from quiz_player.constants.messages import get_message
from quiz_player.constants.network_constants import HTTP_TIMEOUT_SECONDS
from quiz_player.constants.quiz_constants import DEFAULT_CATALOG_FILE
from quiz_player.core.models import CatalogCategory, CatalogEntry
from quiz_player.core.text_sanitizer import sanitize_text

logger = logging.getLogger(__name__)

_IDENTIFIER_KEYS = ("file", "path", "url")
_TITLE_KEYS = ("title", "name")
_NO_CACHE_HEADERS = {"Cache-Control": "no-cache"}


class QuizSourceError(Exception):
    """Base class for failures while reading catalog or quiz data."""


class CatalogLoadError(QuizSourceError):
    """Raised when the quiz catalog cannot be fetched or understood."""


class QuizLoadError(QuizSourceError):
    """Raised when a quiz cannot be fetched, parsed, or has no questions."""


def parse_catalog(data: object, *, category_fallback: str | None = None) -> list[CatalogCategory]:
    """Build catalog categories from decoded JSON.

    Quizzes without an identifier are skipped and categories left empty are
    dropped. Anything other than a list yields an empty catalog.
    """
    if not isinstance(data, list):
        return []
    if category_fallback is None:
        category_fallback = get_message("category_fallback")

    categories: list[CatalogCategory] = []
    for item in data:
        if not isinstance(item, Mapping):
            continue
        name = sanitize_text(item.get("category")) or category_fallback
        raw_quizzes = item.get("quizzes")
        entries: list[CatalogEntry] = []
        for quiz in raw_quizzes if isinstance(raw_quizzes, list) else []:
            entry = _parse_entry(quiz, name)
            if entry is not None:
                entries.append(entry)
        if entries:
            categories.append(CatalogCategory(name=name, entries=tuple(entries)))
    return categories


def extract_question_records(data: object) -> list[object]:
    """Return the question records of a decoded quiz document."""
    if isinstance(data, list):
        return data
    if isinstance(data, Mapping) and isinstance(data.get("questions"), list):
        return data["questions"]
    return []


def _parse_entry(quiz: object, category: str) -> CatalogEntry | None:
    if not isinstance(quiz, Mapping):
        return None
    identifier = _first_present(quiz, _IDENTIFIER_KEYS)
    if not identifier:
        return None
    identifier = str(identifier).strip()
    if not identifier:
        return None
    title = sanitize_text(_first_present(quiz, _TITLE_KEYS) or identifier)
    return CatalogEntry(identifier=identifier, title=title or identifier, category=category)


def _first_present(record: Mapping, keys: tuple[str, ...]) -> object:
    for key in keys:
        value = record.get(key)
        if value:
            return value
    return None


def _is_remote(location: str) -> bool:
    return location.lower().startswith(("http://", "https://"))


class QuizSource:
    """Reads the catalog and quizzes from a directory or a base URL."""

    def __init__(
        self,
        catalog_location: str | Path = DEFAULT_CATALOG_FILE,
        *,
        timeout: float = HTTP_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._catalog_location = str(catalog_location)
        self._timeout = timeout
        self._transport = transport

    @property
    def catalog_location(self) -> str:
        return self._catalog_location

    def resolve(self, identifier: str) -> str:
        """Resolve a quiz identifier relative to the catalog location."""
        if _is_remote(identifier):
            return identifier
        if _is_remote(self._catalog_location):
            return urljoin(self._catalog_location, identifier)
        path = Path(identifier)
        if path.is_absolute():
            return str(path)
        return str(Path(self._catalog_location).resolve().parent / path)

    async def fetch_catalog(self) -> list[CatalogCategory]:
        try:
            data = await self._read_json(self._catalog_location)
        except QuizSourceError as exc:
            raise CatalogLoadError(str(exc)) from exc
        if not isinstance(data, list):
            raise CatalogLoadError("Invalid quiz list format")

        categories = parse_catalog(data)
        logger.info(
            "Loaded catalog from %s: %d categories, %d quizzes",
            self._catalog_location,
            len(categories),
            sum(len(category.entries) for category in categories),
        )
        return categories

    async def fetch_quiz(self, identifier: str) -> list[object]:
        if not identifier or not identifier.strip():
            raise QuizLoadError("No file specified")
        location = self.resolve(identifier.strip())
        try:
            data = await self._read_json(location)
        except QuizSourceError as exc:
            raise QuizLoadError(str(exc)) from exc

        records = extract_question_records(data)
        if not records:
            raise QuizLoadError("No questions found in quiz file")
        logger.info("Loaded quiz %s with %d questions", location, len(records))
        return records

    async def _read_json(self, location: str) -> object:
        if _is_remote(location):
            return await self._read_remote_json(location)
        return await asyncio.to_thread(self._read_local_json, Path(location))

    async def _read_remote_json(self, url: str) -> object:
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                headers=_NO_CACHE_HEADERS,
                transport=self._transport,
            ) as client:
                response = await client.get(url)
        except httpx.HTTPError as exc:
            raise QuizSourceError(f"{url} could not be fetched ({exc})") from exc
        if response.is_error:
            raise QuizSourceError(f"{url} not found ({response.status_code})")
        try:
            return response.json()
        except ValueError as exc:
            raise QuizSourceError(f"{url} is not valid JSON") from exc

    @staticmethod
    def _read_local_json(path: Path) -> object:
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise QuizSourceError(f"{path.name} not found") from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise QuizSourceError(f"{path.name} could not be read ({exc})") from exc
        try:
            return json.loads(text)
        except ValueError as exc:
            raise QuizSourceError(f"{path.name} is not valid JSON") from exc
