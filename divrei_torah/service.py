"""Caller-facing query boundary: browsing lookups and search."""

import logging

from divrei_torah.config import SearchConfig
from divrei_torah.errors import InvalidQuery
from divrei_torah.models.category import Category
from divrei_torah.models.item import Item
from divrei_torah.models.search_result import SearchResponse
from divrei_torah.search.engine import SearchEngine
from divrei_torah.storage.snapshot import SnapshotReader

logger = logging.getLogger(__name__)


class LibraryService:
    """Read-through lookups and validated search over one snapshot.

    Absent units and unknown categories give empty lists. Invalid caller
    input raises InvalidQuery; storage corruption raises StorageFailure.

    Args:
        reader: Snapshot reader.
        search_config: Search boundary settings.
    """

    def __init__(self, reader: SnapshotReader, search_config: SearchConfig | None = None) -> None:
        self._reader = reader
        self._search_config = search_config or SearchConfig()
        self._engine = SearchEngine(reader)

    def list_categories(self) -> list[str]:
        return self._reader.list_categories()

    def list_divisions(self, category: str | Category) -> list[str]:
        resolved = self._resolve(category)
        if resolved is None:
            return []
        return self._reader.list_divisions(resolved)

    def list_sections(self, category: str | Category, division: str | None = None) -> list[str]:
        resolved = self._resolve(category)
        if resolved is None:
            return []
        return self._reader.list_sections(resolved, self._division(resolved, division))

    def list_items(
        self, category: str | Category, division: str | None, section: str
    ) -> list[Item]:
        resolved = self._resolve(category)
        if resolved is None:
            return []
        key = section.strip()
        if not key:
            raise InvalidQuery("Missing section")
        return self._reader.list_items(resolved, self._division(resolved, division), key)

    def search(self, query: str | None) -> SearchResponse:
        """Search the corpus.

        Raises:
            InvalidQuery: If the trimmed query is shorter than the minimum.
        """
        trimmed = (query or "").strip()
        minimum = self._search_config.min_query_length
        if len(trimmed) < minimum:
            raise InvalidQuery(f"Search query must be at least {minimum} characters")

        results = self._engine.search(trimmed)
        return SearchResponse(results=results, count=len(results), query=trimmed)

    @staticmethod
    def _resolve(category: str | Category) -> Category | None:
        if isinstance(category, Category):
            return category
        resolved = Category.parse(category.strip())
        if resolved is None:
            logger.debug("Unknown category requested: %s", category)
        return resolved

    @staticmethod
    def _division(category: Category, division: str | None) -> str | None:
        if not category.has_divisions:
            return None
        key = (division or "").strip()
        if not key:
            raise InvalidQuery(f"Missing division for {category.value}")
        return key
