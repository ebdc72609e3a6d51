"""Full-corpus substring search with per-item match priority."""

import logging

from divrei_torah.models.category import Category
from divrei_torah.models.item import Item
from divrei_torah.models.search_result import MatchType, SearchResult
from divrei_torah.storage.snapshot import SnapshotReader

logger = logging.getLogger(__name__)


def match_item(item: Item, needle: str) -> tuple[MatchType, str] | None:
    """Find the single best match of ``needle`` within one item.

    Title beats summary, summary beats content; among passages the first
    match wins. ``needle`` must already be casefolded.

    Returns:
        ``(match_type, match_text)`` or None when nothing matches.
    """
    if item.title and needle in item.title.casefold():
        return MatchType.TITLE, item.title
    if item.summary and needle in item.summary.casefold():
        return MatchType.SUMMARY, item.summary
    for passage in item.passages:
        if passage.content and needle in passage.content.casefold():
            return MatchType.CONTENT, passage.content
    return None


class SearchEngine:
    """Linear scan over every item of a stored snapshot.

    Results come out in traversal order (category, division, section,
    item) and are not re-ranked; an item contributes at most one result.

    Args:
        reader: Snapshot reader to scan.
    """

    def __init__(self, reader: SnapshotReader) -> None:
        self._reader = reader

    def search(self, query: str) -> list[SearchResult]:
        """Return every item matching ``query``.

        Assumes the query was validated by the caller.
        """
        needle = query.casefold()
        results: list[SearchResult] = []

        for category in self._reader.iter_categories():
            results.extend(self._search_category(category, needle))

        logger.debug("Search %r matched %d items", query, len(results))
        return results

    def _search_category(self, category: Category, needle: str) -> list[SearchResult]:
        results: list[SearchResult] = []
        for division, section in self._reader.iter_sections(category):
            for item in self._reader.list_items(category, division, section):
                match = match_item(item, needle)
                if match is None:
                    continue
                match_type, match_text = match
                results.append(
                    SearchResult(
                        item=item,
                        category=category,
                        division=division,
                        section=section,
                        match_type=match_type,
                        match_text=match_text,
                    )
                )
        return results
