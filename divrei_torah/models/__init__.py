"""Data models for the Divrei Torah library."""

from divrei_torah.models.category import Category
from divrei_torah.models.corpus import CategoryNode, Corpus, DivisionNode, SectionNode
from divrei_torah.models.item import Item, Passage
from divrei_torah.models.report import IngestionReport, RowRejection
from divrei_torah.models.search_result import MatchType, SearchResponse, SearchResult

__all__ = [
    "Category",
    "CategoryNode",
    "Corpus",
    "DivisionNode",
    "IngestionReport",
    "Item",
    "MatchType",
    "Passage",
    "RowRejection",
    "SearchResponse",
    "SearchResult",
    "SectionNode",
]
