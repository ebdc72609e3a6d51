"""Search result data models."""

from enum import Enum

from pydantic import BaseModel, Field

from divrei_torah.models.category import Category
from divrei_torah.models.item import Item


class MatchType(str, Enum):
    """Which field of an item produced a search hit."""

    TITLE = "title"
    SUMMARY = "summary"
    CONTENT = "content"


class SearchResult(BaseModel):
    """A single item matched by a query."""

    item: Item
    category: Category
    division: str | None = None
    section: str
    match_type: MatchType
    match_text: str


class SearchResponse(BaseModel):
    """Ordered results with the total count and the trimmed query."""

    results: list[SearchResult] = Field(default_factory=list)
    count: int = 0
    query: str
