"""Hierarchical corpus data models.

A corpus is a tree: category → division (only for categories that have
them) → section → item. Division and section lists are kept sorted by key;
item lists keep the order in which items were first seen.
"""

from __future__ import annotations

from collections.abc import Iterator

from pydantic import BaseModel, Field

from divrei_torah.models.category import Category
from divrei_torah.models.item import Item


class SectionNode(BaseModel):
    """The lowest browsing unit, e.g. a parsha or a moed."""

    key: str
    items: list[Item] = Field(default_factory=list)


class DivisionNode(BaseModel):
    """A named grouping of sections, e.g. a seder."""

    key: str
    sections: list[SectionNode] = Field(default_factory=list)


class CategoryNode(BaseModel):
    """A category with either divisions or direct sections."""

    category: Category
    divisions: list[DivisionNode] = Field(default_factory=list)
    sections: list[SectionNode] = Field(default_factory=list)

    def iter_sections(self) -> Iterator[tuple[str | None, SectionNode]]:
        """Yield ``(division_key, section)`` pairs in persisted order."""
        if self.category.has_divisions:
            for division in self.divisions:
                for section in division.sections:
                    yield division.key, section
        else:
            for section in self.sections:
                yield None, section


class Corpus(BaseModel):
    """The full snapshot produced by one ingestion run."""

    categories: list[CategoryNode] = Field(default_factory=list)

    def get(self, category: Category) -> CategoryNode | None:
        for node in self.categories:
            if node.category is category:
                return node
        return None

    def item_count(self) -> int:
        return sum(
            len(section.items)
            for node in self.categories
            for _, section in node.iter_sections()
        )
