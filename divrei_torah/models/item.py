"""Item (dvar torah) and passage data models."""

from pydantic import BaseModel, Field


class Passage(BaseModel):
    """One ordered unit of full text within an item."""

    id: str
    content: str


class Item(BaseModel):
    """A single commentary with its passages.

    ``title`` and ``summary`` follow first-non-empty-wins during ingestion.
    """

    id: str
    title: str = ""
    summary: str = ""
    passages: list[Passage] = Field(default_factory=list)

    def merge_heading(self, title: str, summary: str) -> None:
        """Fill a still-empty title or summary; never replaces a set value."""
        if not self.title and title:
            self.title = title
        if not self.summary and summary:
            self.summary = summary
