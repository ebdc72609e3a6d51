"""Corpus search."""

from divrei_torah.search.engine import SearchEngine, match_item

__all__ = ["SearchEngine", "match_item"]
