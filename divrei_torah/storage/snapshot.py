"""Serialization of the corpus to and from snapshot units.

Logical layout:

    ("categories",)                              -> ["Torah", "Moadim"]
    ("divisions", category)                      -> sorted division keys
    ("sections", category[, division])           -> sorted section keys
    ("items", category[, division], section)     -> item list

A missing unit reads as an empty list. A unit that exists but does not
parse raises StorageFailure.
"""

import json
import logging
from collections.abc import Iterator

from pydantic import TypeAdapter, ValidationError

from divrei_torah.errors import MissingSnapshotUnit, StorageFailure
from divrei_torah.models.category import Category
from divrei_torah.models.corpus import CategoryNode, Corpus, DivisionNode, SectionNode
from divrei_torah.models.item import Item
from divrei_torah.storage.stores import SnapshotStore, UnitKey

logger = logging.getLogger(__name__)

CATEGORIES_KEY: UnitKey = ("categories",)

_ITEM_LIST = TypeAdapter(list[Item])


def divisions_key(category: Category) -> UnitKey:
    return ("divisions", category.value)


def sections_key(category: Category, division: str | None = None) -> UnitKey:
    if division is None:
        return ("sections", category.value)
    return ("sections", category.value, division)


def items_key(category: Category, division: str | None, section: str) -> UnitKey:
    if division is None:
        return ("items", category.value, section)
    return ("items", category.value, division, section)


def encode_payload(payload: object) -> str:
    """Serialize a unit payload; equal payloads give identical text."""
    return json.dumps(payload, ensure_ascii=False, indent=2) + "\n"


class SnapshotWriter:
    """Writes a whole corpus to a store in one replace."""

    def __init__(self, store: SnapshotStore) -> None:
        self._store = store

    def units(self, corpus: Corpus) -> dict[UnitKey, str]:
        """Serialize every unit of ``corpus``."""
        units: dict[UnitKey, str] = {
            CATEGORIES_KEY: encode_payload([node.category.value for node in corpus.categories])
        }

        for node in corpus.categories:
            category = node.category
            if category.has_divisions:
                units[divisions_key(category)] = encode_payload([d.key for d in node.divisions])
                for division in node.divisions:
                    units[sections_key(category, division.key)] = encode_payload(
                        [s.key for s in division.sections]
                    )
            else:
                units[sections_key(category)] = encode_payload([s.key for s in node.sections])

            for division_key, section in node.iter_sections():
                units[items_key(category, division_key, section.key)] = encode_payload(
                    [item.model_dump(mode="json") for item in section.items]
                )

        return units

    def write(self, corpus: Corpus) -> int:
        """Persist ``corpus``; returns the number of units written."""
        units = self.units(corpus)
        self._store.replace_all(units)
        return len(units)


class SnapshotReader:
    """Read-only view over a stored snapshot.

    Holds no mutable state, so one instance can serve concurrent callers.
    """

    def __init__(self, store: SnapshotStore) -> None:
        self._store = store

    def _load(self, key: UnitKey) -> object | None:
        try:
            text = self._store.read(key)
        except MissingSnapshotUnit:
            logger.debug("Snapshot unit absent: %s", "/".join(key))
            return None
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            logger.error("Malformed JSON in snapshot unit %s: %s", "/".join(key), exc)
            raise StorageFailure(f"Malformed JSON: {exc}", unit_key=key) from exc

    def _load_keys(self, key: UnitKey) -> list[str]:
        data = self._load(key)
        if data is None:
            return []
        if not isinstance(data, list) or not all(isinstance(v, str) for v in data):
            raise StorageFailure("Expected a list of strings", unit_key=key)
        return data

    def list_categories(self) -> list[str]:
        return self._load_keys(CATEGORIES_KEY)

    def list_divisions(self, category: Category) -> list[str]:
        if not category.has_divisions:
            return []
        return self._load_keys(divisions_key(category))

    def list_sections(self, category: Category, division: str | None = None) -> list[str]:
        return self._load_keys(sections_key(category, division))

    def list_items(self, category: Category, division: str | None, section: str) -> list[Item]:
        key = items_key(category, division, section)
        data = self._load(key)
        if data is None:
            return []
        try:
            return _ITEM_LIST.validate_python(data)
        except ValidationError as exc:
            logger.error("Invalid item list in snapshot unit %s: %s", "/".join(key), exc)
            raise StorageFailure(f"Invalid item list: {exc.error_count()} errors", unit_key=key) from exc

    def iter_sections(self, category: Category) -> Iterator[tuple[str | None, str]]:
        """Yield ``(division, section)`` keys in persisted order."""
        if category.has_divisions:
            for division in self.list_divisions(category):
                for section in self.list_sections(category, division):
                    yield division, section
        else:
            for section in self.list_sections(category):
                yield None, section

    def iter_categories(self) -> Iterator[Category]:
        """Yield the stored categories this build knows about."""
        for name in self.list_categories():
            category = Category.parse(name)
            if category is None:
                logger.warning("Skipping unknown category in snapshot: %s", name)
                continue
            yield category

    def load_corpus(self) -> Corpus:
        """Read the whole snapshot back into a Corpus."""
        nodes: list[CategoryNode] = []
        for category in self.iter_categories():
            if category.has_divisions:
                divisions = [
                    DivisionNode(
                        key=division,
                        sections=[
                            SectionNode(key=section, items=self.list_items(category, division, section))
                            for section in self.list_sections(category, division)
                        ],
                    )
                    for division in self.list_divisions(category)
                ]
                nodes.append(CategoryNode(category=category, divisions=divisions))
            else:
                sections = [
                    SectionNode(key=section, items=self.list_items(category, None, section))
                    for section in self.list_sections(category)
                ]
                nodes.append(CategoryNode(category=category, sections=sections))
        return Corpus(categories=nodes)
