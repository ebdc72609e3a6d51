"""Tests for the search engine."""

from pathlib import Path

import pytest

from divrei_torah.errors import StorageFailure
from divrei_torah.models.category import Category
from divrei_torah.models.corpus import CategoryNode, Corpus, DivisionNode, SectionNode
from divrei_torah.models.item import Item, Passage
from divrei_torah.models.search_result import MatchType
from divrei_torah.search.engine import SearchEngine, match_item
from divrei_torah.storage.snapshot import SnapshotReader, SnapshotWriter, items_key
from divrei_torah.storage.stores import JsonFileStore


def item(item_id: str, title: str = "", summary: str = "", *contents: str) -> Item:
    return Item(
        id=item_id,
        title=title,
        summary=summary,
        passages=[Passage(id=f"{item_id}_p{i}", content=c) for i, c in enumerate(contents, start=1)],
    )


def engine_for(tmp_path: Path, corpus: Corpus) -> SearchEngine:
    store = JsonFileStore(tmp_path / "processed")
    SnapshotWriter(store).write(corpus)
    return SearchEngine(SnapshotReader(store))


class TestMatchItem:
    def test_title_beats_summary_and_content(self) -> None:
        result = match_item(item("d1", "אור גדול", "אור בתקציר", "אור בתוכן"), "אור")
        assert result == (MatchType.TITLE, "אור גדול")

    def test_summary_beats_content(self) -> None:
        result = match_item(item("d1", "כותרת", "אור בתקציר", "אור בתוכן"), "אור")
        assert result == (MatchType.SUMMARY, "אור בתקציר")

    def test_first_matching_passage_wins(self) -> None:
        result = match_item(item("d1", "", "", "ללא", "אור שני", "אור שלישי"), "אור")
        assert result == (MatchType.CONTENT, "אור שני")

    def test_case_insensitive(self) -> None:
        assert match_item(item("d1", "Rashi on Bereshit"), "rashi") == (MatchType.TITLE, "Rashi on Bereshit")

    def test_no_match(self) -> None:
        assert match_item(item("d1", "כותרת", "תקציר", "תוכן"), "אור") is None


class TestSearchEngine:
    @pytest.fixture
    def corpus(self) -> Corpus:
        return Corpus(
            categories=[
                CategoryNode(
                    category=Category.TORAH,
                    divisions=[
                        DivisionNode(
                            key="בראשית",
                            sections=[
                                SectionNode(
                                    key="נח",
                                    items=[
                                        item("d2", "", "", "שלום בתוכן"),
                                        item("d1", "שלום בכותרת"),
                                        item("d3", "אחר", "אחר", "אחר"),
                                    ],
                                )
                            ],
                        ),
                        DivisionNode(
                            key="שמות",
                            sections=[SectionNode(key="בא", items=[item("d4", "", "שלום בתקציר")])],
                        ),
                    ],
                ),
                CategoryNode(
                    category=Category.MOADIM,
                    sections=[SectionNode(key="פסח", items=[item("m1", "שלום במועד")])],
                ),
            ]
        )

    def test_results_in_traversal_order(self, tmp_path: Path, corpus: Corpus) -> None:
        results = engine_for(tmp_path, corpus).search("שלום")
        assert [(r.item.id, r.match_type) for r in results] == [
            ("d2", MatchType.CONTENT),
            ("d1", MatchType.TITLE),
            ("d4", MatchType.SUMMARY),
            ("m1", MatchType.TITLE),
        ]

    def test_result_location(self, tmp_path: Path, corpus: Corpus) -> None:
        results = engine_for(tmp_path, corpus).search("שלום")
        assert (results[0].category, results[0].division, results[0].section) == (Category.TORAH, "בראשית", "נח")
        assert (results[-1].category, results[-1].division, results[-1].section) == (Category.MOADIM, None, "פסח")

    def test_single_result_per_item(self, tmp_path: Path) -> None:
        corpus = Corpus(
            categories=[
                CategoryNode(
                    category=Category.MOADIM,
                    sections=[SectionNode(key="סוכות", items=[item("m1", "שמחה", "שמחה", "שמחה", "שמחה")])],
                )
            ]
        )
        results = engine_for(tmp_path, corpus).search("שמחה")
        assert len(results) == 1
        assert results[0].match_type is MatchType.TITLE

    def test_second_passage_reported(self, tmp_path: Path) -> None:
        corpus = Corpus(
            categories=[
                CategoryNode(
                    category=Category.MOADIM,
                    sections=[SectionNode(key="סוכות", items=[item("m1", "", "", "אין", "שמחה ב", "שמחה ג")])],
                )
            ]
        )
        results = engine_for(tmp_path, corpus).search("שמחה")
        assert len(results) == 1
        assert results[0].match_text == "שמחה ב"

    def test_no_results(self, tmp_path: Path, corpus: Corpus) -> None:
        assert engine_for(tmp_path, corpus).search("לא קיים") == []

    def test_empty_store(self, tmp_path: Path) -> None:
        engine = SearchEngine(SnapshotReader(JsonFileStore(tmp_path / "none")))
        assert engine.search("שלום") == []

    def test_corrupt_unit_propagates(self, tmp_path: Path, corpus: Corpus) -> None:
        store = JsonFileStore(tmp_path / "processed")
        SnapshotWriter(store).write(corpus)
        store.path_for(items_key(Category.MOADIM, None, "פסח")).write_text("not json", encoding="utf-8")

        with pytest.raises(StorageFailure):
            SearchEngine(SnapshotReader(store)).search("שלום")
