"""Folds normalized rows into the corpus tree."""

import logging
from collections.abc import Iterable, Mapping

from divrei_torah.config import ColumnsConfig
from divrei_torah.errors import RejectedRow
from divrei_torah.ingestion.dedup import PassageOutcome, add_passage, append_passage
from divrei_torah.ingestion.normalizer import DEFAULT_COLUMNS, NormalizedRow, normalize_row
from divrei_torah.models.category import Category
from divrei_torah.models.corpus import CategoryNode, Corpus, DivisionNode, SectionNode
from divrei_torah.models.item import Item
from divrei_torah.models.report import IngestionReport, RowRejection

logger = logging.getLogger(__name__)

# Categories whose passages are appended without id/content deduplication.
APPEND_ONLY_CATEGORIES: frozenset[Category] = frozenset({Category.MOADIM})

SectionPath = tuple[Category, str | None, str]


class CorpusBuilder:
    """Builds one Corpus from the full ordered stream of raw rows.

    Two orderings are tracked separately: division and section keys are
    collected as sets and sorted on emission, while items inside a section
    keep first-seen order (dict insertion order) and passages keep
    acceptance order.

    Args:
        columns: Names of the raw columns to read.
    """

    def __init__(self, columns: ColumnsConfig = DEFAULT_COLUMNS) -> None:
        self._columns = columns
        self._division_keys: dict[Category, set[str]] = {c: set() for c in Category}
        self._section_keys: dict[tuple[Category, str | None], set[str]] = {}
        self._items: dict[SectionPath, dict[str, Item]] = {}
        self.report = IngestionReport()

    def add_rows(self, rows: Iterable[Mapping[str, str | None]], source: str = "") -> None:
        for number, row in enumerate(rows, start=1):
            self.add_row(row, source=source, line=number)

    def add_row(self, row: Mapping[str, str | None], source: str = "", line: int = 0) -> None:
        """Normalize one raw row and merge it into the tree.

        Rejected rows are recorded in the report and skipped.
        """
        self.report.rows_read += 1
        try:
            normalized = normalize_row(row, self._columns)
        except RejectedRow as exc:
            if exc.ignored:
                self.report.rows_ignored += 1
                logger.debug("Ignoring row %s:%d: %s", source, line, exc.reason)
                return
            self.report.rows_rejected += 1
            self.report.rejections.append(RowRejection(source=source, line=line, reason=exc.reason))
            logger.warning("Skipping row %s:%d: %s", source, line, exc.reason)
            return

        self.report.rows_accepted += 1
        self._merge(normalized)

    def _merge(self, row: NormalizedRow) -> None:
        if row.division is not None:
            self._division_keys[row.category].add(row.division)
        self._section_keys.setdefault((row.category, row.division), set()).add(row.section)

        items = self._items.setdefault((row.category, row.division, row.section), {})
        item = items.get(row.item_id)
        if item is None:
            item = Item(id=row.item_id, title=row.title, summary=row.summary)
            items[row.item_id] = item
        else:
            item.merge_heading(row.title, row.summary)

        if row.category in APPEND_ONLY_CATEGORIES:
            _, outcome = append_passage(item.passages, item.id, row.passage_id, row.content)
        else:
            _, outcome = add_passage(item.passages, item.id, row.passage_id, row.content)

        if outcome is PassageOutcome.RENAMED:
            self.report.passages_renamed += 1
            logger.info(
                "Passage id %r already used in item %s; stored under %s",
                row.passage_id,
                item.id,
                item.passages[-1].id,
            )
        if outcome.accepted:
            self.report.passages_accepted += 1
        else:
            self.report.passages_dropped += 1

    def _section_nodes(self, category: Category, division: str | None) -> list[SectionNode]:
        keys = sorted(self._section_keys.get((category, division), ()))
        return [
            SectionNode(
                key=key,
                items=list(self._items.get((category, division, key), {}).values()),
            )
            for key in keys
        ]

    def build(self) -> Corpus:
        """Emit the corpus; categories with no rows come out empty."""
        nodes: list[CategoryNode] = []
        for category in Category:
            if category.has_divisions:
                divisions = [
                    DivisionNode(key=key, sections=self._section_nodes(category, key))
                    for key in sorted(self._division_keys[category])
                ]
                node = CategoryNode(category=category, divisions=divisions)
            else:
                node = CategoryNode(category=category, sections=self._section_nodes(category, None))

            if not any(True for _ in node.iter_sections()):
                logger.info("No %s data found/processed. Check CSV and column names.", category.value)
            nodes.append(node)

        return Corpus(categories=nodes).model_copy(deep=True)
