"""Corpus ingestion: reading, normalizing, deduplicating and building."""

from divrei_torah.ingestion.builder import CorpusBuilder
from divrei_torah.ingestion.dedup import PassageOutcome, add_passage, append_passage
from divrei_torah.ingestion.normalizer import NormalizedRow, normalize_row
from divrei_torah.ingestion.pipeline import run_ingestion
from divrei_torah.ingestion.reader import read_csv_rows

__all__ = [
    "CorpusBuilder",
    "NormalizedRow",
    "PassageOutcome",
    "add_passage",
    "append_passage",
    "normalize_row",
    "read_csv_rows",
    "run_ingestion",
]
