"""Full-rebuild ingestion: raw CSVs to a stored snapshot."""

import logging

from divrei_torah.config import AppConfig
from divrei_torah.ingestion.builder import CorpusBuilder
from divrei_torah.ingestion.reader import iter_source_rows
from divrei_torah.models.report import IngestionReport
from divrei_torah.storage.snapshot import SnapshotWriter
from divrei_torah.storage.stores import SnapshotStore, open_store

logger = logging.getLogger(__name__)


def run_ingestion(config: AppConfig, store: SnapshotStore | None = None) -> IngestionReport:
    """Rebuild the snapshot from every configured source file.

    All rows are consumed before anything is written, and the snapshot is
    replaced in one operation.

    Args:
        config: Application configuration.
        store: Target store; defaults to the configured backend.

    Returns:
        Diagnostics of the run.
    """
    logger.info("Starting data processing...")
    builder = CorpusBuilder(config.ingestion.columns)
    for source, line, row in iter_source_rows(config.ingestion, builder.report):
        builder.add_row(row, source=source, line=line)

    corpus = builder.build()
    target = store if store is not None else open_store(config.storage)
    unit_count = SnapshotWriter(target).write(corpus)

    report = builder.report
    logger.info(
        "Data processing complete: %d rows read, %d accepted, %d ignored, %d rejected; "
        "%d items, %d passages, %d units written",
        report.rows_read,
        report.rows_accepted,
        report.rows_ignored,
        report.rows_rejected,
        corpus.item_count(),
        report.passages_accepted,
        unit_count,
    )
    return report
