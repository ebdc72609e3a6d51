"""Entry point for the Divrei Torah library."""

import argparse
import json
import logging
import sys

from divrei_torah.config import load_config
from divrei_torah.errors import InvalidQuery, StorageFailure
from divrei_torah.ingestion.pipeline import run_ingestion
from divrei_torah.service import LibraryService
from divrei_torah.storage import SnapshotReader, open_store

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Rebuild the snapshot or search it."""
    parser = argparse.ArgumentParser(description="Divrei Torah library")
    parser.add_argument("--config", default="config.yaml", help="Path to config.yaml")
    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("ingest", help="Rebuild the snapshot from the raw CSV files")
    search_parser = commands.add_parser("search", help="Search the snapshot")
    search_parser.add_argument("query")
    args = parser.parse_args(argv)

    config = load_config(args.config)
    logging.basicConfig(
        level=config.logging.level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "ingest":
        report = run_ingestion(config)
        if report.rows_accepted == 0:
            logger.warning("No rows accepted; wrote an empty snapshot")
        return 0

    service = LibraryService(SnapshotReader(open_store(config.storage)), config.search)
    try:
        response = service.search(args.query)
    except InvalidQuery as exc:
        print(exc.message, file=sys.stderr)
        return 2
    except StorageFailure as exc:
        print(f"Failed to search corpus: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(response.model_dump(mode="json"), ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
