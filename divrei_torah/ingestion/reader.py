"""Raw CSV record reader with Hebrew-aware encoding detection."""

import csv
import io
import logging
from collections.abc import Iterator
from pathlib import Path

import chardet

from divrei_torah.config import IngestionConfig
from divrei_torah.models.report import IngestionReport

logger = logging.getLogger(__name__)


def decode_bytes(raw_bytes: bytes, source: str = "<bytes>") -> str:
    """Decode raw file content, trying UTF-8 before detection.

    Tries UTF-8 (with or without BOM) first, then uses chardet. Handles
    UTF-8, UTF-16, and Windows-1255 encodings.

    Args:
        raw_bytes: File content.
        source: Name used in log messages.

    Returns:
        The decoded text.
    """
    try:
        return raw_bytes.decode("utf-8-sig")
    except UnicodeDecodeError:
        pass

    detected = chardet.detect(raw_bytes)
    encoding = detected.get("encoding") or "utf-8"
    confidence = detected.get("confidence", 0)

    if confidence < 0.7:
        logger.warning(
            "Low confidence encoding detection for %s: %s (%.0f%%)",
            source,
            encoding,
            confidence * 100,
        )

    try:
        return raw_bytes.decode(encoding)
    except (UnicodeDecodeError, LookupError):
        # Last resort: try windows-1255 (common Hebrew encoding)
        try:
            return raw_bytes.decode("windows-1255")
        except UnicodeDecodeError:
            logger.error("Failed to decode file: %s", source)
            return raw_bytes.decode("utf-8", errors="replace")


def read_csv_rows(file_path: str | Path) -> list[dict[str, str]]:
    """Parse a CSV file with a header row into a list of row mappings.

    Lines whose cells are all blank are skipped. Cells beyond the header
    width are discarded.

    Args:
        file_path: Path to the CSV file.

    Returns:
        One dict per data row, keyed by header name.

    Raises:
        FileNotFoundError: If file_path does not exist.
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    text = decode_bytes(path.read_bytes(), source=path.name)
    reader = csv.DictReader(io.StringIO(text, newline=""))

    rows: list[dict[str, str]] = []
    for raw_row in reader:
        row = {key: value for key, value in raw_row.items() if key is not None}
        if not any((value or "").strip() for value in row.values()):
            continue
        rows.append(row)

    logger.info("Parsed %d rows from %s", len(rows), path.name)
    return rows


def iter_source_rows(
    config: IngestionConfig, report: IngestionReport | None = None
) -> Iterator[tuple[str, int, dict[str, str]]]:
    """Yield ``(source_name, row_number, row)`` across the configured files.

    Files are read in configuration order. A missing file is logged and
    skipped.
    """
    raw_dir = Path(config.raw_dir)
    for file_name in config.csv_files:
        path = raw_dir / file_name
        if not path.exists():
            logger.warning("CSV file not found, skipping: %s", path)
            if report is not None:
                report.files_missing += 1
            continue

        rows = read_csv_rows(path)
        if report is not None:
            report.files_read += 1
        for number, row in enumerate(rows, start=1):
            yield file_name, number, row
