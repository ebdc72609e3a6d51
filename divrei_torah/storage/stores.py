"""Snapshot stores: durable key-value backends for snapshot units.

A unit key is a tuple of strings, e.g. ``("items", "Torah", "בראשית", "נח")``.
Stores hold the serialized payload of each unit and replace the whole
snapshot at once on every ingestion run.
"""

import json
import logging
import re
import shutil
import sqlite3
from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path

from divrei_torah.config import StorageConfig
from divrei_torah.errors import MissingSnapshotUnit, StorageFailure
from divrei_torah.storage.database import get_connection, get_read_connection, initialize_database

logger = logging.getLogger(__name__)

UnitKey = tuple[str, ...]

# Characters escaped in path segments. "." is included so a key can never
# collide with a unit file name such as "items.json".
_UNSAFE_SEGMENT_CHARS = re.compile(r'[\\/:*?"<>|%.\x00-\x1f]')


class SnapshotStore(ABC):
    """Abstract store of serialized snapshot units."""

    @abstractmethod
    def replace_all(self, units: Mapping[UnitKey, str]) -> None:
        """Replace the stored snapshot with ``units`` as one operation."""

    @abstractmethod
    def read(self, key: UnitKey) -> str:
        """Return the payload of one unit.

        Raises:
            MissingSnapshotUnit: If the unit does not exist.
            StorageFailure: If the unit exists but cannot be read.
        """


def escape_segment(segment: str) -> str:
    """Percent-escape characters that are unsafe in a path segment."""
    return _UNSAFE_SEGMENT_CHARS.sub(lambda m: f"%{ord(m.group()):02X}", segment)


class JsonFileStore(SnapshotStore):
    """One JSON file per unit under a root directory.

    ``("items", "Torah", "בראשית", "נח")`` lives at
    ``<root>/Torah/בראשית/נח/items.json``.
    """

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def path_for(self, key: UnitKey, root: Path | None = None) -> Path:
        if not key:
            raise ValueError("Empty unit key")
        base = root if root is not None else self._root
        kind, *segments = key
        return base.joinpath(*(escape_segment(s) for s in segments)) / f"{kind}.json"

    def replace_all(self, units: Mapping[UnitKey, str]) -> None:
        staging = self._root.with_name(self._root.name + ".staging")
        retired = self._root.with_name(self._root.name + ".old")
        for leftover in (staging, retired):
            if leftover.exists():
                shutil.rmtree(leftover)

        try:
            staging.mkdir(parents=True)
            for key, payload in units.items():
                path = self.path_for(key, root=staging)
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(payload, encoding="utf-8")
                logger.debug("Wrote unit %s", path.relative_to(staging))
        except OSError as exc:
            logger.exception("Failed to write snapshot into %s", staging)
            shutil.rmtree(staging, ignore_errors=True)
            raise StorageFailure(f"Failed to write snapshot: {exc}") from exc

        try:
            if self._root.exists():
                self._root.rename(retired)
            staging.rename(self._root)
        except OSError as exc:
            logger.exception("Failed to swap snapshot into %s", self._root)
            if retired.exists() and not self._root.exists():
                retired.rename(self._root)
            shutil.rmtree(staging, ignore_errors=True)
            raise StorageFailure(f"Failed to replace snapshot: {exc}") from exc

        if retired.exists():
            shutil.rmtree(retired)
        logger.info("Snapshot of %d units written to %s", len(units), self._root)

    def read(self, key: UnitKey) -> str:
        path = self.path_for(key)
        if not path.is_file():
            raise MissingSnapshotUnit(key)
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Failed to read snapshot unit %s: %s", path, exc)
            raise StorageFailure(f"Unreadable unit file {path.name}: {exc}", unit_key=key) from exc


class SqliteStore(SnapshotStore):
    """All units as rows of one SQLite table, replaced in a single transaction."""

    def __init__(self, db_path: str | Path) -> None:
        self._db_path = Path(db_path)

    @staticmethod
    def encode_key(key: UnitKey) -> str:
        return json.dumps(list(key), ensure_ascii=False)

    def replace_all(self, units: Mapping[UnitKey, str]) -> None:
        try:
            initialize_database(self._db_path)
            conn = get_connection(self._db_path)
            try:
                with conn:
                    conn.execute("DELETE FROM snapshot_units")
                    conn.executemany(
                        "INSERT INTO snapshot_units (unit_key, payload) VALUES (?, ?)",
                        [(self.encode_key(key), payload) for key, payload in units.items()],
                    )
                    conn.execute(
                        "INSERT OR REPLACE INTO snapshot_info (key, value, updated_at) "
                        "VALUES ('unit_count', ?, CURRENT_TIMESTAMP)",
                        (str(len(units)),),
                    )
                # Leave a single self-contained file for read-only deployments.
                conn.execute("PRAGMA journal_mode=DELETE")
            finally:
                conn.close()
        except sqlite3.Error as exc:
            logger.exception("Failed to write snapshot into %s", self._db_path)
            raise StorageFailure(f"Failed to write snapshot: {exc}") from exc
        logger.info("Snapshot of %d units written to %s", len(units), self._db_path)

    def read(self, key: UnitKey) -> str:
        if not self._db_path.exists():
            raise MissingSnapshotUnit(key)
        try:
            conn = get_read_connection(self._db_path)
            try:
                row = conn.execute(
                    "SELECT payload FROM snapshot_units WHERE unit_key = ?",
                    (self.encode_key(key),),
                ).fetchone()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            logger.error("Failed to read snapshot unit %s: %s", key, exc)
            raise StorageFailure(f"Unreadable snapshot database: {exc}", unit_key=key) from exc

        if row is None:
            raise MissingSnapshotUnit(key)
        return row["payload"]


def open_store(config: StorageConfig) -> SnapshotStore:
    """Create the snapshot store selected by configuration."""
    if config.backend == "sqlite":
        return SqliteStore(config.sqlite_path)
    return JsonFileStore(config.processed_dir)
