"""Snapshot persistence."""

from divrei_torah.storage.snapshot import SnapshotReader, SnapshotWriter
from divrei_torah.storage.stores import JsonFileStore, SnapshotStore, SqliteStore, open_store

__all__ = [
    "JsonFileStore",
    "SnapshotReader",
    "SnapshotStore",
    "SnapshotWriter",
    "SqliteStore",
    "open_store",
]
