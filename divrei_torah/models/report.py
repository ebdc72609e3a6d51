"""Ingestion diagnostics model."""

from pydantic import BaseModel, Field


class RowRejection(BaseModel):
    """A source row that was skipped, and why."""

    source: str = ""
    line: int = 0
    reason: str


class IngestionReport(BaseModel):
    """Counters and rejections collected during one ingestion run."""

    files_read: int = 0
    files_missing: int = 0
    rows_read: int = 0
    rows_accepted: int = 0
    rows_ignored: int = 0
    rows_rejected: int = 0
    passages_accepted: int = 0
    passages_renamed: int = 0
    passages_dropped: int = 0
    rejections: list[RowRejection] = Field(default_factory=list)
