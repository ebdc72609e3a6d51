"""Configuration loader for the Divrei Torah library."""

import os
from pathlib import Path
from typing import Literal

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field


class AppInfo(BaseModel):
    """Application metadata."""

    name: str = "Divrei Torah Library"
    version: str = "1.0.0"
    language: str = "he"


class ColumnsConfig(BaseModel):
    """Names of the raw CSV columns read by the normalizer."""

    type: str = "type"
    item_id: str = "dvar_torah_id"
    passage_id: str = "paragraph_id"
    text: str = "text"
    title: str = "hebrew_title"
    summary: str = "hebrew_summary"
    division: str = "seder"
    section: str = "parsha"
    moed: str = "moadim"


class IngestionConfig(BaseModel):
    """Raw source files for the corpus build."""

    raw_dir: str = "./_data_sources/all_csvs"
    csv_files: list[str] = Field(
        default_factory=lambda: [
            "כל_הפרשיות_חוץ_מאמור.csv",
            "אמור.csv",
            "all_moadim_combined.csv",
        ]
    )
    columns: ColumnsConfig = Field(default_factory=ColumnsConfig)


class StorageConfig(BaseModel):
    """Snapshot storage configuration."""

    backend: Literal["json", "sqlite"] = "json"
    processed_dir: str = "./public/_processed_data"
    sqlite_path: str = "./db/library.db"


class SearchConfig(BaseModel):
    """Search boundary configuration."""

    min_query_length: int = 2


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"


class AppConfig(BaseModel):
    """Root application configuration."""

    app: AppInfo = Field(default_factory=AppInfo)
    ingestion: IngestionConfig = Field(default_factory=IngestionConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(config_path: str | Path = "config.yaml") -> AppConfig:
    """Load configuration from YAML file and environment variables.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        Fully populated AppConfig instance.
    """
    load_dotenv()

    yaml_data: dict = {}
    config_file = Path(config_path)
    if config_file.exists():
        with open(config_file, encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f) or {}

    config = AppConfig(**yaml_data)

    # Environment overrides
    processed_dir = os.getenv("LIBRARY_PROCESSED_DIR")
    if processed_dir:
        config.storage.processed_dir = processed_dir
    log_level = os.getenv("LIBRARY_LOG_LEVEL")
    if log_level:
        config.logging.level = log_level.upper()

    return config
