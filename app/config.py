"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from db.config import load_env_files


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


@dataclass(frozen=True)
class CSVAnalysisSettings:
    """
    Runtime settings for CSV upload analysis.
    """

    max_upload_bytes: int = 10 * 1024 * 1024
    max_stored_rows: int = 1000
    preview_rows: int = 50
    chart_bucket_limit: int = 12
    type_sample_size: int = 5
    max_memory_uploads: int = 100


@dataclass(frozen=True)
class StorageSettings:
    """
    Persistence collaborator settings.

    When ``db_enabled`` is false uploads are kept in an ephemeral
    in-memory store only.
    """

    db_enabled: bool = False


@lru_cache(maxsize=1)
def get_csv_analysis_settings() -> CSVAnalysisSettings:
    """
    Return cached CSV analysis settings from environment variables.
    """

    return CSVAnalysisSettings(
        max_upload_bytes=max(1, _get_int_env("CSV_MAX_UPLOAD_BYTES", 10 * 1024 * 1024)),
        max_stored_rows=max(0, _get_int_env("CSV_MAX_STORED_ROWS", 1000)),
        preview_rows=max(0, _get_int_env("CSV_PREVIEW_ROWS", 50)),
        chart_bucket_limit=max(1, _get_int_env("CSV_CHART_BUCKET_LIMIT", 12)),
        type_sample_size=max(1, _get_int_env("CSV_TYPE_SAMPLE_SIZE", 5)),
        max_memory_uploads=max(1, _get_int_env("CSV_MAX_MEMORY_UPLOADS", 100)),
    )


@lru_cache(maxsize=1)
def get_storage_settings() -> StorageSettings:
    """
    Return cached persistence settings from environment variables.
    """

    return StorageSettings(
        db_enabled=_get_bool_env("DATASET_STORE_DB_ENABLED", False),
    )
