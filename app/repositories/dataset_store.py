"""
app/repositories/dataset_store.py

Persistence collaborator used by the upload workflow.

The workflow depends only on the ``DatasetStore`` protocol. Stores are
passed in by the caller, so tests substitute fakes without touching
module state.
"""

from __future__ import annotations

import logging
import uuid
from collections import OrderedDict
from datetime import datetime, timezone
from typing import Any, Protocol

from app.config import get_csv_analysis_settings, get_storage_settings
from app.logging_utils import log_event
from db.repositories.errors import DatasetPersistenceError
from db.repositories.types import DatasetSummaryInput, StoredRecordHandle

logger = logging.getLogger(__name__)


class DatasetStore(Protocol):
    """
    Stores one analysed upload and returns a handle to it.
    """

    def store(self, upload: DatasetSummaryInput) -> StoredRecordHandle:
        ...


class InMemoryDatasetStore:
    """
    Ephemeral store; contents live as long as this instance.

    Keeps at most ``max_uploads`` uploads; storing beyond that evicts the
    oldest one.
    """

    def __init__(self, *, max_stored_rows: int = 1000, max_uploads: int = 100) -> None:
        self._max_stored_rows = max(0, max_stored_rows)
        self._max_uploads = max(1, max_uploads)
        self._uploads: OrderedDict[str, dict[str, Any]] = OrderedDict()

    def store(self, upload: DatasetSummaryInput) -> StoredRecordHandle:
        sample = upload.rows[: self._max_stored_rows]
        handle = StoredRecordHandle(
            id=f"upload-{uuid.uuid4().hex}",
            file_name=upload.file_name,
            row_count=upload.row_count,
            uploaded_at=datetime.now(timezone.utc),
            columns=upload.columns,
            persistent=False,
            stored_rows=len(sample),
        )
        self._uploads[handle.id] = {"metadata": handle, "data": list(sample)}
        while len(self._uploads) > self._max_uploads:
            evicted_id, _ = self._uploads.popitem(last=False)
            logger.debug("Evicted in-memory upload %s", evicted_id)
        logger.debug("Stored upload %s in memory (%d rows)", handle.id, len(sample))
        return handle

    def get(self, upload_id: str) -> dict[str, Any] | None:
        return self._uploads.get(upload_id)

    def __len__(self) -> int:
        return len(self._uploads)


class FallbackDatasetStore:
    """
    Tries ``primary`` first and falls back on persistence failures.
    """

    def __init__(self, primary: DatasetStore, fallback: DatasetStore) -> None:
        self._primary = primary
        self._fallback = fallback

    def store(self, upload: DatasetSummaryInput) -> StoredRecordHandle:
        try:
            return self._primary.store(upload)
        except DatasetPersistenceError as exc:
            log_event(
                logger,
                logging.WARNING,
                "dataset_store_fallback",
                file_name=upload.file_name,
                error=str(exc),
            )
            return self._fallback.store(upload)


def ephemeral_handle(upload: DatasetSummaryInput) -> StoredRecordHandle:
    """
    Handle returned when no store could keep the upload.
    """

    now = datetime.now(timezone.utc)
    return StoredRecordHandle(
        id=f"temp-{int(now.timestamp() * 1000)}",
        file_name=upload.file_name,
        row_count=upload.row_count,
        uploaded_at=now,
        columns=upload.columns,
        persistent=False,
    )


def build_dataset_store() -> DatasetStore:
    """
    Build the configured store: SQL with in-memory fallback, or in-memory only.
    """

    settings = get_csv_analysis_settings()
    max_rows = settings.max_stored_rows
    memory_store = InMemoryDatasetStore(
        max_stored_rows=max_rows,
        max_uploads=settings.max_memory_uploads,
    )
    if not get_storage_settings().db_enabled:
        return memory_store

    from db.repositories.csv_upload_repository import CsvUploadRepository

    return FallbackDatasetStore(
        primary=CsvUploadRepository(max_stored_rows=max_rows),
        fallback=memory_store,
    )
