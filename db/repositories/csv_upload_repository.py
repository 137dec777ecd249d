"""
CSV upload repository: persists one upload record plus a bounded row sample.
"""

from __future__ import annotations

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from db.models.csv_upload import CsvDataRow, CsvUpload, CsvUploadStatus
from db.repositories.errors import DatasetPersistenceError
from db.repositories.types import DatasetSummaryInput, StoredRecordHandle

logger = logging.getLogger(__name__)

DEFAULT_MAX_STORED_ROWS = 1000


class CsvUploadRepository:
    """
    SQL-backed store for analysed uploads.

    Only the first ``max_stored_rows`` rows are written; ``row_count`` on the
    upload record always reflects the full dataset.
    """

    def __init__(
        self,
        *,
        session_factory: sessionmaker[Session] | None = None,
        max_stored_rows: int = DEFAULT_MAX_STORED_ROWS,
    ) -> None:
        if session_factory is None:
            from db.session import get_session_factory

            self._session_factory = get_session_factory()
        else:
            self._session_factory = session_factory
        self._max_stored_rows = max(0, max_stored_rows)

    def store(self, upload: DatasetSummaryInput) -> StoredRecordHandle:
        """
        Insert the upload and its row sample in one transaction.

        Raises
        ------
        DatasetPersistenceError
            Any database failure; nothing is committed in that case.
        """

        sample = upload.rows[: self._max_stored_rows]
        try:
            with self._session_factory() as session:
                with session.begin():
                    record = CsvUpload(
                        file_name=upload.file_name,
                        row_count=upload.row_count,
                        columns=list(upload.columns),
                        status=CsvUploadStatus.COMPLETED,
                    )
                    record.rows = [
                        CsvDataRow(row_index=index, data=row)
                        for index, row in enumerate(sample)
                    ]
                    session.add(record)
                    session.flush()
                    handle = StoredRecordHandle(
                        id=str(record.id),
                        file_name=record.file_name,
                        row_count=record.row_count,
                        uploaded_at=record.uploaded_at,
                        columns=tuple(record.columns),
                        status=record.status,
                        persistent=True,
                        stored_rows=len(sample),
                    )
        except SQLAlchemyError as exc:
            raise DatasetPersistenceError("Failed to persist CSV upload.") from exc

        logger.info(
            "Stored CSV upload id=%s file=%r rows=%d stored_rows=%d",
            handle.id,
            handle.file_name,
            handle.row_count,
            handle.stored_rows,
        )
        return handle

    def get_upload(self, upload_id: uuid.UUID) -> CsvUpload | None:
        with self._session_factory() as session:
            return session.get(CsvUpload, upload_id)

    def list_rows(self, upload_id: uuid.UUID, *, limit: int = 100) -> list[dict]:
        stmt = (
            select(CsvDataRow.data)
            .where(CsvDataRow.upload_id == upload_id)
            .order_by(CsvDataRow.row_index)
            .limit(limit)
        )
        with self._session_factory() as session:
            return list(session.scalars(stmt).all())
