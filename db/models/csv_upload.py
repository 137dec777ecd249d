"""
db/models/csv_upload.py

Stored CSV uploads and a bounded sample of their typed rows.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, DateTime, ForeignKey, Index, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base


class CsvUploadStatus:
    COMPLETED = "completed"
    FAILED = "failed"


class CsvUpload(Base):
    """
    One analysed CSV upload.

    ``columns`` keeps the header order so stored rows can be re-rendered
    without the original file.
    """

    __tablename__ = "csv_uploads"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    row_count: Mapped[int] = mapped_column(Integer, nullable=False)
    columns: Mapped[list[str]] = mapped_column(JSON, nullable=False)
    status: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default=CsvUploadStatus.COMPLETED,
        comment="completed, failed",
    )
    uploaded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    rows: Mapped[list["CsvDataRow"]] = relationship(
        "CsvDataRow",
        back_populates="upload",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="CsvDataRow.row_index",
    )

    __table_args__ = (
        Index("ix_csv_uploads_uploaded_at", "uploaded_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<CsvUpload id={self.id} file_name={self.file_name!r} "
            f"row_count={self.row_count} status={self.status!r}>"
        )


class CsvDataRow(Base):
    """
    One stored data row of an upload, as JSON-compatible values.
    """

    __tablename__ = "csv_data_rows"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    upload_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("csv_uploads.id", ondelete="CASCADE"),
        nullable=False,
    )
    row_index: Mapped[int] = mapped_column(Integer, nullable=False)
    data: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)

    upload: Mapped[CsvUpload] = relationship("CsvUpload", back_populates="rows")

    __table_args__ = (
        Index("ix_csv_data_rows_upload_id_row_index", "upload_id", "row_index", unique=True),
    )
