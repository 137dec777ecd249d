"""
Model package exports.

Import all SQLAlchemy models here so metadata registration and Alembic
autogeneration work without extra imports.
"""

from db.models.csv_upload import CsvDataRow, CsvUpload, CsvUploadStatus

__all__ = [
    "CsvDataRow",
    "CsvUpload",
    "CsvUploadStatus",
]
