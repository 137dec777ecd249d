"""
Repository layer exports.
"""

from db.repositories.csv_upload_repository import CsvUploadRepository
from db.repositories.errors import DatasetPersistenceError, UploadRepositoryError
from db.repositories.types import DatasetSummaryInput, StoredRecordHandle

__all__ = [
    "CsvUploadRepository",
    "DatasetPersistenceError",
    "DatasetSummaryInput",
    "StoredRecordHandle",
    "UploadRepositoryError",
]
