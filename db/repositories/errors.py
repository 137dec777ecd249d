"""
Repository-layer exceptions for upload persistence.
"""

from __future__ import annotations


class UploadRepositoryError(Exception):
    """Base exception for upload repository failures."""


class DatasetPersistenceError(UploadRepositoryError):
    """Raised when upload metadata or rows cannot be persisted."""
