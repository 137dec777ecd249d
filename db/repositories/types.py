"""
Typed DTOs exchanged with the upload persistence collaborator.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class DatasetSummaryInput:
    """
    What the analysis pipeline hands to a store for one upload.

    ``rows`` are JSON-compatible records in original order; stores keep
    at most their configured row cap.
    """

    file_name: str
    columns: tuple[str, ...]
    row_count: int
    rows: tuple[dict[str, Any], ...] = ()


@dataclass(frozen=True)
class StoredRecordHandle:
    """
    Reference to a stored upload.

    ``persistent`` is False for handles produced by ephemeral stores.
    """

    id: str
    file_name: str
    row_count: int
    uploaded_at: datetime
    columns: tuple[str, ...] = ()
    status: str = "completed"
    persistent: bool = True
    stored_rows: int = field(default=0, compare=False)
