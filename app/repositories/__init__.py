"""
app/repositories package marker.
"""

from app.repositories.dataset_store import (
    DatasetStore,
    FallbackDatasetStore,
    InMemoryDatasetStore,
    build_dataset_store,
    ephemeral_handle,
)

__all__ = [
    "DatasetStore",
    "FallbackDatasetStore",
    "InMemoryDatasetStore",
    "build_dataset_store",
    "ephemeral_handle",
]
