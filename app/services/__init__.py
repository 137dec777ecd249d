"""
app/services package marker.
"""

from app.services.csv_analysis_service import (
    CSVUploadService,
    DatasetAnalyzer,
    UploadResult,
    analyze,
    get_csv_upload_service,
)
from app.services.summary_service import SummaryService
from app.services.time_series_service import TimeSeriesService

__all__ = [
    "CSVUploadService",
    "DatasetAnalyzer",
    "SummaryService",
    "TimeSeriesService",
    "UploadResult",
    "analyze",
    "get_csv_upload_service",
]
