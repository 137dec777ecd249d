"""
app/schemas package marker.
"""

from app.schemas.csv_analysis import (
    ChartPointResponse,
    CSVUploadResponse,
    DataAnalysisResponse,
    DateRangeResponse,
    StructureResponse,
    SummaryResponse,
)

__all__ = [
    "ChartPointResponse",
    "CSVUploadResponse",
    "DataAnalysisResponse",
    "DateRangeResponse",
    "StructureResponse",
    "SummaryResponse",
]
