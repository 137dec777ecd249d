"""
app/domain package marker.
"""

from app.domain.errors import CSVAnalysisError, EmptyInputError, NoDataRowsError
from app.domain.sales_dataset import (
    CellKind,
    CellValue,
    ChartPoint,
    ColumnRoles,
    DataAnalysis,
    DateCell,
    DateRange,
    NumberCell,
    ParsedDataset,
    SkippedRow,
    Summary,
    TextCell,
    TypedRecord,
)

__all__ = [
    "CSVAnalysisError",
    "CellKind",
    "CellValue",
    "ChartPoint",
    "ColumnRoles",
    "DataAnalysis",
    "DateCell",
    "DateRange",
    "EmptyInputError",
    "NoDataRowsError",
    "NumberCell",
    "ParsedDataset",
    "SkippedRow",
    "Summary",
    "TextCell",
    "TypedRecord",
]
