"""
app/domain/sales_dataset.py

Domain models for the sales CSV analysis pipeline.

Cell values are an explicit tagged variant: every consumer handles
TextCell, NumberCell and DateCell. Nothing here performs I/O.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import Any, ClassVar, Mapping, Union


class CellKind:
    """Cell tags; the values double as the reported column type names."""

    TEXT = "string"
    NUMBER = "number"
    DATE = "date"


@dataclass(frozen=True)
class TextCell:
    value: str
    kind: ClassVar[str] = CellKind.TEXT

    def to_json(self) -> str:
        return self.value


@dataclass(frozen=True)
class NumberCell:
    value: float
    kind: ClassVar[str] = CellKind.NUMBER

    def to_json(self) -> float:
        return self.value


@dataclass(frozen=True)
class DateCell:
    value: date
    kind: ClassVar[str] = CellKind.DATE

    def to_json(self) -> str:
        return self.value.isoformat()


CellValue = Union[TextCell, NumberCell, DateCell]

RawRow = list[str]
"""Raw text cells of one CSV line, before typing."""

TypedRecord = dict[str, CellValue]
"""One data row keyed by header name, in header order."""


@dataclass(frozen=True)
class SkippedRow:
    """
    Diagnostic for one data line dropped because of a cell-count mismatch.
    """

    line_number: int
    expected_cells: int
    actual_cells: int


@dataclass(frozen=True)
class ParsedDataset:
    """
    Typed records sharing the header's column set.
    """

    columns: tuple[str, ...]
    records: tuple[TypedRecord, ...]
    skipped_rows: tuple[SkippedRow, ...] = ()

    @property
    def row_count(self) -> int:
        return len(self.records)


@dataclass(frozen=True)
class ColumnRoles:
    """
    Column name resolved for each semantic role, or None when unresolved.
    """

    revenue: str | None = None
    quantity: str | None = None
    date: str | None = None
    customer: str | None = None

    def as_dict(self) -> dict[str, str | None]:
        return {
            "revenue": self.revenue,
            "quantity": self.quantity,
            "date": self.date,
            "customer": self.customer,
        }


@dataclass(frozen=True)
class DateRange:
    start: str
    end: str


@dataclass(frozen=True)
class Summary:
    """
    Aggregate statistics. A field is None when its supporting role was
    unresolved or produced no usable values.
    """

    total_revenue: float | None = None
    average_order_value: float | None = None
    total_orders: float | None = None
    unique_customers: int | None = None
    date_range: DateRange | None = None


@dataclass(frozen=True)
class ChartPoint:
    month: str
    revenue: float
    quantity: float
    orders: int


@dataclass(frozen=True)
class DataAnalysis:
    """
    Result of analysing one uploaded CSV.

    ``data_types`` is stored as a read-only mapping.
    """

    columns: tuple[str, ...]
    row_count: int
    data_types: Mapping[str, str]
    summary: Summary
    chart_data: tuple[ChartPoint, ...]
    roles: ColumnRoles = field(default_factory=ColumnRoles)

    def __post_init__(self) -> None:
        object.__setattr__(self, "data_types", MappingProxyType(dict(self.data_types)))


def record_to_json(record: TypedRecord) -> dict[str, Any]:
    """
    Render one typed record with JSON-compatible values.
    """

    return {column: cell.to_json() for column, cell in record.items()}
