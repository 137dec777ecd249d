"""
app/schemas/csv_analysis.py

Response schemas for CSV analysis endpoints.

Field names are camelCase on the wire; absent summary figures are
omitted rather than sent as null.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.domain.sales_dataset import DataAnalysis
from llm_synthesis.schema import InsightReport


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DateRangeResponse(_CamelModel):
    start: str
    end: str


class SummaryResponse(_CamelModel):
    total_revenue: float | None = None
    average_order_value: float | None = None
    total_orders: float | None = None
    unique_customers: int | None = Field(default=None, ge=0)
    date_range: DateRangeResponse | None = None


class ChartPointResponse(_CamelModel):
    month: str
    revenue: float
    quantity: float
    orders: int = Field(..., ge=0)


class StructureResponse(_CamelModel):
    columns: list[str]
    row_count: int = Field(..., ge=0)
    data_types: dict[str, str]


class DataAnalysisResponse(_CamelModel):
    """
    API response model for one DataAnalysis.
    """

    structure: StructureResponse
    summary: SummaryResponse
    chart_data: list[ChartPointResponse] = Field(default_factory=list)

    @classmethod
    def from_analysis(cls, analysis: DataAnalysis) -> "DataAnalysisResponse":
        summary = analysis.summary
        return cls(
            structure=StructureResponse(
                columns=list(analysis.columns),
                row_count=analysis.row_count,
                data_types=dict(analysis.data_types),
            ),
            summary=SummaryResponse(
                total_revenue=summary.total_revenue,
                average_order_value=summary.average_order_value,
                total_orders=summary.total_orders,
                unique_customers=summary.unique_customers,
                date_range=(
                    DateRangeResponse(start=summary.date_range.start, end=summary.date_range.end)
                    if summary.date_range is not None
                    else None
                ),
            ),
            chart_data=[
                ChartPointResponse(
                    month=point.month,
                    revenue=point.revenue,
                    quantity=point.quantity,
                    orders=point.orders,
                )
                for point in analysis.chart_data
            ],
        )


class CSVUploadResponse(_CamelModel):
    """
    API response model for a processed upload.
    """

    success: bool = True
    data_id: str
    file_name: str
    record_count: int = Field(..., ge=0)
    columns: list[str]
    insights: InsightReport
    chart_data: list[ChartPointResponse] = Field(default_factory=list)
    raw_data: list[dict[str, Any]] = Field(default_factory=list)
    summary: SummaryResponse
    ai_used: bool = False
