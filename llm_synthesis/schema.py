"""Structured insight report returned by the text-generation collaborator."""

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _ReportModel(BaseModel):
    model_config = ConfigDict(
        extra="ignore",
        frozen=True,
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class TopPerformer(_ReportModel):
    category: str
    value: str
    insight: str


class Concern(_ReportModel):
    category: str
    value: str
    recommendation: str


class Trend(_ReportModel):
    metric: str
    direction: Literal["up", "down", "stable"]
    percentage: float
    explanation: str


class ChartConfig(_ReportModel):
    type: Literal["line", "bar", "pie", "area"]
    title: str
    description: str
    data_key: str
    metrics: List[str] = Field(default_factory=list)


class InsightReport(_ReportModel):
    """Business insight report for one analysed upload.

    Serialised with camelCase keys (``keyInsights``, ``topPerformers``...)
    to match what dashboard clients consume.
    """

    summary: str = Field(min_length=1)
    key_insights: List[str] = Field(default_factory=list)
    top_performers: List[TopPerformer] = Field(default_factory=list)
    concerns: List[Concern] = Field(default_factory=list)
    trends: List[Trend] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    chart_configs: List[ChartConfig] = Field(default_factory=list)
