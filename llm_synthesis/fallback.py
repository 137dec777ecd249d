"""Deterministic insight report used when no generator is available.

Built only from figures already present in the analysis; no numbers are
derived here beyond display formatting.
"""

from app.domain.sales_dataset import DataAnalysis
from llm_synthesis.schema import ChartConfig, Concern, InsightReport, TopPerformer, Trend


def format_amount(value: float) -> str:
    """Group thousands and keep at most three decimals: 1234.5 -> '1,234.5'."""
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.3f}".rstrip("0").rstrip(".")


def build_fallback_report(file_name: str, analysis: DataAnalysis) -> InsightReport:
    """Build the standard report for an analysis without a generator."""
    summary = analysis.summary
    record_count = analysis.row_count
    column_count = len(analysis.columns)

    sentences = [
        f"Successfully analyzed {file_name} containing {record_count} records "
        f"across {column_count} data fields."
    ]
    if summary.total_revenue:
        sentences.append(f"Total revenue of ${format_amount(summary.total_revenue)} identified.")
    else:
        sentences.append("Data structure analyzed and ready for insights.")
    if summary.unique_customers:
        sentences.append(f"Found {summary.unique_customers} unique customers.")
    sentences.append("Configure an AI provider for enhanced insights.")

    key_insights = [
        f"Dataset contains {record_count} records with {column_count} columns",
        (
            f"Total revenue: ${format_amount(summary.total_revenue)}"
            if summary.total_revenue
            else "Revenue data structure identified"
        ),
        (
            f"Average order value: ${summary.average_order_value:.2f}"
            if summary.average_order_value
            else "Order value metrics available"
        ),
        (
            f"Data spans from {summary.date_range.start} to {summary.date_range.end}"
            if summary.date_range
            else "Time-series data structure detected"
        ),
        "Data processing completed successfully",
    ]

    if summary.total_revenue:
        revenue_performer = TopPerformer(
            category="Revenue",
            value=f"${format_amount(summary.total_revenue)}",
            insight="Strong revenue data available for detailed analysis",
        )
    else:
        revenue_performer = TopPerformer(
            category="Data Structure",
            value="Complete",
            insight="All data fields properly identified and processed",
        )

    return InsightReport(
        summary=" ".join(sentences),
        key_insights=key_insights,
        top_performers=[
            TopPerformer(
                category="Data Quality",
                value="Excellent",
                insight=f"Successfully processed {record_count} records with clean data structure",
            ),
            revenue_performer,
        ],
        concerns=[
            Concern(
                category="AI Analysis",
                value="Not Configured",
                recommendation="Configure an AI provider for advanced insights and recommendations",
            )
        ],
        trends=[
            Trend(
                metric="Data Processing",
                direction="up",
                percentage=100.0,
                explanation="All data successfully processed and analyzed",
            )
        ],
        recommendations=[
            "Configure an AI provider for advanced insights and recommendations",
            "Regular data uploads will enable trend tracking over time",
        ],
        chart_configs=[
            ChartConfig(
                type="line",
                title="Performance Trends",
                description="Time-based analysis of key metrics",
                data_key="month",
                metrics=["revenue", "orders", "quantity"],
            )
        ],
    )
