import json

import pytest
from pydantic import ValidationError

from app.domain.sales_dataset import DataAnalysis, DateRange, Summary
from llm_synthesis.adapter import BaseInsightGenerator, MockInsightGenerator
from llm_synthesis.fallback import build_fallback_report, format_amount
from llm_synthesis.retry import InsightRetryExhaustedError, generate_with_retry
from llm_synthesis.schema import InsightReport
from llm_synthesis.validator import InsightOutputValidationError, validate_insight_output


def _payload() -> dict:
    return {
        "summary": "Revenue grew steadily.",
        "keyInsights": ["January was the strongest month."],
        "topPerformers": [{"category": "Product", "value": "Widget", "insight": "Most units sold."}],
        "concerns": [],
        "trends": [
            {"metric": "Revenue", "direction": "up", "percentage": 12.5, "explanation": "Seasonal lift."}
        ],
        "recommendations": ["Restock widgets."],
        "chartConfigs": [
            {
                "type": "bar",
                "title": "Revenue",
                "description": "Monthly revenue",
                "dataKey": "month",
                "metrics": ["revenue"],
            }
        ],
    }


def _analysis(summary: Summary) -> DataAnalysis:
    return DataAnalysis(
        columns=("date", "customer", "amount"),
        row_count=4,
        data_types={"date": "date", "customer": "string", "amount": "number"},
        summary=summary,
        chart_data=(),
    )


class _SequenceGenerator(BaseInsightGenerator):
    def __init__(self, responses: list[str]) -> None:
        self._responses = list(responses)
        self.calls = 0

    def generate(self, analysis, prompt: str) -> str:
        self.calls += 1
        return self._responses.pop(0)


# ---------------------------------------------------------------------------
# Schema and validator
# ---------------------------------------------------------------------------


def test_report_accepts_camel_case_and_dumps_by_alias() -> None:
    report = InsightReport.model_validate(_payload())

    assert report.key_insights == ["January was the strongest month."]
    assert report.chart_configs[0].data_key == "month"
    dumped = report.model_dump(by_alias=True)
    assert set(dumped) == {
        "summary",
        "keyInsights",
        "topPerformers",
        "concerns",
        "trends",
        "recommendations",
        "chartConfigs",
    }


def test_report_rejects_unknown_trend_direction() -> None:
    data = _payload()
    data["trends"][0]["direction"] = "sideways"
    with pytest.raises(ValidationError):
        InsightReport.model_validate(data)


def test_validator_strips_markdown_fences() -> None:
    raw = "```json\n" + json.dumps(_payload()) + "\n```"

    report = validate_insight_output(raw)

    assert report.summary == "Revenue grew steadily."


@pytest.mark.parametrize(
    "raw, stage",
    [
        ("{not json", "json_parse"),
        ("[1, 2, 3]", "schema"),
        (json.dumps({"keyInsights": []}), "schema"),
        (json.dumps({"summary": ""}), "schema"),
    ],
)
def test_validator_reports_failing_stage(raw: str, stage: str) -> None:
    with pytest.raises(InsightOutputValidationError) as exc_info:
        validate_insight_output(raw)

    assert exc_info.value.stage == stage
    assert exc_info.value.raw_response == raw
    assert exc_info.value.errors


def test_mock_generator_output_is_valid() -> None:
    generator = MockInsightGenerator()

    report = validate_insight_output(generator.generate(_analysis(Summary()), "prompt"))

    assert report.trends[0].direction == "stable"
    assert generator.calls == 1


# ---------------------------------------------------------------------------
# Retry
# ---------------------------------------------------------------------------


def test_retry_recovers_on_second_attempt() -> None:
    generator = _SequenceGenerator(["oops", json.dumps(_payload())])

    report = generate_with_retry(generator, _analysis(Summary()), "prompt")

    assert report.summary == "Revenue grew steadily."
    assert generator.calls == 2


def test_retry_exhausted_keeps_history() -> None:
    generator = _SequenceGenerator(["oops", "[]"])

    with pytest.raises(InsightRetryExhaustedError) as exc_info:
        generate_with_retry(generator, _analysis(Summary()), "prompt", max_retries=1)

    assert exc_info.value.attempts == 2
    assert [err.stage for err in exc_info.value.history] == ["json_parse", "schema"]


def test_retry_zero_means_single_attempt() -> None:
    generator = _SequenceGenerator(["oops"])

    with pytest.raises(InsightRetryExhaustedError):
        generate_with_retry(generator, _analysis(Summary()), "prompt", max_retries=0)

    assert generator.calls == 1


# ---------------------------------------------------------------------------
# Fallback report
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "value, expected",
    [(1000.0, "1,000"), (1234.5, "1,234.5"), (1234.5678, "1,234.568"), (0.25, "0.25")],
)
def test_format_amount(value: float, expected: str) -> None:
    assert format_amount(value) == expected


def test_fallback_report_with_revenue() -> None:
    summary = Summary(
        total_revenue=1234.5,
        average_order_value=411.5,
        total_orders=3.0,
        unique_customers=2,
        date_range=DateRange(start="2024-01-01", end="2024-03-31"),
    )

    report = build_fallback_report("sales.csv", _analysis(summary))

    assert report.summary == (
        "Successfully analyzed sales.csv containing 4 records across 3 data fields. "
        "Total revenue of $1,234.5 identified. "
        "Found 2 unique customers. "
        "Configure an AI provider for enhanced insights."
    )
    assert report.key_insights == [
        "Dataset contains 4 records with 3 columns",
        "Total revenue: $1,234.5",
        "Average order value: $411.50",
        "Data spans from 2024-01-01 to 2024-03-31",
        "Data processing completed successfully",
    ]
    assert report.top_performers[1].value == "$1,234.5"


def test_fallback_report_without_revenue() -> None:
    report = build_fallback_report("data.csv", _analysis(Summary(total_orders=4.0)))

    assert "Data structure analyzed and ready for insights." in report.summary
    assert "unique customers" not in report.summary
    assert report.key_insights[1] == "Revenue data structure identified"
    assert report.key_insights[3] == "Time-series data structure detected"
    assert report.top_performers[1].category == "Data Structure"


def test_fallback_report_is_deterministic() -> None:
    analysis = _analysis(Summary(total_revenue=10.0, average_order_value=5.0))

    assert build_fallback_report("a.csv", analysis) == build_fallback_report("a.csv", analysis)
