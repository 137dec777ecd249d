"""Text-generation collaborator interface.

The analysis core never calls a model provider itself. Callers inject a
``BaseInsightGenerator`` implementation; ``MockInsightGenerator`` is a
deterministic stand-in for local runs and tests.
"""

import json
from abc import ABC, abstractmethod

from app.domain.sales_dataset import DataAnalysis


class BaseInsightGenerator(ABC):
    """Abstract base for all insight generators."""

    @abstractmethod
    def generate(self, analysis: DataAnalysis, prompt: str) -> str:
        """Produce structured insight text for one analysis.

        Args:
            analysis: The completed analysis of the uploaded CSV.
            prompt: Natural-language instruction for the generator.

        Returns:
            Raw string response (expected to be a JSON InsightReport).
        """


# ---------------------------------------------------------------------------
# Fixed mock response used for local testing.
# ---------------------------------------------------------------------------
_MOCK_RESPONSE = {
    "summary": "Mock insight report for testing purposes.",
    "keyInsights": ["Revenue data identified in test fixture."],
    "topPerformers": [
        {"category": "Revenue", "value": "n/a", "insight": "Test fixture value."}
    ],
    "concerns": [],
    "trends": [
        {
            "metric": "Revenue",
            "direction": "stable",
            "percentage": 0,
            "explanation": "No real trend - this is a test fixture.",
        }
    ],
    "recommendations": ["Verify integration with the upload workflow."],
    "chartConfigs": [
        {
            "type": "line",
            "title": "Monthly Revenue",
            "description": "Revenue per month",
            "dataKey": "month",
            "metrics": ["revenue"],
        }
    ],
}

_MOCK_RESPONSE_JSON = json.dumps(_MOCK_RESPONSE, indent=2)


class MockInsightGenerator(BaseInsightGenerator):
    """Deterministic generator that returns a fixed valid JSON report."""

    def __init__(self) -> None:
        self.calls = 0

    def generate(self, analysis: DataAnalysis, prompt: str) -> str:
        """Return a fixed JSON string regardless of input.

        Args:
            analysis: Ignored - present only to satisfy the interface.
            prompt: Ignored - present only to satisfy the interface.

        Returns:
            A valid JSON string that validates into InsightReport.
        """
        self.calls += 1
        return _MOCK_RESPONSE_JSON
