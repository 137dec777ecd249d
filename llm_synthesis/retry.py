"""Retry logic for insight generator formatting errors.

Retries only on JSON parse or schema validation failures. Transport
errors raised by the generator itself propagate immediately.
"""

import logging
from typing import List

from app.domain.sales_dataset import DataAnalysis
from llm_synthesis.adapter import BaseInsightGenerator
from llm_synthesis.schema import InsightReport
from llm_synthesis.validator import InsightOutputValidationError, validate_insight_output

logger = logging.getLogger(__name__)


class InsightRetryExhaustedError(Exception):
    """Raised when all retry attempts fail validation.

    Attributes:
        attempts: Total number of attempts made (initial + retries).
        last_error: The validation error from the final attempt.
        history: Validation errors from every failed attempt.
    """

    def __init__(
        self,
        attempts: int,
        last_error: InsightOutputValidationError,
        history: List[InsightOutputValidationError],
    ) -> None:
        self.attempts = attempts
        self.last_error = last_error
        self.history = history
        super().__init__(
            f"Insight output validation failed after {attempts} attempt(s). "
            f"Last error: {last_error}"
        )


def generate_with_retry(
    generator: BaseInsightGenerator,
    analysis: DataAnalysis,
    prompt: str,
    max_retries: int = 1,
) -> InsightReport:
    """Generate an insight report, retrying on malformed output.

    Args:
        generator: Collaborator implementing ``generate(analysis, prompt)``.
        analysis: The completed analysis passed through to the generator.
        prompt: Natural-language instruction.
        max_retries: Additional attempts after the first failure.

    Returns:
        A validated ``InsightReport``.

    Raises:
        InsightRetryExhaustedError: If every attempt fails validation.
    """
    history: List[InsightOutputValidationError] = []
    total_attempts = 1 + max(0, max_retries)

    for attempt in range(1, total_attempts + 1):
        raw = generator.generate(analysis, prompt)
        try:
            report = validate_insight_output(raw)
        except InsightOutputValidationError as exc:
            history.append(exc)
            logger.warning(
                "Insight attempt %d/%d failed at stage '%s': %s",
                attempt,
                total_attempts,
                exc.stage,
                "; ".join(exc.errors),
            )
            continue

        if attempt > 1:
            logger.info("Insight output validated on attempt %d/%d", attempt, total_attempts)
        return report

    raise InsightRetryExhaustedError(
        attempts=total_attempts,
        last_error=history[-1],
        history=history,
    )
