"""
app/services/csv_analysis_service.py

Entry points for analysing an uploaded sales CSV.

Pipeline (pure, synchronous, no shared state):

    1. tokenize(): raw text → header + data rows
    2. RowBuilder.build(): typed records, mismatched rows skipped
    3. ColumnRoleDetector.detect(): revenue / quantity / date / customer
    4. SummaryService.compute(): totals, averages, date span
    5. TimeSeriesService.aggregate(): monthly chart points

``EmptyInputError`` and ``NoDataRowsError`` propagate unchanged; every
later step is total.

CSVUploadService wraps the pipeline with the upload workflow: store the
dataset through the injected DatasetStore and attach an insight report.
Storage and insight failures are logged and never fail the upload.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any

from app.config import get_csv_analysis_settings
from app.domain.sales_dataset import (
    CellKind,
    DataAnalysis,
    ParsedDataset,
    TextCell,
    record_to_json,
)
from app.logging_utils import log_event
from app.mappers.column_role_detector import ColumnRoleDetector
from app.parsing.csv_tokenizer import tokenize
from app.parsing.row_builder import RowBuilder
from app.repositories.dataset_store import DatasetStore, build_dataset_store, ephemeral_handle
from app.services.summary_service import SummaryService
from app.services.time_series_service import TimeSeriesService
from db.repositories.types import DatasetSummaryInput, StoredRecordHandle
from llm_synthesis.adapter import BaseInsightGenerator
from llm_synthesis.fallback import build_fallback_report
from llm_synthesis.retry import generate_with_retry
from llm_synthesis.schema import InsightReport

logger = logging.getLogger(__name__)

DEFAULT_TYPE_SAMPLE_SIZE = 5


# ---------------------------------------------------------------------------
# Analyzer
# ---------------------------------------------------------------------------


class DatasetAnalyzer:
    """
    Composes tokenizer, row builder, role detector and aggregators.

    Holds no per-call state, so one instance can serve any number of
    sequential or concurrent calls.
    """

    def __init__(
        self,
        *,
        row_builder: RowBuilder | None = None,
        role_detector: ColumnRoleDetector | None = None,
        summary_service: SummaryService | None = None,
        time_series_service: TimeSeriesService | None = None,
        type_sample_size: int = DEFAULT_TYPE_SAMPLE_SIZE,
    ) -> None:
        self._row_builder = row_builder or RowBuilder()
        self._role_detector = role_detector or ColumnRoleDetector()
        self._summary_service = summary_service or SummaryService()
        self._time_series_service = time_series_service or TimeSeriesService()
        self._type_sample_size = max(1, type_sample_size)

    def parse(self, raw_text: str) -> ParsedDataset:
        """
        Tokenize and type raw CSV text.

        Raises
        ------
        EmptyInputError
            Fewer than two non-blank lines.
        NoDataRowsError
            Every data row mismatched the header's cell count.
        """

        dataset = self._row_builder.build(tokenize(raw_text))
        log_event(
            logger,
            logging.INFO,
            "csv_parsed",
            columns=len(dataset.columns),
            rows=dataset.row_count,
            skipped_rows=len(dataset.skipped_rows),
        )
        return dataset

    def analyze_dataset(self, dataset: ParsedDataset) -> DataAnalysis:
        """
        Derive column types, roles, summary and chart data from a dataset.
        """

        roles = self._role_detector.detect(dataset.columns)
        return DataAnalysis(
            columns=dataset.columns,
            row_count=dataset.row_count,
            data_types=self.infer_column_types(dataset),
            summary=self._summary_service.compute(dataset, roles),
            chart_data=self._time_series_service.aggregate(dataset, roles),
            roles=roles,
        )

    def analyze(self, raw_text: str) -> DataAnalysis:
        return self.analyze_dataset(self.parse(raw_text))

    def infer_column_types(self, dataset: ParsedDataset) -> dict[str, str]:
        """
        Report each column's type from the first non-empty sampled value.

        Only the first ``type_sample_size`` records are inspected; a column
        with no non-empty sample is reported as text.
        """

        sample = dataset.records[: self._type_sample_size]
        data_types: dict[str, str] = {}
        for column in dataset.columns:
            kinds = [
                record[column].kind
                for record in sample
                if column in record
                and not (isinstance(record[column], TextCell) and record[column].value == "")
            ]
            data_types[column] = kinds[0] if kinds else CellKind.TEXT
        return data_types


_default_analyzer = DatasetAnalyzer()


def analyze(raw_text: str) -> DataAnalysis:
    """
    Analyse raw CSV text with the default pipeline configuration.
    """

    return _default_analyzer.analyze(raw_text)


# ---------------------------------------------------------------------------
# Upload workflow
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class UploadResult:
    """
    Everything the HTTP layer needs to answer one upload.
    """

    file_name: str
    dataset: ParsedDataset
    analysis: DataAnalysis
    stored: StoredRecordHandle
    insights: InsightReport
    ai_used: bool
    preview: list[dict[str, Any]] = field(default_factory=list)


class CSVUploadService:
    """
    Coordinates analysis, storage and insight generation for one upload.
    """

    def __init__(
        self,
        *,
        store: DatasetStore,
        analyzer: DatasetAnalyzer | None = None,
        insight_generator: BaseInsightGenerator | None = None,
        preview_rows: int = 50,
    ) -> None:
        self._store = store
        self._analyzer = analyzer or DatasetAnalyzer()
        self._insight_generator = insight_generator
        self._preview_rows = max(0, preview_rows)

    def process_upload(self, *, file_name: str, raw_text: str) -> UploadResult:
        """
        Analyse, store and summarise one uploaded CSV.

        Raises
        ------
        EmptyInputError, NoDataRowsError
            Propagated from parsing; nothing is stored in that case.
        """

        dataset = self._analyzer.parse(raw_text)
        analysis = self._analyzer.analyze_dataset(dataset)
        rows = tuple(record_to_json(record) for record in dataset.records)

        stored = self._store_dataset(
            DatasetSummaryInput(
                file_name=file_name,
                columns=dataset.columns,
                row_count=dataset.row_count,
                rows=rows,
            )
        )
        insights, ai_used = self._build_insights(file_name, analysis)

        return UploadResult(
            file_name=file_name,
            dataset=dataset,
            analysis=analysis,
            stored=stored,
            insights=insights,
            ai_used=ai_used,
            preview=list(rows[: self._preview_rows]),
        )

    def _store_dataset(self, upload: DatasetSummaryInput) -> StoredRecordHandle:
        try:
            return self._store.store(upload)
        except Exception as exc:  # noqa: BLE001
            log_event(
                logger,
                logging.WARNING,
                "dataset_store_failed",
                file_name=upload.file_name,
                error=str(exc),
            )
            return ephemeral_handle(upload)

    def _build_insights(self, file_name: str, analysis: DataAnalysis) -> tuple[InsightReport, bool]:
        if self._insight_generator is None:
            return build_fallback_report(file_name, analysis), False

        prompt = (
            "Analyze this sales data and provide comprehensive business insights. "
            f"The data contains {analysis.row_count} records with "
            f"{len(analysis.columns)} columns. Focus on actionable recommendations "
            "and clear explanations."
        )
        try:
            return generate_with_retry(self._insight_generator, analysis, prompt), True
        except Exception as exc:  # noqa: BLE001
            log_event(
                logger,
                logging.WARNING,
                "insight_generation_failed",
                file_name=file_name,
                error=str(exc),
            )
            return build_fallback_report(file_name, analysis), False


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_csv_upload_service() -> CSVUploadService:
    """
    Build and cache the upload service with env-driven settings.
    """

    settings = get_csv_analysis_settings()
    analyzer = DatasetAnalyzer(
        time_series_service=TimeSeriesService(bucket_limit=settings.chart_bucket_limit),
        type_sample_size=settings.type_sample_size,
    )
    return CSVUploadService(
        store=build_dataset_store(),
        analyzer=analyzer,
        preview_rows=settings.preview_rows,
    )
