"""
tests/test_summary_service.py

Pytest unit tests for SummaryService.

Datasets are built from CSV text through the real tokenizer and
RowBuilder, so the tests exercise the same typed cells the pipeline
produces.
"""

from __future__ import annotations

import pytest

from app.domain.sales_dataset import (
    ColumnRoles,
    DateRange,
    NumberCell,
    ParsedDataset,
    Summary,
    TextCell,
)
from app.mappers.column_role_detector import ColumnRoleDetector
from app.parsing.csv_tokenizer import tokenize
from app.parsing.row_builder import RowBuilder
from app.services.summary_service import SummaryService

SALES_CSV = """date,customer,amount,quantity
2024-01-05,alice,100,2
2024-01-20,bob,300,1
2024-02-03,alice,0,5
2024-03-10,,-50,1
"""


def _dataset(raw_text: str) -> ParsedDataset:
    return RowBuilder().build(tokenize(raw_text))


def _summarize(raw_text: str) -> Summary:
    dataset = _dataset(raw_text)
    roles = ColumnRoleDetector().detect(dataset.columns)
    return SummaryService().compute(dataset, roles)


@pytest.fixture()
def svc() -> SummaryService:
    return SummaryService()


class TestRevenue:
    def test_only_positive_values_count(self) -> None:
        summary = _summarize(SALES_CSV)

        assert summary.total_revenue == pytest.approx(400.0)
        assert summary.average_order_value == pytest.approx(200.0)

    def test_average_uses_positive_row_count(self) -> None:
        summary = _summarize("amount\n100\n200\n300\n400\n")

        assert summary.total_revenue == pytest.approx(1000.0)
        assert summary.average_order_value == pytest.approx(250.0)

    def test_quoted_currency_cell_counts_as_revenue(self, svc: SummaryService) -> None:
        dataset = _dataset('amount\n"$1,000.50"\nn/a\n')

        total, average = svc.revenue_totals(dataset, "amount")

        assert dataset.row_count == 2
        assert total == pytest.approx(1000.5)
        assert average == pytest.approx(1000.5)

    def test_numeric_text_cell_counts_as_revenue(self, svc: SummaryService) -> None:
        dataset = ParsedDataset(
            columns=("amount",),
            records=(
                {"amount": TextCell("17")},
                {"amount": NumberCell(3.0)},
                {"amount": TextCell("n/a")},
            ),
        )

        total, average = svc.revenue_totals(dataset, "amount")

        assert total == pytest.approx(20.0)
        assert average == pytest.approx(10.0)

    def test_no_positive_values_gives_none(self) -> None:
        summary = _summarize("amount\n0\n-5\nabc\n")

        assert summary.total_revenue is None
        assert summary.average_order_value is None

    def test_missing_column_gives_none(self, svc: SummaryService) -> None:
        assert svc.revenue_totals(_dataset("a\n1\n"), None) == (None, None)


class TestOrders:
    def test_sums_quantity_column(self) -> None:
        assert _summarize(SALES_CSV).total_orders == pytest.approx(9.0)

    def test_falls_back_to_row_count(self) -> None:
        summary = _summarize("amount\n10\n20\n30\n")

        assert summary.total_orders == pytest.approx(3.0)

    def test_non_numeric_quantities_count_as_zero(self) -> None:
        summary = _summarize("qty\n2\nmany\n3\n")

        assert summary.total_orders == pytest.approx(5.0)


class TestCustomers:
    def test_counts_distinct_non_empty_values(self) -> None:
        assert _summarize(SALES_CSV).unique_customers == 2

    def test_numeric_ids_compare_by_string_form(self, svc: SummaryService) -> None:
        dataset = _dataset("customer\n101\n101.0\n102\n")

        assert svc.unique_customers(dataset, "customer") == 2

    def test_missing_column_gives_none(self) -> None:
        assert _summarize("amount\n1\n").unique_customers is None


class TestDateRange:
    def test_min_and_max_dates(self) -> None:
        assert _summarize(SALES_CSV).date_range == DateRange(start="2024-01-05", end="2024-03-10")

    def test_unordered_rows(self) -> None:
        summary = _summarize("date\n2024-05-01\n2023-12-31\n2024-01-15\n")

        assert summary.date_range == DateRange(start="2023-12-31", end="2024-05-01")

    def test_unreadable_dates_are_ignored(self) -> None:
        summary = _summarize("date\nsoon\n2024-02-02\n")

        assert summary.date_range == DateRange(start="2024-02-02", end="2024-02-02")

    def test_no_readable_dates_gives_none(self) -> None:
        assert _summarize("date\nsoon\nlater\n").date_range is None


class TestSummaryContract:
    def test_no_roles_leaves_only_order_count(self, svc: SummaryService) -> None:
        dataset = _dataset("foo,bar\n1,2\n3,4\n")

        summary = svc.compute(dataset, ColumnRoles())

        assert summary == Summary(total_orders=2.0)

    def test_repeated_calls_are_identical(self) -> None:
        assert _summarize(SALES_CSV) == _summarize(SALES_CSV)
