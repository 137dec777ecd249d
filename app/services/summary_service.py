"""
app/services/summary_service.py

Deterministic summary statistics for a parsed sales dataset.

Formulas
--------
Total Revenue        = Σ revenue                 over rows with revenue > 0
Average Order Value  = Total Revenue / count(rows with revenue > 0)
Total Orders         = Σ quantity over all rows  (row count when no quantity column)
Unique Customers     = |{customer}|              excluding empty values
Date Range           = [min(date), max(date)]    over readable dates

Every figure is independent. A figure whose supporting column is missing,
or which has no usable values, is left as ``None``; nothing here raises.
"""

from __future__ import annotations

import logging

from app.domain.sales_dataset import ColumnRoles, DateRange, ParsedDataset, Summary
from app.validators.cell_typer import cell_key, to_date, to_number

logger = logging.getLogger(__name__)


class SummaryService:
    """
    Stateless summary calculator over typed records and detected roles.

    Usage::

        summary = SummaryService().compute(dataset, roles)
        print(summary.total_revenue)
    """

    def compute(self, dataset: ParsedDataset, roles: ColumnRoles) -> Summary:
        total_revenue, average_order_value = self.revenue_totals(dataset, roles.revenue)
        return Summary(
            total_revenue=total_revenue,
            average_order_value=average_order_value,
            total_orders=self.total_orders(dataset, roles.quantity),
            unique_customers=self.unique_customers(dataset, roles.customer),
            date_range=self.date_range(dataset, roles.date),
        )

    # ------------------------------------------------------------------
    # Revenue
    # ------------------------------------------------------------------

    def revenue_totals(
        self,
        dataset: ParsedDataset,
        column: str | None,
    ) -> tuple[float | None, float | None]:
        """
        Return ``(total_revenue, average_order_value)``.

        Only strictly positive revenue values count. Both figures are
        ``None`` when the column is missing or no positive value exists.
        """
        if column is None:
            return None, None

        revenues = [
            value
            for value in (to_number(record.get(column)) for record in dataset.records)
            if value > 0
        ]
        if not revenues:
            logger.debug("Revenue column %r has no positive values", column)
            return None, None

        total = sum(revenues)
        return total, total / len(revenues)

    # ------------------------------------------------------------------
    # Orders
    # ------------------------------------------------------------------

    def total_orders(self, dataset: ParsedDataset, column: str | None) -> float:
        if column is None:
            return float(dataset.row_count)
        return sum(to_number(record.get(column)) for record in dataset.records)

    # ------------------------------------------------------------------
    # Customers
    # ------------------------------------------------------------------

    def unique_customers(self, dataset: ParsedDataset, column: str | None) -> int | None:
        if column is None:
            return None
        keys = {
            cell_key(record[column])
            for record in dataset.records
            if column in record
        }
        keys.discard("")
        return len(keys)

    # ------------------------------------------------------------------
    # Dates
    # ------------------------------------------------------------------

    def date_range(self, dataset: ParsedDataset, column: str | None) -> DateRange | None:
        if column is None:
            return None

        dates = [
            parsed
            for parsed in (to_date(record.get(column)) for record in dataset.records)
            if parsed is not None
        ]
        if not dates:
            logger.debug("Date column %r has no readable dates", column)
            return None
        return DateRange(start=min(dates).isoformat(), end=max(dates).isoformat())
