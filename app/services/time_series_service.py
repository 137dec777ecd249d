"""
app/services/time_series_service.py

Monthly time-series aggregation for chart rendering.

Two paths
---------
Dated     – records are bucketed by calendar month (``YYYY-MM``). Records
            whose date cell cannot be read are left out of the chart only.
            The most recent ``bucket_limit`` buckets are kept, oldest first,
            labelled ``"Mar 24"``; revenue is rounded to a whole number.
Undated   – the first ``bucket_limit`` records each become one point
            labelled ``"Month 1"``, ``"Month 2"``, ...
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Final

from app.domain.sales_dataset import ChartPoint, ColumnRoles, ParsedDataset, TypedRecord
from app.validators.cell_typer import to_date, to_number

logger = logging.getLogger(__name__)

DEFAULT_BUCKET_LIMIT: Final = 12
UNDATED_DEFAULT_QUANTITY: Final = 1.0

MONTH_ABBREVIATIONS: Final[tuple[str, ...]] = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


@dataclass
class _MonthBucket:
    revenue: float = 0.0
    quantity: float = 0.0
    orders: int = 0


def round_half_up(value: float) -> float:
    """
    Round to the nearest integer with .5 going up, as chart consumers expect.
    """

    if not math.isfinite(value):
        return value
    return float(math.floor(value + 0.5))


def format_month(bucket_key: str) -> str:
    """
    Render a ``YYYY-MM`` key as ``"Mon YY"``.
    """

    year, month = bucket_key.split("-")
    return f"{MONTH_ABBREVIATIONS[int(month) - 1]} {year[-2:]}"


class TimeSeriesService:
    """
    Builds ordered ChartPoints from typed records and detected roles.
    """

    def __init__(self, *, bucket_limit: int = DEFAULT_BUCKET_LIMIT) -> None:
        self._bucket_limit = max(1, bucket_limit)

    def aggregate(self, dataset: ParsedDataset, roles: ColumnRoles) -> tuple[ChartPoint, ...]:
        if roles.date is None:
            return self._sequential_points(dataset, roles)
        return self._monthly_points(dataset, roles, roles.date)

    def _sequential_points(
        self,
        dataset: ParsedDataset,
        roles: ColumnRoles,
    ) -> tuple[ChartPoint, ...]:
        points = []
        for index, record in enumerate(dataset.records[: self._bucket_limit], start=1):
            quantity = (
                to_number(record.get(roles.quantity))
                if roles.quantity is not None
                else UNDATED_DEFAULT_QUANTITY
            )
            points.append(
                ChartPoint(
                    month=f"Month {index}",
                    revenue=self._revenue_of(record, roles.revenue),
                    quantity=quantity,
                    orders=1,
                )
            )
        return tuple(points)

    def _monthly_points(
        self,
        dataset: ParsedDataset,
        roles: ColumnRoles,
        date_column: str,
    ) -> tuple[ChartPoint, ...]:
        buckets: dict[str, _MonthBucket] = {}
        undated = 0

        for record in dataset.records:
            parsed = to_date(record.get(date_column))
            if parsed is None:
                undated += 1
                continue

            bucket = buckets.setdefault(f"{parsed.year:04d}-{parsed.month:02d}", _MonthBucket())
            bucket.revenue += self._revenue_of(record, roles.revenue)
            if roles.quantity is not None:
                bucket.quantity += to_number(record.get(roles.quantity))
            bucket.orders += 1

        if undated:
            logger.debug("%d record(s) without a readable %r date left out of the chart", undated, date_column)

        kept = sorted(buckets)[-self._bucket_limit :]
        return tuple(
            ChartPoint(
                month=format_month(key),
                revenue=round_half_up(buckets[key].revenue),
                quantity=buckets[key].quantity,
                orders=buckets[key].orders,
            )
            for key in kept
        )

    @staticmethod
    def _revenue_of(record: TypedRecord, column: str | None) -> float:
        if column is None:
            return 0.0
        return to_number(record.get(column))
