"""
app/mappers/column_role_detector.py

Semantic role detection for sales CSV headers.
"""

from __future__ import annotations

import logging
from typing import Mapping, Sequence

from app.domain.sales_dataset import ColumnRoles

logger = logging.getLogger(__name__)

ROLE_NAMES: tuple[str, ...] = ("revenue", "quantity", "date", "customer")

DEFAULT_ROLE_KEYWORDS: dict[str, tuple[str, ...]] = {
    "revenue": ("revenue", "sales", "amount", "total", "price", "value"),
    "quantity": ("quantity", "qty", "count", "units", "items"),
    "date": ("date", "created", "order_date", "timestamp", "time"),
    "customer": ("customer", "client", "user", "buyer", "name"),
}


class ColumnRoleDetector:
    """
    Resolves revenue / quantity / date / customer columns from header names.

    For each role the keyword list is tried in order; the first column (in
    header order) whose lower-cased name contains the keyword wins. Roles
    are resolved independently, so one column may fill several roles.
    """

    def __init__(self, *, keywords: Mapping[str, Sequence[str]] | None = None) -> None:
        merged = dict(DEFAULT_ROLE_KEYWORDS)
        for role, values in (keywords or {}).items():
            if role not in ROLE_NAMES:
                raise ValueError(f"Unknown column role: {role!r}")
            merged[role] = tuple(values)
        self._keywords: dict[str, tuple[str, ...]] = {
            role: tuple(keyword.lower() for keyword in values)
            for role, values in merged.items()
        }

    def detect(self, columns: Sequence[str]) -> ColumnRoles:
        roles = ColumnRoles(
            **{role: self.find_column(columns, self._keywords[role]) for role in ROLE_NAMES}
        )
        logger.debug("Detected column roles: %s", roles.as_dict())
        return roles

    @staticmethod
    def find_column(columns: Sequence[str], keywords: Sequence[str]) -> str | None:
        lowered = [(column, column.lower()) for column in columns]
        for keyword in keywords:
            for column, name in lowered:
                if keyword.lower() in name:
                    return column
        return None
