"""
app/validators/cell_typer.py

Per-cell type inference and best-effort coercion.

Type inference order (first match wins) on the quote-stripped cell:

    1. currency / grouped number   ``$1,234.50`` -> NumberCell(1234.5)
    2. plain numeric literal       ``-3.5e2``    -> NumberCell(-350.0)
    3. calendar date               ``2024-01-15`` -> DateCell
    4. anything else               -> TextCell

The bare string ``"0"`` is always kept as text. Aggregations still read
it as zero through ``to_number``.

Coercions (``to_number`` / ``to_date``) are total: they return a
fallback value instead of raising.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime
from typing import Final

from app.domain.sales_dataset import CellValue, DateCell, NumberCell, TextCell

CURRENCY_PATTERN: Final = re.compile(r"^[$€£¥]?[0-9,]+\.?[0-9]*$")
CURRENCY_STRIP_PATTERN: Final = re.compile(r"[$€£¥,]")

NUMERIC_LITERAL_PATTERN: Final = re.compile(
    r"""^[+-]?(
        (\d+\.?\d*|\.\d+)([eE][+-]?\d+)?
        |Infinity
    )$""",
    re.VERBOSE,
)
RADIX_LITERAL_PATTERN: Final = re.compile(r"^0([xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)$")

DATE_FORMATS: Final[tuple[tuple[re.Pattern[str], str], ...]] = (
    (re.compile(r"^\d{4}-\d{2}-\d{2}$"), "%Y-%m-%d"),
    (re.compile(r"^\d{2}/\d{2}/\d{4}$"), "%m/%d/%Y"),
    (re.compile(r"^\d{2}-\d{2}-\d{4}$"), "%m-%d-%Y"),
    (re.compile(r"^\d{4}/\d{2}/\d{2}$"), "%Y/%m/%d"),
)

LITERAL_ZERO: Final = "0"
MIN_DATE_LENGTH: Final = 6
MIN_YEAR_EXCLUSIVE: Final = 1900
MAX_YEAR_EXCLUSIVE: Final = 2100


def parse_numeric_literal(text: str) -> float | None:
    """
    Parse a complete numeric literal, or return None.

    Accepts signed decimals with optional exponent, ``Infinity`` and
    hex/octal/binary integer literals. Empty text is not a number.
    """

    candidate = text.strip()
    if not candidate:
        return None
    if NUMERIC_LITERAL_PATTERN.match(candidate):
        return float(candidate.replace("Infinity", "inf"))
    if RADIX_LITERAL_PATTERN.match(candidate):
        return float(int(candidate, 0))
    return None


def parse_calendar_date(text: str) -> date | None:
    """
    Parse one of the four supported date layouts, or return None.
    """

    for pattern, fmt in DATE_FORMATS:
        if not pattern.match(text):
            continue
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            return None
    return None


class CellTyper:
    """
    Classifies raw cells into TextCell, NumberCell or DateCell.
    """

    def type_cell(self, raw: str) -> CellValue:
        """
        Infer the typed value of one trimmed raw cell.
        """

        value = raw.replace('"', "")
        if value == LITERAL_ZERO:
            return TextCell(value)

        number = self._parse_currency(value)
        if number is None:
            number = parse_numeric_literal(value)
        if number is not None:
            return NumberCell(number)

        parsed_date = self._parse_date(value)
        if parsed_date is not None:
            return DateCell(parsed_date)

        return TextCell(value)

    @staticmethod
    def _parse_currency(value: str) -> float | None:
        if not CURRENCY_PATTERN.match(value):
            return None
        cleaned = CURRENCY_STRIP_PATTERN.sub("", value)
        if not cleaned or cleaned == ".":
            return None
        # "1.2.3" cannot match the pattern, so float() only sees digits and one dot
        return float(cleaned)

    @staticmethod
    def _parse_date(value: str) -> date | None:
        if len(value) < MIN_DATE_LENGTH:
            return None
        parsed = parse_calendar_date(value)
        if parsed is None:
            return None
        if not MIN_YEAR_EXCLUSIVE < parsed.year < MAX_YEAR_EXCLUSIVE:
            return None
        return parsed


def to_number(cell: CellValue | None) -> float:
    """
    Coerce a cell to a number for aggregation; non-numeric values give 0.
    """

    if isinstance(cell, NumberCell):
        number = cell.value
    elif isinstance(cell, TextCell):
        number = parse_numeric_literal(cell.value) or 0.0
    else:
        return 0.0
    return 0.0 if math.isnan(number) else number


def to_date(cell: CellValue | None) -> date | None:
    """
    Coerce a cell to a calendar date, or None when it cannot be read as one.
    """

    if isinstance(cell, DateCell):
        return cell.value
    if not isinstance(cell, TextCell):
        return None

    text = cell.value.strip()
    if not text:
        return None
    parsed = parse_calendar_date(text)
    if parsed is not None:
        return parsed
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def cell_key(cell: CellValue) -> str:
    """
    String form of a cell used for distinct-value counting.
    """

    if isinstance(cell, NumberCell):
        if math.isfinite(cell.value) and cell.value.is_integer():
            return str(int(cell.value))
        return repr(cell.value)
    if isinstance(cell, DateCell):
        return cell.value.isoformat()
    return cell.value
