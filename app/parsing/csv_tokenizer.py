"""
app/parsing/csv_tokenizer.py

Line-based CSV tokenizer.

Splits raw text into rows of trimmed string cells with a two-state
(normal / in-quotes) scanner. Escaped quotes ("") and newlines inside
quoted fields are not supported: lines are split before scanning.
"""

from __future__ import annotations

import logging

from app.domain.errors import EmptyInputError
from app.domain.sales_dataset import RawRow

logger = logging.getLogger(__name__)

QUOTE = '"'
DELIMITER = ","


def split_lines(raw_text: str) -> list[str]:
    """
    Return the non-blank lines of *raw_text*.
    """

    return [line for line in raw_text.strip().split("\n") if line.strip()]


def tokenize_line(line: str) -> RawRow:
    """
    Split one CSV line into trimmed cells, honouring double-quoted fields.
    """

    cells: RawRow = []
    buffer: list[str] = []
    in_quotes = False

    for char in line:
        if char == QUOTE:
            in_quotes = not in_quotes
        elif char == DELIMITER and not in_quotes:
            cells.append("".join(buffer).strip())
            buffer = []
        else:
            buffer.append(char)

    cells.append("".join(buffer).strip())
    return cells


def tokenize(raw_text: str) -> list[RawRow]:
    """
    Tokenize a whole CSV document; the first row is the header.

    Raises
    ------
    EmptyInputError
        Fewer than two non-blank lines (header plus one data row).
    """

    lines = split_lines(raw_text)
    if len(lines) < 2:
        raise EmptyInputError(
            "CSV must have at least a header row and one data row "
            f"(found {len(lines)} non-blank line(s))."
        )

    logger.debug("Tokenizing %d non-blank CSV lines", len(lines))
    return [tokenize_line(line) for line in lines]
