"""
app/parsing/row_builder.py

Builds typed records from tokenized header and data rows.
"""

from __future__ import annotations

import logging
from typing import Sequence

from app.domain.errors import NoDataRowsError
from app.domain.sales_dataset import ParsedDataset, RawRow, SkippedRow, TypedRecord
from app.logging_utils import log_event
from app.validators.cell_typer import CellTyper

logger = logging.getLogger(__name__)


class RowBuilder:
    """
    Combines tokenized rows with per-cell typing.

    The header row fixes the column names and the expected cell count.
    Data rows with any other cell count are skipped, never padded or
    truncated. Duplicate header names collapse onto one key; the last
    cell written wins.
    """

    def __init__(self, typer: CellTyper | None = None) -> None:
        self._typer = typer or CellTyper()

    def build(self, rows: Sequence[RawRow]) -> ParsedDataset:
        """
        Build a ParsedDataset from ``rows[0]`` (header) and the data rows.

        Raises
        ------
        NoDataRowsError
            No data row matched the header's cell count.
        """

        if not rows:
            raise NoDataRowsError("CSV has no header row.")

        headers = [cell.replace('"', "") for cell in rows[0]]
        records: list[TypedRecord] = []
        skipped: list[SkippedRow] = []

        for line_number, cells in enumerate(rows[1:], start=2):
            if len(cells) != len(headers):
                skipped.append(
                    SkippedRow(
                        line_number=line_number,
                        expected_cells=len(headers),
                        actual_cells=len(cells),
                    )
                )
                log_event(
                    logger,
                    logging.WARNING,
                    "csv_row_skipped",
                    line_number=line_number,
                    expected_cells=len(headers),
                    actual_cells=len(cells),
                )
                continue
            records.append(self.build_record(headers, cells))

        if not records:
            raise NoDataRowsError(
                f"No valid data rows found in CSV ({len(skipped)} row(s) skipped)."
            )

        return ParsedDataset(
            columns=tuple(headers),
            records=tuple(records),
            skipped_rows=tuple(skipped),
        )

    def build_record(self, headers: Sequence[str], cells: Sequence[str]) -> TypedRecord:
        """
        Type each cell and key it by its header name.
        """

        record: TypedRecord = {}
        for header, raw in zip(headers, cells):
            record[header] = self._typer.type_cell(raw)
        return record
