"""
app/domain/errors.py

Fatal errors raised by the CSV analysis pipeline.

Row-level cell-count mismatches are not errors; they are reported as
SkippedRow diagnostics and parsing continues.
"""

from __future__ import annotations


class CSVAnalysisError(ValueError):
    """
    Base class for errors that abort the analysis of one upload.
    """

    user_message = "Failed to process CSV file."


class EmptyInputError(CSVAnalysisError):
    """
    Raised when the input has fewer than two non-blank lines.
    """

    user_message = "CSV file is empty or has no data rows."


class NoDataRowsError(CSVAnalysisError):
    """
    Raised when every data row mismatched the header's cell count.
    """

    user_message = "No valid data found in CSV file."
