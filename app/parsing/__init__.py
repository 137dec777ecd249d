"""
app/parsing package marker.
"""

from app.parsing.csv_tokenizer import split_lines, tokenize, tokenize_line
from app.parsing.row_builder import RowBuilder

__all__ = [
    "RowBuilder",
    "split_lines",
    "tokenize",
    "tokenize_line",
]
