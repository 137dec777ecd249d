"""
app/validators package marker.
"""

from app.validators.cell_typer import CellTyper, cell_key, to_date, to_number

__all__ = [
    "CellTyper",
    "cell_key",
    "to_date",
    "to_number",
]
