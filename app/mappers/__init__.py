"""
app/mappers package marker.
"""

from app.mappers.column_role_detector import (
    DEFAULT_ROLE_KEYWORDS,
    ROLE_NAMES,
    ColumnRoleDetector,
)

__all__ = [
    "DEFAULT_ROLE_KEYWORDS",
    "ROLE_NAMES",
    "ColumnRoleDetector",
]
