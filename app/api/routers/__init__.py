"""
app/api/routers package marker.
"""

from app.api.routers.csv_analysis import router as csv_analysis_router

__all__ = [
    "csv_analysis_router",
]
