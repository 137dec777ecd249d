"""
db/base.py

Declarative base for all SQLAlchemy models.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Project-wide declarative base.
    All models must inherit from this class.

    Models use portable column types (Uuid, JSON) so the same metadata
    runs against PostgreSQL in production and SQLite in tests.
    """
