from __future__ import annotations

import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.config import get_storage_settings

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    """
    Configure root logging once for the API process.
    """

    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _check_schema() -> None:
    """
    Warn when upload tables are missing from the configured database.

    Does NOT auto-migrate. Uploads still succeed without the tables
    because storage failures fall back to an ephemeral handle.
    """
    from sqlalchemy import inspect as sa_inspect

    import db.models  # noqa: F401
    from db.base import Base
    from db.session import get_engine

    inspector = sa_inspect(get_engine())
    missing = set(Base.metadata.tables.keys()) - set(inspector.get_table_names())
    if missing:
        logger.warning(
            "Upload store is missing %d table(s): %s. Run 'alembic upgrade head'.",
            len(missing),
            ", ".join(sorted(missing)),
        )


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    if get_storage_settings().db_enabled:
        try:
            _check_schema()
        except Exception as exc:  # noqa: BLE001
            logger.warning("Upload store unreachable at startup: %s", exc)
    else:
        logger.info("Database store disabled; uploads are kept in memory")
    yield


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    _configure_logging()

    application = FastAPI(
        title="Sales CSV Analysis API",
        version="1.0.0",
        lifespan=_lifespan,
    )

    from app.api.routers import csv_analysis_router

    application.include_router(csv_analysis_router)

    @application.get("/health")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    return application


app = create_app()
