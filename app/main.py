from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI

from app.config import AppSettings, get_app_settings


def _validate_env() -> None:
    """
    Validate required environment variables at startup.

    Runs before any database connection is initialised. Raises
    RuntimeError listing every missing or invalid variable so the operator
    can fix all problems in one restart cycle.
    """

    from db.config import load_env_files

    load_env_files()

    errors: list[str] = []

    database_urls = {
        name: os.getenv(name, "").strip()
        for name in ("DATABASE_URL", "CLOUD_DATABASE_URL", "LOCAL_DATABASE_URL")
    }
    configured = {name: url for name, url in database_urls.items() if url}
    if not configured:
        errors.append(
            "No database URL configured. Set DATABASE_URL, CLOUD_DATABASE_URL "
            "or LOCAL_DATABASE_URL."
        )
    for name, url in configured.items():
        if not url.startswith(("postgres://", "postgresql://", "postgresql+")):
            errors.append(f"{name} must be a PostgreSQL URL.")

    if errors:
        raise RuntimeError(
            "Startup validation failed: missing or invalid environment variables:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )


def _configure_logging(settings: AppSettings) -> None:
    """
    Configure root logging once for the API process.
    """

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Validate DB connectivity and schema on boot."""
    from app.startup import check_database, check_schema
    from db.session import get_engine

    log = logging.getLogger(__name__)
    engine = get_engine()
    check_database(engine)
    log.info("Database connectivity confirmed")
    if get_app_settings().check_schema_on_startup:
        check_schema(engine)
        log.info("Database schema validated")
    yield


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    _validate_env()
    settings = get_app_settings()
    _configure_logging(settings)

    application = FastAPI(
        title=settings.title,
        version=settings.version,
        lifespan=_lifespan,
    )

    from app.api.routers import kpi_router

    application.include_router(kpi_router, prefix=settings.api_prefix)

    @application.get("/health")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    return application


app = create_app()
