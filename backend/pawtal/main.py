"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import make_url

from pawtal.config import get_settings
from pawtal.application.services import ContentScheduler
from pawtal.infrastructure.database import Base, engine
from pawtal.infrastructure.database.session import async_session_factory
from pawtal.infrastructure.dependencies import (
    build_maintenance_repositories,
    build_retention_policy,
)
from pawtal.infrastructure.logging.log_config import setup_logging
from pawtal.presentation.api.error_handlers import register_exception_handlers
from pawtal.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


async def _ensure_database_exists() -> None:
    """Create the PostgreSQL database if it does not yet exist.

    Connects to the default ``postgres`` maintenance database, checks for the
    target database name, and issues ``CREATE DATABASE`` when missing.
    """
    import asyncpg

    settings = get_settings()
    url = make_url(settings.database_url)
    db_name = url.database
    if not db_name:
        return

    maintenance_url = url.set(drivername="postgresql", database="postgres").render_as_string(
        hide_password=False
    )

    try:
        conn = await asyncpg.connect(maintenance_url)
        try:
            exists = await conn.fetchval(
                "SELECT 1 FROM pg_database WHERE datname = $1", db_name
            )
            if not exists:
                # CREATE DATABASE cannot run inside a transaction block
                await conn.execute(f'CREATE DATABASE "{db_name}"')
                logger.info("Created database '%s'", db_name)
            else:
                logger.debug("Database '%s' already exists", db_name)
        finally:
            await conn.close()
    except Exception as exc:
        logger.warning("Could not auto-create database '%s': %s", db_name, exc)


def _ensure_sqlite_directory() -> None:
    """Create the parent directory of a file-backed SQLite database."""
    url = make_url(get_settings().database_url)
    if url.database and url.database != ":memory:":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)


async def _prepare_database() -> None:
    backend = make_url(get_settings().database_url).get_backend_name()
    if backend == "postgresql":
        await _ensure_database_exists()
    elif backend == "sqlite":
        _ensure_sqlite_directory()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — create tables, start and stop the scheduler."""
    settings = get_settings()
    setup_logging()

    # 1. Make sure the database and its tables exist
    await _prepare_database()

    # 2. Start the content scheduler
    scheduler = None
    if settings.scheduler_enabled:
        scheduler = ContentScheduler(
            session_factory=async_session_factory,
            build_repositories=build_maintenance_repositories,
            policy=build_retention_policy(),
            interval=settings.scheduler_interval_seconds,
        )
        await scheduler.start()
    else:
        logger.info("ContentScheduler disabled by configuration")

    yield

    # Shutdown
    if scheduler is not None:
        await scheduler.stop()
    await engine.dispose()


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Mount API routes
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "pawtal.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
