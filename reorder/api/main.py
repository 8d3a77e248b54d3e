"""
FastAPI application factory.

Run with: uvicorn reorder.api.main:app
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from reorder import __version__
from reorder.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from reorder.api.middleware.error_handler import setup_exception_handlers
from reorder.api.routes import health_router, parts_router, stats_router
from reorder.config import configure_logging, get_logger, get_settings

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Migrate and open the pool before serving; close the pool after."""
    from reorder.infrastructure.storage.sqlite import (
        close_connection_pool,
        get_connection_pool,
    )
    from reorder.infrastructure.storage.sqlite.migrations import run_migrations

    settings = get_settings()
    logger.info(
        "application_starting",
        db_path=str(settings.storage.db_path),
        environment=settings.environment,
    )

    results = await run_migrations()
    failed = [r for r in results if not r.success]
    if failed:
        logger.error("database_migration_failed", version=failed[0].version, error=failed[0].error)
        raise RuntimeError(f"Migration v{failed[0].version} failed: {failed[0].error}")

    pool = await get_connection_pool()
    logger.info("application_started", applied_migrations=len(results), pool_size=pool.pool_size)

    try:
        yield
    finally:
        await close_connection_pool()
        logger.info("application_stopped")


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging()

    app = FastAPI(
        title=settings.app_name,
        description="Spare parts inventory ranked by reorder urgency",
        version=__version__,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    # Last added runs first: CORS, then error handling, then request logging
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_methods=["GET", "POST", "PATCH", "DELETE"],
            allow_headers=["*"],
            expose_headers=["X-Request-ID", "X-Response-Time"],
        )

    setup_exception_handlers(app)

    for router in (health_router, parts_router, stats_router):
        app.include_router(router)

    @app.get("/")
    async def root() -> dict[str, str]:
        return {
            "name": settings.app_name,
            "version": __version__,
            "parts": "/api/parts",
            "view": "/api/parts/view",
        }

    # Container health checks hit this; /api/health/db also checks the database
    @app.get("/health")
    async def root_health() -> dict[str, str]:
        return {"status": "healthy", "version": __version__}

    return app


app = create_app()
