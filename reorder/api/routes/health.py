"""Liveness and database readiness endpoints."""

import time

from fastapi import APIRouter

from reorder import __version__
from reorder.application.dto.responses import HealthResponse, ProviderHealthResponse
from reorder.config import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/health", tags=["health"])

_started = time.monotonic()


def _uptime() -> float:
    return time.monotonic() - _started


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    return HealthResponse(status="healthy", version=__version__, uptime_seconds=_uptime())


async def _check_database() -> ProviderHealthResponse:
    from reorder.infrastructure.storage.sqlite import get_connection_pool

    pool = await get_connection_pool()
    idle = pool.idle
    started = time.perf_counter()
    async with pool.acquire() as conn:
        cursor = await conn.execute("SELECT COUNT(*) FROM spare_parts")
        (part_count,) = await cursor.fetchone()

    return ProviderHealthResponse(
        name=f"sqlite ({idle}/{pool.pool_size} idle, {part_count} parts)",
        available=True,
        latency_ms=(time.perf_counter() - started) * 1000,
    )


@router.get("/db", response_model=HealthResponse)
async def db_health() -> HealthResponse:
    """Reports unhealthy (still 200) when the parts table cannot be read."""
    try:
        database = await _check_database()
    except Exception as e:
        logger.warning("db_health_failed", error=str(e))
        database = ProviderHealthResponse(name="sqlite", available=False, error=str(e))

    return HealthResponse(
        status="healthy" if database.available else "unhealthy",
        version=__version__,
        uptime_seconds=_uptime(),
        database=database,
    )
