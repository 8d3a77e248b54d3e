"""API route modules."""

from reorder.api.routes.health import router as health_router
from reorder.api.routes.parts import router as parts_router
from reorder.api.routes.stats import router as stats_router

__all__ = [
    "health_router",
    "parts_router",
    "stats_router",
]
