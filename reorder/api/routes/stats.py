"""
Inventory statistics endpoint.
"""

from fastapi import APIRouter, Depends

from reorder.api.dependencies import get_store
from reorder.application.dto.responses import PartStatisticsResponse
from reorder.core.interfaces import IPartStore

router = APIRouter(prefix="/api/stats", tags=["stats"])


@router.get("", response_model=PartStatisticsResponse)
async def get_statistics(
    store: IPartStore = Depends(get_store),
) -> PartStatisticsResponse:
    """Totals, reorder counts, stock value and mean lead time."""
    stats = await store.get_statistics()
    return PartStatisticsResponse(**stats.model_dump())
