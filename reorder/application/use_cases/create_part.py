"""Create Part Use Case."""

from reorder.application.dto.requests import CreatePartRequest
from reorder.application.dto.responses import PartResponse
from reorder.config import get_logger
from reorder.core.entities.part import SparePart
from reorder.core.interfaces.part_store import IPartStore
from reorder.core.services.urgency import rank_part

logger = get_logger(__name__)


class CreatePartUseCase:
    """Register a new spare part."""

    def __init__(self, part_store: IPartStore | None = None):
        self._part_store = part_store

    async def _get_part_store(self) -> IPartStore:
        if self._part_store is None:
            from reorder.infrastructure.storage.sqlite import get_part_store

            self._part_store = await get_part_store()
        return self._part_store

    async def execute(self, request: CreatePartRequest) -> SparePart:
        """Persist the part; the store assigns its id and timestamps."""
        part = SparePart(
            name=request.name,
            current_stock=request.current_stock,
            reorder_point=request.reorder_point,
            supplier_lead_time=request.supplier_lead_time,
            cost=request.cost,
        )

        store = await self._get_part_store()
        part = await store.create_part(part)

        logger.info(
            "create_part_complete",
            part_id=part.id,
            urgency=part.current_stock - part.reorder_point,
        )
        return part

    def to_response(self, part: SparePart) -> PartResponse:
        """Convert result to API response."""
        return PartResponse.from_entity(rank_part(part))
