"""Update Part Use Case: partial field update."""

from reorder.application.dto.requests import UpdatePartRequest
from reorder.application.dto.responses import PartResponse
from reorder.config import get_logger
from reorder.core.entities.part import SparePart
from reorder.core.exceptions import PartNotFoundError
from reorder.core.interfaces.part_store import IPartStore
from reorder.core.services.urgency import rank_part

logger = get_logger(__name__)


class UpdatePartUseCase:
    """Change only the fields present in the request."""

    def __init__(self, part_store: IPartStore | None = None):
        self._part_store = part_store

    async def _get_part_store(self) -> IPartStore:
        if self._part_store is None:
            from reorder.infrastructure.storage.sqlite import get_part_store

            self._part_store = await get_part_store()
        return self._part_store

    async def execute(self, part_id: str, request: UpdatePartRequest) -> SparePart:
        """
        Apply the provided fields to the part.

        An empty request leaves the record untouched and returns it.

        Raises:
            PartNotFoundError: No part has this id
        """
        changes = request.to_changes()
        store = await self._get_part_store()

        if not changes:
            part = await store.get_part(part_id)
            if part is None:
                raise PartNotFoundError(part_id)
            logger.debug("update_part_noop", part_id=part_id)
            return part

        part = await store.update_part(part_id, changes)
        if part is None:
            raise PartNotFoundError(part_id)

        logger.info("update_part_complete", part_id=part_id, fields=sorted(changes))
        return part

    def to_response(self, part: SparePart) -> PartResponse:
        """Convert result to API response."""
        return PartResponse.from_entity(rank_part(part))
