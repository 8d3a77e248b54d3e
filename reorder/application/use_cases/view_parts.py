"""View Parts Use Case: ranked, searchable parts list."""

from collections.abc import Awaitable, Callable, Sequence

from reorder.application.dto.responses import PartsViewResponse
from reorder.config import get_logger
from reorder.core.entities.part import SparePart
from reorder.core.entities.view import PartsView, ViewQuery
from reorder.core.exceptions import StorageError
from reorder.core.interfaces.part_store import IPartStore
from reorder.core.services.view_composer import compose_view

logger = get_logger(__name__)

SnapshotLoader = Callable[[], Awaitable[Sequence[SparePart]]]


class PartsViewSession:
    """
    Holds the last good snapshot for one viewer.

    A failed refresh keeps the previous snapshot and marks the session
    stale; the next successful refresh clears the flag.
    """

    def __init__(self, loader: SnapshotLoader):
        self._loader = loader
        self._snapshot: list[SparePart] = []
        self.stale = False
        self.last_error: str | None = None

    @property
    def snapshot(self) -> list[SparePart]:
        return list(self._snapshot)

    async def refresh(self) -> bool:
        """Reload the snapshot. Returns False if the previous one was kept."""
        try:
            parts = await self._loader()
        except StorageError as e:
            self.stale = True
            self.last_error = e.message
            logger.warning(
                "view_refresh_failed",
                error=e.message,
                kept_parts=len(self._snapshot),
            )
            return False

        self._snapshot = list(parts)
        self.stale = False
        self.last_error = None
        logger.debug("view_refreshed", parts=len(self._snapshot))
        return True

    def render(self, query: ViewQuery | None = None) -> PartsView:
        """Compose a view over the current snapshot."""
        return compose_view(self._snapshot, query)


class ViewPartsUseCase:
    """Load the current parts and compose the ranked view."""

    def __init__(self, part_store: IPartStore | None = None):
        self._part_store = part_store

    async def _get_part_store(self) -> IPartStore:
        if self._part_store is None:
            from reorder.infrastructure.storage.sqlite import get_part_store

            self._part_store = await get_part_store()
        return self._part_store

    async def execute(self, query: ViewQuery | None = None) -> PartsView:
        """Execute view parts use case."""
        store = await self._get_part_store()
        parts = await store.list_parts()
        return compose_view(parts, query)

    async def open_session(self) -> PartsViewSession:
        """A session over this store, already loaded once."""
        store = await self._get_part_store()
        session = PartsViewSession(store.list_parts)
        await session.refresh()
        return session

    def to_response(self, view: PartsView) -> PartsViewResponse:
        """Convert result to API response."""
        return PartsViewResponse.from_view(view)
