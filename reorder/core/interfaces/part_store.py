"""Abstract interface for spare part storage."""

from abc import ABC, abstractmethod
from typing import Any

from reorder.core.entities.part import PartStatistics, SparePart


class IPartStore(ABC):
    """Interface for spare part persistence."""

    @abstractmethod
    async def create_part(self, part: SparePart) -> SparePart:
        """Persist a new part and return it with its generated ID."""
        pass

    @abstractmethod
    async def get_part(self, part_id: str) -> SparePart | None:
        """Get part by ID."""
        pass

    @abstractmethod
    async def list_parts(self) -> list[SparePart]:
        """List all parts, newest first."""
        pass

    @abstractmethod
    async def search_parts(self, term: str) -> list[SparePart]:
        """List parts whose name contains term (case-insensitive), newest first."""
        pass

    @abstractmethod
    async def update_part(
        self, part_id: str, changes: dict[str, Any]
    ) -> SparePart | None:
        """
        Apply a partial update.

        Only the keys present in changes are written. An empty mapping
        leaves the row untouched. Returns None when the part does not exist.
        """
        pass

    @abstractmethod
    async def delete_part(self, part_id: str) -> bool:
        """Delete a part. Returns False when nothing was deleted."""
        pass

    @abstractmethod
    async def get_statistics(self) -> PartStatistics:
        """Aggregate counts and values over all parts."""
        pass
