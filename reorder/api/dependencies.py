"""
Dependency injection container for FastAPI.

Provides store and use case instances to route handlers. Tests swap
the store through app.dependency_overrides[get_store].
"""

from functools import lru_cache

from fastapi import Depends

from reorder.application.use_cases import (
    CreatePartUseCase,
    UpdatePartUseCase,
    ViewPartsUseCase,
)
from reorder.config import Settings, get_settings
from reorder.core.interfaces import IPartStore
from reorder.infrastructure.storage.sqlite import get_part_store


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


# Store dependencies
async def get_store() -> IPartStore:
    """Get part store."""
    return await get_part_store()


# Use case dependencies
def get_create_part_use_case(
    store: IPartStore = Depends(get_store),
) -> CreatePartUseCase:
    """Get create part use case."""
    return CreatePartUseCase(part_store=store)


def get_update_part_use_case(
    store: IPartStore = Depends(get_store),
) -> UpdatePartUseCase:
    """Get update part use case."""
    return UpdatePartUseCase(part_store=store)


def get_view_parts_use_case(
    store: IPartStore = Depends(get_store),
) -> ViewPartsUseCase:
    """Get view parts use case."""
    return ViewPartsUseCase(part_store=store)
