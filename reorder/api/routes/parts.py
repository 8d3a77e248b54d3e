"""
Spare parts endpoints: CRUD, name search and the ranked view.
"""

from enum import Enum
from typing import TypeVar

from fastapi import APIRouter, Depends, HTTPException, Query, status

from reorder.api.dependencies import (
    get_app_settings,
    get_create_part_use_case,
    get_store,
    get_update_part_use_case,
    get_view_parts_use_case,
)
from reorder.application.dto.requests import CreatePartRequest, UpdatePartRequest
from reorder.application.dto.responses import (
    ErrorResponse,
    PartResponse,
    PartsViewResponse,
)
from reorder.application.use_cases import (
    CreatePartUseCase,
    UpdatePartUseCase,
    ViewPartsUseCase,
)
from reorder.config import Settings
from reorder.core.entities import (
    SearchMode,
    SortAlgorithm,
    SortDirection,
    SortField,
    SparePart,
    ViewQuery,
)
from reorder.core.exceptions import ValidationError
from reorder.core.interfaces import IPartStore
from reorder.core.services import rank_part

router = APIRouter(prefix="/api/parts", tags=["parts"])

E = TypeVar("E", bound=Enum)


def _entity_to_response(part: SparePart) -> PartResponse:
    """Convert entity to response DTO."""
    return PartResponse.from_entity(rank_part(part))


def _parse_option(enum_cls: type[E], raw: str | None, default: str, field: str) -> E:
    """Parse an optional query parameter into its enum, 400 on unknown values."""
    value = raw if raw else default
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(field, f"must be one of: {allowed}", value) from None


@router.get(
    "",
    response_model=list[PartResponse],
)
async def list_parts(
    store: IPartStore = Depends(get_store),
) -> list[PartResponse]:
    """List all parts, newest first."""
    parts = await store.list_parts()
    return [_entity_to_response(part) for part in parts]


@router.post(
    "",
    response_model=PartResponse,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": ErrorResponse}},
)
async def create_part(
    request: CreatePartRequest,
    use_case: CreatePartUseCase = Depends(get_create_part_use_case),
) -> PartResponse:
    """Create a new spare part."""
    part = await use_case.execute(request)
    return use_case.to_response(part)


@router.get(
    "/search",
    response_model=list[PartResponse],
    responses={400: {"model": ErrorResponse}},
)
async def search_parts(
    q: str | None = None,
    store: IPartStore = Depends(get_store),
) -> list[PartResponse]:
    """Case-insensitive substring search on part name."""
    if q is None or not q.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='Query parameter "q" is required',
        )
    parts = await store.search_parts(q.strip())
    return [_entity_to_response(part) for part in parts]


@router.get(
    "/view",
    response_model=PartsViewResponse,
    responses={400: {"model": ErrorResponse}},
)
async def view_parts(
    sort: str | None = Query(default=None, description="priority, name, stock, cost or leadTime"),
    direction: str | None = Query(default=None, description="asc or desc"),
    algorithm: str | None = Query(default=None, description="comparator, quicksort or mergesort"),
    q: str = Query(default="", description="Name search term"),
    mode: str | None = Query(default=None, description="substring or exact"),
    use_case: ViewPartsUseCase = Depends(get_view_parts_use_case),
    settings: Settings = Depends(get_app_settings),
) -> PartsViewResponse:
    """
    Ranked view of all parts.

    Counts cover every part; the list is narrowed by the search term.
    """
    ranking = settings.ranking
    query = ViewQuery(
        sort_field=_parse_option(SortField, sort, ranking.default_sort_field, "sort"),
        direction=_parse_option(SortDirection, direction, ranking.default_direction, "direction"),
        algorithm=_parse_option(SortAlgorithm, algorithm, ranking.default_algorithm, "algorithm"),
        search=q,
        search_mode=_parse_option(SearchMode, mode, SearchMode.SUBSTRING.value, "mode"),
    )
    view = await use_case.execute(query)
    return use_case.to_response(view)


@router.get(
    "/{part_id}",
    response_model=PartResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_part(
    part_id: str,
    store: IPartStore = Depends(get_store),
) -> PartResponse:
    """Get a part by ID."""
    part = await store.get_part(part_id)
    if part is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Part not found: {part_id}",
        )
    return _entity_to_response(part)


@router.patch(
    "/{part_id}",
    response_model=PartResponse,
    responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def update_part(
    part_id: str,
    request: UpdatePartRequest,
    use_case: UpdatePartUseCase = Depends(get_update_part_use_case),
) -> PartResponse:
    """Update only the provided fields of a part."""
    part = await use_case.execute(part_id, request)
    return use_case.to_response(part)


@router.delete(
    "/{part_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_part(
    part_id: str,
    store: IPartStore = Depends(get_store),
) -> None:
    """Delete a part."""
    deleted = await store.delete_part(part_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Part not found: {part_id}",
        )
