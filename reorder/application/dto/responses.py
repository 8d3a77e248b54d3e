"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from reorder.application.dto.requests import CamelModel
from reorder.core.entities import PartsView, RankedPart


class PartResponse(CamelModel):
    """Spare part with its derived urgency fields."""

    id: str = Field(..., description="Part ID")
    name: str = Field(..., description="Part name")
    current_stock: int = Field(..., description="Units on hand")
    reorder_point: int = Field(..., description="Reorder threshold")
    supplier_lead_time: int = Field(..., description="Supplier lead time in days")
    cost: float = Field(..., description="Unit cost")
    urgency: int = Field(..., description="current_stock - reorder_point")
    needs_reorder: bool = Field(..., description="True when urgency < 0")
    stock_status: str = Field(..., description="critical, low or adequate")
    stock_status_label: str = Field(..., description="Human-readable stock status")
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, part: RankedPart) -> "PartResponse":
        return cls(
            id=part.id,  # type: ignore[arg-type]
            name=part.name,
            current_stock=part.current_stock,
            reorder_point=part.reorder_point,
            supplier_lead_time=part.supplier_lead_time,
            cost=part.cost,
            urgency=part.urgency,
            needs_reorder=part.needs_reorder,
            stock_status=part.stock_status.value,
            stock_status_label=part.stock_status.label,
            created_at=part.created_at,
            updated_at=part.updated_at,
        )


class PartsViewResponse(CamelModel):
    """Ranked and filtered parts list with summary counts."""

    parts: list[PartResponse]
    total: int = Field(..., description="Parts in the snapshot before filtering")
    needs_reorder_count: int = Field(..., description="Parts below their reorder point")
    adequate_count: int = Field(..., description="Parts at or above their reorder point")
    match_count: int = Field(..., description="Parts in the returned list")
    sort_field: str
    direction: str
    algorithm: str
    search: str = ""
    search_mode: str

    @classmethod
    def from_view(cls, view: PartsView) -> "PartsViewResponse":
        query = view.query
        return cls(
            parts=[PartResponse.from_entity(part) for part in view.parts],
            total=view.total,
            needs_reorder_count=view.needs_reorder_count,
            adequate_count=view.adequate_count,
            match_count=view.match_count,
            sort_field=query.sort_field.value,
            direction=query.direction.value,
            algorithm=query.algorithm.value,
            search=query.search,
            search_mode=query.search_mode.value,
        )


class PartStatisticsResponse(CamelModel):
    """Aggregate inventory statistics."""

    total_parts: int
    parts_needing_reorder: int
    parts_with_adequate_stock: int
    total_inventory_value: float
    average_lead_time: float


class ProviderHealthResponse(BaseModel):
    """Provider health status."""

    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: ProviderHealthResponse | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. PART_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)
