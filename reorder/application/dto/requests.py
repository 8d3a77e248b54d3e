"""Request DTOs for API endpoints.

Pydantic v2 models for request validation. JSON field names are
camelCase (currentStock, reorderPoint, ...); snake_case names are
accepted too.
"""

from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for DTOs exchanged as camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _require_name(value: str) -> str:
    stripped = value.strip()
    if not stripped:
        raise ValueError("Name must be a non-empty string")
    return stripped


PartName = Annotated[str, AfterValidator(_require_name)]


# --- Parts ---


class CreatePartRequest(CamelModel):
    """Request to create a spare part."""

    name: PartName = Field(..., description="Part name (trimmed, must not be blank)")
    current_stock: int = Field(default=0, ge=0, description="Units on hand")
    reorder_point: int = Field(default=0, ge=0, description="Reorder threshold")
    supplier_lead_time: int = Field(default=0, ge=0, description="Supplier lead time in days")
    cost: float = Field(default=0.0, ge=0, description="Unit cost")


class UpdatePartRequest(CamelModel):
    """Partial update of a spare part; omitted fields are left unchanged."""

    name: PartName | None = Field(default=None, description="Part name")
    current_stock: int | None = Field(default=None, ge=0, description="Units on hand")
    reorder_point: int | None = Field(default=None, ge=0, description="Reorder threshold")
    supplier_lead_time: int | None = Field(
        default=None, ge=0, description="Supplier lead time in days"
    )
    cost: float | None = Field(default=None, ge=0, description="Unit cost")

    def to_changes(self) -> dict[str, Any]:
        """Provided fields keyed by entity field name."""
        return self.model_dump(exclude_unset=True, exclude_none=True)
