"""Spare part domain entities."""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


def _utcnow() -> datetime:
    return datetime.now(UTC)


class StockStatus(str, Enum):
    """Display classification of a part's urgency."""

    CRITICAL = "critical"  # urgency < 0
    LOW = "low"  # 0 <= urgency < 5
    ADEQUATE = "adequate"  # urgency >= 5

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]


_STATUS_LABELS = {
    StockStatus.CRITICAL: "Critical - Reorder Now",
    StockStatus.LOW: "Low Stock - Monitor",
    StockStatus.ADEQUATE: "Adequate Stock",
}


class SparePart(BaseModel):
    """A stocked spare part with its reorder parameters."""

    id: str | None = None
    name: str = Field(..., min_length=1)
    current_stock: int = Field(default=0, ge=0)
    reorder_point: int = Field(default=0, ge=0)
    supplier_lead_time: int = Field(default=0, ge=0)  # days
    cost: float = Field(default=0.0, ge=0)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @property
    def stock_value(self) -> float:
        """Value of the stock on hand = current_stock * cost."""
        return self.current_stock * self.cost


class RankedPart(SparePart):
    """
    Read-only snapshot of a part annotated with its urgency.

    Built by the urgency calculator on every read and never persisted.
    The validator rejects any instance whose derived fields disagree
    with its stock fields.
    """

    model_config = ConfigDict(frozen=True)

    urgency: int
    needs_reorder: bool
    stock_status: StockStatus

    @model_validator(mode="after")
    def _check_derived_fields(self) -> "RankedPart":
        if self.urgency != self.current_stock - self.reorder_point:
            raise ValueError(
                f"urgency {self.urgency} does not match stock "
                f"{self.current_stock} - reorder point {self.reorder_point}"
            )
        if self.needs_reorder != (self.urgency < 0):
            raise ValueError("needs_reorder must equal urgency < 0")
        return self


class PartStatistics(BaseModel):
    """Aggregate figures over the whole parts table."""

    total_parts: int = 0
    parts_needing_reorder: int = 0
    parts_with_adequate_stock: int = 0
    total_inventory_value: float = 0.0
    average_lead_time: float = 0.0
