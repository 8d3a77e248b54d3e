"""
Urgency calculator.

Urgency = current_stock - reorder_point. Negative means the part is
below its reorder threshold and must be reordered.
"""

from collections.abc import Iterable

from reorder.core.entities.part import RankedPart, SparePart, StockStatus

# Parts this close above their reorder point are flagged for monitoring
LOW_STOCK_MARGIN = 5


def calculate_urgency(current_stock: int, reorder_point: int) -> int:
    """Signed priority score; lower is more urgent."""
    return current_stock - reorder_point


def classify_urgency(urgency: int) -> StockStatus:
    """Map an urgency score to its display classification."""
    if urgency < 0:
        return StockStatus.CRITICAL
    if urgency < LOW_STOCK_MARGIN:
        return StockStatus.LOW
    return StockStatus.ADEQUATE


def rank_part(part: SparePart) -> RankedPart:
    """Annotate a single part with its derived fields."""
    urgency = calculate_urgency(part.current_stock, part.reorder_point)
    return RankedPart(
        **part.model_dump(include=set(SparePart.model_fields)),
        urgency=urgency,
        needs_reorder=urgency < 0,
        stock_status=classify_urgency(urgency),
    )


def annotate_urgency(parts: Iterable[SparePart]) -> list[RankedPart]:
    """Annotate a snapshot of parts, preserving order."""
    return [rank_part(part) for part in parts]
