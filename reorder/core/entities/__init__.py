"""Core domain entities."""

from reorder.core.entities.part import (
    PartStatistics,
    RankedPart,
    SparePart,
    StockStatus,
)
from reorder.core.entities.view import (
    PartsView,
    SearchMode,
    SortAlgorithm,
    SortDirection,
    SortField,
    ViewQuery,
)

__all__ = [
    # Part entities
    "SparePart",
    "RankedPart",
    "StockStatus",
    "PartStatistics",
    # View entities
    "SortField",
    "SortDirection",
    "SortAlgorithm",
    "SearchMode",
    "ViewQuery",
    "PartsView",
]
