"""Ranked view entities: sort options, search query and result."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from reorder.core.entities.part import RankedPart


class SortField(str, Enum):
    """Field a ranked view can be ordered by."""

    PRIORITY = "priority"
    NAME = "name"
    STOCK = "stock"
    COST = "cost"
    LEAD_TIME = "leadTime"

    @classmethod
    def _missing_(cls, value: object) -> "SortField | None":
        # "urgency" is accepted as a synonym for priority
        if isinstance(value, str) and value.lower() == "urgency":
            return cls.PRIORITY
        return None


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class SortAlgorithm(str, Enum):
    """Interchangeable sort strategies."""

    COMPARATOR = "comparator"  # stable built-in sort
    QUICKSORT = "quicksort"
    MERGESORT = "mergesort"


class SearchMode(str, Enum):
    SUBSTRING = "substring"
    EXACT = "exact"  # binary search on name


class ViewQuery(BaseModel):
    """Parameters of one view refresh, supplied by the caller."""

    model_config = ConfigDict(frozen=True)

    sort_field: SortField = SortField.PRIORITY
    direction: SortDirection = SortDirection.ASC
    algorithm: SortAlgorithm = SortAlgorithm.COMPARATOR
    search: str = ""
    search_mode: SearchMode = SearchMode.SUBSTRING


class PartsView(BaseModel):
    """The displayed list plus its summary counts."""

    parts: list[RankedPart] = Field(default_factory=list)
    total: int = 0  # size of the unfiltered snapshot
    needs_reorder_count: int = 0  # counted before search filtering
    query: ViewQuery = Field(default_factory=ViewQuery)

    @property
    def adequate_count(self) -> int:
        return self.total - self.needs_reorder_count

    @property
    def match_count(self) -> int:
        return len(self.parts)
