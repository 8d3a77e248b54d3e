"""
Core business logic services.

Layer-pure services that depend only on:
- reorder/core/entities/*
- reorder/core/interfaces/*
- reorder/core/exceptions.py

NO infrastructure imports. Everything here is a synchronous, pure
transformation over an in-memory snapshot.
"""

from reorder.core.services.part_search import binary_search_by_name, search_by_name
from reorder.core.services.ranking import (
    build_comparator,
    merge_sort,
    merge_sort_by_urgency,
    quick_sort,
    quick_sort_by_urgency,
    rank,
    sort_parts,
)
from reorder.core.services.urgency import (
    LOW_STOCK_MARGIN,
    annotate_urgency,
    calculate_urgency,
    classify_urgency,
    rank_part,
)
from reorder.core.services.view_composer import compose_view

__all__ = [
    # Urgency
    "LOW_STOCK_MARGIN",
    "calculate_urgency",
    "classify_urgency",
    "rank_part",
    "annotate_urgency",
    # Ranking
    "build_comparator",
    "sort_parts",
    "quick_sort",
    "merge_sort",
    "quick_sort_by_urgency",
    "merge_sort_by_urgency",
    "rank",
    # Search
    "binary_search_by_name",
    "search_by_name",
    # View
    "compose_view",
]
