"""
Ranking engine.

Orders urgency-annotated parts by a chosen field and direction. Three
interchangeable strategies share one comparator:

- comparator: Python's built-in stable sort (default, production path)
- quicksort: Lomuto partition with the last element as pivot, not stable
- mergesort: top-down merge sort, stable

With field=priority the default direction=asc puts the most urgent
(most negative) part first; direction=desc yields a non-increasing
urgency sequence. Inputs are never mutated: each strategy
works on its own copy.
"""

from collections.abc import Callable, Sequence
from functools import cmp_to_key
from typing import Any

from reorder.config import get_logger
from reorder.core.entities.part import RankedPart
from reorder.core.entities.view import SortAlgorithm, SortDirection, SortField

logger = get_logger(__name__)

Comparator = Callable[[RankedPart, RankedPart], int]


def _three_way(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def _name_key(part: RankedPart) -> tuple[str, str]:
    # case-insensitive order first, raw name keeps the order total
    return (part.name.casefold(), part.name)


_FIELD_KEYS: dict[SortField, Callable[[RankedPart], Any]] = {
    SortField.PRIORITY: lambda part: part.urgency,
    SortField.NAME: _name_key,
    SortField.STOCK: lambda part: part.current_stock,
    SortField.COST: lambda part: part.cost,
    SortField.LEAD_TIME: lambda part: part.supplier_lead_time,
}


def build_comparator(
    field: SortField | str = SortField.PRIORITY,
    direction: SortDirection | str = SortDirection.ASC,
) -> Comparator:
    """
    Build a three-way comparison for one field.

    Descending order negates the ascending comparison, so equal keys
    still compare as 0 in both directions.
    """
    key = _FIELD_KEYS[SortField(field)]
    sign = -1 if SortDirection(direction) is SortDirection.DESC else 1

    def compare(a: RankedPart, b: RankedPart) -> int:
        return sign * _three_way(key(a), key(b))

    return compare


def sort_parts(
    parts: Sequence[RankedPart],
    field: SortField | str = SortField.PRIORITY,
    direction: SortDirection | str = SortDirection.ASC,
) -> list[RankedPart]:
    """Stable comparator-driven sort on any field."""
    return _builtin_sort(parts, build_comparator(field, direction))


def _builtin_sort(parts: Sequence[RankedPart], compare: Comparator) -> list[RankedPart]:
    return sorted(parts, key=cmp_to_key(compare))


# --- Quicksort ---


def quick_sort(parts: Sequence[RankedPart], compare: Comparator) -> list[RankedPart]:
    """Quicksort a copy of parts. Equal elements may be reordered."""
    items = list(parts)
    _quick_sort_range(items, 0, len(items) - 1, compare)
    return items


def _quick_sort_range(
    items: list[RankedPart], left: int, right: int, compare: Comparator
) -> None:
    while left < right:
        pivot_index = _partition(items, left, right, compare)
        # Recurse into the smaller side and loop on the larger one to keep
        # the stack depth logarithmic on already-sorted input.
        if pivot_index - left < right - pivot_index:
            _quick_sort_range(items, left, pivot_index - 1, compare)
            left = pivot_index + 1
        else:
            _quick_sort_range(items, pivot_index + 1, right, compare)
            right = pivot_index - 1


def _partition(
    items: list[RankedPart], left: int, right: int, compare: Comparator
) -> int:
    """Lomuto partition around items[right]; returns the pivot's final index."""
    pivot = items[right]
    i = left - 1
    for j in range(left, right):
        if compare(items[j], pivot) <= 0:
            i += 1
            items[i], items[j] = items[j], items[i]
    items[i + 1], items[right] = items[right], items[i + 1]
    return i + 1


# --- Mergesort ---


def merge_sort(parts: Sequence[RankedPart], compare: Comparator) -> list[RankedPart]:
    """Stable top-down merge sort returning a new list."""
    if len(parts) <= 1:
        return list(parts)

    mid = len(parts) // 2
    left = merge_sort(parts[:mid], compare)
    right = merge_sort(parts[mid:], compare)
    return _merge(left, right, compare)


def _merge(
    left: list[RankedPart], right: list[RankedPart], compare: Comparator
) -> list[RankedPart]:
    result: list[RankedPart] = []
    left_index = 0
    right_index = 0

    while left_index < len(left) and right_index < len(right):
        # <= takes from the left run on ties, which keeps the sort stable
        if compare(left[left_index], right[right_index]) <= 0:
            result.append(left[left_index])
            left_index += 1
        else:
            result.append(right[right_index])
            right_index += 1

    result.extend(left[left_index:])
    result.extend(right[right_index:])
    return result


def quick_sort_by_urgency(
    parts: Sequence[RankedPart],
    direction: SortDirection | str = SortDirection.ASC,
) -> list[RankedPart]:
    """Quicksort on urgency; most urgent (most negative) first by default."""
    return quick_sort(parts, build_comparator(SortField.PRIORITY, direction))


def merge_sort_by_urgency(
    parts: Sequence[RankedPart],
    direction: SortDirection | str = SortDirection.ASC,
) -> list[RankedPart]:
    """Mergesort on urgency; most urgent (most negative) first by default."""
    return merge_sort(parts, build_comparator(SortField.PRIORITY, direction))


_STRATEGIES: dict[
    SortAlgorithm, Callable[[Sequence[RankedPart], Comparator], list[RankedPart]]
] = {
    SortAlgorithm.COMPARATOR: _builtin_sort,
    SortAlgorithm.QUICKSORT: quick_sort,
    SortAlgorithm.MERGESORT: merge_sort,
}


def rank(
    parts: Sequence[RankedPart],
    field: SortField | str = SortField.PRIORITY,
    direction: SortDirection | str = SortDirection.ASC,
    algorithm: SortAlgorithm | str = SortAlgorithm.COMPARATOR,
) -> list[RankedPart]:
    """
    Order parts with the selected strategy.

    Args:
        parts: Urgency-annotated snapshot; left unmodified.
        field: Field to order by.
        direction: asc (most urgent first for priority) or desc.
        algorithm: Sort strategy; comparator (stable) by default.

    Returns:
        A new list containing the same parts in ranked order.
    """
    strategy = _STRATEGIES[SortAlgorithm(algorithm)]
    ranked = strategy(parts, build_comparator(field, direction))

    logger.debug(
        "parts_ranked",
        count=len(ranked),
        field=SortField(field).value,
        direction=SortDirection(direction).value,
        algorithm=SortAlgorithm(algorithm).value,
    )
    return ranked
