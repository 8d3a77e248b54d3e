"""
Name search over ranked parts.

Two modes, neither of which mutates its input:

- exact: binary search on a name-sorted working copy, case-insensitive
- substring: linear case-insensitive "contains" filter, order preserved
"""

from collections.abc import Sequence

from reorder.core.entities.part import RankedPart


def _name_sort_key(part: RankedPart) -> tuple[str, str]:
    return (part.name.casefold(), part.name)


def binary_search_by_name(
    parts: Sequence[RankedPart], name: str
) -> RankedPart | None:
    """
    Find the part whose name equals name, ignoring case.

    The caller's collection is usually ordered by urgency, so a copy is
    sorted by case-folded name first. That key agrees with the
    case-insensitive comparison used while bisecting.

    Returns:
        The matching part, or None when no name matches. When several
        parts share the name, any one of them may be returned.
    """
    ordered = sorted(parts, key=_name_sort_key)
    target = name.casefold()

    left = 0
    right = len(ordered) - 1
    while left <= right:
        mid = (left + right) // 2
        mid_name = ordered[mid].name.casefold()

        if mid_name == target:
            return ordered[mid]
        if mid_name < target:
            left = mid + 1
        else:
            right = mid - 1

    return None


def search_by_name(parts: Sequence[RankedPart], term: str) -> list[RankedPart]:
    """Parts whose name contains term, ignoring case. Empty term matches all."""
    needle = term.casefold()
    return [part for part in parts if needle in part.name.casefold()]
