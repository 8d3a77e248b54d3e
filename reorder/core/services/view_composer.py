"""
View composer.

Turns a raw parts snapshot into the displayed list:
annotate urgency -> rank -> optional name search.
"""

from collections.abc import Sequence

from reorder.config import get_logger
from reorder.core.entities.part import SparePart
from reorder.core.entities.view import PartsView, SearchMode, ViewQuery
from reorder.core.services.part_search import binary_search_by_name, search_by_name
from reorder.core.services.ranking import rank
from reorder.core.services.urgency import annotate_urgency

logger = get_logger(__name__)


def compose_view(parts: Sequence[SparePart], query: ViewQuery | None = None) -> PartsView:
    """
    Build the ranked, optionally filtered view of a snapshot.

    Counts are taken over the whole ranked snapshot so they do not change
    while the user types a search term. A blank (whitespace only) search
    term disables filtering.
    """
    query = query or ViewQuery()

    annotated = annotate_urgency(parts)
    ranked = rank(
        annotated,
        field=query.sort_field,
        direction=query.direction,
        algorithm=query.algorithm,
    )
    needs_reorder_count = sum(1 for part in ranked if part.needs_reorder)

    if not query.search.strip():
        displayed = ranked
    elif query.search_mode is SearchMode.EXACT:
        found = binary_search_by_name(ranked, query.search)
        displayed = [found] if found is not None else []
    else:
        displayed = search_by_name(ranked, query.search)

    logger.debug(
        "view_composed",
        total=len(ranked),
        displayed=len(displayed),
        needs_reorder=needs_reorder_count,
        search_mode=query.search_mode.value,
    )

    return PartsView(
        parts=displayed,
        total=len(ranked),
        needs_reorder_count=needs_reorder_count,
        query=query,
    )
