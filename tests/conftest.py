"""Pytest configuration and fixtures."""

from collections.abc import Callable

import pytest

from reorder.application.sample_data import generate_sample_parts
from reorder.core.entities import RankedPart, SparePart
from reorder.core.services import annotate_urgency, rank_part


@pytest.fixture
def sample_parts() -> list[SparePart]:
    """The eight sample parts, ids "1" to "8"."""
    return generate_sample_parts()


@pytest.fixture
def ranked_sample_parts(sample_parts: list[SparePart]) -> list[RankedPart]:
    """Sample parts annotated with urgency, in input order."""
    return annotate_urgency(sample_parts)


@pytest.fixture
def make_part() -> Callable[..., RankedPart]:
    """Factory for a ranked part with sensible defaults."""

    def _make(
        name: str = "Part",
        current_stock: int = 0,
        reorder_point: int = 0,
        supplier_lead_time: int = 0,
        cost: float = 0.0,
        part_id: str | None = None,
    ) -> RankedPart:
        return rank_part(
            SparePart(
                id=part_id or name,
                name=name,
                current_stock=current_stock,
                reorder_point=reorder_point,
                supplier_lead_time=supplier_lead_time,
                cost=cost,
            )
        )

    return _make
