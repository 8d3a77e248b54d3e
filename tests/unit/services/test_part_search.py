"""Tests for name search."""

import pytest

from reorder.core.services.part_search import binary_search_by_name, search_by_name
from reorder.core.services.ranking import rank


class TestBinarySearchByName:
    """Tests for exact name lookup."""

    def test_finds_exact_name(self, ranked_sample_parts):
        """An exact name returns that part."""
        found = binary_search_by_name(ranked_sample_parts, "Control Valve")
        assert found is not None
        assert found.id == "5"

    @pytest.mark.parametrize("query", ["gasket kit", "GASKET KIT", "Gasket Kit"])
    def test_case_insensitive(self, ranked_sample_parts, query):
        """Case is ignored when matching names."""
        found = binary_search_by_name(ranked_sample_parts, query)
        assert found is not None
        assert found.name.casefold() == query.casefold()

    def test_miss_returns_none(self, ranked_sample_parts):
        """An unknown name returns None."""
        assert binary_search_by_name(ranked_sample_parts, "Flux Capacitor") is None

    def test_partial_name_is_a_miss(self, ranked_sample_parts):
        """Binary search needs the whole name."""
        assert binary_search_by_name(ranked_sample_parts, "Gasket") is None

    def test_empty_collection(self):
        """Searching nothing returns None."""
        assert binary_search_by_name([], "anything") is None

    def test_works_on_urgency_order(self, ranked_sample_parts):
        """Every part is found even when the input is ranked by urgency."""
        by_urgency = rank(ranked_sample_parts)
        for part in by_urgency:
            found = binary_search_by_name(by_urgency, part.name)
            assert found is not None
            assert found.name == part.name

    def test_mixed_case_names(self, make_part):
        """Names that sort differently by raw code point are still found."""
        parts = [make_part("apple"), make_part("Banana"), make_part("cherry"), make_part("Date")]
        for name in ("APPLE", "banana", "Cherry", "date"):
            assert binary_search_by_name(parts, name) is not None

    def test_duplicate_names_return_one(self, make_part):
        """One of several same-named parts is returned."""
        parts = [make_part("Seal", part_id="a"), make_part("seal", part_id="b")]
        found = binary_search_by_name(parts, "SEAL")
        assert found is not None
        assert found.id in {"a", "b"}

    def test_input_not_mutated(self, ranked_sample_parts):
        """The input keeps its order."""
        before = [p.id for p in ranked_sample_parts]
        binary_search_by_name(ranked_sample_parts, "Steel Cable")
        assert [p.id for p in ranked_sample_parts] == before


class TestSearchByName:
    """Tests for substring filtering."""

    def test_empty_term_returns_everything_in_order(self, ranked_sample_parts):
        """An empty term returns a copy of the whole list."""
        result = search_by_name(ranked_sample_parts, "")
        assert [p.id for p in result] == [p.id for p in ranked_sample_parts]
        assert result is not ranked_sample_parts

    def test_case_insensitive_contains(self, make_part):
        """Substring matching ignores case."""
        parts = [make_part("Engine Filter"), make_part("Air Filter"), make_part("Belt")]
        result = search_by_name(parts, "ENGINE")
        assert [p.name for p in result] == ["Engine Filter"]

    def test_preserves_input_order(self, ranked_sample_parts):
        """Matches keep the ranked order."""
        ranked = rank(ranked_sample_parts)
        result = search_by_name(ranked, "co")
        assert [p.name for p in result] == ["Conveyor Belt", "Control Valve"]

    def test_no_match(self, ranked_sample_parts):
        """A term that matches nothing returns an empty list."""
        assert search_by_name(ranked_sample_parts, "zzz") == []
