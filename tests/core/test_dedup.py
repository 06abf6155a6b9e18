"""Unit tests for batch identity logic.

Pure function tests - no mocks needed.
"""

import pytest

from quakeview.core.earthquake import Earthquake
from quakeview.core.dedup import (
    dedupe_by_id,
    find_by_id,
    find_duplicate_ids,
)


@pytest.fixture
def earthquakes():
    """Create list of earthquakes."""
    return [
        Earthquake(id="eq1", magnitude=4.0),
        Earthquake(id="eq2", magnitude=3.0),
        Earthquake(id="eq3", magnitude=2.0),
    ]


class TestDedupeById:
    """Tests for dedupe_by_id() function."""

    def test_unique_list_unchanged(self, earthquakes):
        assert dedupe_by_id(earthquakes) == earthquakes

    def test_keeps_first_occurrence(self, earthquakes):
        duplicate = Earthquake(id="eq1", magnitude=9.9)
        result = dedupe_by_id([*earthquakes, duplicate])

        assert len(result) == 3
        assert result[0].magnitude == 4.0

    def test_preserves_order(self):
        batch = [
            Earthquake(id="b"),
            Earthquake(id="a"),
            Earthquake(id="b"),
            Earthquake(id="c"),
        ]
        assert [e.id for e in dedupe_by_id(batch)] == ["b", "a", "c"]


class TestFindDuplicateIds:
    """Tests for find_duplicate_ids() function."""

    def test_no_duplicates(self, earthquakes):
        assert find_duplicate_ids(earthquakes) == set()

    def test_reports_duplicates(self, earthquakes):
        batch = [*earthquakes, Earthquake(id="eq2"), Earthquake(id="eq2")]
        assert find_duplicate_ids(batch) == {"eq2"}


class TestFindById:
    """Tests for find_by_id() function."""

    def test_found(self, earthquakes):
        assert find_by_id(earthquakes, "eq2") is earthquakes[1]

    def test_missing(self, earthquakes):
        assert find_by_id(earthquakes, "nope") is None
