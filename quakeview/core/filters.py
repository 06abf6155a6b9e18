"""Visible record filtering - Pure functions.

Filters never re-sort: the result is always an order-preserving
subsequence of the input records.
"""

from typing import Sequence

from quakeview.core.earthquake import Earthquake
from quakeview.core.state import FilterState, WorkingState


def normalize_search(term: str) -> str:
    """Trim and casefold a search term. Empty means no search filter."""
    return term.strip().casefold()


def matches_magnitude(earthquake: Earthquake, min_magnitude: float) -> bool:
    """Check an earthquake against the magnitude threshold.

    Pure function. Unknown magnitude compares as 0.
    """
    magnitude = earthquake.magnitude if earthquake.magnitude is not None else 0.0
    return magnitude >= min_magnitude


def matches_search(earthquake: Earthquake, normalized_term: str) -> bool:
    """Check whether the place contains an already-normalized term.

    Pure function.
    """
    if not normalized_term:
        return True
    return normalized_term in earthquake.place.casefold()


def visible(
    records: Sequence[Earthquake],
    min_magnitude: float,
    committed_search: str,
) -> list[Earthquake]:
    """Compute the visible subset of records.

    Pure function. A record must pass both the magnitude and the search
    stage. Whitespace-only search terms disable the search stage.

    Args:
        records: All records, in display order
        min_magnitude: Minimum magnitude (inclusive)
        committed_search: Case-insensitive place substring

    Returns:
        Matching records in their original relative order
    """
    term = normalize_search(committed_search)
    return [
        e for e in records
        if matches_magnitude(e, min_magnitude) and matches_search(e, term)
    ]


class VisibleRecords:
    """Memoized view of the visible records.

    Recomputes on read, and only when the records generation, the
    magnitude threshold or the committed search changed. Pending search
    text is not part of the key.
    """

    def __init__(self) -> None:
        self._key: tuple[int, float, str] | None = None
        self._value: tuple[Earthquake, ...] = ()
        self.recompute_count = 0

    def get(self, working: WorkingState, filters: FilterState) -> tuple[Earthquake, ...]:
        key = (
            working.generation,
            filters.min_magnitude,
            normalize_search(filters.committed_search),
        )
        if key != self._key:
            self._value = tuple(visible(
                working.records,
                filters.min_magnitude,
                filters.committed_search,
            ))
            self._key = key
            self.recompute_count += 1
        return self._value
