"""Pipeline state - Pure data structures and transitions.

Working, filter and selection state live on a single AppContext that is
passed by reference to the refresh, filter and selection operations.
Working and filter state are immutable snapshots: every transition reads
a complete prior state and returns a complete new one.
"""

import math
from dataclasses import dataclass, field, replace
from datetime import datetime

from quakeview.core.earthquake import Earthquake
from quakeview.core.fetch_result import FetchError


@dataclass(frozen=True)
class WorkingState:
    """The current feed data and fetch status.

    Attributes:
        records: Records from the last successful fetch, in feed order
        last_fetched_at: When the last successful fetch completed
        loading: True while a fetch is in flight
        last_error: Failure from the most recent fetch, if it failed
        generation: Incremented each time records are replaced
    """
    records: tuple[Earthquake, ...] = ()
    last_fetched_at: datetime | None = None
    loading: bool = False
    last_error: FetchError | None = None
    generation: int = 0


@dataclass(frozen=True)
class FilterState:
    """User filter inputs.

    Attributes:
        min_magnitude: Minimum magnitude threshold (may be negative)
        pending_search: Search text as typed, not yet applied
        committed_search: Search term applied to the visible records
    """
    min_magnitude: float = 0.0
    pending_search: str = ""
    committed_search: str = ""


@dataclass
class AppContext:
    """Single owner of all mutable pipeline state.

    Attributes:
        working: Current working state snapshot
        filters: Current filter state snapshot
        selected_id: Id of the selected record, if any
    """
    working: WorkingState = field(default_factory=WorkingState)
    filters: FilterState = field(default_factory=FilterState)
    selected_id: str | None = None


def begin_fetch(state: WorkingState) -> WorkingState:
    """Mark a fetch as in flight.

    Pure function.
    """
    return replace(state, loading=True)


def apply_fetch_success(
    state: WorkingState,
    records: tuple[Earthquake, ...],
    fetched_at: datetime,
) -> WorkingState:
    """Replace the record list after a successful fetch.

    Pure function. Clears the last error and stamps the fetch time.
    """
    return WorkingState(
        records=tuple(records),
        last_fetched_at=fetched_at,
        loading=False,
        last_error=None,
        generation=state.generation + 1,
    )


def apply_fetch_failure(state: WorkingState, error: FetchError) -> WorkingState:
    """Record a failed fetch.

    Pure function. Existing records and the last fetch time are kept.
    """
    return replace(state, loading=False, last_error=error)


def set_min_magnitude(filters: FilterState, value: float) -> FilterState:
    """Set the minimum magnitude threshold.

    Pure function.

    Raises:
        ValueError: If value is not a finite number
    """
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"Minimum magnitude must be finite, got {value}")
    return replace(filters, min_magnitude=value)


def set_pending_search(filters: FilterState, text: str) -> FilterState:
    """Update the search text being typed. Does not affect filtering."""
    return replace(filters, pending_search=text)


def commit_search(filters: FilterState) -> FilterState:
    """Apply the pending search text, trimmed.

    Pure function.
    """
    return replace(filters, committed_search=filters.pending_search.strip())


def clear_search(filters: FilterState) -> FilterState:
    """Reset both pending and committed search text."""
    return replace(filters, pending_search="", committed_search="")
