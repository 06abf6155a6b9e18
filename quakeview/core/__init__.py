"""Functional Core - Pure functions with no side effects.

This module contains the pipeline's business logic:
- Feed normalization into Earthquake records
- Working, filter and selection state transitions
- Visible record filtering
- Map marker and viewport parameters
- Display formatting

Everything here is deterministic and has no I/O.
"""

from quakeview.core.earthquake import Earthquake, parse_feature, parse_features
from quakeview.core.fetch_result import FetchError, FetchErrorKind, FetchResult
from quakeview.core.state import AppContext, FilterState, WorkingState
from quakeview.core.filters import VisibleRecords, visible
from quakeview.core.selection import SelectionCoordinator
from quakeview.core.map_view import ViewportTarget, build_markers, focus_viewport

__all__ = [
    # Earthquake
    "Earthquake",
    "parse_feature",
    "parse_features",
    # Fetch results
    "FetchError",
    "FetchErrorKind",
    "FetchResult",
    # State
    "AppContext",
    "FilterState",
    "WorkingState",
    # Filters
    "VisibleRecords",
    "visible",
    # Selection
    "SelectionCoordinator",
    # Map view
    "ViewportTarget",
    "build_markers",
    "focus_viewport",
]
