"""Display formatting - Pure functions.

This module formats earthquake records for the presentation layer.
Unknown values always render distinctly from measured zeros.
"""

from datetime import datetime, timezone
from typing import Any

from quakeview.core.earthquake import Earthquake


NOT_AVAILABLE = "N/A"
UNKNOWN_MAGNITUDE = "—"
TIME_UNAVAILABLE = "Time unavailable"
EMPTY_LIST_MESSAGE = "No earthquakes found for your search."

TIME_FORMAT = "%Y-%m-%d %H:%M:%S UTC"


def format_magnitude(magnitude: float | None) -> str:
    """Format a magnitude label, e.g. "M 5.2" or "M —"."""
    if magnitude is None:
        return f"M {UNKNOWN_MAGNITUDE}"
    return f"M {magnitude:.1f}"


def format_depth(depth_km: float | None) -> str:
    """Format a depth, e.g. "10.0 km" or "N/A"."""
    if depth_km is None:
        return NOT_AVAILABLE
    return f"{depth_km:.1f} km"


def format_coordinates(coordinates: tuple[float, float] | None) -> str:
    """Format a (latitude, longitude) pair to two decimals."""
    if coordinates is None:
        return NOT_AVAILABLE
    latitude, longitude = coordinates
    return f"{latitude:.2f}, {longitude:.2f}"


def format_time(time: datetime | None) -> str:
    """Format an event time in UTC."""
    if time is None:
        return TIME_UNAVAILABLE
    return time.astimezone(timezone.utc).strftime(TIME_FORMAT)


def format_last_updated(fetched_at: datetime | None) -> str | None:
    """Format the last successful fetch time, or None before the first."""
    if fetched_at is None:
        return None
    return f"Last update: {format_time(fetched_at)}"


def format_event_count(count: int) -> str:
    """Format the visible event count."""
    return f"{count} event" if count == 1 else f"{count} events"


def format_search_banner(committed_search: str) -> str | None:
    """Banner describing the active search, or None without one."""
    term = committed_search.strip()
    if not term:
        return None
    return f"Showing earthquakes related to: {term}"


def format_earthquake_summary(earthquake: Earthquake) -> str:
    """Format a one-line summary of an earthquake.

    Pure function.
    """
    place = earthquake.place or "Unknown location"
    return (
        f"{format_magnitude(earthquake.magnitude)} - {place} "
        f"at {format_time(earthquake.time)} "
        f"(depth: {format_depth(earthquake.depth_km)})"
    )


def format_event_item(
    earthquake: Earthquake,
    selected_id: str | None = None,
) -> dict[str, Any]:
    """Format an earthquake as a list item payload.

    Pure function. Raw values are kept next to their display labels so
    clients can sort or style without re-parsing.

    Args:
        earthquake: Earthquake to format
        selected_id: Currently selected id, used for highlighting

    Returns:
        JSON-serializable dict
    """
    time = earthquake.time
    return {
        "id": earthquake.id,
        "magnitude": earthquake.magnitude,
        "place": earthquake.place,
        "time": time.isoformat() if time else None,
        "time_ms": earthquake.time_ms,
        "url": earthquake.url,
        "depth_km": earthquake.depth_km,
        "latitude": earthquake.latitude,
        "longitude": earthquake.longitude,
        "is_selected": selected_id is not None and earthquake.id == selected_id,
        "display": {
            "magnitude": format_magnitude(earthquake.magnitude),
            "depth": format_depth(earthquake.depth_km),
            "coordinates": format_coordinates(earthquake.coordinates),
            "time": format_time(time),
            "summary": format_earthquake_summary(earthquake),
        },
    }
