"""Earthquake data model and feed normalization - Pure functions.

This module turns raw USGS GeoJSON features into typed Earthquake records.
All functions are pure with no side effects.

Normalization is best-effort: a feature without an id is dropped, every
other missing or malformed field becomes None rather than failing the
whole feature.
"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from quakeview.core.dedup import dedupe_by_id


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Earthquake:
    """Immutable normalized earthquake record.

    Attributes:
        id: Unique event ID within one feed response
        magnitude: Event magnitude, None when unknown
        place: Human-readable location description (may be empty)
        time_ms: Event time in epoch milliseconds, None when unknown
        url: Event detail URL (opaque, may be empty)
        depth_km: Depth in kilometers, None when unknown
        coordinates: (latitude, longitude) pair, None when geometry is
            missing or malformed
    """
    id: str
    magnitude: float | None = None
    place: str = ""
    time_ms: int | None = None
    url: str = ""
    depth_km: float | None = None
    coordinates: tuple[float, float] | None = None

    @property
    def latitude(self) -> float | None:
        """Epicenter latitude, or None without coordinates."""
        return self.coordinates[0] if self.coordinates else None

    @property
    def longitude(self) -> float | None:
        """Epicenter longitude, or None without coordinates."""
        return self.coordinates[1] if self.coordinates else None

    @property
    def has_coordinates(self) -> bool:
        return self.coordinates is not None

    @property
    def time(self) -> datetime | None:
        """Event timestamp (UTC), or None when unknown."""
        if self.time_ms is None:
            return None
        return datetime.fromtimestamp(self.time_ms / 1000, tz=timezone.utc)


def _as_float(value: Any) -> float | None:
    """Convert a JSON number to a finite float.

    Pure function. Booleans, strings and non-finite values are rejected.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        result = float(value)
    except OverflowError:
        return None
    if not math.isfinite(result):
        return None
    return result


def _as_text(value: Any) -> str:
    """Convert an optional JSON value to a string, empty when missing."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def parse_id(feature: dict[str, Any]) -> str | None:
    """Extract the event id from a feature.

    Pure function.

    Args:
        feature: GeoJSON feature dict

    Returns:
        Id as a string, or None if missing or empty
    """
    raw_id = feature.get("id")
    if raw_id is None or isinstance(raw_id, bool):
        return None
    if isinstance(raw_id, (int, float)):
        raw_id = str(raw_id)
    if not isinstance(raw_id, str) or not raw_id.strip():
        return None
    return raw_id


def parse_time_ms(value: Any) -> int | None:
    """Parse an epoch-milliseconds timestamp.

    Pure function. Timestamps outside the range datetime can represent
    are treated as unknown.
    """
    number = _as_float(value)
    if number is None:
        return None
    try:
        datetime.fromtimestamp(number / 1000, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None
    return int(number)


def parse_coordinates(geometry: Any) -> tuple[float, float] | None:
    """Parse a GeoJSON point geometry into a (latitude, longitude) pair.

    Pure function. GeoJSON orders coordinates longitude first; the
    returned tuple is latitude first. Anything short of two finite,
    in-range numbers yields None.

    Args:
        geometry: GeoJSON geometry dict

    Returns:
        (latitude, longitude) tuple or None
    """
    if not isinstance(geometry, dict):
        return None

    coords = geometry.get("coordinates")
    if not isinstance(coords, (list, tuple)) or len(coords) < 2:
        return None

    longitude = _as_float(coords[0])
    latitude = _as_float(coords[1])
    if latitude is None or longitude is None:
        return None

    if not -90 <= latitude <= 90 or not -180 <= longitude <= 180:
        return None

    return (latitude, longitude)


def parse_depth(geometry: Any) -> float | None:
    """Parse depth (km) from the third geometry component.

    Pure function. Independent of whether the lat/lon pair is valid.
    """
    if not isinstance(geometry, dict):
        return None

    coords = geometry.get("coordinates")
    if not isinstance(coords, (list, tuple)) or len(coords) < 3:
        return None

    return _as_float(coords[2])


def parse_feature(feature: Any) -> Earthquake | None:
    """Parse a single GeoJSON feature into an Earthquake.

    Pure function: takes raw dict, returns typed Earthquake or None if the
    feature has no usable id.

    Args:
        feature: GeoJSON feature dict from the feed

    Returns:
        Earthquake object or None
    """
    if not isinstance(feature, dict):
        return None

    event_id = parse_id(feature)
    if event_id is None:
        return None

    props = feature.get("properties")
    if not isinstance(props, dict):
        props = {}

    geometry = feature.get("geometry")

    return Earthquake(
        id=event_id,
        magnitude=_as_float(props.get("mag")),
        place=_as_text(props.get("place")),
        time_ms=parse_time_ms(props.get("time")),
        url=_as_text(props.get("url")),
        depth_km=parse_depth(geometry),
        coordinates=parse_coordinates(geometry),
    )


def parse_features(features: list[Any]) -> list[Earthquake]:
    """Normalize a list of raw features, preserving feed order.

    Pure function. Features without an id are skipped, and only the first
    occurrence of a repeated id is kept.

    Args:
        features: GeoJSON features list

    Returns:
        List of Earthquake records in feed order
    """
    earthquakes = []
    dropped = 0

    for feature in features:
        earthquake = parse_feature(feature)
        if earthquake is None:
            dropped += 1
            continue
        earthquakes.append(earthquake)

    if dropped:
        logger.debug("Dropped %d features without an id", dropped)

    return dedupe_by_id(earthquakes)
