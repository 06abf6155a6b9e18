"""Map view parameters - Pure functions.

This module computes marker styling and viewport targets for the map.
Rendering is left to the presentation layer.
"""

from dataclasses import dataclass

from quakeview.core.earthquake import Earthquake


# Initial world view
DEFAULT_CENTER = (20.0, 0.0)
DEFAULT_ZOOM = 2
MIN_ZOOM = 2

# Viewport used when a record is selected
FOCUS_ZOOM = 6
FOCUS_DURATION_SECONDS = 1.5

MIN_MARKER_RADIUS = 4
MARKER_SCALE = 3
MARKER_FILL_OPACITY = 0.7


@dataclass(frozen=True)
class ViewportTarget:
    """Where the map should fly to.

    Attributes:
        latitude: Center latitude
        longitude: Center longitude
        zoom: Zoom level
        duration_seconds: Fly animation duration
    """
    latitude: float
    longitude: float
    zoom: int = FOCUS_ZOOM
    duration_seconds: float = FOCUS_DURATION_SECONDS


@dataclass(frozen=True)
class Marker:
    """A circle marker for one earthquake.

    Attributes:
        id: Earthquake id
        latitude: Marker latitude
        longitude: Marker longitude
        radius: Circle radius in pixels
        color: Hex color for stroke and fill
        fill_opacity: Fill opacity
    """
    id: str
    latitude: float
    longitude: float
    radius: float
    color: str
    fill_opacity: float = MARKER_FILL_OPACITY


def get_magnitude_color(magnitude: float | None) -> str:
    """Get hex color for magnitude visualization.

    Pure function. Unknown magnitude gets the lowest band.

    Args:
        magnitude: Earthquake magnitude

    Returns:
        Hex color string
    """
    if magnitude is None:
        return "#a3e635"
    if magnitude >= 6.0:
        return "#443e3e"
    elif magnitude >= 5.0:
        return "#a52d2d"
    elif magnitude >= 4.0:
        return "#e75a5a"
    elif magnitude >= 3.0:
        return "#f98c3e"
    elif magnitude >= 2.0:
        return "#facc15"
    return "#a3e635"


def get_marker_radius(magnitude: float | None) -> float:
    """Determine marker radius based on magnitude.

    Pure function. Larger earthquakes get bigger markers, with a floor so
    small or unknown events stay visible.
    """
    scaled = (magnitude if magnitude is not None else 0.0) * MARKER_SCALE
    return max(MIN_MARKER_RADIUS, scaled)


def create_marker(earthquake: Earthquake) -> Marker | None:
    """Create a map marker, or None if the earthquake has no coordinates.

    Pure function.
    """
    if not earthquake.has_coordinates:
        return None

    latitude, longitude = earthquake.coordinates
    return Marker(
        id=earthquake.id,
        latitude=latitude,
        longitude=longitude,
        radius=get_marker_radius(earthquake.magnitude),
        color=get_magnitude_color(earthquake.magnitude),
    )


def build_markers(earthquakes: list[Earthquake]) -> list[Marker]:
    """Create markers for every earthquake that has coordinates.

    Pure function. Order follows the input.
    """
    markers = []
    for earthquake in earthquakes:
        marker = create_marker(earthquake)
        if marker is not None:
            markers.append(marker)
    return markers


def focus_viewport(earthquake: Earthquake | None) -> ViewportTarget | None:
    """Viewport target for re-centering on a selected earthquake.

    Pure function. Returns None when nothing is selected or the
    earthquake has no coordinates; the map is left where it is.
    """
    if earthquake is None or not earthquake.has_coordinates:
        return None

    latitude, longitude = earthquake.coordinates
    return ViewportTarget(latitude=latitude, longitude=longitude)
