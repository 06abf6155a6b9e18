"""Unit tests for map view parameters.

Pure function tests - no mocks needed.
"""

import pytest

from quakeview.core.earthquake import Earthquake
from quakeview.core.map_view import (
    FOCUS_DURATION_SECONDS,
    FOCUS_ZOOM,
    MIN_MARKER_RADIUS,
    Marker,
    ViewportTarget,
    build_markers,
    create_marker,
    focus_viewport,
    get_magnitude_color,
    get_marker_radius,
)


class TestGetMagnitudeColor:
    """Tests for get_magnitude_color()."""

    @pytest.mark.parametrize("magnitude,expected", [
        (7.5, "#443e3e"),
        (6.0, "#443e3e"),
        (5.5, "#a52d2d"),
        (4.0, "#e75a5a"),
        (3.9, "#f98c3e"),
        (2.0, "#facc15"),
        (1.9, "#a3e635"),
        (-0.5, "#a3e635"),
    ])
    def test_bands(self, magnitude, expected):
        assert get_magnitude_color(magnitude) == expected

    def test_unknown_magnitude_uses_lowest_band(self):
        assert get_magnitude_color(None) == "#a3e635"


class TestGetMarkerRadius:
    """Tests for get_marker_radius()."""

    def test_scales_with_magnitude(self):
        assert get_marker_radius(5.0) == 15.0

    def test_floor_for_small_magnitudes(self):
        assert get_marker_radius(0.5) == MIN_MARKER_RADIUS
        assert get_marker_radius(-1.0) == MIN_MARKER_RADIUS

    def test_unknown_magnitude_gets_floor(self):
        assert get_marker_radius(None) == MIN_MARKER_RADIUS


class TestCreateMarker:
    """Tests for create_marker() / build_markers()."""

    def test_marker_uses_lat_lon(self):
        marker = create_marker(Earthquake(id="a", magnitude=5.2, coordinates=(35.6, 139.7)))

        assert marker == Marker(
            id="a",
            latitude=35.6,
            longitude=139.7,
            radius=pytest.approx(15.6),
            color="#a52d2d",
        )

    def test_no_marker_without_coordinates(self):
        assert create_marker(Earthquake(id="a", magnitude=5.2)) is None

    def test_build_markers_skips_missing_coordinates(self):
        earthquakes = [
            Earthquake(id="a", coordinates=(1.0, 2.0)),
            Earthquake(id="b"),
            Earthquake(id="c", coordinates=(3.0, 4.0)),
        ]
        assert [m.id for m in build_markers(earthquakes)] == ["a", "c"]


class TestFocusViewport:
    """Tests for focus_viewport()."""

    def test_targets_coordinates(self):
        target = focus_viewport(Earthquake(id="a", coordinates=(35.6, 139.7)))
        assert target == ViewportTarget(
            latitude=35.6,
            longitude=139.7,
            zoom=FOCUS_ZOOM,
            duration_seconds=FOCUS_DURATION_SECONDS,
        )

    def test_none_without_coordinates(self):
        assert focus_viewport(Earthquake(id="a")) is None

    def test_none_without_selection(self):
        assert focus_viewport(None) is None
