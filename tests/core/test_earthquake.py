"""Unit tests for earthquake normalization.

These tests demonstrate the benefit of the Functional Core pattern:
- No mocks needed
- Fast, deterministic execution
- Simple assertions on pure functions
"""

import math
from datetime import datetime, timezone

import pytest

from quakeview.core.earthquake import (
    Earthquake,
    parse_coordinates,
    parse_depth,
    parse_feature,
    parse_features,
    parse_id,
    parse_time_ms,
)


# Sample USGS GeoJSON feature for testing
SAMPLE_FEATURE = {
    "type": "Feature",
    "id": "nc75095866",
    "properties": {
        "mag": 4.2,
        "place": "10km NE of San Francisco, CA",
        "time": 1703001600000,  # 2023-12-19 16:00:00 UTC
        "url": "https://earthquake.usgs.gov/earthquakes/eventpage/nc75095866",
    },
    "geometry": {
        "type": "Point",
        "coordinates": [-122.4194, 37.7749, 10.5],  # lon, lat, depth
    },
}


def _feature(**overrides):
    """Copy SAMPLE_FEATURE with top-level overrides."""
    return {**SAMPLE_FEATURE, **overrides}


class TestParseFeature:
    """Tests for parse_feature() pure function."""

    def test_parses_valid_feature(self):
        """Should parse a valid GeoJSON feature into Earthquake."""
        result = parse_feature(SAMPLE_FEATURE)

        assert result is not None
        assert result.id == "nc75095866"
        assert result.magnitude == 4.2
        assert result.place == "10km NE of San Francisco, CA"
        assert result.time_ms == 1703001600000
        assert result.url.endswith("nc75095866")
        assert result.depth_km == 10.5

    def test_stores_latitude_before_longitude(self):
        """GeoJSON lon/lat order is flipped to (lat, lon)."""
        result = parse_feature(SAMPLE_FEATURE)

        assert result.coordinates == (37.7749, -122.4194)
        assert result.latitude == 37.7749
        assert result.longitude == -122.4194

    def test_drops_feature_without_id(self):
        """A feature missing its id is dropped."""
        feature = {k: v for k, v in SAMPLE_FEATURE.items() if k != "id"}
        assert parse_feature(feature) is None

    @pytest.mark.parametrize("bad_id", [None, "", "   "])
    def test_drops_feature_with_empty_id(self, bad_id):
        assert parse_feature(_feature(id=bad_id)) is None

    def test_drops_non_dict_feature(self):
        assert parse_feature("not a feature") is None
        assert parse_feature(None) is None

    def test_missing_magnitude_is_none_not_zero(self):
        """Unknown magnitude is kept as None, distinct from 0."""
        feature = _feature(properties={**SAMPLE_FEATURE["properties"], "mag": None})
        result = parse_feature(feature)

        assert result is not None
        assert result.magnitude is None

    def test_zero_magnitude_is_kept(self):
        feature = _feature(properties={**SAMPLE_FEATURE["properties"], "mag": 0})
        assert parse_feature(feature).magnitude == 0.0

    def test_missing_place_normalizes_to_empty_string(self):
        """Missing place never drops the record."""
        props = {k: v for k, v in SAMPLE_FEATURE["properties"].items() if k != "place"}
        result = parse_feature(_feature(properties=props))

        assert result is not None
        assert result.place == ""

    def test_null_place_normalizes_to_empty_string(self):
        props = {**SAMPLE_FEATURE["properties"], "place": None}
        assert parse_feature(_feature(properties=props)).place == ""

    def test_missing_properties_keeps_record(self):
        """All other missing fields become absent."""
        result = parse_feature({"id": "x1", "geometry": SAMPLE_FEATURE["geometry"]})

        assert result is not None
        assert result.magnitude is None
        assert result.place == ""
        assert result.time_ms is None
        assert result.url == ""
        assert result.coordinates == (37.7749, -122.4194)

    def test_missing_geometry_keeps_record(self):
        result = parse_feature(_feature(geometry=None))

        assert result is not None
        assert result.coordinates is None
        assert result.depth_km is None

    def test_numeric_id_is_converted_to_string(self):
        assert parse_feature(_feature(id=12345)).id == "12345"

    def test_zero_depth_is_kept(self):
        """Depth 0 is a measurement, not a missing value."""
        feature = _feature(geometry={"coordinates": [10.0, 20.0, 0]})
        assert parse_feature(feature).depth_km == 0.0

    def test_string_magnitude_is_treated_as_unknown(self):
        props = {**SAMPLE_FEATURE["properties"], "mag": "4.2"}
        assert parse_feature(_feature(properties=props)).magnitude is None

    def test_huge_integer_magnitude_is_treated_as_unknown(self):
        """Integers too large for a float become absent, not an error."""
        props = {**SAMPLE_FEATURE["properties"], "mag": 10 ** 400}
        result = parse_feature(_feature(properties=props))

        assert result is not None
        assert result.magnitude is None

    def test_huge_integer_coordinate_drops_coordinates_only(self):
        result = parse_feature(_feature(geometry={"coordinates": [10 ** 400, 35.6, 10 ** 400]}))

        assert result is not None
        assert result.coordinates is None
        assert result.depth_km is None

    @pytest.mark.parametrize("raw_time", [1e20, -1e20, 10 ** 400])
    def test_unrepresentable_time_is_treated_as_unknown(self, raw_time):
        """Times datetime cannot represent never reach the record."""
        props = {**SAMPLE_FEATURE["properties"], "time": raw_time}
        result = parse_feature(_feature(properties=props))

        assert result is not None
        assert result.time_ms is None
        assert result.time is None


class TestParseCoordinates:
    """Tests for parse_coordinates() pure function."""

    def test_valid_point(self):
        assert parse_coordinates({"coordinates": [139.7, 35.6, 10]}) == (35.6, 139.7)

    def test_two_component_point(self):
        assert parse_coordinates({"coordinates": [139.7, 35.6]}) == (35.6, 139.7)

    @pytest.mark.parametrize("geometry", [
        None,
        "point",
        {},
        {"coordinates": None},
        {"coordinates": []},
        {"coordinates": [139.7]},
        {"coordinates": "139.7,35.6"},
        {"coordinates": [None, 35.6, 10]},
        {"coordinates": [139.7, "35.6", 10]},
        {"coordinates": [139.7, math.nan, 10]},
        {"coordinates": [math.inf, 35.6, 10]},
        {"coordinates": [True, False, 10]},
        {"coordinates": [139.7, 95.0, 10]},
        {"coordinates": [200.0, 35.6, 10]},
    ])
    def test_malformed_geometry_is_absent(self, geometry):
        """Malformed geometry never produces partial coordinates."""
        assert parse_coordinates(geometry) is None


class TestParseDepth:
    """Tests for parse_depth() pure function."""

    def test_third_component(self):
        assert parse_depth({"coordinates": [1.0, 2.0, 33.5]}) == 33.5

    def test_missing_third_component(self):
        assert parse_depth({"coordinates": [1.0, 2.0]}) is None

    def test_depth_independent_of_pair(self):
        """Depth is extracted even when lat/lon are unusable."""
        assert parse_depth({"coordinates": [None, None, 12.0]}) == 12.0
        assert parse_coordinates({"coordinates": [None, None, 12.0]}) is None


class TestParseTimeMs:
    """Tests for parse_time_ms() pure function."""

    def test_epoch_milliseconds(self):
        assert parse_time_ms(1703001600000) == 1703001600000

    def test_float_is_truncated(self):
        assert parse_time_ms(1703001600000.7) == 1703001600000

    @pytest.mark.parametrize("value", [None, "1703001600000", True, math.nan, 1e20, 10 ** 400])
    def test_unusable_values_are_absent(self, value):
        assert parse_time_ms(value) is None


class TestParseId:
    """Tests for parse_id() pure function."""

    def test_string_id(self):
        assert parse_id({"id": "us7000abcd"}) == "us7000abcd"

    def test_boolean_id_rejected(self):
        assert parse_id({"id": True}) is None


class TestParseFeatures:
    """Tests for parse_features() pure function."""

    def test_preserves_feed_order(self):
        """Records keep the upstream order; no re-sorting."""
        features = [
            _feature(id="b"),
            _feature(id="a"),
            _feature(id="c"),
        ]
        result = parse_features(features)
        assert [e.id for e in result] == ["b", "a", "c"]

    def test_skips_features_without_id(self):
        features = [SAMPLE_FEATURE, {"properties": {}, "geometry": {}}]
        result = parse_features(features)
        assert len(result) == 1

    def test_keeps_first_of_duplicate_ids(self):
        """Ids are unique within one batch."""
        first = _feature(id="dup", properties={**SAMPLE_FEATURE["properties"], "mag": 1.0})
        second = _feature(id="dup", properties={**SAMPLE_FEATURE["properties"], "mag": 2.0})
        result = parse_features([first, second])

        assert len(result) == 1
        assert result[0].magnitude == 1.0

    def test_handles_empty_features(self):
        assert parse_features([]) == []

    def test_one_out_of_range_feature_does_not_fail_batch(self):
        huge = _feature(id="huge", properties={**SAMPLE_FEATURE["properties"], "mag": 10 ** 400, "time": 1e20})
        result = parse_features([_feature(id="a"), huge, _feature(id="b")])

        assert [e.id for e in result] == ["a", "huge", "b"]
        assert result[1].magnitude is None
        assert result[1].time_ms is None


class TestEarthquakeModel:
    """Tests for Earthquake dataclass."""

    def test_is_immutable(self):
        """Earthquake should be immutable (frozen)."""
        eq = parse_feature(SAMPLE_FEATURE)

        with pytest.raises(Exception):  # FrozenInstanceError
            eq.magnitude = 5.0  # type: ignore

    def test_time_property(self):
        """Should convert milliseconds to UTC datetime."""
        eq = Earthquake(id="t", time_ms=1703001600000)
        assert eq.time == datetime(2023, 12, 19, 16, 0, 0, tzinfo=timezone.utc)

    def test_time_property_absent(self):
        assert Earthquake(id="t").time is None

    def test_latitude_longitude_absent_without_coordinates(self):
        eq = Earthquake(id="t")
        assert eq.latitude is None
        assert eq.longitude is None
        assert eq.has_coordinates is False
