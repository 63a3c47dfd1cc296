import math

import pytest

from parkroute.utils.geo_utils import (
    LatLng, LngLat, is_finite_number, position_to_display, representative_coordinate,
    to_display_order, to_provider_order,
)


def feature(geom_type, coordinates):
    return {"type": "Feature", "geometry": {"type": geom_type, "coordinates": coordinates}, "properties": {}}


def test_conversions_swap_order_and_name_fields():
    provider = to_provider_order([40.7, -74.0])
    assert provider == LngLat(lng=-74.0, lat=40.7)
    assert tuple(provider) == (-74.0, 40.7)

    display = to_display_order(provider)
    assert display == LatLng(lat=40.7, lng=-74.0)


@pytest.mark.parametrize("bad", [[1.0], [1.0, 2.0, 3.0], []])
def test_conversions_reject_wrong_length(bad):
    with pytest.raises(ValueError):
        to_provider_order(bad)
    with pytest.raises(ValueError):
        to_display_order(bad)


def test_is_finite_number():
    assert is_finite_number(0)
    assert is_finite_number(-73.95)
    assert not is_finite_number(math.nan)
    assert not is_finite_number(math.inf)
    assert not is_finite_number(True)
    assert not is_finite_number("40.7")
    assert not is_finite_number(None)
    assert not is_finite_number(10 ** 400)
    assert is_finite_number(10 ** 300)


def test_huge_integer_coordinate_gives_none():
    assert representative_coordinate(feature("Point", [-73.92, 10 ** 400])) is None
    assert position_to_display([10 ** 400, 40.7]) is None


def test_point_is_order_converted():
    assert representative_coordinate(feature("Point", [-73.92, 40.78])) == LatLng(40.78, -73.92)


def test_polygon_uses_first_position_of_outer_ring():
    ring = [[-73.96, 40.78], [-73.95, 40.79], [-73.94, 40.77], [-73.96, 40.78]]
    hole = [[-73.955, 40.781], [-73.954, 40.782], [-73.955, 40.781]]
    assert representative_coordinate(feature("Polygon", [ring, hole])) == LatLng(40.78, -73.96)


def test_multipolygon_uses_first_polygon_outer_ring():
    first = [[[-74.01, 40.70], [-74.00, 40.71], [-74.01, 40.70]]]
    second = [[[-73.80, 40.60], [-73.79, 40.61], [-73.80, 40.60]]]
    assert representative_coordinate(feature("MultiPolygon", [first, second])) == LatLng(40.70, -74.01)


def test_altitude_is_ignored():
    assert representative_coordinate(feature("Point", [-73.92, 40.78, 12.5])) == LatLng(40.78, -73.92)


@pytest.mark.parametrize("geom", [
    {"type": "LineString", "coordinates": [[-73.9, 40.7], [-73.8, 40.8]]},
    {"type": "Point", "coordinates": []},
    {"type": "Point", "coordinates": [-73.9]},
    {"type": "Point", "coordinates": ["-73.9", "40.7"]},
    {"type": "Point", "coordinates": [math.nan, 40.7]},
    {"type": "Polygon", "coordinates": []},
    {"type": "Polygon", "coordinates": [[]]},
    {"type": "Polygon", "coordinates": [[-73.9, 40.7]]},
    {"type": "MultiPolygon", "coordinates": [[]]},
    {"type": "MultiPolygon", "coordinates": [[[]]]},
    {"type": "Polygon"},
    {"coordinates": [-73.9, 40.7]},
])
def test_malformed_or_unsupported_geometry_gives_none(geom):
    assert representative_coordinate({"type": "Feature", "geometry": geom}) is None


@pytest.mark.parametrize("value", [None, {}, {"geometry": None}, "feature", 42])
def test_missing_feature_or_geometry_gives_none(value):
    assert representative_coordinate(value) is None


def test_position_to_display():
    assert position_to_display([-73.9, 40.7]) == LatLng(40.7, -73.9)
    assert position_to_display([-73.9, 40.7, 3.0]) == LatLng(40.7, -73.9)
    assert position_to_display([-73.9, 40.7, 3.0, 4.0]) is None
    assert position_to_display("-73.9,40.7") is None
