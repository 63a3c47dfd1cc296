"""
Geospatial Utility Functions
============================

Coordinate-order conversions and representative-point extraction for
GeoJSON features.

Two coordinate conventions meet in this service:
    LatLng  (lat, lng) - display convention, used by the API and the map
    LngLat  (lng, lat) - GeoJSON / OpenRouteService wire convention

Never reverse a pair by hand; go through to_provider_order() or
to_display_order().
"""

import logging
import math
from numbers import Real
from typing import Any, NamedTuple, Optional, Sequence

logger = logging.getLogger(__name__)


class LatLng(NamedTuple):
    """Display-order coordinate"""
    lat: float
    lng: float


class LngLat(NamedTuple):
    """Provider/GeoJSON-order coordinate"""
    lng: float
    lat: float


def is_finite_number(value: Any) -> bool:
    """True for real, finite numbers. Booleans and ints too large for a float are rejected."""
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    try:
        return math.isfinite(float(value))
    except OverflowError:
        return False


def to_provider_order(pair: Sequence[float]) -> LngLat:
    """
    Convert a display-order pair to provider order.

    Args:
        pair: (lat, lng)

    Returns:
        LngLat(lng, lat)
    """
    lat, lng = pair
    return LngLat(lng=lng, lat=lat)


def to_display_order(pair: Sequence[float]) -> LatLng:
    """
    Convert a provider-order pair to display order.

    Args:
        pair: (lng, lat)

    Returns:
        LatLng(lat, lng)
    """
    lng, lat = pair
    return LatLng(lat=lat, lng=lng)


def position_to_display(position: Any) -> Optional[LatLng]:
    """
    Convert one GeoJSON position to display order.

    A position is [lng, lat] or [lng, lat, altitude]; altitude is dropped.

    Returns:
        LatLng, or None if the position is malformed or non-finite
    """
    if not isinstance(position, (list, tuple)) or len(position) not in (2, 3):
        return None
    if not all(is_finite_number(v) for v in position):
        return None
    return to_display_order(position[:2])


def _first(value: Any) -> Any:
    if isinstance(value, (list, tuple)) and value:
        return value[0]
    return None


def representative_coordinate(feature: Any) -> Optional[LatLng]:
    """
    Extract a single (lat, lng) that places a feature on the map.

    Point        -> the point itself
    Polygon      -> first position of the outer ring
    MultiPolygon -> first position of the outer ring of the first polygon

    Args:
        feature: GeoJSON Feature dict

    Returns:
        LatLng, or None when the feature cannot be placed
    """
    if not isinstance(feature, dict):
        return None
    geometry = feature.get("geometry")
    if not isinstance(geometry, dict):
        return None

    geom_type = geometry.get("type")
    coords = geometry.get("coordinates")

    if geom_type == "Point":
        position = coords
    elif geom_type == "Polygon":
        position = _first(_first(coords))
    elif geom_type == "MultiPolygon":
        position = _first(_first(_first(coords)))
    else:
        logger.debug(f"No representative coordinate for geometry type {geom_type!r}")
        return None

    return position_to_display(position)
