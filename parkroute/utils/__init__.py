"""Utility modules."""

from .geo_utils import (
    LatLng, LngLat, to_provider_order, to_display_order, representative_coordinate,
)

__all__ = ['LatLng', 'LngLat', 'to_provider_order', 'to_display_order', 'representative_coordinate']
