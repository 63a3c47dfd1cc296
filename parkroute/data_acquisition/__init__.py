"""Location data: upstream GeoJSON sources, caching and feature identity."""

from .features import (
    FeatureCategory, Location, feature_name, combine_locations, search_locations,
)
from .location_cache import LocationCache, make_geojson_fetcher

__all__ = [
    'FeatureCategory', 'Location', 'feature_name', 'combine_locations',
    'search_locations', 'LocationCache', 'make_geojson_fetcher',
]
