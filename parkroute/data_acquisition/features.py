"""
Feature Identity
================

Display names and categories for NYC dog run and skate park features.

The two upstream datasets name their features differently:
    name              - current schema, either dataset
    dog_run_name      - legacy dog run schema
    skate_park_name   - legacy skate park schema
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from parkroute.utils.geo_utils import LatLng, representative_coordinate

logger = logging.getLogger(__name__)

UNKNOWN_LOCATION = "Unknown Location"


class FeatureCategory(str, Enum):
    """Which collection a feature came from"""
    DOG_RUN = "dog_run"
    SKATE_PARK = "skate_park"

    @property
    def label(self) -> str:
        return "Dog Run" if self is FeatureCategory.DOG_RUN else "Skate Park"

    @property
    def legacy_name_field(self) -> str:
        return f"{self.value}_name"


# Current schema first, then the legacy field of each category in declaration order
NAME_FIELDS = ("name",) + tuple(category.legacy_name_field for category in FeatureCategory)


def feature_name(feature: Any) -> str:
    """
    Resolve the display name of a feature.

    Precedence is name, dog_run_name, skate_park_name, then
    "Unknown Location". Never raises, whatever the feature looks like.
    """
    if not isinstance(feature, dict):
        return UNKNOWN_LOCATION
    properties = feature.get("properties")
    if not isinstance(properties, dict):
        return UNKNOWN_LOCATION

    for field in NAME_FIELDS:
        value = properties.get(field)
        if isinstance(value, str) and value:
            return value
    return UNKNOWN_LOCATION


@dataclass(frozen=True)
class Location:
    """A feature tagged with its category"""
    category: FeatureCategory
    feature: Dict[str, Any]

    @property
    def name(self) -> str:
        return feature_name(self.feature)

    @property
    def coordinate(self) -> Optional[LatLng]:
        return representative_coordinate(self.feature)

    def to_dict(self) -> Dict[str, Any]:
        coordinate = self.coordinate
        return {
            "name": self.name,
            "category": self.category.value,
            "lat": coordinate.lat if coordinate else None,
            "lng": coordinate.lng if coordinate else None,
        }


def tag_features(collection: Any, category: FeatureCategory) -> List[Location]:
    """Wrap every feature of a FeatureCollection as a Location."""
    if not isinstance(collection, dict):
        return []
    features = collection.get("features")
    if not isinstance(features, list):
        logger.warning(f"{category.label} collection has no feature list")
        return []
    return [Location(category, f) for f in features if isinstance(f, dict)]


def combine_locations(dog_runs: Any, skate_parks: Any) -> List[Location]:
    """Merge both collections, sorted case-insensitively by name."""
    locations = (
        tag_features(dog_runs, FeatureCategory.DOG_RUN)
        + tag_features(skate_parks, FeatureCategory.SKATE_PARK)
    )
    return sorted(locations, key=lambda loc: loc.name.casefold())


def same_location(a: Any, b: Any) -> bool:
    """Two features are the same place when their names match."""
    return feature_name(_as_feature(a)) == feature_name(_as_feature(b))


def search_locations(
    locations: Iterable[Location],
    query: str = "",
    exclude: Iterable[Any] = (),
) -> List[Location]:
    """
    Filter locations for a picker.

    Args:
        locations: Candidates, usually from combine_locations()
        query: Case-insensitive substring of the name
        exclude: Already selected locations (Location, feature dict or name)

    Returns:
        Matching locations, order preserved
    """
    needle = (query or "").casefold()
    excluded = {_exclusion_name(e) for e in exclude if e is not None}
    return [
        loc for loc in locations
        if loc.name not in excluded and needle in loc.name.casefold()
    ]


def find_location(locations: Iterable[Location], name: str) -> Optional[Location]:
    """Look up a location by name, ignoring case."""
    wanted = name.strip().casefold()
    for loc in locations:
        if loc.name.casefold() == wanted:
            return loc
    return None


def _as_feature(value: Any) -> Any:
    return value.feature if isinstance(value, Location) else value


def _exclusion_name(value: Any) -> str:
    if isinstance(value, str):
        return value
    return feature_name(_as_feature(value))
