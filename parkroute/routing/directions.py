"""
Walking Directions
==================

Validates a start/end pair, asks OpenRouteService for a walking route and
normalizes the answer into a RouteResult:

    coordinates  ordered (lat, lng) points, LineString or MultiLineString flattened
    distance     meters
    duration     seconds
    steps        turn-by-turn instructions

Results are built per request and never cached.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from parkroute.errors import GeometryError, InvalidInputError
from parkroute.routing.ors_client import ORSClient
from parkroute.utils.geo_utils import (
    LatLng, is_finite_number, position_to_display, to_provider_order,
)

logger = logging.getLogger(__name__)

_HTML_TAG = re.compile(r"<[^>]*>")


@dataclass(frozen=True)
class RouteStep:
    """One turn-by-turn instruction"""
    instruction: str
    distance: float = 0.0  # meters
    duration: float = 0.0  # seconds

    def describe(self) -> str:
        return f"{self.instruction} ({format_distance(self.distance)})"


@dataclass(frozen=True)
class RouteResult:
    """Normalized walking route, display order"""
    coordinates: List[LatLng]
    distance: float = 0.0
    duration: float = 0.0
    steps: List[RouteStep] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "coordinates": [[c.lat, c.lng] for c in self.coordinates],
            "distance": self.distance,
            "duration": self.duration,
            "distance_text": format_distance(self.distance),
            "duration_text": format_duration(self.duration),
            "steps": [
                {
                    "instruction": s.instruction,
                    "distance": s.distance,
                    "duration": s.duration,
                    "text": s.describe(),
                }
                for s in self.steps
            ],
        }


# ============================================================================
# Formatting
# ============================================================================

def format_distance(meters: float) -> str:
    """850 -> '850m', 1234 -> '1.2km'"""
    if meters < 1000:
        return f"{round(meters)}m"
    return f"{meters / 1000:.1f}km"


def format_duration(seconds: float) -> str:
    """900 -> '15 min', 3900 -> '1h 5min'"""
    minutes = round(seconds / 60)
    if minutes < 60:
        return f"{minutes} min"
    hours, remaining = divmod(minutes, 60)
    return f"{hours}h {remaining}min"


# ============================================================================
# Validation
# ============================================================================

def validate_coordinate_pair(value: Any, label: str) -> LatLng:
    """
    Check a client-supplied [lat, lng] pair.

    Raises:
        InvalidInputError: missing, wrong shape, or non-finite values
    """
    if value is None:
        raise InvalidInputError(f"Missing {label} coordinates")
    if (
        not isinstance(value, (list, tuple))
        or len(value) != 2
        or not all(is_finite_number(v) for v in value)
    ):
        raise InvalidInputError(f"{label.capitalize()} coordinates are invalid")
    return LatLng(lat=float(value[0]), lng=float(value[1]))


# ============================================================================
# Response normalization
# ============================================================================

def _number(value: Any) -> float:
    return float(value) if is_finite_number(value) else 0.0


def _first_route_feature(payload: Any) -> Dict[str, Any]:
    if isinstance(payload, dict):
        features = payload.get("features")
        if isinstance(features, list) and features and isinstance(features[0], dict):
            return features[0]
    return {}


def _flatten_geometry(geometry: Any) -> List[Any]:
    geom_type = geometry.get("type") if isinstance(geometry, dict) else None
    coords = geometry.get("coordinates") if isinstance(geometry, dict) else None

    if geom_type == "LineString":
        if not isinstance(coords, list):
            raise GeometryError("Invalid route data received from directions API")
        return list(coords)

    if geom_type == "MultiLineString":
        if not isinstance(coords, list) or not all(isinstance(s, list) for s in coords):
            raise GeometryError("Invalid route data received from directions API")
        return [position for segment in coords for position in segment]

    raise GeometryError(
        "Unsupported route geometry from directions API",
        details={"type": geom_type},
    )


def _route_coordinates(geometry: Any) -> List[LatLng]:
    positions = _flatten_geometry(geometry)
    coordinates = []
    for position in positions:
        point = position_to_display(position)
        if point is None:
            raise GeometryError("Invalid route data received from directions API")
        coordinates.append(point)
    if not coordinates:
        raise GeometryError("Invalid route data received from directions API")
    return coordinates


def _parse_step(step: Any) -> Optional[RouteStep]:
    if not isinstance(step, dict):
        return None
    maneuver = step.get("maneuver") if isinstance(step.get("maneuver"), dict) else {}
    instruction = maneuver.get("instruction") or step.get("instruction") or ""
    if not isinstance(instruction, str):
        instruction = str(instruction)
    return RouteStep(
        instruction=_HTML_TAG.sub("", instruction).strip(),
        distance=_number(step.get("distance") or step.get("length")),
        duration=_number(step.get("duration")),
    )


def _route_summary(properties: Dict[str, Any]):
    segments = properties.get("segments")
    segments = [s for s in segments if isinstance(s, dict)] if isinstance(segments, list) else []
    summary = properties.get("summary") if isinstance(properties.get("summary"), dict) else {}
    first = segments[0] if segments else {}

    distance = _number(summary.get("distance") or first.get("distance"))
    duration = _number(summary.get("duration") or first.get("duration"))

    steps = []
    for segment in segments:
        raw_steps = segment.get("steps")
        if not isinstance(raw_steps, list):
            continue
        for raw in raw_steps:
            step = _parse_step(raw)
            if step is not None:
                steps.append(step)
    return distance, duration, steps


def normalize_route(payload: Any) -> RouteResult:
    """
    Turn an ORS GeoJSON directions payload into a RouteResult.

    Raises:
        GeometryError: geometry is not a LineString/MultiLineString, or any
            point is malformed, or the route is empty
    """
    feature = _first_route_feature(payload)
    coordinates = _route_coordinates(feature.get("geometry"))

    properties = feature.get("properties")
    distance, duration, steps = _route_summary(properties if isinstance(properties, dict) else {})

    return RouteResult(
        coordinates=coordinates,
        distance=distance,
        duration=duration,
        steps=steps,
    )


# ============================================================================
# Proxy
# ============================================================================

class DirectionsProxy:
    """Validate, forward to ORS, normalize."""

    def __init__(self, client: ORSClient):
        self.client = client

    async def get_route(self, start: Any, end: Any) -> RouteResult:
        """
        Walking route between two display-order points.

        Args:
            start: [lat, lng]
            end: [lat, lng]

        Returns:
            RouteResult with coordinates in (lat, lng) order
        """
        try:
            start_point = validate_coordinate_pair(start, "start")
            end_point = validate_coordinate_pair(end, "end")
        except InvalidInputError as e:
            logger.error(f"Invalid coordinates: start={start!r} end={end!r} ({e.message})")
            raise

        payload = await self.client.directions(
            to_provider_order(start_point),
            to_provider_order(end_point),
        )

        try:
            route = normalize_route(payload)
        except GeometryError as e:
            logger.error(
                f"Unusable route geometry for {start_point} -> {end_point}: "
                f"{e.message} {e.details or ''}"
            )
            raise

        logger.info(
            f"Route {start_point} -> {end_point}: {len(route.coordinates)} points, "
            f"{format_distance(route.distance)}, {format_duration(route.duration)}"
        )
        return route
