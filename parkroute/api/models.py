"""Pydantic models for the locations, directions and health endpoints."""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Locations
# ---------------------------------------------------------------------------

class LocationsResponse(BaseModel):
    dogRuns: Dict[str, Any] = Field(..., description="Dog run FeatureCollection")
    skateParks: Dict[str, Any] = Field(..., description="Skate park FeatureCollection")


class Place(BaseModel):
    name: str
    category: str = Field(..., description="dog_run or skate_park")
    lat: Optional[float] = Field(None, description="Latitude, null if the feature cannot be placed")
    lng: Optional[float] = Field(None, description="Longitude, null if the feature cannot be placed")


# ---------------------------------------------------------------------------
# Directions
# ---------------------------------------------------------------------------

class DirectionsRequest(BaseModel):
    # Shape checks happen in the directions proxy so bad input maps to a 400
    start: Optional[Any] = Field(None, description="[lat, lng]")
    end: Optional[Any] = Field(None, description="[lat, lng]")


class RouteStepModel(BaseModel):
    instruction: str
    distance: float = 0.0
    duration: float = 0.0
    text: str = ""


class RouteResponse(BaseModel):
    coordinates: List[List[float]] = Field(..., description="Route points as [lat, lng]")
    distance: float = Field(0.0, description="Meters")
    duration: float = Field(0.0, description="Seconds")
    distance_text: str = ""
    duration_text: str = ""
    steps: List[RouteStepModel] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------

class CacheStatus(BaseModel):
    valid: bool
    age_seconds: Optional[float] = None
    ttl_seconds: float


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    dataSources: Dict[str, Optional[str]]
    orsConfigured: bool
    cache: CacheStatus
