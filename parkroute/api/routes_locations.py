"""Location API router: dog runs and skate parks, served from the location cache."""

from typing import List, Optional

from fastapi import APIRouter, Query, Request

from parkroute.api.models import Place
from parkroute.data_acquisition.features import combine_locations, search_locations

router = APIRouter(prefix="/api", tags=["Locations"])


@router.get("/locations")
async def get_locations(request: Request):
    """Both collections: {dogRuns, skateParks}."""
    dog_runs, skate_parks = await request.app.state.location_cache.get_all()
    return {"dogRuns": dog_runs, "skateParks": skate_parks}


@router.get("/dog-runs")
async def get_dog_runs(request: Request):
    """Dog run FeatureCollection."""
    return await request.app.state.location_cache.get_dog_runs()


@router.get("/skate-parks")
async def get_skate_parks(request: Request):
    """Skate park FeatureCollection."""
    return await request.app.state.location_cache.get_skate_parks()


@router.get("/places", response_model=List[Place])
async def get_places(
    request: Request,
    q: Optional[str] = Query(None, description="Case-insensitive name filter"),
    exclude: List[str] = Query([], description="Names already selected"),
):
    """
    Both collections merged into one name-sorted picker list.

    Optional filters:
    - q: only names containing this text
    - exclude: drop these names (e.g. the already chosen start)
    """
    dog_runs, skate_parks = await request.app.state.location_cache.get_all()
    locations = search_locations(combine_locations(dog_runs, skate_parks), q or "", exclude)
    return [loc.to_dict() for loc in locations]
