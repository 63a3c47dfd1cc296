"""Directions API router: walking routes via OpenRouteService."""

from fastapi import APIRouter, Request

from parkroute.api.models import DirectionsRequest, RouteResponse

router = APIRouter(prefix="/api", tags=["Directions"])


@router.post("/directions", response_model=RouteResponse)
async def get_directions(body: DirectionsRequest, request: Request):
    """
    Walking route between two [lat, lng] points.

    The provider's GeoJSON is normalized server-side: the response carries
    the route as [lat, lng] points plus distance, duration and steps.
    """
    route = await request.app.state.directions.get_route(body.start, body.end)
    return route.to_dict()
