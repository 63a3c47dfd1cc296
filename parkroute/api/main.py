"""
ParkRoute REST API
==================

FastAPI application: NYC dog runs and skate parks, and walking directions
between them.

Run:
    uvicorn parkroute.api.main:app --reload
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Callable, Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from parkroute.api.models import HealthResponse
from parkroute.config import Settings, get_settings
from parkroute.data_acquisition.location_cache import (
    DOG_RUNS, SKATE_PARKS, LocationCache, make_geojson_fetcher,
)
from parkroute.errors import ParkRouteError
from parkroute.routing.directions import DirectionsProxy
from parkroute.routing.ors_client import ORSClient

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    http_client: Optional[httpx.AsyncClient] = None,
    clock: Optional[Callable[[], float]] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Configuration; read from the environment when omitted
        http_client: Shared outbound client; created (and closed) by the app when omitted
        clock: Time source for the location cache
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup / shutdown lifecycle."""
        client = http_client or httpx.AsyncClient(timeout=settings.http_timeout_seconds)

        cache_options = {"ttl": settings.cache_ttl_seconds}
        if clock is not None:
            cache_options["clock"] = clock
        app.state.location_cache = LocationCache(
            make_geojson_fetcher(client, settings.dog_runs_url, DOG_RUNS),
            make_geojson_fetcher(client, settings.skate_parks_url, SKATE_PARKS),
            **cache_options,
        )
        app.state.directions = DirectionsProxy(
            ORSClient(settings.ors_api_key, client, base_url=settings.ors_base_url)
        )

        if not settings.ors_configured:
            logger.warning("ORS_API_KEY is not set, directions will not work")
        logger.info("ParkRoute API starting up...")
        yield
        logger.info("ParkRoute API shutting down...")
        if http_client is None:
            await client.aclose()

    app = FastAPI(
        title="ParkRoute API",
        description="Walking directions between NYC dog runs and skate parks",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # CORS middleware for frontend access
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ParkRouteError)
    async def _parkroute_error(request: Request, exc: ParkRouteError):
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def _invalid_body(request: Request, exc: RequestValidationError):
        logger.error(f"Invalid request to {request.url.path}: {exc.errors()}")
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    @app.get("/api/health", response_model=HealthResponse, tags=["Info"])
    async def health_check(request: Request):
        """Health check endpoint"""
        cache: LocationCache = request.app.state.location_cache
        age = cache.age()
        return {
            "status": "OK",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "dataSources": {
                "dogRuns": settings.dog_runs_url,
                "skateParks": settings.skate_parks_url,
            },
            "orsConfigured": settings.ors_configured,
            "cache": {
                "valid": cache.is_valid(),
                "age_seconds": round(age, 1) if age is not None else None,
                "ttl_seconds": cache.ttl,
            },
        }

    # Mount routers
    from parkroute.api.routes_locations import router as locations_router
    from parkroute.api.routes_directions import router as directions_router
    app.include_router(locations_router)
    app.include_router(directions_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=app.state.settings.port)
