#!/usr/bin/env python
"""
ParkRoute - NYC Dog Run to Skate Park Walking Directions
========================================================

Main entry point for ParkRoute.

Usage:
    python main.py api                                   Start API server
    python main.py locations [--search TEXT]             List dog runs and skate parks
    python main.py route --from NAME --to NAME           Walking directions between two places
    python main.py --help                                Show help

"""

import asyncio
import logging
import argparse
import sys

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger('parkroute')


def _build_services(settings, http_client):
    from parkroute.data_acquisition.location_cache import (
        DOG_RUNS, SKATE_PARKS, LocationCache, make_geojson_fetcher,
    )
    from parkroute.routing.directions import DirectionsProxy
    from parkroute.routing.ors_client import ORSClient

    cache = LocationCache(
        make_geojson_fetcher(http_client, settings.dog_runs_url, DOG_RUNS),
        make_geojson_fetcher(http_client, settings.skate_parks_url, SKATE_PARKS),
        ttl=settings.cache_ttl_seconds,
    )
    proxy = DirectionsProxy(
        ORSClient(settings.ors_api_key, http_client, base_url=settings.ors_base_url)
    )
    return cache, proxy


async def list_locations(search: str = ""):
    """Print every location whose name matches ``search``."""
    import httpx
    from parkroute.config import get_settings
    from parkroute.data_acquisition.features import combine_locations, search_locations

    settings = get_settings()
    async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as client:
        cache, _ = _build_services(settings, client)
        dog_runs, skate_parks = await cache.get_all()

    locations = search_locations(combine_locations(dog_runs, skate_parks), search)

    print("\n" + "=" * 60)
    print(f"{len(dog_runs['features'])} Dog Runs, {len(skate_parks['features'])} Skate Parks")
    print("=" * 60 + "\n")
    for loc in locations:
        coordinate = loc.coordinate
        where = f"{coordinate.lat:.5f}, {coordinate.lng:.5f}" if coordinate else "no coordinates"
        print(f"  [{loc.category.label:<10}] {loc.name}  ({where})")
    print(f"\n{len(locations)} location(s)\n")


async def show_route(start_name: str, end_name: str):
    """Resolve two names and print walking directions between them."""
    import httpx
    from parkroute.config import get_settings
    from parkroute.data_acquisition.features import combine_locations, find_location, same_location
    from parkroute.errors import InvalidInputError
    from parkroute.routing.directions import format_distance, format_duration

    settings = get_settings()
    async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as client:
        cache, proxy = _build_services(settings, client)
        dog_runs, skate_parks = await cache.get_all()
        locations = combine_locations(dog_runs, skate_parks)

        start = find_location(locations, start_name)
        end = find_location(locations, end_name)
        for name, loc in ((start_name, start), (end_name, end)):
            if loc is None:
                raise InvalidInputError(f"No dog run or skate park named {name!r}")
            if loc.coordinate is None:
                raise InvalidInputError(f"{loc.name} has no usable coordinates")
        if same_location(start, end):
            raise InvalidInputError("Start and destination are the same location")

        route = await proxy.get_route(list(start.coordinate), list(end.coordinate))

    print("\n" + "=" * 60)
    print(f"From: {start.name} ({start.category.label})")
    print(f"To:   {end.name} ({end.category.label})")
    print(f"{format_duration(route.duration)}, {format_distance(route.distance)}, "
          f"{len(route.coordinates)} route points")
    print("=" * 60 + "\n")
    if route.steps:
        for i, step in enumerate(route.steps, 1):
            print(f"  {i:>2}. {step.describe()}")
    else:
        print("  No step-by-step directions available.")
    print()


def run_api(port=None):
    """Start the API server."""
    import uvicorn
    from parkroute.api.main import app

    port = port or app.state.settings.port
    print(f"\nStarting ParkRoute API on http://0.0.0.0:{port}  (docs at /docs)\n")
    uvicorn.run(app, host="0.0.0.0", port=port)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='ParkRoute - walking directions between NYC dog runs and skate parks',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  api        Start the REST API server
  locations  List dog runs and skate parks
  route      Walking directions between two named places

Examples:
  python main.py api --port 8080
  python main.py locations --search astoria
  python main.py route --from "Astoria Park Dog Run" --to "Astoria Skate Park"
        """
    )

    parser.add_argument(
        'command',
        choices=['api', 'locations', 'route'],
        help='Command to run'
    )
    parser.add_argument('--port', type=int, help='API server port (default: $PORT or 8000)')
    parser.add_argument('--search', default='', help='Name filter for "locations"')
    parser.add_argument('--from', dest='start', help='Start location name for "route"')
    parser.add_argument('--to', dest='end', help='Destination location name for "route"')
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose output'
    )

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    from parkroute.errors import ParkRouteError

    try:
        if args.command == 'api':
            run_api(args.port)
        elif args.command == 'locations':
            asyncio.run(list_locations(args.search))
        elif args.command == 'route':
            if not args.start or not args.end:
                parser.error('route requires --from and --to')
            asyncio.run(show_route(args.start, args.end))
        else:
            parser.print_help()
    except ParkRouteError as e:
        logger.error(e.message)
        if e.details is not None:
            logger.error(f"Details: {e.details}")
        sys.exit(1)


if __name__ == "__main__":
    main()
