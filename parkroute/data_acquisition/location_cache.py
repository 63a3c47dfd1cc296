"""
Location Cache
==============

Time-boxed in-memory cache of the NYC dog run and skate park
FeatureCollections.

Both collections live in one immutable CacheEntry with a single fetch
timestamp. A refresh builds a new entry and swaps it in with one
assignment, so readers always see a consistent snapshot. Concurrent misses
for the same collection share one in-flight fetch.

Example:
    >>> cache = LocationCache(fetch_dog_runs, fetch_skate_parks)
    >>> dog_runs, skate_parks = await cache.get_all()
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional, Tuple

import httpx

from parkroute.config import CACHE_DURATION_SECONDS
from parkroute.errors import ConfigurationError, UpstreamFetchError

logger = logging.getLogger(__name__)

DOG_RUNS = "dog_runs"
SKATE_PARKS = "skate_parks"

SOURCE_LABELS = {
    DOG_RUNS: "dog runs",
    SKATE_PARKS: "skate parks",
}

FeatureCollection = Dict[str, Any]
Fetcher = Callable[[], Awaitable[FeatureCollection]]
Clock = Callable[[], float]


@dataclass(frozen=True)
class CacheEntry:
    """Snapshot of both collections. Either may be None after a single-source fetch."""
    dog_runs: Optional[FeatureCollection]
    skate_parks: Optional[FeatureCollection]
    fetched_at: float

    def get(self, source: str) -> Optional[FeatureCollection]:
        return self.dog_runs if source == DOG_RUNS else self.skate_parks


class LocationCache:
    """
    Cache for the two upstream location collections.

    Args:
        fetch_dog_runs: Coroutine function returning the dog run collection
        fetch_skate_parks: Coroutine function returning the skate park collection
        ttl: Entry lifetime in seconds, measured from fetch time
        clock: Monotonic time source in seconds
    """

    def __init__(
        self,
        fetch_dog_runs: Fetcher,
        fetch_skate_parks: Fetcher,
        ttl: float = CACHE_DURATION_SECONDS,
        clock: Clock = time.monotonic,
    ):
        self._fetchers = {DOG_RUNS: fetch_dog_runs, SKATE_PARKS: fetch_skate_parks}
        self.ttl = ttl
        self._clock = clock
        self._entry: Optional[CacheEntry] = None
        self._inflight: Dict[str, asyncio.Future] = {}

    # ------------------------------------------------------------------
    # Freshness
    # ------------------------------------------------------------------

    def _is_fresh(self, entry: Optional[CacheEntry]) -> bool:
        return entry is not None and self._clock() - entry.fetched_at < self.ttl

    def is_valid(self) -> bool:
        """True when both collections are cached and young enough."""
        entry = self._entry
        return (
            self._is_fresh(entry)
            and entry.dog_runs is not None
            and entry.skate_parks is not None
        )

    def age(self) -> Optional[float]:
        """Seconds since the current entry was fetched, or None when empty."""
        entry = self._entry
        if entry is None:
            return None
        return self._clock() - entry.fetched_at

    def invalidate(self):
        """Drop the current entry; the next read fetches fresh data."""
        self._entry = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def get_all(self) -> Tuple[FeatureCollection, FeatureCollection]:
        """Return (dog_runs, skate_parks), refreshing both if needed."""
        entry = self._entry
        if (
            self._is_fresh(entry)
            and entry.dog_runs is not None
            and entry.skate_parks is not None
        ):
            return entry.dog_runs, entry.skate_parks

        entry = await self._single_flight("all", self._refresh_all)
        return entry.dog_runs, entry.skate_parks

    async def get_dog_runs(self) -> FeatureCollection:
        return await self._get_one(DOG_RUNS)

    async def get_skate_parks(self) -> FeatureCollection:
        return await self._get_one(SKATE_PARKS)

    # ------------------------------------------------------------------
    # Refresh
    # ------------------------------------------------------------------

    async def _get_one(self, source: str) -> FeatureCollection:
        entry = self._entry
        if self._is_fresh(entry) and entry.get(source) is not None:
            return entry.get(source)

        entry = await self._single_flight(source, lambda: self._refresh_one(source))
        return entry.get(source)

    async def _single_flight(
        self, key: str, refresh: Callable[[], Awaitable[CacheEntry]]
    ) -> CacheEntry:
        future = self._inflight.get(key)
        if future is None:
            future = asyncio.ensure_future(self._run_refresh(key, refresh))
            self._inflight[key] = future
        else:
            logger.debug(f"Joining in-flight refresh of {key}")
        return await asyncio.shield(future)

    async def _run_refresh(
        self, key: str, refresh: Callable[[], Awaitable[CacheEntry]]
    ) -> CacheEntry:
        try:
            return await refresh()
        finally:
            self._inflight.pop(key, None)

    async def _refresh_all(self) -> CacheEntry:
        logger.info("Location cache miss, fetching dog runs and skate parks")
        dog_runs, skate_parks = await asyncio.gather(
            self._fetchers[DOG_RUNS](),
            self._fetchers[SKATE_PARKS](),
        )
        entry = CacheEntry(dog_runs=dog_runs, skate_parks=skate_parks, fetched_at=self._clock())
        self._entry = entry
        return entry

    async def _refresh_one(self, source: str) -> CacheEntry:
        logger.info(f"Location cache miss, fetching {SOURCE_LABELS[source]}")
        fetched = await self._fetchers[source]()

        previous = self._entry
        if self._is_fresh(previous):
            # Carry the other collection over without extending its lifetime
            fetched_at = previous.fetched_at
        else:
            previous = None
            fetched_at = self._clock()

        if source == DOG_RUNS:
            entry = CacheEntry(
                dog_runs=fetched,
                skate_parks=previous.skate_parks if previous else None,
                fetched_at=fetched_at,
            )
        else:
            entry = CacheEntry(
                dog_runs=previous.dog_runs if previous else None,
                skate_parks=fetched,
                fetched_at=fetched_at,
            )
        self._entry = entry
        return entry


# ============================================================================
# Upstream fetchers
# ============================================================================

def make_geojson_fetcher(
    http_client: httpx.AsyncClient,
    url: Optional[str],
    source: str,
) -> Fetcher:
    """
    Build a coroutine function that downloads one GeoJSON FeatureCollection.

    Args:
        http_client: Shared async HTTP client
        url: Source URL (from NYC_DOG_RUNS_API_URL / NYC_SKATE_PARKS_API_URL)
        source: DOG_RUNS or SKATE_PARKS, reported in errors

    Returns:
        Coroutine function raising UpstreamFetchError on any failure
    """
    label = SOURCE_LABELS.get(source, source)

    async def fetch() -> FeatureCollection:
        if not url:
            raise ConfigurationError(f"No URL configured for {label}")

        try:
            response = await http_client.get(url)
        except httpx.HTTPError as e:
            logger.error(f"Error fetching {label} from {url}: {e!r}")
            raise UpstreamFetchError(source, f"Failed to fetch {label}") from e

        if response.status_code != 200:
            logger.error(f"Error fetching {label}: HTTP {response.status_code} from {url}")
            raise UpstreamFetchError(
                source,
                f"Failed to fetch {label}",
                details={"status": response.status_code},
            )

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Error fetching {label}: response from {url} is not JSON")
            raise UpstreamFetchError(source, f"Failed to fetch {label}") from e

        if not isinstance(data, dict) or not isinstance(data.get("features"), list):
            logger.error(f"Error fetching {label}: response from {url} is not a FeatureCollection")
            raise UpstreamFetchError(source, f"Invalid {label} data")

        logger.info(f"Fetched {len(data['features'])} {label}")
        return data

    return fetch
