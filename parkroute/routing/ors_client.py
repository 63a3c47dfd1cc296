"""
OpenRouteService client.

Sole responsibility: talk to the ORS directions API over HTTP.
Takes coordinates already in provider order (lng, lat) and returns the raw
GeoJSON payload; normalization lives in routing.directions.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from parkroute.config import DEFAULT_ORS_BASE_URL
from parkroute.errors import ConfigurationError, UpstreamProviderError
from parkroute.utils.geo_utils import LngLat

logger = logging.getLogger(__name__)


class ORSClient:
    """
    Async OpenRouteService directions client.

    Example:
        >>> client = ORSClient(api_key, http_client)
        >>> payload = await client.directions(LngLat(-74.0, 40.7), LngLat(-73.95, 40.75))
    """

    DIRECTIONS_PATH = "/v2/directions/{profile}/geojson"

    def __init__(
        self,
        api_key: Optional[str],
        http_client: httpx.AsyncClient,
        base_url: str = DEFAULT_ORS_BASE_URL,
        profile: str = "foot-walking",
    ):
        self._api_key = api_key
        self._http = http_client
        self.base_url = base_url.rstrip("/")
        self.profile = profile

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    @property
    def url(self) -> str:
        return self.base_url + self.DIRECTIONS_PATH.format(profile=self.profile)

    async def directions(self, start: LngLat, end: LngLat) -> Dict[str, Any]:
        """
        Request a route between two provider-order coordinates.

        Raises:
            ConfigurationError: no API key; no request is sent
            UpstreamProviderError: transport failure, non-2xx status or non-JSON body
        """
        if not self._api_key:
            raise ConfigurationError("ORS API key not configured")

        body = {"coordinates": [list(start), list(end)]}
        headers = {
            "Authorization": self._api_key,
            "Content-Type": "application/json",
            "Accept": "application/json, application/geo+json",
        }

        try:
            response = await self._http.post(self.url, json=body, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"Error fetching directions from ORS: {e!r}")
            raise UpstreamProviderError("Failed to fetch directions from ORS") from e

        if not response.is_success:
            details = _error_payload(response)
            logger.error(
                f"Error fetching directions from ORS: HTTP {response.status_code} {details}"
            )
            raise UpstreamProviderError(
                "Failed to fetch directions from ORS",
                details=details,
                status=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            logger.error("Error fetching directions from ORS: response is not JSON")
            raise UpstreamProviderError(
                "Failed to fetch directions from ORS",
                details=response.text[:500] or None,
                status=response.status_code,
            ) from e


def _error_payload(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text[:500] or None
