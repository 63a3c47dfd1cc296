"""
ParkRoute - Configuration
=========================

Environment-driven settings. A ``.env`` file at the project root is loaded
on import.

Environment variables:
    PORT                      - HTTP port for the API server (default 8000)
    NYC_DOG_RUNS_API_URL      - GeoJSON source for dog runs
    NYC_SKATE_PARKS_API_URL   - GeoJSON source for skate parks
    ORS_API_KEY               - OpenRouteService API key
    ORS_BASE_URL              - OpenRouteService base URL
    CACHE_TTL_SECONDS         - location cache lifetime (default 1800)
    HTTP_TIMEOUT_SECONDS      - outbound request timeout (default 5)
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).parent.parent

load_dotenv(PROJECT_ROOT / ".env")

logger = logging.getLogger(__name__)

DEFAULT_PORT = 8000
DEFAULT_ORS_BASE_URL = "https://api.openrouteservice.org"
CACHE_DURATION_SECONDS = 30 * 60
DEFAULT_HTTP_TIMEOUT_SECONDS = 5.0


def _env_number(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Ignoring non-numeric {name}={raw!r}, using {default}")
        return default


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for the API server and CLI."""
    port: int = DEFAULT_PORT
    dog_runs_url: Optional[str] = None
    skate_parks_url: Optional[str] = None
    ors_api_key: Optional[str] = None
    ors_base_url: str = DEFAULT_ORS_BASE_URL
    cache_ttl_seconds: float = CACHE_DURATION_SECONDS
    http_timeout_seconds: float = DEFAULT_HTTP_TIMEOUT_SECONDS

    @property
    def ors_configured(self) -> bool:
        return bool(self.ors_api_key)

    def __repr__(self) -> str:
        # Keep the API key out of logs and tracebacks
        return (
            f"Settings(port={self.port}, dog_runs_url={self.dog_runs_url!r}, "
            f"skate_parks_url={self.skate_parks_url!r}, "
            f"ors_configured={self.ors_configured}, ors_base_url={self.ors_base_url!r}, "
            f"cache_ttl_seconds={self.cache_ttl_seconds}, "
            f"http_timeout_seconds={self.http_timeout_seconds})"
        )


def get_settings() -> Settings:
    """Read settings from the current environment."""
    return Settings(
        port=int(_env_number("PORT", DEFAULT_PORT)),
        dog_runs_url=os.getenv("NYC_DOG_RUNS_API_URL") or None,
        skate_parks_url=os.getenv("NYC_SKATE_PARKS_API_URL") or None,
        ors_api_key=os.getenv("ORS_API_KEY") or None,
        ors_base_url=(os.getenv("ORS_BASE_URL") or DEFAULT_ORS_BASE_URL).rstrip("/"),
        cache_ttl_seconds=_env_number("CACHE_TTL_SECONDS", CACHE_DURATION_SECONDS),
        http_timeout_seconds=_env_number("HTTP_TIMEOUT_SECONDS", DEFAULT_HTTP_TIMEOUT_SECONDS),
    )
