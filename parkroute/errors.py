"""Error taxonomy shared by the cache, the directions proxy and the API."""

from typing import Any, Dict, Optional


class ParkRouteError(Exception):
    """Base error. ``status_code`` is the HTTP status the API answers with."""

    status_code = 500

    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class InvalidInputError(ParkRouteError):
    """Client supplied coordinates that cannot be routed."""

    status_code = 400


class ConfigurationError(ParkRouteError):
    """A required setting (URL or credential) is missing."""


class UpstreamFetchError(ParkRouteError):
    """A location source was unreachable or answered with an error."""

    def __init__(self, source: str, message: str, details: Any = None):
        super().__init__(message, details)
        self.source = source

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        body["source"] = self.source
        return body


class UpstreamProviderError(ParkRouteError):
    """The directions provider failed or rejected the request."""

    def __init__(self, message: str, details: Any = None, status: Optional[int] = None):
        super().__init__(message, details)
        self.status = status


class GeometryError(ParkRouteError):
    """The provider answered, but its route geometry is unusable."""
