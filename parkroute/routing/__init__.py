from .ors_client import ORSClient
from .directions import DirectionsProxy, RouteResult, RouteStep, normalize_route

__all__ = [
    "ORSClient",
    "DirectionsProxy",
    "RouteResult",
    "RouteStep",
    "normalize_route",
]
