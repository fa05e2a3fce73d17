"""Client side of Re.Ciclo: API client, point value type, map/dashboard state."""
from .point import Point, validate_point
from .service import ApiError, GeocodingClient, InvalidPointError, PointService
from .state import DashboardSummary, Marker, PointCache

__all__ = [
    "ApiError",
    "DashboardSummary",
    "GeocodingClient",
    "InvalidPointError",
    "Marker",
    "Point",
    "PointCache",
    "PointService",
    "validate_point",
]
