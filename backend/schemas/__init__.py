# Schemas package
from .health import HealthResponse
from .points import (
    GeoPoint,
    MessageResponse,
    PointCreate,
    PointResponse,
    PointUpdate,
    SearchHit,
    SearchResponse,
)
from .statistics import StatisticsData, StatisticsResponse

__all__ = [
    "GeoPoint",
    "HealthResponse",
    "MessageResponse",
    "PointCreate",
    "PointResponse",
    "PointUpdate",
    "SearchHit",
    "SearchResponse",
    "StatisticsData",
    "StatisticsResponse",
]
