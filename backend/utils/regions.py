"""Approximate Brazilian regions by coordinate boxes.

The boxes overlap, so the check order decides the result: the first box that
contains the point wins and anything outside all of them is "Sul".
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class RegionBox:
    """Inclusive latitude/longitude ranges for one region."""

    name: str
    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float

    def contains(self, lng: float, lat: float) -> bool:
        return self.min_lat <= lat <= self.max_lat and self.min_lng <= lng <= self.max_lng


REGION_BOXES: tuple[RegionBox, ...] = (
    RegionBox("Norte", min_lat=-5, max_lat=5, min_lng=-75, max_lng=-35),
    RegionBox("Nordeste", min_lat=-16, max_lat=-2, min_lng=-60, max_lng=-35),
    RegionBox("Centro-Oeste", min_lat=-25, max_lat=-5, min_lng=-60, max_lng=-35),
    RegionBox("Sudeste", min_lat=-25, max_lat=-14, min_lng=-50, max_lng=-39),
)
DEFAULT_REGION = "Sul"


def classify_region(lng: float, lat: float) -> str:
    """Return the region name for a [lng, lat] pair."""
    for box in REGION_BOXES:
        if box.contains(lng, lat):
            return box.name
    return DEFAULT_REGION


def region_switch_expression(coordinates_field: str = "$localizacao.coordinates") -> dict:
    """Aggregation $switch expression that evaluates to the same region as classify_region."""
    lng = {"$arrayElemAt": [coordinates_field, 0]}
    lat = {"$arrayElemAt": [coordinates_field, 1]}
    branches = [
        {
            "case": {
                "$and": [
                    {"$gte": [lat, box.min_lat]},
                    {"$lte": [lat, box.max_lat]},
                    {"$gte": [lng, box.min_lng]},
                    {"$lte": [lng, box.max_lng]},
                ]
            },
            "then": box.name,
        }
        for box in REGION_BOXES
    ]
    return {"$switch": {"branches": branches, "default": DEFAULT_REGION}}
