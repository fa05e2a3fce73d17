"""Coordinate and date helpers used by the map and forms."""
import math
from datetime import datetime

EARTH_RADIUS_KM = 6371.0


def validate_coordinates(lat: float, lng: float) -> bool:
    """True when lat is in [-90, 90] and lng in [-180, 180]."""
    try:
        lat, lng = float(lat), float(lng)
    except (TypeError, ValueError):
        return False
    if math.isnan(lat) or math.isnan(lng):
        return False
    return -90 <= lat <= 90 and -180 <= lng <= 180


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance in kilometres."""
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def _to_dms(coord: float, direction: str) -> str:
    absolute = abs(coord)
    degrees = math.floor(absolute)
    minutes_exact = (absolute - degrees) * 60
    minutes = math.floor(minutes_exact)
    seconds = (minutes_exact - minutes) * 60
    return f"{degrees}°{minutes}'{seconds:.2f}\"{direction}"


def format_coordinates(lat: float, lng: float) -> dict[str, str]:
    """Decimal, DMS and map-link renderings of a coordinate pair."""
    lat_dms = _to_dms(lat, "N" if lat >= 0 else "S")
    lng_dms = _to_dms(lng, "E" if lng >= 0 else "W")
    return {
        "decimal": f"{lat:.6f}, {lng:.6f}",
        "dms": f"{lat_dms}, {lng_dms}",
        "googleMaps": f"https://www.google.com/maps?q={lat},{lng}",
        "openStreetMap": f"https://www.openstreetmap.org/?mlat={lat}&mlon={lng}&zoom=15",
    }


def parse_timestamp(value: str | datetime | None) -> datetime | None:
    """Parse an API timestamp (ISO 8601, optional trailing Z)."""
    if value is None or isinstance(value, datetime):
        return value
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def format_date(value: str | datetime | None) -> str:
    """dd/mm/yyyy hh:mm, or empty string when there is no date."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return ""
    return parsed.strftime("%d/%m/%Y %H:%M")
