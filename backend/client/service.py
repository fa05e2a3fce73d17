"""HTTP clients for the points API and the Nominatim geocoder."""
import logging
from dataclasses import dataclass
from typing import Any

import httpx

from client.point import Point, validate_point

LOG = logging.getLogger(__name__)

NOMINATIM_URL = "https://nominatim.openstreetmap.org"


class ApiError(Exception):
    """Non-2xx response from the API."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code


class InvalidPointError(ValueError):
    """Point failed client-side validation; nothing was sent."""

    def __init__(self, errors: list[str]):
        super().__init__(f"Dados inválidos: {', '.join(errors)}")
        self.errors = errors


class PointService:
    """
    Points API client. The httpx.Client is passed in by the caller, so base URL,
    timeouts and transport are configured where the client is built.
    """

    def __init__(self, http: httpx.Client, base_path: str = "/api"):
        self.http = http
        self.base_path = base_path.rstrip("/")

    def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            response = self.http.request(method, f"{self.base_path}{path}", **kwargs)
        except httpx.HTTPError:
            LOG.exception("Request %s %s failed", method, path)
            raise
        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = {}
            message = ""
            if isinstance(body, dict):
                message = body.get("error") or body.get("message") or ""
            raise ApiError(response.status_code, message or f"HTTP Error: {response.status_code}")
        return response

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        return self._send(method, path, **kwargs).json()

    def _envelope(self, path: str, **kwargs: Any) -> dict[str, Any]:
        """GET a {success, ...} body. success=false raises ApiError with the response status."""
        response = self._send("GET", path, **kwargs)
        result = response.json()
        if not result.get("success"):
            raise ApiError(response.status_code, result.get("message") or f"HTTP Error: {response.status_code}")
        return result

    def list_points(self) -> list[Point]:
        return [Point.from_api(item) for item in self._request("GET", "/pontos")]

    def get_point(self, point_id: str) -> Point:
        return Point.from_api(self._request("GET", f"/pontos/{point_id}"))

    def create_point(self, point: Point) -> Point:
        """Validate locally, then POST. Raises InvalidPointError before any request."""
        errors = validate_point(point)
        if errors:
            raise InvalidPointError(errors)
        return Point.from_api(self._request("POST", "/pontos", json=point.to_json()))

    def update_point(self, point_id: str, point: Point) -> Point:
        errors = validate_point(point)
        if errors:
            raise InvalidPointError(errors)
        return Point.from_api(self._request("PUT", f"/pontos/{point_id}", json=point.to_json()))

    def delete_point(self, point_id: str) -> dict[str, Any]:
        return self._request("DELETE", f"/pontos/{point_id}")

    def search(self, query: str) -> tuple[list[Point], int]:
        """Ranked text search. Returns (points, total)."""
        result = self._envelope("/buscar", params={"q": query})
        return [Point.from_api(item) for item in result["data"]], result["total"]

    def statistics(self) -> dict[str, Any]:
        result = self._envelope("/estatisticas")
        return result["data"]


@dataclass(frozen=True)
class AddressCandidate:
    """One geocoding match."""

    lat: float
    lng: float
    display_name: str

    @property
    def title(self) -> str:
        """First component of the display name, used as the headline."""
        return self.display_name.split(",")[0]


class GeocodingClient:
    """Address lookup against Nominatim, restricted to Brazil."""

    def __init__(self, http: httpx.Client, base_url: str = NOMINATIM_URL, limit: int = 5):
        self.http = http
        self.base_url = base_url.rstrip("/")
        self.limit = limit

    def search(self, address: str) -> list[AddressCandidate]:
        address = address.strip()
        if not address:
            raise ValueError("Digite um endereço para buscar")
        response = self.http.get(
            f"{self.base_url}/search",
            params={
                "format": "json",
                "q": address,
                "limit": self.limit,
                "addressdetails": 1,
                "countrycodes": "br",
            },
        )
        response.raise_for_status()
        return [
            AddressCandidate(
                lat=float(item["lat"]),
                lng=float(item["lon"]),
                display_name=item["display_name"],
            )
            for item in response.json()
        ]
