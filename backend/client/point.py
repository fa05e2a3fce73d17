"""Immutable point value type and its client-side validation."""
from dataclasses import dataclass, replace
from typing import Any

UNSET_COORDINATES = (0.0, 0.0)


@dataclass(frozen=True)
class Point:
    """A point as the client sees it. `coordinates` is (lng, lat), GeoJSON order."""

    name: str = ""
    category: str = ""
    description: str = ""
    address: str = ""
    coordinates: tuple[float, float] = UNSET_COORDINATES
    id: str | None = None
    registered_at: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Point":
        """Build from an API record; missing fields fall back to defaults."""
        location = data.get("localizacao") or {}
        coords = location.get("coordinates") or UNSET_COORDINATES
        return cls(
            name=data.get("nome") or "",
            category=data.get("tipo") or "",
            description=data.get("descricao") or "",
            address=data.get("endereco") or "",
            coordinates=tuple(coords),
            id=data.get("_id"),
            registered_at=data.get("data_cadastro"),
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
        )

    def to_json(self) -> dict[str, Any]:
        """Payload for create/update requests, strings trimmed."""
        payload: dict[str, Any] = {}
        if self.id:
            payload["_id"] = self.id
        payload.update(
            nome=self.name.strip(),
            tipo=self.category.strip(),
            descricao=self.description.strip(),
            endereco=self.address.strip(),
            localizacao={"type": "Point", "coordinates": list(self.coordinates)},
        )
        if self.registered_at:
            payload["data_cadastro"] = self.registered_at
        return payload

    def lat_lng(self) -> tuple[float, float]:
        """(lat, lng), the order map widgets expect."""
        lng, lat = self.coordinates
        return lat, lng

    def with_lat_lng(self, lat: float, lng: float) -> "Point":
        """Copy of this point moved to (lat, lng)."""
        return replace(self, coordinates=(lng, lat))


def validate_point(point: Point) -> list[str]:
    """Return one message per violation; empty when the point can be submitted."""
    errors = []
    if not point.name.strip():
        errors.append("Nome é obrigatório")
    if not point.category.strip():
        errors.append("Tipo é obrigatório")
    coords = point.coordinates
    if coords is None or len(coords) != 2 or tuple(coords) == UNSET_COORDINATES:
        errors.append("Localização é obrigatória")
    return errors
