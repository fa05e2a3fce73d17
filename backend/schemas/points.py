"""Pydantic schemas for point API."""
from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator

TrimmedName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
TrimmedText = Annotated[str, StringConstraints(strip_whitespace=True)]
Coordinates = Annotated[list[float], Field(min_length=2, max_length=2)]


class GeoPoint(BaseModel):
    """GeoJSON point. Coordinates are [longitude, latitude]."""

    type: Literal["Point"]
    coordinates: Coordinates


class PointCreate(BaseModel):
    """Payload for creating a point."""

    model_config = ConfigDict(extra="ignore")

    nome: TrimmedName
    tipo: TrimmedName
    descricao: str | None = None
    endereco: TrimmedText | None = None
    data_cadastro: datetime | None = None
    localizacao: GeoPoint


class PointUpdate(BaseModel):
    """Payload for updating a point. Only fields present in the body are written."""

    model_config = ConfigDict(extra="ignore")

    nome: TrimmedName | None = None
    tipo: TrimmedName | None = None
    descricao: str | None = None
    endereco: TrimmedText | None = None
    data_cadastro: datetime | None = None
    localizacao: GeoPoint | None = None

    @field_validator("nome", "tipo", "localizacao")
    @classmethod
    def _required_when_present(cls, value):
        # Explicit null would unset a required field.
        if value is None:
            raise ValueError("field is required and cannot be null")
        return value


class PointResponse(BaseModel):
    """Point in API responses."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    nome: str
    tipo: str
    descricao: str | None = None
    endereco: str | None = None
    data_cadastro: datetime | None = None
    localizacao: GeoPoint
    createdAt: datetime | None = None
    updatedAt: datetime | None = None


class SearchHit(PointResponse):
    """Point returned by text search, with its relevance score."""

    score: float = 0.0


class SearchResponse(BaseModel):
    """Response for GET /buscar."""

    success: bool = True
    data: list[SearchHit]
    total: int
    query: str


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str
