"""Pydantic schemas for the statistics response."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CountBucket(BaseModel):
    """Count for one category or region."""

    model_config = ConfigDict(populate_by_name=True)

    id: str | None = Field(alias="_id")
    total: int


class MonthKey(BaseModel):
    # null for points stored without createdAt
    ano: int | None = None
    mes: int | None = None


class MonthBucket(BaseModel):
    """Count of points created in one month."""

    model_config = ConfigDict(populate_by_name=True)

    id: MonthKey = Field(alias="_id")
    total: int


class RecentPoint(BaseModel):
    """Newest points, projected to name, category and creation time."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    nome: str
    tipo: str
    createdAt: datetime | None = None


class StatisticsData(BaseModel):
    pontosPorTipo: list[CountBucket] = []
    pontosPorMes: list[MonthBucket] = []
    distribuicaoGeografica: list[CountBucket] = []
    totalPontos: int = 0
    pontosRecentes: list[RecentPoint] = []


class StatisticsResponse(BaseModel):
    """Response for GET /estatisticas."""

    success: bool = True
    data: StatisticsData
