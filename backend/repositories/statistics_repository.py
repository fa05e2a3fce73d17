"""Statistics over the point collection. Every view is recomputed on each call."""
from typing import Any

from pymongo import DESCENDING
from pymongo.collection import Collection

from models.point import to_record
from repositories.point_repository import count_points, store_errors
from utils.regions import region_switch_expression

MONTHS_LIMIT = 12
RECENT_LIMIT = 5

CATEGORY_PIPELINE: list[dict] = [
    {"$group": {"_id": "$tipo", "total": {"$sum": 1}}},
    {"$sort": {"total": -1}},
]

MONTHLY_PIPELINE: list[dict] = [
    {
        "$group": {
            "_id": {"ano": {"$year": "$createdAt"}, "mes": {"$month": "$createdAt"}},
            "total": {"$sum": 1},
        }
    },
    {"$sort": {"_id.ano": -1, "_id.mes": -1}},
    {"$limit": MONTHS_LIMIT},
]


def region_pipeline() -> list[dict]:
    """Tag each point with its region, then count per region."""
    return [
        {"$addFields": {"regiao": region_switch_expression()}},
        {"$group": {"_id": "$regiao", "total": {"$sum": 1}}},
        {"$sort": {"total": -1}},
    ]


def counts_by_category(collection: Collection) -> list[dict[str, Any]]:
    with store_errors("category aggregation"):
        return list(collection.aggregate(CATEGORY_PIPELINE))


def counts_by_month(collection: Collection) -> list[dict[str, Any]]:
    with store_errors("monthly aggregation"):
        return list(collection.aggregate(MONTHLY_PIPELINE))


def counts_by_region(collection: Collection) -> list[dict[str, Any]]:
    with store_errors("region aggregation"):
        return list(collection.aggregate(region_pipeline()))


def recent_points(collection: Collection, limit: int = RECENT_LIMIT) -> list[dict[str, Any]]:
    """Newest points by createdAt, projected to nome, tipo and createdAt."""
    with store_errors("recent points"):
        cursor = (
            collection.find({}, {"nome": 1, "tipo": 1, "createdAt": 1})
            .sort("createdAt", DESCENDING)
            .limit(limit)
        )
        return [to_record(doc) for doc in cursor]


def get_statistics(collection: Collection) -> dict[str, Any]:
    """All dashboard views in one dict, keyed as the API returns them."""
    return {
        "pontosPorTipo": counts_by_category(collection),
        "pontosPorMes": counts_by_month(collection),
        "distribuicaoGeografica": counts_by_region(collection),
        "totalPontos": count_points(collection),
        "pontosRecentes": recent_points(collection),
    }
