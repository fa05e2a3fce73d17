"""Dashboard statistics route."""
import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from pymongo.collection import Collection

from db import get_points_collection
from repositories.statistics_repository import get_statistics
from schemas.statistics import StatisticsData, StatisticsResponse
from utils.errors import PersistenceError

LOG = logging.getLogger(__name__)

router = APIRouter(tags=["estatisticas"])


@router.get("/estatisticas", response_model=StatisticsResponse)
def statistics(collection: Collection = Depends(get_points_collection)):
    """Counts by category, month and region, plus total and newest points."""
    try:
        data = StatisticsData.model_validate(get_statistics(collection))
    except (PersistenceError, ValidationError) as exc:
        LOG.exception("Error computing statistics")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "success": False,
                "message": "Erro interno do servidor ao obter estatísticas",
                "error": str(exc),
            },
        )
    return StatisticsResponse(data=data)
