"""Full-text search route."""
import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from pymongo.collection import Collection

from db import get_points_collection
from repositories.point_repository import search_points
from schemas.points import SearchHit, SearchResponse
from utils.errors import PersistenceError

LOG = logging.getLogger(__name__)

router = APIRouter(tags=["busca"])


@router.get("/buscar", response_model=SearchResponse)
def search(q: str | None = None, collection: Collection = Depends(get_points_collection)):
    """Search points by name, category, address and description, best matches first."""
    if q is None or not q.strip():
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "message": 'Parâmetro de busca "q" é obrigatório'},
        )
    try:
        records = search_points(collection, q)
        hits = [SearchHit.model_validate(r) for r in records]
    except (PersistenceError, ValidationError) as exc:
        LOG.exception("Error running text search for %r", q)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "success": False,
                "message": "Erro interno do servidor ao buscar texto",
                "error": str(exc),
            },
        )
    return SearchResponse(data=hits, total=len(hits), query=q)
