"""Point CRUD routes."""
import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from pymongo.collection import Collection

from db import get_points_collection
from repositories.point_repository import create_point as repo_create_point
from repositories.point_repository import delete_point as repo_delete_point
from repositories.point_repository import get_point as repo_get_point
from repositories.point_repository import list_points as repo_list_points
from repositories.point_repository import update_point as repo_update_point
from schemas.points import MessageResponse, PointResponse
from utils.errors import PersistenceError, PointNotFound, PointValidationError

LOG = logging.getLogger(__name__)

router = APIRouter(prefix="/pontos", tags=["pontos"])


def _error(status_code: int, message: str, details: list[str] | None = None) -> JSONResponse:
    content: dict[str, Any] = {"error": message}
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


@router.get("", response_model=list[PointResponse])
def list_points(collection: Collection = Depends(get_points_collection)):
    """List all points."""
    try:
        records = repo_list_points(collection)
        return [PointResponse.model_validate(r) for r in records]
    except (PersistenceError, ValidationError):
        LOG.exception("Error listing points")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Erro ao listar pontos.")


@router.post("", response_model=PointResponse, status_code=status.HTTP_201_CREATED)
def create_point(
    body: dict[str, Any] = Body(...),
    collection: Collection = Depends(get_points_collection),
):
    """Create a new point."""
    try:
        record = repo_create_point(collection, body)
        return PointResponse.model_validate(record)
    except PointValidationError as exc:
        LOG.info("Rejected point: %s", exc)
        return _error(status.HTTP_400_BAD_REQUEST, "Dados do ponto inválidos.", exc.errors)
    except (PersistenceError, ValidationError):
        LOG.exception("Error creating point")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Erro ao criar ponto.")


@router.get("/{point_id}", response_model=PointResponse)
def get_point(point_id: str, collection: Collection = Depends(get_points_collection)):
    """Get a point by id."""
    try:
        record = repo_get_point(collection, point_id)
        return PointResponse.model_validate(record)
    except PointNotFound:
        return _error(status.HTTP_404_NOT_FOUND, "Ponto não encontrado.")
    except (PersistenceError, ValidationError):
        LOG.exception("Error fetching point %s", point_id)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Erro ao buscar ponto.")


@router.put("/{point_id}", response_model=PointResponse)
def update_point(
    point_id: str,
    body: dict[str, Any] = Body(...),
    collection: Collection = Depends(get_points_collection),
):
    """Update the fields present in the body."""
    try:
        record = repo_update_point(collection, point_id, body)
        return PointResponse.model_validate(record)
    except PointNotFound:
        return _error(status.HTTP_404_NOT_FOUND, "Ponto não encontrado para atualização.")
    except PointValidationError as exc:
        LOG.info("Rejected update of point %s: %s", point_id, exc)
        return _error(status.HTTP_400_BAD_REQUEST, "Dados do ponto inválidos.", exc.errors)
    except (PersistenceError, ValidationError):
        LOG.exception("Error updating point %s", point_id)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Erro ao atualizar ponto.")


@router.delete("/{point_id}", response_model=MessageResponse)
def delete_point(point_id: str, collection: Collection = Depends(get_points_collection)):
    """Delete a point by id."""
    try:
        repo_delete_point(collection, point_id)
    except PointNotFound:
        return _error(status.HTTP_404_NOT_FOUND, "Ponto não encontrado para exclusão.")
    except PersistenceError:
        LOG.exception("Error deleting point %s", point_id)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Erro ao deletar ponto.")
    return MessageResponse(message="Ponto deletado com sucesso.")
