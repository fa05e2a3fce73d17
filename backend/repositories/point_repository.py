"""Point repository: create, get, list, update, delete, text search."""
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any

from bson import ObjectId
from bson.errors import InvalidId
from pydantic import ValidationError
from pymongo import ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from models.point import SEARCH_LIMIT, to_record
from schemas.points import PointCreate, PointUpdate
from utils.errors import PersistenceError, PointNotFound, PointValidationError


def _now() -> datetime:
    return datetime.now(timezone.utc)


def validation_messages(exc: ValidationError) -> list[str]:
    """Flatten a pydantic ValidationError into 'field: message' strings."""
    messages = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()))
        messages.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return messages


@contextmanager
def store_errors(action: str) -> Iterator[None]:
    """Re-raise driver failures as PersistenceError."""
    try:
        yield
    except PyMongoError as exc:
        raise PersistenceError(f"{action} failed: {exc}") from exc


def _object_id(point_id: str) -> ObjectId:
    try:
        return ObjectId(point_id)
    except (InvalidId, TypeError) as exc:
        raise PersistenceError(f"Malformed point id: {point_id!r}") from exc


def create_point(collection: Collection, fields: Mapping[str, Any]) -> dict[str, Any]:
    """Validate fields, insert the point and return the stored record (with _id and timestamps)."""
    try:
        payload = PointCreate.model_validate(fields)
    except ValidationError as exc:
        raise PointValidationError(validation_messages(exc)) from exc
    now = _now()
    document = payload.model_dump(exclude_none=True)
    document.setdefault("data_cadastro", now)
    document["createdAt"] = now
    document["updatedAt"] = now
    with store_errors("insert"):
        inserted_id = collection.insert_one(document).inserted_id
        stored = collection.find_one({"_id": inserted_id})
    if stored is None:
        raise PersistenceError(f"Inserted point {inserted_id} could not be read back")
    return to_record(stored)


def get_point(collection: Collection, point_id: str) -> dict[str, Any]:
    """Return the point with the given id. Raises PointNotFound if absent."""
    oid = _object_id(point_id)
    with store_errors("find"):
        document = collection.find_one({"_id": oid})
    if document is None:
        raise PointNotFound(point_id)
    return to_record(document)


def list_points(collection: Collection) -> list[dict[str, Any]]:
    """Return all points in the store's natural order."""
    with store_errors("find"):
        return [to_record(doc) for doc in collection.find({})]


def count_points(collection: Collection) -> int:
    """Return the number of stored points."""
    with store_errors("count"):
        return collection.count_documents({})


def update_point(collection: Collection, point_id: str, fields: Mapping[str, Any]) -> dict[str, Any]:
    """
    Set only the supplied fields (validated like create) and refresh updatedAt.
    Returns the updated record; raises PointNotFound if absent.
    """
    try:
        payload = PointUpdate.model_validate(fields)
    except ValidationError as exc:
        raise PointValidationError(validation_messages(exc)) from exc
    oid = _object_id(point_id)
    changes = payload.model_dump(exclude_unset=True)
    changes["updatedAt"] = _now()
    with store_errors("update"):
        document = collection.find_one_and_update(
            {"_id": oid},
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )
    if document is None:
        raise PointNotFound(point_id)
    return to_record(document)


def delete_point(collection: Collection, point_id: str) -> None:
    """Delete a point by id. Raises PointNotFound if absent."""
    oid = _object_id(point_id)
    with store_errors("delete"):
        result = collection.delete_one({"_id": oid})
    if result.deleted_count == 0:
        raise PointNotFound(point_id)


def text_search_query(query: str) -> tuple[dict, dict, list]:
    """Filter, projection and sort for a relevance-ranked text search."""
    score = {"$meta": "textScore"}
    return {"$text": {"$search": query}}, {"score": score}, [("score", score)]


def search_points(collection: Collection, query: str, limit: int = SEARCH_LIMIT) -> list[dict[str, Any]]:
    """Full-text search over the weighted text index, best matches first."""
    filter_, projection, sort = text_search_query(query)
    with store_errors("text search"):
        cursor = collection.find(filter_, projection).sort(sort).limit(limit)
        return [to_record(doc) for doc in cursor]
