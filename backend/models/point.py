"""Point document layout in the document store: collection, indexes, conversion."""
from typing import Any

from pymongo import ASCENDING, GEOSPHERE, TEXT
from pymongo.collection import Collection

COLLECTION_NAME = "pontos"
TEXT_INDEX_NAME = "texto_completo"
GEO_INDEX_NAME = "localizacao_2dsphere"

# Relative weight of each field in the text score.
TEXT_INDEX_WEIGHTS: dict[str, int] = {
    "nome": 10,
    "tipo": 5,
    "endereco": 3,
    "descricao": 1,
}

SEARCH_LIMIT = 20


def ensure_indexes(collection: Collection) -> None:
    """Create the 2dsphere and weighted text indexes (no-op when they already exist)."""
    collection.create_index([("localizacao", GEOSPHERE)], name=GEO_INDEX_NAME)
    collection.create_index(
        [(field, TEXT) for field in TEXT_INDEX_WEIGHTS],
        name=TEXT_INDEX_NAME,
        weights=TEXT_INDEX_WEIGHTS,
    )
    collection.create_index([("createdAt", ASCENDING)], name="createdAt_1")


def to_record(document: dict[str, Any]) -> dict[str, Any]:
    """Copy of a stored document with the ObjectId rendered as a hex string."""
    record = dict(document)
    if "_id" in record:
        record["_id"] = str(record["_id"])
    return record
