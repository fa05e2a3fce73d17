"""Unit tests: point request schemas and text search query."""
import pytest
from pydantic import ValidationError

from models.point import SEARCH_LIMIT, TEXT_INDEX_WEIGHTS, to_record
from repositories.point_repository import text_search_query, validation_messages
from schemas import MessageResponse, PointResponse
from schemas.points import PointCreate, PointUpdate

pytestmark = pytest.mark.unit

LOCATION = {"type": "Point", "coordinates": [-43.2, -22.9]}


def test_point_create_trims_required_strings():
    """nome, tipo and endereco are trimmed."""
    p = PointCreate.model_validate({"nome": " A ", "tipo": " B ", "endereco": " C ", "localizacao": LOCATION})
    assert (p.nome, p.tipo, p.endereco) == ("A", "B", "C")


def test_point_create_requires_non_empty_name():
    """A whitespace-only nome is rejected."""
    with pytest.raises(ValidationError):
        PointCreate.model_validate({"nome": "  ", "tipo": "B", "localizacao": LOCATION})


def test_point_create_accepts_zero_coordinates():
    """[0, 0] is only rejected client-side."""
    p = PointCreate.model_validate({"nome": "A", "tipo": "B", "localizacao": {"type": "Point", "coordinates": [0, 0]}})
    assert p.localizacao.coordinates == [0.0, 0.0]


def test_point_update_only_reports_set_fields():
    """exclude_unset keeps the partial update partial."""
    p = PointUpdate.model_validate({"descricao": None, "nome": "Novo"})
    assert p.model_dump(exclude_unset=True) == {"descricao": None, "nome": "Novo"}


def test_point_update_rejects_null_location():
    """Required fields cannot be nulled by an update."""
    with pytest.raises(ValidationError):
        PointUpdate.model_validate({"localizacao": None})


def test_validation_messages_name_fields():
    """Messages are prefixed with the failing field path."""
    with pytest.raises(ValidationError) as exc_info:
        PointCreate.model_validate({"nome": "A", "localizacao": {"type": "Line", "coordinates": [1, 2]}})
    messages = validation_messages(exc_info.value)
    assert any(m.startswith("tipo:") for m in messages)
    assert any(m.startswith("localizacao.type:") for m in messages)


def test_text_search_query_sorts_by_score():
    """The query filters by $text and projects/sorts on the text score."""
    filter_, projection, sort = text_search_query("roupas")
    assert filter_ == {"$text": {"$search": "roupas"}}
    assert projection == {"score": {"$meta": "textScore"}}
    assert sort == [("score", {"$meta": "textScore"})]
    assert SEARCH_LIMIT == 20


def test_text_index_weights():
    """Name weighs most, description least."""
    assert TEXT_INDEX_WEIGHTS == {"nome": 10, "tipo": 5, "endereco": 3, "descricao": 1}


def test_to_record_stringifies_id():
    """to_record renders _id as text and leaves the source untouched."""
    from bson import ObjectId

    oid = ObjectId()
    doc = {"_id": oid, "nome": "A"}
    assert to_record(doc) == {"_id": str(oid), "nome": "A"}
    assert doc["_id"] is oid


def test_point_response_timestamps_optional():
    """A stored point without createdAt/updatedAt still converts to a response."""
    response = PointResponse.model_validate({"_id": "a" * 24, "nome": "x", "tipo": "y", "localizacao": LOCATION})
    assert response.createdAt is None and response.updatedAt is None


def test_message_response_exported_from_package():
    assert MessageResponse(message="ok").model_dump() == {"message": "ok"}
