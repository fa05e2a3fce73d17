"""API tests: client PointService end to end against the app, geocoding with a mock transport."""
import json

import httpx
import pytest

from client.point import Point
from client.service import ApiError, GeocodingClient, InvalidPointError, PointService
from client.state import PointBrowser

pytestmark = pytest.mark.api


@pytest.fixture
def service(client):
    """PointService talking to the test app through TestClient (an httpx.Client)."""
    return PointService(client)


def test_service_crud_round_trip(service):
    """create, get, update, list and delete through the client."""
    created = service.create_point(Point(name="Ponto A", category="Cultura").with_lat_lng(-22.9, -43.2))
    assert created.id and created.lat_lng() == (-22.9, -43.2)
    assert service.get_point(created.id) == created

    updated = service.update_point(created.id, created.with_lat_lng(-23.5, -46.6))
    assert updated.coordinates == (-46.6, -23.5)
    assert [p.id for p in service.list_points()] == [created.id]

    assert service.delete_point(created.id) == {"message": "Ponto deletado com sucesso."}
    with pytest.raises(ApiError) as exc_info:
        service.get_point(created.id)
    assert exc_info.value.status_code == 404
    assert str(exc_info.value) == "Ponto não encontrado."


def test_service_rejects_invalid_point_without_request(service, collection):
    """Client-side validation stops the request before it is sent."""
    with pytest.raises(InvalidPointError) as exc_info:
        service.create_point(Point(name="A", category="B"))
    assert exc_info.value.errors == ["Localização é obrigatória"]
    assert collection.count_documents({}) == 0


def test_service_search_blank_surfaces_400(service):
    """The server's 400 message is surfaced for an empty query."""
    with pytest.raises(ApiError) as exc_info:
        service.search("")
    assert exc_info.value.status_code == 400
    assert "q" in str(exc_info.value)


def test_browser_reload_after_delete(service):
    """PointBrowser refetches after mutations so the cache mirrors the store."""
    browser = PointBrowser(service)
    saved = browser.save(Point(name="A", category="Cultura").with_lat_lng(-22.9, -43.2))
    assert set(browser.cache.markers) == {saved.id}
    browser.delete(saved.id)
    assert browser.cache.points == [] and browser.cache.markers == {}


def test_browser_dashboard_empty(service):
    """Dashboard on an empty store."""
    summary = PointBrowser(service).dashboard()
    assert summary.total == 0 and summary.top_category == "N/A"


def test_error_without_json_body():
    """A non-JSON error body falls back to 'HTTP Error: <status>'."""
    transport = httpx.MockTransport(lambda request: httpx.Response(502, text="bad gateway"))
    service = PointService(httpx.Client(transport=transport, base_url="http://api.test"))
    with pytest.raises(ApiError, match="HTTP Error: 502"):
        service.list_points()


def test_unsuccessful_envelope_keeps_response_status():
    """A 200 body with success=false raises ApiError carrying 200 and the server message."""
    transport = httpx.MockTransport(
        lambda request: httpx.Response(200, json={"success": False, "message": "sem dados"})
    )
    service = PointService(httpx.Client(transport=transport, base_url="http://api.test"))
    with pytest.raises(ApiError, match="sem dados") as excinfo:
        service.statistics()
    assert excinfo.value.status_code == 200


def test_search_failure_keeps_server_status():
    """A 500 search body surfaces as ApiError with status 500 and the server message."""
    body = {"success": False, "message": "Erro interno do servidor ao buscar texto", "error": "x"}
    transport = httpx.MockTransport(lambda request: httpx.Response(500, json=body))
    service = PointService(httpx.Client(transport=transport, base_url="http://api.test"))
    with pytest.raises(ApiError, match="buscar texto") as excinfo:
        service.search("livros")
    assert excinfo.value.status_code == 500


def test_geocoding_search():
    """Nominatim is queried for Brazil and results are parsed to candidates."""
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["params"] = dict(request.url.params)
        seen["path"] = request.url.path
        body = [{"lat": "-22.9068", "lon": "-43.1729", "display_name": "Rio de Janeiro, RJ, Brasil"}]
        return httpx.Response(200, content=json.dumps(body))

    geocoder = GeocodingClient(httpx.Client(transport=httpx.MockTransport(handler)), base_url="http://geo.test")
    results = geocoder.search("  Rio de Janeiro ")
    assert seen["path"] == "/search"
    assert seen["params"] == {
        "format": "json",
        "q": "Rio de Janeiro",
        "limit": "5",
        "addressdetails": "1",
        "countrycodes": "br",
    }
    assert len(results) == 1
    assert (results[0].lat, results[0].lng) == (-22.9068, -43.1729)
    assert results[0].title == "Rio de Janeiro"


def test_geocoding_blank_address():
    """A blank address is rejected before any request."""
    geocoder = GeocodingClient(httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(500))))
    with pytest.raises(ValueError):
        geocoder.search("   ")
