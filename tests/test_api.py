import pytest
from fastapi.testclient import TestClient

from conftest import element
from listy.api.app import app
from listy.api.routes import get_provider
from listy.providers.overpass import normalize_elements

HEADERS = {"X-API-Key": "test-key"}


class StaticProvider:
    provider_name = "static"

    def __init__(self, elements):
        self.elements = elements
        self.calls = 0

    async def fetch_nearby(self, origin, radius_m):
        self.calls += 1
        return normalize_elements(self.elements)


@pytest.fixture
def provider():
    return StaticProvider(
        [
            element(1, name="El Cardenal", amenity="restaurant"),
            element(2, amenity="cafe"),
            element(3, name="Café Río", amenity="cafe", cuisine="coffee_shop"),
        ]
    )


@pytest.fixture
def client(monkeypatch, provider):
    monkeypatch.setenv("LISTY_API_KEY", "test-key")
    app.dependency_overrides[get_provider] = lambda: provider
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def test_requires_api_key(client):
    resp = client.post("/v1/sessions", json={"position": {"latitude": 19.4326, "longitude": -99.1332}})
    assert resp.status_code == 401


def test_create_select_and_close_session(client):
    resp = client.post(
        "/v1/sessions",
        json={"position": {"latitude": 19.4326, "longitude": -99.1332}},
        headers=HEADERS,
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"]["label"] == "2 encontrados"
    assert [p["id"] for p in body["places"]] == ["1", "3"]
    assert body["map_state"]["marker_ids"] == ["1", "3"]
    assert body["list_state"]["row_ids"] == ["1", "3"]
    assert body["map_state"]["center"] == [19.4326, -99.1332]
    assert body["map_state"]["zoom"] == 15
    assert body["map_state"]["user_position"] == [19.4326, -99.1332]
    session_id = body["session_id"]

    resp = client.post(f"/v1/sessions/{session_id}/select", json={"place_id": "3"}, headers=HEADERS)
    body = resp.json()
    assert body["selected_id"] == "3"
    assert body["map_state"]["open_detail_id"] == "3"
    assert body["map_state"]["zoom"] == 17
    assert body["list_state"]["highlighted_id"] == "3"
    assert [p["selected"] for p in body["places"]] == [False, True]

    resp = client.post(f"/v1/sessions/{session_id}/select", json={"place_id": "999"}, headers=HEADERS)
    assert resp.json()["selected_id"] == "3"

    assert client.delete(f"/v1/sessions/{session_id}", headers=HEADERS).status_code == 204
    assert client.get(f"/v1/sessions/{session_id}", headers=HEADERS).status_code == 404


def test_retry_reuses_cached_result(client, provider):
    body = client.post(
        "/v1/sessions",
        json={"position": {"latitude": 19.4326, "longitude": -99.1332}},
        headers=HEADERS,
    ).json()
    body = client.post(f"/v1/sessions/{body['session_id']}/retry", headers=HEADERS).json()
    assert body["cache_hit"] is True
    assert provider.calls == 1


def test_reported_denial_is_classified(client, provider):
    resp = client.post(
        "/v1/sessions",
        json={"error": {"code": 1, "message": "User denied Geolocation", "permission_state": "denied"}},
        headers=HEADERS,
    )
    body = resp.json()
    assert body["geo_error"]["category"] == "PermissionHardBlocked"
    assert body["location"] is None
    assert body["places"] == []
    assert provider.calls == 0
    assert body["status"]["state"] == "unavailable"
    assert body["status"]["retry_available"] is False


def test_reported_unsupported(client):
    body = client.post("/v1/sessions", json={"error": {"code": None}}, headers=HEADERS).json()
    assert body["geo_error"]["category"] == "Unsupported"


def test_position_and_error_are_exclusive(client):
    resp = client.post(
        "/v1/sessions",
        json={"position": {"latitude": 1.0, "longitude": 1.0}, "error": {"code": 2}},
        headers=HEADERS,
    )
    assert resp.status_code == 422


def test_unknown_session_is_404(client):
    assert client.post("/v1/sessions/nope/retry", headers=HEADERS).status_code == 404
