"""Tests for the HTTP endpoints."""

import pytest
import requests
import responses
from fastapi.testclient import TestClient

from config import Settings
from errors import GeocodeError
from main import app
from routers.verify import get_verifier
from services.geocoder import HereGeocoder, get_geocoder
from services.verifier import AddressVerifier
from tests.conftest import SERVICE_KEY
from tests.fakes import FRIEDRICHSTRASSE_ITEM, HAUPTSTRASSE_ITEM, FakeGeocoder

HEADERS = {"X-API-Key": SERVICE_KEY}

BERLIN = {
    "street": "Hauptstraße 10",
    "city": "Berlin",
    "postal_code": "10115",
    "country": "Germany",
}


@pytest.fixture
def use_geocoder():
    """Install a FakeGeocoder behind the verify endpoint."""

    def install(geocoder: FakeGeocoder) -> FakeGeocoder:
        app.dependency_overrides[get_verifier] = lambda: AddressVerifier(geocoder)
        return geocoder

    yield install
    app.dependency_overrides.clear()


@pytest.fixture
def here_backend(here_settings: Settings):
    """Serve every endpoint from a HERE client whose HTTP is mocked."""
    app.dependency_overrides[get_geocoder] = lambda: HereGeocoder(settings=here_settings)
    yield
    app.dependency_overrides.clear()

@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


class TestAuth:
    def test_missing_key(self, client: TestClient) -> None:
        response = client.post("/api/verify", json={"address": BERLIN})
        assert response.status_code == 401

    def test_wrong_key(self, client: TestClient) -> None:
        response = client.post(
            "/api/verify", json={"address": BERLIN}, headers={"X-API-Key": "nope"}
        )
        assert response.status_code == 403


class TestVerifyEndpoint:
    def test_verified(self, client: TestClient, use_geocoder) -> None:
        use_geocoder(FakeGeocoder(items=[HAUPTSTRASSE_ITEM]))

        response = client.post("/api/verify", json={"address": BERLIN}, headers=HEADERS)

        assert response.status_code == 200
        body = response.json()
        assert body["verified"] is True
        assert body["confidence"] == pytest.approx(1.0)
        assert body["geocoded_address"]["country"] == "DE"
        assert body["input_address"] == BERLIN
        assert "suggestions" not in body

    def test_options_are_applied(self, client: TestClient, use_geocoder) -> None:
        use_geocoder(FakeGeocoder(items=[FRIEDRICHSTRASSE_ITEM, HAUPTSTRASSE_ITEM]))

        response = client.post(
            "/api/verify",
            json={"address": BERLIN, "options": {"include_confidence": False}},
            headers=HEADERS,
        )

        body = response.json()
        assert body["verified"] is False
        assert "confidence" not in body
        assert [s["formatted_address"] for s in body["suggestions"]] == [
            HAUPTSTRASSE_ITEM["title"]
        ]

    def test_raw_address_is_parsed(self, client: TestClient, use_geocoder) -> None:
        geocoder = use_geocoder(FakeGeocoder(items=[HAUPTSTRASSE_ITEM]))

        response = client.post(
            "/api/verify",
            json={"raw": "123 Main St, Springfield, IL 62704"},
            headers=HEADERS,
        )

        assert response.status_code == 200
        assert geocoder.calls[0]["query"] == "Main St 123, Springfield, 62704, US"

    def test_empty_body(self, client: TestClient, use_geocoder) -> None:
        use_geocoder(FakeGeocoder(items=[HAUPTSTRASSE_ITEM]))

        response = client.post("/api/verify", json={}, headers=HEADERS)

        assert response.status_code == 400

    def test_missing_field(self, client: TestClient, use_geocoder) -> None:
        geocoder = use_geocoder(FakeGeocoder(items=[HAUPTSTRASSE_ITEM]))
        address = {k: v for k, v in BERLIN.items() if k != "postal_code"}

        response = client.post("/api/verify", json={"address": address}, headers=HEADERS)

        assert response.status_code == 422
        assert response.json()["detail"]["field"] == "postal_code"
        assert geocoder.calls == []

    def test_no_match(self, client: TestClient, use_geocoder) -> None:
        use_geocoder(FakeGeocoder(items=[]))

        response = client.post("/api/verify", json={"address": BERLIN}, headers=HEADERS)

        assert response.status_code == 404
        assert response.json()["detail"]["error"] == "no_match"

    def test_geocode_failure(self, client: TestClient, use_geocoder) -> None:
        use_geocoder(FakeGeocoder(error=GeocodeError("boom", status_code=500)))

        response = client.post("/api/verify", json={"address": BERLIN}, headers=HEADERS)

        assert response.status_code == 502
        assert response.json()["detail"]["error"] == "geocode_failed"

    def test_not_configured(self, client: TestClient, use_geocoder) -> None:
        use_geocoder(FakeGeocoder(configured=False))

        response = client.post("/api/verify", json={"address": BERLIN}, headers=HEADERS)

        assert response.status_code == 503


class TestParseEndpoint:
    def test_parse(self, client: TestClient) -> None:
        response = client.post(
            "/api/parse",
            json={"address": "123 Main St, Springfield, IL 62704"},
            headers=HEADERS,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["address"]["street"] == "Main St"
        assert body["address"]["house_number"] == "123"

    def test_blank(self, client: TestClient) -> None:
        response = client.post("/api/parse", json={"address": "   "}, headers=HEADERS)
        assert response.status_code == 400


class TestHealth:
    def test_healthz(self, client: TestClient) -> None:
        response = client.get("/healthz")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert "geocoder_configured" in response.json()


class TestAutocompleteEndpoint:
    @responses.activate
    def test_returns_items(self, client: TestClient, here_backend) -> None:
        items = [{"title": "Hauptstraße, Berlin, Deutschland", "resultType": "street"}]
        responses.add(responses.GET, HereGeocoder.AUTOCOMPLETE_URL, json={"items": items})

        response = client.post(
            "/api/autocomplete", json={"query": "Hauptstr", "limit": 3}, headers=HEADERS
        )

        assert response.status_code == 200
        assert response.json() == {"items": items}
        assert "limit=3" in responses.calls[0].request.url

    def test_blank_query(self, client: TestClient, here_backend) -> None:
        response = client.post("/api/autocomplete", json={"query": "  "}, headers=HEADERS)
        assert response.status_code == 400

    def test_requires_key(self, client: TestClient) -> None:
        response = client.post("/api/autocomplete", json={"query": "Hauptstr"})
        assert response.status_code == 401

    @responses.activate
    def test_provider_error(self, client: TestClient, here_backend) -> None:
        responses.add(
            responses.GET,
            HereGeocoder.AUTOCOMPLETE_URL,
            json={"error_description": "Unauthorized"},
            status=401,
        )

        response = client.post(
            "/api/autocomplete", json={"query": "Hauptstr"}, headers=HEADERS
        )

        assert response.status_code == 502
        assert response.json()["detail"]["error"] == "geocode_failed"

    def test_not_configured(self, client: TestClient) -> None:
        app.dependency_overrides[get_geocoder] = lambda: HereGeocoder(
            settings=Settings(here_api_key="", _env_file=None)
        )
        try:
            response = client.post(
                "/api/autocomplete", json={"query": "Hauptstr"}, headers=HEADERS
            )
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 503


class TestReverseEndpoint:
    @responses.activate
    def test_returns_components(self, client: TestClient, here_backend) -> None:
        responses.add(
            responses.GET,
            HereGeocoder.REVERSE_GEOCODE_URL,
            json={"items": [HAUPTSTRASSE_ITEM]},
        )

        response = client.post(
            "/api/reverse", json={"latitude": 52.53, "longitude": 13.38}, headers=HEADERS
        )

        assert response.status_code == 200
        result = response.json()["results"][0]
        assert result["formatted_address"] == HAUPTSTRASSE_ITEM["title"]
        assert result["address"]["country"] == "DE"
        assert result["address"]["house_number"] == "10"

    def test_null_island(self, client: TestClient, here_backend) -> None:
        response = client.post(
            "/api/reverse", json={"latitude": 0, "longitude": 0}, headers=HEADERS
        )
        assert response.status_code == 400

    def test_out_of_range(self, client: TestClient, here_backend) -> None:
        response = client.post(
            "/api/reverse", json={"latitude": 91, "longitude": 13.38}, headers=HEADERS
        )
        assert response.status_code == 422

    @responses.activate
    def test_provider_timeout(self, client: TestClient, here_backend) -> None:
        responses.add(
            responses.GET,
            HereGeocoder.REVERSE_GEOCODE_URL,
            body=requests.exceptions.Timeout("read timed out"),
        )

        response = client.post(
            "/api/reverse", json={"latitude": 52.53, "longitude": 13.38}, headers=HEADERS
        )

        assert response.status_code == 502


class TestHereConnections:
    @responses.activate
    def test_every_session_is_closed(
        self, client: TestClient, here_backend, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        created: list[requests.Session] = []
        closed: list[requests.Session] = []
        base = requests.sessions.Session

        class TrackingSession(base):
            def __init__(self, *args, **kwargs) -> None:
                super().__init__(*args, **kwargs)
                created.append(self)

            def close(self) -> None:
                closed.append(self)
                super().close()

        monkeypatch.setattr(requests, "Session", TrackingSession)
        monkeypatch.setattr(requests.sessions, "Session", TrackingSession)
        responses.add(
            responses.GET, HereGeocoder.GEOCODE_URL, json={"items": [HAUPTSTRASSE_ITEM]}
        )

        for _ in range(3):
            response = client.post("/api/verify", json={"address": BERLIN}, headers=HEADERS)
            assert response.status_code == 200
        for _ in range(2):
            assert client.get("/healthz").status_code == 200

        assert len(responses.calls) == 3
        assert len(closed) == len(created)
