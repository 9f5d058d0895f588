"""Tests for the mock language detection server."""
import pytest
from fastapi.testclient import TestClient

from caption_validator.config import settings
from caption_validator.mock_server import create_app


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app("es-ES"))


def test_detect_answers_configured_language(client: TestClient) -> None:
    response = client.post(
        "/detect",
        content="Hola mundo".encode("utf-8"),
        headers={"Content-Type": "text/plain; charset=utf-8"},
    )

    assert response.status_code == 200
    assert response.json() == {"lang": "es-ES"}


def test_detect_accepts_empty_body(client: TestClient) -> None:
    response = client.post("/detect", content=b"")

    assert response.status_code == 200
    assert response.json() == {"lang": "es-ES"}


def test_detect_rejects_get(client: TestClient) -> None:
    assert client.get("/detect").status_code == 405


def test_health(client: TestClient) -> None:
    response = client.get("/health")

    assert response.json() == {"status": "ok", "language": "es-ES"}


def test_default_language_comes_from_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "MOCK_LANGUAGE", "fr-FR")

    response = TestClient(create_app()).post("/detect", content=b"Bonjour")

    assert response.json() == {"lang": "fr-FR"}
