"""Tests for the application-wide error handlers."""

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_current_user
from app.config import settings
from app.database import configure_engine
from app.errors import MissingParameterError
from app.main import app


def failing_user():
    raise RuntimeError("boom")


@pytest.fixture
def failing_client(tmp_path):
    """TestClient whose every authenticated route raises an unexpected error."""
    configure_engine(f"sqlite+aiosqlite:///{tmp_path / 'mindlink.db'}")
    app.dependency_overrides[get_current_user] = failing_user
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.mark.unit
class TestUnhandledErrors:
    def test_generic_body(self, failing_client, monkeypatch):
        monkeypatch.setattr(settings, "environment", "production")

        response = failing_client.get("/api/links")

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error", "message": "boom"}

    def test_stack_only_in_development(self, failing_client, monkeypatch):
        monkeypatch.setattr(settings, "environment", "development")

        response = failing_client.get("/api/links")

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Internal server error"
        assert body["message"] == "boom"
        assert "RuntimeError: boom" in body["stack"]


@pytest.mark.unit
class TestMissingParameterError:
    def test_default_message(self):
        assert str(MissingParameterError("url")) == "Missing required parameter: url"

    def test_explicit_message(self):
        error = MissingParameterError("url", "URL parameter is required")
        assert str(error) == "URL parameter is required"
        assert error.name == "url"
