"""
Pytest configuration and fixtures for the MindLink API tests.

Provides:
- A fake Instagram upstream served through httpx.MockTransport
- A MetadataService with a fresh cache per test
- A FastAPI TestClient on a throwaway SQLite database
- A registered user and its API key headers
"""

import os
from collections.abc import AsyncGenerator, Generator
from dataclasses import dataclass, field

import httpx
import pytest
import pytest_asyncio

# Must be set before app.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "test")

from fastapi.testclient import TestClient  # noqa: E402

from app.api.deps import get_metadata_service  # noqa: E402
from app.cache import MetadataCache  # noqa: E402
from app.database import configure_engine  # noqa: E402
from app.main import app  # noqa: E402
from app.services.metadata import MetadataService  # noqa: E402


def instagram_page(
    *,
    title: str | None = "Instagram",
    description: str | None = None,
    image: str | None = None,
    site_name: str | None = "Instagram",
) -> str:
    """Minimal Instagram-like page with the requested meta tags."""
    head = []
    if title is not None:
        head.append(f"<title>{title}</title>")
    if site_name is not None:
        head.append(f'<meta property="og:site_name" content="{site_name}" />')
    if description is not None:
        head.append(f'<meta property="og:description" content="{description}" />')
    if image is not None:
        head.append(f'<meta property="og:image" content="{image}" />')
    return "<!DOCTYPE html><html><head>" + "".join(head) + "</head><body></body></html>"


@dataclass
class FakeUpstream:
    """Serves canned pages by exact URL and records every request."""

    pages: dict[str, tuple[int, str]] = field(default_factory=dict)
    requests: list[httpx.Request] = field(default_factory=list)
    error: Exception | None = None

    def add(self, url: str, body: str, status_code: int = 200) -> None:
        self.pages[url] = (status_code, body)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        status_code, body = self.pages.get(str(request.url), (404, "Not Found"))
        return httpx.Response(status_code, text=body)

    @property
    def fetched_urls(self) -> list[str]:
        return [str(r.url) for r in self.requests]


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def metadata_cache() -> MetadataCache:
    return MetadataCache(ttl_seconds=3600)


@pytest_asyncio.fixture
async def metadata_service(
    upstream: FakeUpstream, metadata_cache: MetadataCache
) -> AsyncGenerator[MetadataService, None]:
    async with httpx.AsyncClient(
        transport=httpx.MockTransport(upstream.handle)
    ) as http_client:
        yield MetadataService(http_client, metadata_cache, timeout=5.0)


@pytest.fixture
def client(tmp_path, metadata_service: MetadataService) -> Generator[TestClient, None, None]:
    """TestClient backed by a per-test SQLite file and the fake upstream."""
    configure_engine(f"sqlite+aiosqlite:///{tmp_path / 'mindlink.db'}")
    app.dependency_overrides[get_metadata_service] = lambda: metadata_service
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def register(client: TestClient, email: str) -> dict[str, str]:
    response = client.post("/api/users", json={"email": email})
    assert response.status_code == 201, response.text
    return {"X-API-Key": response.json()["api_key"]}


@pytest.fixture
def auth_headers(client: TestClient) -> dict[str, str]:
    return register(client, "ada@mindlink.app")
