"""Pytest configuration and fixtures."""

from typing import Any, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from bookshelf.config import Settings
from bookshelf.core.auth import SessionManager, StaticCredentialVerifier
from bookshelf.core.books import LibraryClient
from bookshelf.core.storage import MemoryStorage
from bookshelf.main import create_app

BOOKS_API_URL = "http://books.test/api/books"
API_PREFIX = "/api/books"


def make_books(count: int) -> list[dict]:
    """Book records the way the books API returns them."""
    return [
        {"id": i, "title": f"Book {i}", "author": f"Author {i}", "isbn": f"97800000000{i:02d}"}
        for i in range(1, count + 1)
    ]


class FakeBooksAPI:
    """Scripted stand-in for the remote books API.

    Responses are registered per (method, path) with the path relative to
    the API prefix. Unregistered routes answer 404. An exception registered
    as the response is raised from the transport.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], Any] = {}

    def respond(
        self,
        method: str,
        path: str,
        json: Any = None,
        status_code: int = 200,
        error: Optional[type[Exception]] = None,
    ) -> None:
        self._routes[(method, path)] = error or (status_code, json)

    def fail(self, method: str, path: str) -> None:
        self.respond(method, path, error=httpx.ConnectError)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix(API_PREFIX)
        route = self._routes.get((request.method, path))
        if route is None:
            return httpx.Response(404, json={"detail": "not found"})
        if isinstance(route, type) and issubclass(route, Exception):
            raise route("connection refused", request=request)
        status_code, body = route
        return httpx.Response(status_code, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def storage():
    """Empty in-memory credential storage."""
    return MemoryStorage()


@pytest.fixture
def session_manager(storage):
    """Session manager accepting admin/1234."""
    return SessionManager(storage, StaticCredentialVerifier("admin", "1234"))


@pytest.fixture
def books_api():
    return FakeBooksAPI()


@pytest.fixture
def library(session_manager, books_api):
    """Library client talking to the fake books API."""
    return LibraryClient(
        session_manager,
        base_url=BOOKS_API_URL,
        timeout=5.0,
        search_limit=10,
        transport=books_api.transport,
    )


@pytest.fixture
def test_settings():
    return Settings(
        books_api_url=BOOKS_API_URL,
        credential_storage="memory",
        login_username="admin",
        login_password="1234",
    )


@pytest.fixture
def client(test_settings, storage, books_api):
    """Create a test client for the FastAPI app."""
    app = create_app(settings=test_settings, storage=storage, transport=books_api.transport)
    with TestClient(app) as test_client:
        yield test_client
