"""Client for book search and the personal library on the remote books API."""

from typing import Any, Optional, Union
from urllib.parse import quote

import httpx
import structlog
from pydantic import TypeAdapter

from bookshelf.api.schemas.books import Book
from bookshelf.config import get_settings
from bookshelf.core.auth.session import SessionManager

logger = structlog.get_logger(__name__)

SEARCH_ERROR = "Error searching books"
LIBRARY_ERROR = "Error loading library"
SAVE_ERROR = "Error saving book"
UPDATE_ERROR = "Error updating book"
DELETE_ERROR = "Error deleting book"

# Faults a single round trip can produce: transport/status errors and
# bodies that are not JSON or not a list of objects (ValidationError is a ValueError)
REQUEST_FAULTS = (httpx.HTTPError, ValueError)

_book_list = TypeAdapter(list[Book])

BookId = Union[int, str]


def _parse_books(data: Any) -> list[Book]:
    return _book_list.validate_python(data)


def _book_payload(book: Union[Book, dict]) -> dict:
    if isinstance(book, Book):
        return book.model_dump(mode="json", exclude_unset=True)
    return dict(book)


class LibraryClient:
    """Book state backed by the remote books API.

    Holds the last search results, the last searches and the user's library.
    Every call is one HTTP round trip authorized with the session token; the
    client keeps no local copy that mutations would update, so callers
    refetch after save/update/delete.

    Overlapping reads of the same field resolve as last-issued-wins: a
    response that arrives after a newer request for the same field was
    started is dropped.
    """

    def __init__(
        self,
        session: SessionManager,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        search_limit: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        # Settings only fill in what the caller left out
        if base_url is None or timeout is None or search_limit is None:
            settings = get_settings()
            base_url = base_url if base_url is not None else settings.books_api_url
            timeout = timeout if timeout is not None else settings.request_timeout
            search_limit = search_limit if search_limit is not None else settings.search_result_limit

        self._session = session
        self._search_limit = search_limit
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

        self.last_searches: list[Book] = []
        self.my_library: list[Book] = []
        self.search_results: list[Book] = []
        self.error_message: Optional[str] = None

        self._in_flight = 0
        self._sequence = 0
        self._latest: dict[str, int] = {}

    @property
    def is_loading(self) -> bool:
        return self._in_flight > 0

    def _issue(self, field: str) -> int:
        self._sequence += 1
        self._latest[field] = self._sequence
        return self._sequence

    def _is_current(self, field: str, ticket: int) -> bool:
        return self._latest.get(field) == ticket

    def _auth_header(self) -> dict[str, str]:
        # Sent even without a token; the books API decides what to reject
        return {"Authorization": f"Basic {self._session.token or ''}"}

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        response = await self._client.request(method, path, headers=self._auth_header(), **kwargs)
        response.raise_for_status()
        return response

    async def fetch_last_searches(self) -> None:
        """Refresh ``last_searches``. Failures are logged and otherwise ignored."""
        ticket = self._issue("last_searches")
        try:
            response = await self._request("GET", "/last-search")
            books = _parse_books(response.json())
        except REQUEST_FAULTS as e:
            logger.error("Failed to fetch last searches", error=str(e))
            return

        if self._is_current("last_searches", ticket):
            self.last_searches = books

    async def search_books(self, query: str) -> None:
        """
        Search the books API and keep the first results.

        A response object carrying ``message`` is the API refusing the
        search: the message becomes ``error_message`` and results are
        cleared. Otherwise ``search_results`` holds at most
        ``search_limit`` books, whatever total the API reports.
        """
        ticket = self._issue("search_results")
        self._in_flight += 1
        self.error_message = None
        try:
            response = await self._request("GET", "/search", params={"q": query})
            data = response.json()

            if isinstance(data, dict) and data.get("message"):
                if self._is_current("search_results", ticket):
                    self.error_message = str(data["message"])
                    self.search_results = []
                logger.info("Search rejected by books API", query=query, message=data["message"])
                return

            books = _parse_books(data)[: self._search_limit]
            if self._is_current("search_results", ticket):
                self.search_results = books
                logger.info("Book search completed", query=query, results=len(books))
            else:
                logger.debug("Discarding stale search response", query=query)

        except REQUEST_FAULTS as e:
            logger.error("Book search failed", query=query, error=str(e))
            if self._is_current("search_results", ticket):
                self.error_message = SEARCH_ERROR
        finally:
            self._in_flight -= 1

    async def fetch_my_library(self) -> None:
        """Replace ``my_library`` with the user's library from the books API."""
        ticket = self._issue("my_library")
        self._in_flight += 1
        self.error_message = None
        try:
            response = await self._request("GET", "/my-library")
            books = _parse_books(response.json())
            if self._is_current("my_library", ticket):
                self.my_library = books
        except REQUEST_FAULTS as e:
            logger.error("Failed to load library", error=str(e))
            if self._is_current("my_library", ticket):
                self.error_message = LIBRARY_ERROR
        finally:
            self._in_flight -= 1

    async def _mutate(self, method: str, path: str, error_message: str, **kwargs: Any) -> None:
        self._in_flight += 1
        self.error_message = None
        try:
            await self._request(method, path, **kwargs)
        except REQUEST_FAULTS as e:
            logger.error("Library update failed", method=method, path=path, error=str(e))
            self.error_message = error_message
            raise
        finally:
            self._in_flight -= 1

    async def save_book(self, book: Union[Book, dict]) -> None:
        """Add a book to the user's library. Re-raises the fault on failure."""
        await self._mutate("POST", "/my-library", SAVE_ERROR, json=_book_payload(book))

    async def update_book(self, book_id: BookId, book: Union[Book, dict]) -> None:
        """Replace a library book by id. Re-raises the fault on failure."""
        path = f"/my-library/{quote(str(book_id), safe='')}"
        await self._mutate("PUT", path, UPDATE_ERROR, json=_book_payload(book))

    async def delete_book(self, book_id: BookId) -> None:
        """Remove a library book by id. Re-raises the fault on failure."""
        path = f"/my-library/{quote(str(book_id), safe='')}"
        await self._mutate("DELETE", path, DELETE_ERROR)

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "LibraryClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
