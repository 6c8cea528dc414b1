"""API schemas."""

from bookshelf.api.schemas.auth import HomeResponse, LoginRequest, SessionResponse
from bookshelf.api.schemas.books import Book, LibraryResponse, MutationResponse, SearchResponse

__all__ = [
    "Book",
    "HomeResponse",
    "LibraryResponse",
    "LoginRequest",
    "MutationResponse",
    "SearchResponse",
    "SessionResponse",
]
