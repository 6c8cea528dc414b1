"""Book and library state schemas."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class Book(BaseModel):
    """A book record as returned by the remote books API.

    The API owns the schema, so field values are taken as they come: an
    author may be a list, a year may be free text. Unknown fields are kept so
    they survive a save/update round trip.
    """

    model_config = ConfigDict(extra="allow")

    id: Optional[Any] = Field(default=None, description="Identifier assigned by the books API")
    title: Optional[Any] = Field(default=None, description="Book title")
    author: Optional[Any] = Field(default=None, description="Book author")
    isbn: Optional[Any] = Field(default=None, description="ISBN-10 or ISBN-13")
    cover_url: Optional[Any] = Field(default=None, description="Cover image URL")
    published_year: Optional[Any] = Field(default=None, description="Year of first publication")


class SearchResponse(BaseModel):
    """Outcome of a book search."""
    query: str
    results: list[Book] = Field(default_factory=list)
    error_message: Optional[str] = None
    is_loading: bool = False


class LibraryResponse(BaseModel):
    """The user's library as last fetched."""
    books: list[Book] = Field(default_factory=list)
    error_message: Optional[str] = None
    is_loading: bool = False


class MutationResponse(BaseModel):
    """Result of a save, update or delete on the library."""
    status: str
    book_id: Optional[Any] = None
