"""Book search and personal library endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query

from bookshelf.api.deps import get_library_client
from bookshelf.api.schemas.books import Book, LibraryResponse, MutationResponse, SearchResponse
from bookshelf.core.books.library import REQUEST_FAULTS, LibraryClient

router = APIRouter(tags=["Books"])

LibraryDep = Annotated[LibraryClient, Depends(get_library_client)]


def _library_view(library: LibraryClient) -> LibraryResponse:
    return LibraryResponse(
        books=library.my_library,
        error_message=library.error_message,
        is_loading=library.is_loading,
    )


# --- Search ---


@router.get("/search", response_model=SearchResponse)
async def search_books(
    library: LibraryDep,
    q: str = Query(..., min_length=1, description="Search query"),
) -> SearchResponse:
    """Search the books API. Errors are reported in the body, not as a status."""
    await library.search_books(q)
    return SearchResponse(
        query=q,
        results=library.search_results,
        error_message=library.error_message,
        is_loading=library.is_loading,
    )


# --- My library ---


@router.get("/my-library", response_model=LibraryResponse)
async def get_my_library(library: LibraryDep) -> LibraryResponse:
    """Fetch and return the user's library."""
    await library.fetch_my_library()
    return _library_view(library)


@router.post("/my-library", response_model=MutationResponse, status_code=201)
async def save_book(book: Book, library: LibraryDep) -> MutationResponse:
    """Add a book to the user's library."""
    try:
        await library.save_book(book)
    except REQUEST_FAULTS:
        raise HTTPException(status_code=502, detail=library.error_message)
    return MutationResponse(status="saved", book_id=book.id)


@router.put("/my-library/{book_id}", response_model=MutationResponse)
async def update_book(book_id: str, book: Book, library: LibraryDep) -> MutationResponse:
    """Replace a book in the user's library."""
    try:
        await library.update_book(book_id, book)
    except REQUEST_FAULTS:
        raise HTTPException(status_code=502, detail=library.error_message)
    return MutationResponse(status="updated", book_id=book_id)


@router.delete("/my-library/{book_id}", response_model=MutationResponse)
async def delete_book(book_id: str, library: LibraryDep) -> MutationResponse:
    """Remove a book from the user's library."""
    try:
        await library.delete_book(book_id)
    except REQUEST_FAULTS:
        raise HTTPException(status_code=502, detail=library.error_message)
    return MutationResponse(status="deleted", book_id=book_id)
