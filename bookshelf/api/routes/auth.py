"""Login, logout and landing views."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from bookshelf.api.deps import get_library_client, get_session_manager
from bookshelf.api.schemas.auth import HomeResponse, LoginRequest, SessionResponse
from bookshelf.core.auth.session import SessionManager
from bookshelf.core.books.library import LibraryClient

router = APIRouter(tags=["Auth"])


def _session_view(manager: SessionManager) -> SessionResponse:
    return SessionResponse(
        authenticated=manager.is_authenticated,
        status_message=manager.status_message,
    )


@router.get("/login", response_model=SessionResponse)
async def login_page(
    manager: Annotated[SessionManager, Depends(get_session_manager)],
) -> SessionResponse:
    """Current session state for the login form."""
    return _session_view(manager)


@router.post("/login", response_model=SessionResponse)
async def login(
    request: LoginRequest,
    manager: Annotated[SessionManager, Depends(get_session_manager)],
) -> SessionResponse:
    """Log in with a username/password pair."""
    if not manager.login(request.username, request.password):
        raise HTTPException(status_code=401, detail=manager.status_message)
    return _session_view(manager)


@router.post("/logout", response_model=SessionResponse)
async def logout(
    manager: Annotated[SessionManager, Depends(get_session_manager)],
) -> SessionResponse:
    """Drop the credential token."""
    manager.logout()
    return _session_view(manager)


@router.get("/", response_model=HomeResponse)
async def home(
    manager: Annotated[SessionManager, Depends(get_session_manager)],
    library: Annotated[LibraryClient, Depends(get_library_client)],
) -> HomeResponse:
    """Landing view. Refreshes the last searches on every visit."""
    await library.fetch_last_searches()
    return HomeResponse(
        session=_session_view(manager),
        last_searches=library.last_searches,
    )
