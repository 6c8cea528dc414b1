"""Request dependencies resolving the components built by the app factory."""

from fastapi import Request

from bookshelf.core.auth.session import SessionManager
from bookshelf.core.books.library import LibraryClient
from bookshelf.core.guard import RouteGuard


def get_session_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


def get_library_client(request: Request) -> LibraryClient:
    return request.app.state.library_client


def get_route_guard(request: Request) -> RouteGuard:
    return request.app.state.route_guard
