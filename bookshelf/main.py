"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import Optional

import httpx
import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CollectorRegistry
from prometheus_fastapi_instrumentator import Instrumentator

from bookshelf.api.middleware import RouteGuardMiddleware
from bookshelf.api.routes import auth_router, books_router, health_router
from bookshelf.config import Settings, get_settings
from bookshelf.core.auth import SessionManager, StaticCredentialVerifier
from bookshelf.core.books import LibraryClient
from bookshelf.core.guard import RouteGuard
from bookshelf.core.storage import KeyValueStorage, create_storage
from bookshelf.utils.logging import setup_logging

logger = structlog.get_logger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    storage: Optional[KeyValueStorage] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Build the application and the components it serves.

    Args:
        settings: Settings to use instead of the environment
        storage: Credential storage instead of the configured backend
        transport: httpx transport for the books API (tests use a mock)
    """
    settings = settings or get_settings()
    storage = storage or create_storage(settings)

    session_manager = SessionManager(
        storage=storage,
        verifier=StaticCredentialVerifier(settings.login_username, settings.login_password),
        credential_key=settings.credential_key,
    )
    library_client = LibraryClient(
        session_manager,
        base_url=settings.books_api_url,
        timeout=settings.request_timeout,
        search_limit=settings.search_result_limit,
        transport=transport,
    )
    route_guard = RouteGuard(
        session_manager,
        public_paths=settings.public_paths,
        login_path=settings.login_path,
        home_path=settings.home_path,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler for startup and shutdown."""
        setup_logging(debug=settings.debug)
        session_manager.load_credential()
        logger.info(
            "Bookshelf client started",
            books_api_url=settings.books_api_url,
            authenticated=session_manager.is_authenticated,
        )
        yield
        await library_client.close()
        storage.close()

    app = FastAPI(
        title=settings.app_name,
        description="Session, book search and personal library client for the books API",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    app.state.settings = settings
    app.state.session_manager = session_manager
    app.state.library_client = library_client
    app.state.route_guard = route_guard

    # Added first so CORS wraps it and preflight requests skip the guard
    app.add_middleware(RouteGuardMiddleware, exempt_paths=settings.guard_exempt_paths)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Prometheus metrics, one registry per app instance
    Instrumentator(registry=CollectorRegistry()).instrument(app).expose(app, endpoint="/metrics")

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(books_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "bookshelf.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        workers=settings.workers,
    )
