"""Navigation guard middleware."""

from typing import Iterable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response
from starlette.types import ASGIApp

from bookshelf.api.deps import get_route_guard

logger = structlog.get_logger(__name__)


class RouteGuardMiddleware(BaseHTTPMiddleware):
    """Runs the route guard before every request that is a navigation.

    Infrastructure paths (health, metrics, docs) are not navigations and
    bypass the guard. An exempt path covers itself and its subpaths only,
    so ``/healthz`` is still guarded when ``/health`` is exempt.
    """

    def __init__(self, app: ASGIApp, exempt_paths: Iterable[str] = ()) -> None:
        super().__init__(app)
        self._exempt_paths = tuple(exempt_paths)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        if any(path == prefix or path.startswith(prefix + "/") for prefix in self._exempt_paths):
            return await call_next(request)

        decision = get_route_guard(request).decide(path)
        if not decision.allowed:
            logger.debug("Navigation redirected", path=path, location=decision.location)
            # 303 so a redirected POST becomes a GET
            return RedirectResponse(decision.location, status_code=303)
        return await call_next(request)
