"""Health check endpoints."""

from fastapi import APIRouter, Request

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check() -> dict:
    """Basic health check endpoint."""
    return {"status": "healthy"}


@router.get("/health/ready")
async def readiness_check(request: Request) -> dict:
    """Readiness check - reports where books and credentials come from."""
    settings = request.app.state.settings
    return {
        "status": "ready",
        "books_api_url": settings.books_api_url,
        "credential_storage": settings.credential_storage,
    }


@router.get("/health/live")
async def liveness_check() -> dict:
    """Liveness check - verifies service is running."""
    return {"status": "alive"}
