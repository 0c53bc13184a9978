"""Health check endpoint — answers even before the sync core is wired."""

from fastapi import APIRouter, Request

from care_sync.config import get_settings

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(request: Request) -> dict:
    """Returns the application status and how many record scopes are cached."""
    settings = get_settings()
    container = getattr(request.app.state, "container", None)
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
        "sync_ready": container is not None,
        "cached_scopes": len(container.store.scopes()) if container is not None else 0,
    }
