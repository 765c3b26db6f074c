"""Health check endpoint — no dependencies, always available."""

from fastapi import APIRouter

from pawtal.config import get_settings

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check() -> dict:
    """Returns the current application health status."""
    settings = get_settings()
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
        "scheduler_enabled": settings.scheduler_enabled,
    }
