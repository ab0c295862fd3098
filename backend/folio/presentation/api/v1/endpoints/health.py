"""Health check endpoint — reports the backends resolved at startup."""

from fastapi import APIRouter, Depends

from folio.config import Settings
from folio.infrastructure.dependencies import Container, get_app_settings, get_container

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(
    settings: Settings = Depends(get_app_settings),
    container: Container = Depends(get_container),
) -> dict:
    """Returns the current application health status."""
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
        "backends": container.registry.keys(),
    }
