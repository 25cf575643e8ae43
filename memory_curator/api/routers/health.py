"""Health endpoint."""

from fastapi import APIRouter, Depends

from memory_curator.api.dependencies import get_settings_dependency
from memory_curator.api.models import HealthResponse
from memory_curator.config.settings import Settings

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(
    settings: Settings = Depends(get_settings_dependency),  # noqa: B008
) -> dict[str, str]:
    """Liveness probe."""
    return {"status": "healthy", "version": settings.app_version}
