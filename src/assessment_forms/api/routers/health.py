"""Health check endpoint used by the gateway and container probes."""

from datetime import datetime

from fastapi import APIRouter, status

from ..deps import SettingsDep

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", status_code=status.HTTP_200_OK)
async def health_check(settings: SettingsDep):
    """Report service liveness and the configured storage backend."""
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
        "environment": settings.app_env,
        "storage": settings.storage_backend,
        "timestamp": datetime.utcnow().isoformat(),
    }
