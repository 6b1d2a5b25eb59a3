# Health router: liveness plus root directory status.
# Created: 2026-10-19

from __future__ import annotations

from fastapi import APIRouter, Depends

from dirstream.api.v1.schemas.health import HealthSummary
from dirstream.config import Settings, get_settings

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthSummary)
async def get_health_status(settings: Settings = Depends(get_settings)):
    """Report whether the configured root is usable."""
    root = settings.root_dir
    exists = root.exists()
    is_dir = root.is_dir()
    return HealthSummary(
        status="ok" if is_dir else "degraded",
        root=str(root),
        root_exists=exists,
        root_is_dir=is_dir,
    )
