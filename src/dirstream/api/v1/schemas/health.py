# Health schemas.
# Created: 2026-10-19

from __future__ import annotations

from pydantic import BaseModel


class HealthSummary(BaseModel):
    """Service health and root directory status."""

    status: str = "ok"
    root: str
    root_exists: bool = False
    root_is_dir: bool = False
