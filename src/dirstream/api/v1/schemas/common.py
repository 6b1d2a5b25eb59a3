# Common API response schemas.
# Created: 2026-10-19

from __future__ import annotations

from pydantic import BaseModel


class APIResponse(BaseModel):
    """Base response wrapper."""

    model_config = {"from_attributes": True}


class ErrorResponse(APIResponse):
    """Error body sent before any streaming starts."""

    detail: str
