# Directory listing schemas.
# Created: 2026-10-19

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, Field


class FileEntry(BaseModel):
    """One NDJSON line of a directory listing."""

    name: str
    path: str = Field(description="Root-relative path, always starting with '/'.")
    size: Annotated[int, Field(ge=0)] | None = Field(description="Bytes; null for directories.")
    isDirectory: bool
    created: int = Field(description="Creation time in epoch ms (falls back to modified).")
    modified: int = Field(description="Modification time in epoch ms.")
    permissions: str = Field(
        min_length=11,
        description="Octal mode digits zero-padded to 11 characters.",
    )
    extension: str | None = Field(
        description="Text after the last '.', 'file' when there is none; null for directories."
    )
    type: Literal["file", "directory"]
