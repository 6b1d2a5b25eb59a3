# Files router: streamed NDJSON directory listing.
# Created: 2026-10-19
#
# Both error responses below are decided before the first byte is sent. Once
# the stream starts, failures end the connection instead.

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from dirstream.api.deps import get_path_resolver
from dirstream.api.v1.schemas.common import ErrorResponse
from dirstream.api.v1.schemas.files import FileEntry
from dirstream.config import Settings, get_settings
from dirstream.errors import DirectoryOpenFailure, ForbiddenPath
from dirstream.listing.enumerator import DirectoryEnumerator
from dirstream.listing.paths import PathResolver
from dirstream.listing.pipeline import DirectoryListing
from dirstream.listing.response import NDJSON_MEDIA_TYPE, NDJSONStreamResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Files"])


@router.get(
    "/files",
    responses={
        200: {
            "description": "One JSON object per line, one line per entry.",
            "content": {NDJSON_MEDIA_TYPE: {"schema": FileEntry.model_json_schema()}},
        },
        403: {"model": ErrorResponse, "description": "Path outside the root."},
        500: {"model": ErrorResponse, "description": "Directory could not be opened."},
    },
)
async def list_files(
    path: str = "",
    resolver: PathResolver = Depends(get_path_resolver),
    settings: Settings = Depends(get_settings),
):
    """Stream the entries of one directory under the root as NDJSON."""
    try:
        target = resolver.resolve(path)
    except ForbiddenPath:
        logger.warning("Rejected path outside root: %r", path)
        raise HTTPException(status_code=403, detail="Forbidden")

    try:
        enumerator = await DirectoryEnumerator.open(target)
    except DirectoryOpenFailure as e:
        logger.error("Failed to read directory %s: %s", target, e.cause)
        raise HTTPException(status_code=500, detail="Failed to read directory")

    listing = DirectoryListing(resolver.root, enumerator)
    return NDJSONStreamResponse(
        listing,
        high_water_mark=settings.stream_high_water_mark,
        label=path or "/",
    )
