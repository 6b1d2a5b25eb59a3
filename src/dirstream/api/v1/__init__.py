# API v1 router aggregation.
# Created: 2026-10-19
#
# mount_v1_routers(app) registers all routers at /api/v1/ (canonical) and again
# at /api/ for clients that call the unversioned paths.

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fastapi import FastAPI

logger = logging.getLogger(__name__)

# Imported lazily inside mount_v1_routers() to keep app construction cheap.
_V1_ROUTERS: list[tuple[str, str, str]] = [
    # (module_path, attr_name, tag)
    ("dirstream.api.v1.files", "router", "Files"),
    ("dirstream.api.v1.health", "router", "Health"),
]

_ALIAS_PREFIX = "/api"
_V1_PREFIX = "/api/v1"


def mount_v1_routers(app: FastAPI) -> None:
    """Mount all v1 routers on *app*.

    Each router is mounted at ``/api/v1/<path>`` and aliased at
    ``/api/<path>``; the alias is left out of the OpenAPI document.
    """
    import importlib

    from fastapi import APIRouter

    for module_path, attr_name, tag in _V1_ROUTERS:
        mod = importlib.import_module(module_path)
        router: APIRouter = getattr(mod, attr_name)

        app.include_router(router, prefix=_V1_PREFIX)
        app.include_router(router, prefix=_ALIAS_PREFIX, include_in_schema=False)

        logger.debug("Mounted v1 router: %s (%s)", module_path, tag)
