# Shared FastAPI dependencies for the API layer.
# Created: 2026-10-19

from __future__ import annotations

from fastapi import Depends

from dirstream.config import Settings, get_settings
from dirstream.listing.paths import PathResolver


def get_path_resolver(settings: Settings = Depends(get_settings)) -> PathResolver:
    """PathResolver for the configured root.

    Tests swap the root by overriding ``get_settings`` in
    ``app.dependency_overrides``.
    """
    return PathResolver(settings.root_dir, resolve_symlinks=settings.resolve_symlinks)
