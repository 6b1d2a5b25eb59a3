# Root containment for client-supplied paths.
# Created: 2026-10-19

from __future__ import annotations

import os
from pathlib import Path

from dirstream.errors import ForbiddenPath


def is_within(root: str, candidate: str) -> bool:
    """True if *candidate* is *root* or lies below it.

    Compares on a separator boundary, so ``/data`` does not contain
    ``/data-other``.
    """
    if candidate == root:
        return True
    prefix = root if root.endswith(os.sep) else root + os.sep
    return candidate.startswith(prefix)


class PathResolver:
    """Maps request paths onto absolute paths inside a fixed root.

    The request path is always treated as relative to the root, so
    ``/photos`` and ``photos`` name the same directory. ``.`` and ``..``
    are collapsed lexically before the containment check; nothing on disk
    is touched unless ``resolve_symlinks`` is set, in which case the
    accepted path is checked a second time with symlinks resolved.
    """

    def __init__(self, root: str | Path, *, resolve_symlinks: bool = False):
        self.root = os.path.abspath(root)
        self.resolve_symlinks = resolve_symlinks

    def resolve(self, request_path: str | None) -> str:
        """Return the absolute path for *request_path* or raise ForbiddenPath."""
        raw = request_path or ""
        if "\x00" in raw:
            raise ForbiddenPath(raw)

        relative = raw.lstrip("/" + (os.altsep or ""))
        candidate = os.path.normpath(os.path.join(self.root, relative))

        if not is_within(self.root, candidate):
            raise ForbiddenPath(raw)

        if self.resolve_symlinks:
            real_root = os.path.realpath(self.root)
            if not is_within(real_root, os.path.realpath(candidate)):
                raise ForbiddenPath(raw)

        return candidate
