# Per-entry metadata resolution.
# Created: 2026-10-19

from __future__ import annotations

import asyncio
import logging
import os
import time
from collections.abc import Callable
from dataclasses import dataclass

from dirstream.listing.enumerator import RawEntry

logger = logging.getLogger(__name__)

# Mode reported for directories, which are never stat'ed.
DIRECTORY_MODE = 0o755

_NS_PER_MS = 1_000_000


@dataclass(frozen=True, slots=True)
class ResolvedEntry:
    """Normalized metadata for one entry, ready to encode."""

    name: str
    full_path: str
    is_dir: bool
    size: int | None
    created_ms: int
    modified_ms: int
    mode: int


def _birthtime_ms(st: os.stat_result) -> int:
    """Creation time in ms, or 0 where the platform does not record one."""
    birth_ns = getattr(st, "st_birthtime_ns", None)
    if birth_ns:
        return birth_ns // _NS_PER_MS
    birth = getattr(st, "st_birthtime", None)
    if birth:
        return int(birth * 1000)
    return 0


class MetadataResolver:
    """Turns RawEntry values from one parent directory into ResolvedEntry.

    Directories get synthesized metadata without a stat call. Files are
    stat'ed in a worker thread; an entry that cannot be stat'ed (usually
    removed after it was enumerated) is logged and resolved to ``None`` so
    the caller can drop it.
    """

    def __init__(
        self,
        parent: str,
        *,
        stat: Callable[[str], os.stat_result] = os.stat,
        clock_ns: Callable[[], int] = time.time_ns,
    ):
        self.parent = parent
        self._stat = stat
        self._clock_ns = clock_ns

    async def resolve(self, raw: RawEntry) -> ResolvedEntry | None:
        full_path = os.path.join(self.parent, raw.name)

        if raw.is_dir:
            now_ms = self._clock_ns() // _NS_PER_MS
            return ResolvedEntry(
                name=raw.name,
                full_path=full_path,
                is_dir=True,
                size=None,
                created_ms=now_ms,
                modified_ms=now_ms,
                mode=DIRECTORY_MODE,
            )

        try:
            st = await asyncio.to_thread(self._stat, full_path)
        except OSError as e:
            logger.warning("Could not stat file %s: %s", full_path, e)
            return None

        modified_ms = st.st_mtime_ns // _NS_PER_MS
        return ResolvedEntry(
            name=raw.name,
            full_path=full_path,
            is_dir=False,
            size=st.st_size,
            created_ms=_birthtime_ms(st) or modified_ms,
            modified_ms=modified_ms,
            mode=st.st_mode,
        )
