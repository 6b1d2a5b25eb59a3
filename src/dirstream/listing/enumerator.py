# Lazy, single-pass directory enumeration over one scandir handle.
# Created: 2026-10-19

from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass

from dirstream.errors import DirectoryOpenFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RawEntry:
    """A directory entry as the OS reported it."""

    name: str
    is_dir: bool


class DirectoryEnumerator:
    """Async iterator of RawEntry backed by a single ``os.scandir`` handle.

    Entries come out in the order the OS returns them. Reads run in a worker
    thread one at a time. The handle is closed when iteration is exhausted
    or ``aclose()`` is called, whichever comes first.

    Usage::

        async with await DirectoryEnumerator.open(path) as entries:
            async for raw in entries:
                ...
    """

    def __init__(self, path: str, handle):
        self.path = path
        self._handle = handle
        self._pending: asyncio.Future | None = None
        self._closed = False

    @classmethod
    async def open(cls, path: str) -> DirectoryEnumerator:
        """Open *path* for enumeration or raise DirectoryOpenFailure."""
        try:
            handle = await asyncio.to_thread(os.scandir, path)
        except OSError as e:
            raise DirectoryOpenFailure(path, e) from e
        logger.debug("Opened directory %s", path)
        return cls(path, handle)

    @property
    def closed(self) -> bool:
        return self._closed

    def _read_next(self) -> RawEntry | None:
        # Runs in a worker thread. StopIteration cannot travel through a
        # future, so exhaustion is reported as None.
        try:
            entry = next(self._handle)
        except StopIteration:
            return None
        try:
            is_dir = entry.is_dir()
        except OSError:
            is_dir = False
        return RawEntry(entry.name, is_dir)

    def __aiter__(self) -> DirectoryEnumerator:
        return self

    async def __anext__(self) -> RawEntry:
        if self._closed:
            raise StopAsyncIteration

        self._pending = asyncio.ensure_future(asyncio.to_thread(self._read_next))
        # Shielded so a cancelled consumer leaves the read running; aclose()
        # waits for it before closing the handle underneath the thread.
        raw = await asyncio.shield(self._pending)
        self._pending = None

        if raw is None:
            await self.aclose()
            raise StopAsyncIteration
        return raw

    async def aclose(self) -> None:
        """Release the directory handle. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True

        pending, self._pending = self._pending, None
        if pending is not None and not pending.done():
            await asyncio.wait([pending])
        if pending is not None and pending.done() and not pending.cancelled():
            # Retrieve so a failed discarded read is not reported as unhandled.
            pending.exception()

        self._handle.close()
        logger.debug("Closed directory %s", self.path)

    async def __aenter__(self) -> DirectoryEnumerator:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
