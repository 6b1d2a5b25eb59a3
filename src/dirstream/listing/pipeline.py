# One request's listing pipeline: enumerate -> resolve -> encode.
# Created: 2026-10-19

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator, AsyncIterator

from dirstream.listing.encoder import RecordEncoder
from dirstream.listing.enumerator import DirectoryEnumerator
from dirstream.listing.metadata import MetadataResolver

logger = logging.getLogger(__name__)


class DirectoryListing:
    """Composes the listing stages for one already-opened directory.

    Entries are handled strictly one at a time in enumeration order, so at
    most one stat is in flight and output order matches the OS order minus
    skipped entries. Counters here belong to this request only.
    """

    def __init__(
        self,
        root: str,
        enumerator: DirectoryEnumerator,
        *,
        resolver: MetadataResolver | None = None,
        encoder: RecordEncoder | None = None,
    ):
        self.enumerator = enumerator
        self.resolver = resolver or MetadataResolver(enumerator.path)
        self.encoder = encoder or RecordEncoder(root)
        self.entries_seen = 0
        self.skipped = 0
        self.emitted = 0
        self._lines: AsyncGenerator[bytes, None] | None = None

    def __aiter__(self) -> AsyncIterator[bytes]:
        if self._lines is None:
            self._lines = self.lines()
        return self._lines

    async def aclose(self) -> None:
        """Stop the line generator and release the directory handle.

        Closing a generator that never started skips its ``finally``, so the
        enumerator is closed here as well.
        """
        if self._lines is not None:
            await self._lines.aclose()
        await self.enumerator.aclose()

    async def lines(self) -> AsyncGenerator[bytes, None]:
        """Yield one encoded line per resolvable entry; closes the handle on exit."""
        try:
            async for raw in self.enumerator:
                self.entries_seen += 1
                entry = await self.resolver.resolve(raw)
                if entry is None:
                    self.skipped += 1
                    continue
                self.emitted += 1
                yield self.encoder.encode(entry)
        finally:
            await self.enumerator.aclose()
            if self.skipped:
                logger.info(
                    "Skipped %d of %d entries in %s",
                    self.skipped,
                    self.entries_seen,
                    self.enumerator.path,
                )
