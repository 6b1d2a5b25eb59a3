# Backpressure-aware delivery of encoded lines to a consumer sink.
# Created: 2026-10-19

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterable
from dataclasses import dataclass
from typing import Protocol

from dirstream.errors import ConsumerDisconnect

logger = logging.getLogger(__name__)


class Sink(Protocol):
    """Consumer side of the write/drain protocol.

    ``write`` returns False once the sink's buffer is saturated; the writer
    then awaits ``drain`` before producing anything else. Any method may
    raise ConsumerDisconnect.
    """

    async def write(self, data: bytes) -> bool: ...

    async def drain(self) -> None: ...

    async def end(self) -> None: ...


@dataclass
class StreamStats:
    """Counters for a single stream."""

    records: int = 0
    bytes: int = 0
    drains: int = 0
    disconnected: bool = False
    completed: bool = False


class StreamWriter:
    """Pulls lines from *source* one at a time and pushes them into a sink.

    The source is only advanced after the previous line was accepted, so
    the writer never holds more than one line. The source is closed on
    every exit path, which releases whatever it holds upstream.
    """

    def __init__(self, source: AsyncIterable[bytes]):
        self._source = source
        self.stats = StreamStats()

    async def attach(self, sink: Sink) -> StreamStats:
        # records counts lines the sink accepted, drained or not.
        stats = self.stats
        try:
            async for line in self._source:
                accepted = await sink.write(line)
                stats.records += 1
                stats.bytes += len(line)
                if not accepted:
                    stats.drains += 1
                    await sink.drain()
            await sink.end()
            stats.completed = True
        except ConsumerDisconnect:
            stats.disconnected = True
            logger.debug("Consumer disconnected after %d records", stats.records)
        except asyncio.CancelledError:
            stats.disconnected = True
            logger.debug("Stream cancelled after %d records", stats.records)
            raise
        except Exception:
            logger.error("Error during streaming after %d records", stats.records, exc_info=True)
            raise
        finally:
            await self._close_source()
        return stats

    async def _close_source(self) -> None:
        aclose = getattr(self._source, "aclose", None)
        if aclose is not None:
            await aclose()
