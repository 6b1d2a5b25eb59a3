# NDJSON streaming response bound to a StreamWriter.
# Created: 2026-10-19
#
# Works like starlette's StreamingResponse (headers first, body chunks, a
# second task watching for http.disconnect) but drives the body through the
# write/drain protocol so buffering per connection stays bounded.

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import AsyncIterable, Mapping

from starlette.background import BackgroundTask
from starlette.responses import Response
from starlette.types import Receive, Scope, Send

from dirstream.errors import ConsumerDisconnect
from dirstream.listing.writer import StreamWriter

logger = logging.getLogger(__name__)

NDJSON_MEDIA_TYPE = "application/x-ndjson"

STREAM_HEADERS = {
    "Cache-Control": "no-cache",
    "X-Accel-Buffering": "no",
}


class ASGISink:
    """Sink over an ASGI ``send`` callable.

    Lines are collected until *high_water_mark* bytes are pending, then the
    writer is told to drain, which sends them as one body message. The very
    first line and any line arriving after *flush_interval* seconds of quiet
    also trigger a drain, so clients see data promptly on slow directories.
    ``send`` itself suspends while the server's transport is paused, which
    is where a slow client pushes back.
    """

    def __init__(
        self,
        send: Send,
        *,
        high_water_mark: int = 16384,
        flush_interval: float = 0.05,
    ):
        self._send = send
        self.high_water_mark = high_water_mark
        self.flush_interval = flush_interval
        self._chunks: list[bytes] = []
        self._pending_bytes = 0
        self._last_flush: float | None = None

    @property
    def pending_bytes(self) -> int:
        return self._pending_bytes

    @property
    def pending_records(self) -> int:
        return len(self._chunks)

    async def start(self, status_code: int, raw_headers: list[tuple[bytes, bytes]]) -> None:
        await self._send_message(
            {"type": "http.response.start", "status": status_code, "headers": raw_headers}
        )

    async def write(self, data: bytes) -> bool:
        self._chunks.append(data)
        self._pending_bytes += len(data)
        if self._pending_bytes >= self.high_water_mark:
            return False
        if self._last_flush is None:
            return False
        return time.monotonic() - self._last_flush < self.flush_interval

    async def drain(self) -> None:
        if not self._chunks:
            return
        body = b"".join(self._chunks)
        self._chunks.clear()
        self._pending_bytes = 0
        await self._send_message({"type": "http.response.body", "body": body, "more_body": True})
        self._last_flush = time.monotonic()

    async def end(self) -> None:
        await self.drain()
        await self._send_message({"type": "http.response.body", "body": b"", "more_body": False})

    async def _send_message(self, message: dict) -> None:
        try:
            await self._send(message)
        except OSError as e:
            raise ConsumerDisconnect(str(e)) from e


async def _listen_for_disconnect(receive: Receive) -> None:
    while True:
        message = await receive()
        if message["type"] == "http.disconnect":
            return


class NDJSONStreamResponse(Response):
    """Streams newline-delimited JSON from an async iterable of encoded lines.

    If the client disconnects the writer is cancelled and the source closed;
    nothing more is written. A source failure after headers were sent is
    re-raised so the server drops the connection rather than ending the body
    cleanly.
    """

    media_type = NDJSON_MEDIA_TYPE

    def __init__(
        self,
        source: AsyncIterable[bytes],
        *,
        status_code: int = 200,
        headers: Mapping[str, str] | None = None,
        high_water_mark: int = 16384,
        label: str = "/",
        background: BackgroundTask | None = None,
    ) -> None:
        self.source = source
        self.status_code = status_code
        self.high_water_mark = high_water_mark
        self.label = label
        self.background = background
        self.init_headers({**STREAM_HEADERS, **(headers or {})})

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        sink = ASGISink(send, high_water_mark=self.high_water_mark)
        writer = StreamWriter(self.source)
        try:
            try:
                await sink.start(self.status_code, self.raw_headers)
            except ConsumerDisconnect:
                logger.debug("Client gone before streaming %s", self.label)
                return

            write_task = asyncio.create_task(writer.attach(sink))
            disconnect_task = asyncio.create_task(_listen_for_disconnect(receive))
            try:
                await asyncio.wait(
                    {write_task, disconnect_task}, return_when=asyncio.FIRST_COMPLETED
                )
            finally:
                disconnect_task.cancel()
                # A disconnect noticed after the final body message is not a cancel.
                if not write_task.done() and not writer.stats.completed:
                    write_task.cancel()
                await asyncio.gather(write_task, disconnect_task, return_exceptions=True)

            error = None if write_task.cancelled() else write_task.exception()
            if error is not None:
                raise error
        finally:
            await self._close_source()

        stats = writer.stats
        if stats.completed:
            logger.info("Streamed %d entries from: %s", stats.records, self.label)
            if self.background is not None:
                await self.background()
        else:
            logger.debug(
                "Client disconnected from %s after %d entries", self.label, stats.records
            )

    async def _close_source(self) -> None:
        aclose = getattr(self.source, "aclose", None)
        if aclose is not None:
            await aclose()
