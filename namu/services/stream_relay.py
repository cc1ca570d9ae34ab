# namu/services/stream_relay.py
"""
Relay of a streamed text generation into an HTTP response body.

The first chunk is awaited before the response is committed: an upstream
failure at that point still becomes a clean 500. Once bytes have been sent the
status can no longer change, so a later failure only truncates the body.

After the first chunk every pull runs in its own task. A client disconnect
cancels the response task, not the pull, so the upstream is always closed by
us and its own cleanup is never interrupted.
"""
from __future__ import annotations

import asyncio
import logging
from typing import AsyncIterator, Optional

import anyio
from starlette.responses import PlainTextResponse, Response, StreamingResponse

from namu.app.domain.models import StreamState

log = logging.getLogger("stream_relay")

MEDIA_TYPE = "text/plain"  # starlette appends "; charset=utf-8"
DEFAULT_ERROR_MESSAGE = "Failed to generate response."


class StreamSession:
    """One relayed generation. Owns its upstream iterator exclusively."""

    def __init__(
        self,
        upstream: AsyncIterator[str],
        endpoint: str,
        error_message: str = DEFAULT_ERROR_MESSAGE,
    ) -> None:
        self.upstream = upstream
        self.endpoint = endpoint
        self.error_message = error_message
        self.state = StreamState.OPEN
        self.chunks_sent = 0
        self.bytes_sent = 0
        self._pull: Optional[asyncio.Task] = None

    async def response(self) -> Response:
        try:
            first = await self.upstream.__anext__()
        except StopAsyncIteration:
            self.state = StreamState.CLOSED
            log.info("stream_relay.empty endpoint=%s", self.endpoint)
            return Response(content=b"", media_type=MEDIA_TYPE)
        except Exception:
            self.state = StreamState.FAILED
            log.exception("stream_relay.failed endpoint=%s phase=before_commit", self.endpoint)
            await self._close_upstream()
            return PlainTextResponse(self.error_message, status_code=500)

        return StreamingResponse(self._body(first), media_type=MEDIA_TYPE)

    def _encode(self, chunk: str) -> bytes:
        data = chunk.encode("utf-8")
        self.chunks_sent += 1
        self.bytes_sent += len(data)
        return data

    async def _advance(self) -> str:
        return await self.upstream.__anext__()

    async def _next_chunk(self) -> str:
        self._pull = asyncio.create_task(self._advance())
        return await asyncio.shield(self._pull)

    async def _body(self, first: str) -> AsyncIterator[bytes]:
        try:
            yield self._encode(first)
            while True:
                try:
                    chunk = await self._next_chunk()
                except StopAsyncIteration:
                    break
                yield self._encode(chunk)
        except (GeneratorExit, asyncio.CancelledError):
            log.info(
                "stream_relay.client_disconnected endpoint=%s chunks=%s",
                self.endpoint,
                self.chunks_sent,
            )
            raise
        except Exception:
            self.state = StreamState.FAILED
            log.exception(
                "stream_relay.failed endpoint=%s phase=after_commit bytes_sent=%s",
                self.endpoint,
                self.bytes_sent,
            )
        else:
            log.info(
                "stream_relay.done endpoint=%s chunks=%s bytes=%s",
                self.endpoint,
                self.chunks_sent,
                self.bytes_sent,
            )
        finally:
            if self.state is StreamState.OPEN:
                self.state = StreamState.CLOSED
            with anyio.CancelScope(shield=True):
                await self._close_upstream()

    async def _close_upstream(self) -> None:
        pull, self._pull = self._pull, None
        if pull is not None and not pull.done():
            pull.cancel()
            # the upstream ends with the cancellation; its outcome is not relayed
            await asyncio.gather(pull, return_exceptions=True)

        aclose = getattr(self.upstream, "aclose", None)
        if aclose is not None:
            await aclose()


async def relay(
    upstream: AsyncIterator[str],
    endpoint: str,
    error_message: str = DEFAULT_ERROR_MESSAGE,
) -> Response:
    return await StreamSession(upstream, endpoint, error_message).response()
