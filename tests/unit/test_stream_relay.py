from __future__ import annotations

import asyncio
from typing import AsyncIterator

from starlette.responses import StreamingResponse

from namu.app.domain.models import StreamState
from namu.services.stream_relay import StreamSession, relay


class UpstreamStub:
    """Async chunk source that can fail at a given position and records closing."""

    def __init__(self, chunks: list[str], fail_at: int | None = None) -> None:
        self.chunks = chunks
        self.fail_at = fail_at
        self.pulled = 0
        self.closed = False

    async def stream(self) -> AsyncIterator[str]:
        try:
            for index, chunk in enumerate(self.chunks):
                if self.fail_at == index:
                    raise RuntimeError("upstream exploded")
                self.pulled += 1
                yield chunk
            if self.fail_at == len(self.chunks):
                raise RuntimeError("upstream exploded")
        finally:
            self.closed = True


async def _consume(response) -> bytes:
    if not isinstance(response, StreamingResponse):
        return response.body
    body = b""
    async for part in response.body_iterator:
        body += part
    return body


def _run(upstream: UpstreamStub, endpoint: str = "test-endpoint") -> tuple[StreamSession, int, dict, bytes]:
    async def scenario():
        session = StreamSession(upstream.stream(), endpoint, "Fixed failure message.")
        response = await session.response()
        body = await _consume(response)
        return session, response.status_code, dict(response.headers), body

    return asyncio.run(scenario())


class TestRelaySuccess:
    def test_concatenates_chunks_in_order(self) -> None:
        session, status, headers, body = _run(UpstreamStub(["Hello, ", "world!"]))

        assert status == 200
        assert headers["content-type"] == "text/plain; charset=utf-8"
        assert body == "Hello, world!".encode("utf-8")
        assert session.state is StreamState.CLOSED
        assert session.chunks_sent == 2

    def test_non_ascii_chunks_are_utf8_encoded(self) -> None:
        _, _, _, body = _run(UpstreamStub(["Crème ", "brûlée 🍮"]))

        assert body.decode("utf-8") == "Crème brûlée 🍮"

    def test_empty_upstream_gives_empty_200(self) -> None:
        session, status, _, body = _run(UpstreamStub([]))

        assert status == 200
        assert body == b""
        assert session.state is StreamState.CLOSED

    def test_relay_helper(self) -> None:
        upstream = UpstreamStub(["a", "b"])

        async def scenario():
            response = await relay(upstream.stream(), "helper")
            return await _consume(response)

        assert asyncio.run(scenario()) == b"ab"


class TestRelayFailure:
    def test_failure_before_first_chunk_is_500(self) -> None:
        upstream = UpstreamStub(["never"], fail_at=0)

        session, status, headers, body = _run(upstream)

        assert status == 500
        assert body == b"Fixed failure message."
        assert headers["content-type"].startswith("text/plain")
        assert session.state is StreamState.FAILED
        assert session.bytes_sent == 0

    def test_failure_after_commit_truncates_body(self) -> None:
        upstream = UpstreamStub(["partial ", "never sent"], fail_at=1)

        session, status, _, body = _run(upstream)

        assert status == 200
        assert body == b"partial "
        assert session.state is StreamState.FAILED
        assert upstream.closed is True

    def test_failure_is_logged_with_endpoint(self, caplog) -> None:
        with caplog.at_level("ERROR", logger="stream_relay"):
            _run(UpstreamStub([], fail_at=0), endpoint="generate-recipe")

        assert "endpoint=generate-recipe" in caplog.text


class TestClientDisconnect:
    def test_closing_body_releases_upstream(self) -> None:
        upstream = UpstreamStub(["one", "two", "three"])

        async def scenario():
            session = StreamSession(upstream.stream(), "disconnect")
            response = await session.response()
            body_iterator = response.body_iterator
            first = await body_iterator.__anext__()
            await body_iterator.aclose()
            return session, first

        session, first = asyncio.run(scenario())

        assert first == b"one"
        assert upstream.pulled == 1
        assert upstream.closed is True
        assert session.state is StreamState.CLOSED

    def test_disconnect_under_starlette_lets_upstream_finish_cleanup(self) -> None:
        state = {"pulled": 0, "closed": False}

        async def slow_upstream():
            try:
                for index in range(100):
                    state["pulled"] += 1
                    yield f"c{index}"
                    await asyncio.sleep(0.01)
            finally:
                # cleanup that itself awaits, like closing an HTTP stream
                await asyncio.sleep(0)
                state["closed"] = True

        async def scenario():
            session = StreamSession(slow_upstream(), "generate-recipe")
            response = await session.response()
            sent: list[dict] = []
            body_started = asyncio.Event()

            async def receive():
                await body_started.wait()
                return {"type": "http.disconnect"}

            async def send(message):
                sent.append(message)
                if message["type"] == "http.response.body":
                    body_started.set()

            scope = {"type": "http", "asgi": {"spec_version": "2.3"}, "method": "POST", "path": "/"}
            await response(scope, receive, send)
            return session, sent

        session, sent = asyncio.run(scenario())

        assert sent[0]["status"] == 200
        assert sent[1]["body"] == b"c0"
        assert state["pulled"] < 100
        assert state["closed"] is True
        assert session.state is StreamState.CLOSED
