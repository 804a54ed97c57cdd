"""Shared fixtures for the test suite."""

import asyncio
import random

import pytest

from api import main
from api.data_access import QuoteProvider


@pytest.fixture
def seeded_provider():
    """QuoteProvider with a deterministic random source."""
    return QuoteProvider(rng=random.Random(1234))


@pytest.fixture
def fast_interval(monkeypatch):
    """Shrink the emission interval so stream tests finish quickly."""
    def _set(seconds=0.05):
        monkeypatch.setattr(main.settings, "QUOTE_INTERVAL_SECONDS", seconds)
        return seconds
    return _set


@pytest.fixture
def opened_sessions(monkeypatch):
    """Record every StreamSession the app opens."""
    opened = []
    original_open = main.sessions.open

    def _open(*args, **kwargs):
        session = original_open(*args, **kwargs)
        opened.append(session)
        return session

    monkeypatch.setattr(main.sessions, "open", _open)
    yield opened
    main.sessions.close_all()


class StreamCapture:
    """Messages sent by the app for one request, with arrival times."""

    def __init__(self):
        self.start = None
        self.chunks = []      # (elapsed seconds, decoded body)
        self.late_chunks = []  # body written after the client left

    @property
    def headers(self):
        return {k.decode().lower(): v.decode() for k, v in self.start["headers"]}

    @property
    def records(self):
        return [body for _, body in self.chunks]


async def _drive_quotes(app, disconnect_after=None, disconnect_at=None, send_delay=0.0, timeout=5.0):
    """
    Call the ASGI app for GET /quotes and hang up like a browser would.

    The client disconnects after `disconnect_after` body chunks or after
    `disconnect_at` seconds, whichever comes first. `disconnect_at=0`
    means the client is already gone when the request arrives.
    `send_delay` makes every send yield to the loop, like a slow socket.
    """
    loop = asyncio.get_running_loop()
    capture = StreamCapture()
    disconnected = asyncio.Event()
    request_sent = False
    began = loop.time()

    async def receive():
        nonlocal request_sent
        if not request_sent:
            request_sent = True
            return {"type": "http.request", "body": b"", "more_body": False}
        await disconnected.wait()
        return {"type": "http.disconnect"}

    async def send(message):
        if send_delay:
            await asyncio.sleep(send_delay)
        if message["type"] == "http.response.start":
            capture.start = message
            return
        body = message.get("body", b"")
        if not body:
            return
        if disconnected.is_set():
            capture.late_chunks.append(body.decode())
            return
        capture.chunks.append((loop.time() - began, body.decode()))
        if disconnect_after is not None and len(capture.chunks) >= disconnect_after:
            disconnected.set()

    if disconnect_at == 0:
        disconnected.set()
    elif disconnect_at is not None:
        loop.call_later(disconnect_at, disconnected.set)

    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "GET",
        "scheme": "http",
        "path": "/quotes",
        "raw_path": b"/quotes",
        "root_path": "",
        "query_string": b"",
        "headers": [(b"host", b"testserver"), (b"accept", b"text/event-stream")],
        "client": ("127.0.0.1", 50000),
        "server": ("testserver", 80),
    }
    await asyncio.wait_for(app(scope, receive, send), timeout)
    return capture


@pytest.fixture
def drive_quotes():
    """Coroutine factory that runs one GET /quotes against an ASGI app."""
    return _drive_quotes
