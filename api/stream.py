"""
Server-Sent Events sessions for the quote stream.

Provides:
- StreamSession: one open /quotes connection with its own ticker task and queue
- SessionManager: registry of open sessions, closed together on shutdown

Each session owns its ticker exclusively. The ticker is cancelled exactly
once, either when the client goes away or when the server shuts down, and
nothing is written to the client after that.
"""

import asyncio
import logging
import uuid
from typing import AsyncIterator, Awaitable, Callable, Dict, Optional

from models import QuoteEvent, SessionState, iso_timestamp

from .config import settings
from .data_access import QuoteProvider

logger = logging.getLogger(__name__)


class StreamSession:
    """
    Per-connection quote stream.

    Usage:
        session = StreamSession(provider)
        async for record in session.stream(request.is_disconnected):
            ...

    The ticker enqueues one quote immediately and then one every `interval`
    seconds. `stream()` drains the queue, stamping each quote as it is
    written, and yields event-stream records until the session is closed.
    """

    def __init__(
        self,
        provider: QuoteProvider,
        interval: Optional[float] = None,
        session_id: Optional[str] = None,
        on_close: Optional[Callable[["StreamSession"], None]] = None,
    ):
        self.provider = provider
        self.interval = settings.QUOTE_INTERVAL_SECONDS if interval is None else interval
        self.session_id = session_id or f"session-{uuid.uuid4().hex[:8]}"
        self.queue: "asyncio.Queue[Optional[str]]" = asyncio.Queue()
        self.state = SessionState.CONNECTED
        self.connected_at = iso_timestamp()
        self.events_sent = 0
        self._task: Optional[asyncio.Task] = None
        self._on_close = on_close

    @property
    def is_active(self) -> bool:
        return self.state is SessionState.CONNECTED

    @property
    def ticker(self) -> Optional[asyncio.Task]:
        return self._task

    def next_quote(self) -> str:
        return self.provider.random_quote()

    def start(self) -> None:
        """Arm the ticker. Calling it again, or after close, does nothing."""
        if self._task is not None or not self.is_active:
            return
        self._task = asyncio.create_task(self._tick(), name=f"quote-ticker-{self.session_id}")

    async def _tick(self) -> None:
        try:
            while self.is_active:
                self.queue.put_nowait(self.next_quote())
                await asyncio.sleep(self.interval)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(f"Quote ticker failed for {self.session_id}: {e}")
            # Already finishing; close() must not cancel this task
            self._task = None
            self.close()

    def close(self) -> bool:
        """
        Stop the session.

        Cancels the ticker, wakes any pending reader with an end-of-stream
        marker and unregisters the session.

        Returns:
            True the first time, False if the session was already closed
        """
        if not self.is_active:
            return False

        self.state = SessionState.DISCONNECTED
        if self._task is not None:
            self._task.cancel()
        self.queue.put_nowait(None)

        if self._on_close is not None:
            self._on_close(self)

        logger.info(f"Quote stream closed: session_id={self.session_id}, events_sent={self.events_sent}")
        return True

    async def stream(
        self, is_disconnected: Optional[Callable[[], Awaitable[bool]]] = None
    ) -> AsyncIterator[str]:
        """
        Yield event-stream records until the client disconnects.

        Args:
            is_disconnected: Optional liveness check run before every write
        """
        self.start()
        try:
            while True:
                quote = await self.queue.get()
                if quote is None or not self.is_active:
                    break
                if is_disconnected is not None and await is_disconnected():
                    logger.info(f"Client disconnected: session_id={self.session_id}")
                    break
                yield QuoteEvent.create(quote).to_sse()
                self.events_sent += 1
        finally:
            self.close()


class SessionManager:
    """
    Tracks open quote streams.

    Sessions share no state with each other; the manager only exists so
    that shutdown can close every ticker that is still running.
    """

    def __init__(self):
        # session_id -> StreamSession
        self._sessions: Dict[str, StreamSession] = {}

    def open(self, provider: QuoteProvider, interval: Optional[float] = None) -> StreamSession:
        """
        Register a new session.

        Args:
            provider: Quote source for the session
            interval: Seconds between events (defaults to config setting)

        Returns:
            StreamSession object, not yet started
        """
        session = StreamSession(provider, interval=interval, on_close=self.discard)
        self._sessions[session.session_id] = session
        logger.info(f"Quote stream opened: session_id={session.session_id}, active={self.count}")
        return session

    async def stream(
        self,
        provider: QuoteProvider,
        interval: Optional[float] = None,
        is_disconnected: Optional[Callable[[], Awaitable[bool]]] = None,
    ) -> AsyncIterator[str]:
        """
        Open a session on first iteration and yield its records.

        A response body that is never iterated (the client left while the
        headers were being sent) registers nothing.
        """
        session = self.open(provider, interval=interval)
        try:
            async for record in session.stream(is_disconnected):
                yield record
        finally:
            session.close()

    def discard(self, session: StreamSession) -> None:
        self._sessions.pop(session.session_id, None)

    def get(self, session_id: str) -> Optional[StreamSession]:
        return self._sessions.get(session_id)

    @property
    def count(self) -> int:
        return len(self._sessions)

    def close_all(self) -> int:
        """
        Close every open session.

        Returns:
            Number of sessions closed
        """
        closed = 0
        for session in list(self._sessions.values()):
            if session.close():
                closed += 1
        self._sessions.clear()

        if closed > 0:
            logger.info(f"Closed {closed} quote stream(s)")
        return closed
