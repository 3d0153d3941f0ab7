"""Connection bookkeeping for the chat websocket."""

from __future__ import annotations

import asyncio
import logging
import threading
from collections import defaultdict
from typing import Any, DefaultDict, Set

from fastapi import WebSocket

logger = logging.getLogger(__name__)

_CLOSE = object()


class ChatSession:
    """One live websocket connection with its own ordered outbound queue.

    Events are queued with :meth:`enqueue` from any thread and written by
    :meth:`run_writer` on the event loop that accepted the socket, so frames
    reach the client in the order they were queued.
    """

    def __init__(
        self,
        user_id: int,
        websocket: WebSocket | None = None,
        *,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self.user_id = user_id
        self.websocket = websocket
        self._loop = loop or asyncio.get_running_loop()
        self._queue: asyncio.Queue[Any] = asyncio.Queue()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def enqueue(self, message: dict[str, Any]) -> None:
        """Queue ``message`` for delivery; a closed session drops it."""

        if self._closed:
            return
        self._put(message)

    def close(self) -> None:
        """Stop accepting events and let the writer drain and exit."""

        if self._closed:
            return
        self._closed = True
        self._put(_CLOSE)

    async def run_writer(self) -> None:
        """Write queued events to the websocket until the session closes."""

        while True:
            message = await self._queue.get()
            if message is _CLOSE:
                return
            try:
                await self.websocket.send_json(message)
            except Exception:  # pragma: no cover - peer vanished mid-write
                logger.info(
                    "Dropping event %s for user %s: socket is gone",
                    message.get("type"),
                    self.user_id,
                )
                self._closed = True
                return

    def _put(self, item: Any) -> None:
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None
        if running is self._loop:
            self._queue.put_nowait(item)
            return
        try:
            self._loop.call_soon_threadsafe(self._queue.put_nowait, item)
        except RuntimeError:
            # The loop owning this socket already shut down.
            self._closed = True


class SessionRegistry:
    """Map user ids to their live sessions.

    Additions and removals happen under a lock and readers receive a
    snapshot, so routing never observes a half-updated set.
    """

    def __init__(self) -> None:
        self._sessions: DefaultDict[int, Set[ChatSession]] = defaultdict(set)
        self._lock = threading.Lock()

    def add(self, session: ChatSession) -> bool:
        """Register ``session`` and return ``True`` if it is the user's first."""

        with self._lock:
            sessions = self._sessions[session.user_id]
            first = not sessions
            sessions.add(session)
            return first

    def remove(self, session: ChatSession) -> bool:
        """Unregister ``session`` and return ``True`` if it was the user's last."""

        with self._lock:
            sessions = self._sessions.get(session.user_id)
            if sessions is None or session not in sessions:
                return False
            sessions.discard(session)
            if sessions:
                return False
            self._sessions.pop(session.user_id, None)
            return True

    def sessions_for(self, user_id: int) -> tuple[ChatSession, ...]:
        with self._lock:
            return tuple(self._sessions.get(user_id, ()))

    def all_sessions(self) -> tuple[ChatSession, ...]:
        with self._lock:
            return tuple(
                session for sessions in self._sessions.values() for session in sessions
            )

    def online_user_ids(self) -> list[int]:
        with self._lock:
            return sorted(self._sessions)


__all__ = ["ChatSession", "SessionRegistry"]
