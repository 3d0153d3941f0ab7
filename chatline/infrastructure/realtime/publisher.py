"""Route realtime events to the connected sessions of each user."""

from __future__ import annotations

import copy
import logging
from datetime import datetime
from typing import Any, Iterable, Set

from chatline.utils import isoformat_or_none, now_utc

from .manager import ChatSession, SessionRegistry

logger = logging.getLogger(__name__)

EVENT_NEW_MESSAGE = "new_message"
EVENT_MESSAGE_DELIVERED = "message_delivered"
EVENT_MESSAGES_SEEN = "messages_seen"
EVENT_MESSAGE_DELETED = "message_deleted"
EVENT_CHAT_CLEARED = "chat_cleared"
EVENT_TYPING = "typing"
EVENT_STOP_TYPING = "stop_typing"
EVENT_NEW_MESSAGE_NOTIFICATION = "new_message_notification"
EVENT_NOTIFICATION = "notification"
EVENT_USER_ONLINE = "user_online"
EVENT_USER_OFFLINE = "user_offline"


class RealtimeFanout:
    """Deliver structured events to every live session of a user.

    Users without sessions are skipped silently: nothing is queued for
    later, offline clients catch up by reading history from the store.
    """

    def __init__(self, registry: SessionRegistry | None = None) -> None:
        self._registry = registry or SessionRegistry()

    @property
    def registry(self) -> SessionRegistry:
        return self._registry

    def route(self, user_id: int, event_type: str, payload: Any = None) -> int:
        """Queue ``event_type`` on each session of ``user_id``.

        Returns the number of sessions the event was handed to.
        """

        if not user_id:
            return 0
        sessions = self._registry.sessions_for(user_id)
        message = {"type": event_type, "data": payload}
        for session in sessions:
            self._deliver(session, message)
        return len(sessions)

    def route_many(self, user_ids: Iterable[int], event_type: str, payload: Any = None) -> None:
        """Route one event to several users, each user at most once."""

        seen: Set[int] = set()
        for user_id in user_ids:
            if not user_id or user_id in seen:
                continue
            seen.add(user_id)
            self.route(user_id, event_type, payload)

    def broadcast(self, event_type: str, payload: Any = None) -> None:
        message = {"type": event_type, "data": payload}
        for session in self._registry.all_sessions():
            self._deliver(session, message)

    def connect(self, session: ChatSession) -> None:
        """Register ``session`` and announce that its user is online."""

        self._registry.add(session)
        logger.info("User %s connected", session.user_id)
        self.broadcast(EVENT_USER_ONLINE, {"userId": session.user_id})

    def disconnect(self, session: ChatSession, *, last_seen: datetime | None = None) -> bool:
        """Unregister ``session``; announce offline when it was the last one."""

        session.close()
        was_last = self._registry.remove(session)
        logger.info("User %s disconnected", session.user_id)
        if was_last:
            self.broadcast(
                EVENT_USER_OFFLINE,
                {
                    "userId": session.user_id,
                    "lastSeen": isoformat_or_none(last_seen or now_utc()),
                },
            )
        return was_last

    def online_user_ids(self) -> list[int]:
        return self._registry.online_user_ids()

    def _deliver(self, session: ChatSession, message: dict[str, Any]) -> None:
        try:
            session.enqueue({"type": message["type"], "data": copy.deepcopy(message["data"])})
        except Exception:  # pragma: no cover - emission never undoes persistence
            logger.exception(
                "Failed to queue %s for user %s", message.get("type"), session.user_id
            )


__all__ = [
    "RealtimeFanout",
    "EVENT_NEW_MESSAGE",
    "EVENT_MESSAGE_DELIVERED",
    "EVENT_MESSAGES_SEEN",
    "EVENT_MESSAGE_DELETED",
    "EVENT_CHAT_CLEARED",
    "EVENT_TYPING",
    "EVENT_STOP_TYPING",
    "EVENT_NEW_MESSAGE_NOTIFICATION",
    "EVENT_NOTIFICATION",
    "EVENT_USER_ONLINE",
    "EVENT_USER_OFFLINE",
]
