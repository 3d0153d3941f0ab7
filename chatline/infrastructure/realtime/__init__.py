"""Realtime delivery helpers for the infrastructure layer."""

from .manager import ChatSession, SessionRegistry
from .payloads import serialize_message, serialize_notification
from .publisher import (
    EVENT_CHAT_CLEARED,
    EVENT_MESSAGE_DELETED,
    EVENT_MESSAGE_DELIVERED,
    EVENT_MESSAGES_SEEN,
    EVENT_NEW_MESSAGE,
    EVENT_NEW_MESSAGE_NOTIFICATION,
    EVENT_NOTIFICATION,
    EVENT_STOP_TYPING,
    EVENT_TYPING,
    EVENT_USER_OFFLINE,
    EVENT_USER_ONLINE,
    RealtimeFanout,
)

__all__ = [
    "ChatSession",
    "SessionRegistry",
    "RealtimeFanout",
    "serialize_message",
    "serialize_notification",
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
