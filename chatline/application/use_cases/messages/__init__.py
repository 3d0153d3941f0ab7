"""Use cases driving the message lifecycle."""

from .clear_conversation import ClearResult, clear_conversation
from .delete_message import (
    DELETE_MODE_EVERYONE,
    DELETE_MODE_ME,
    delete_for_everyone,
    delete_for_me,
    delete_message,
)
from .history import RecentConversation, get_visible_history, list_recent_conversations
from .mark_seen import mark_seen
from .send_message import send_message
from .typing_indicator import relay_typing

__all__ = [
    "ClearResult",
    "clear_conversation",
    "DELETE_MODE_EVERYONE",
    "DELETE_MODE_ME",
    "delete_for_everyone",
    "delete_for_me",
    "delete_message",
    "RecentConversation",
    "get_visible_history",
    "list_recent_conversations",
    "mark_seen",
    "send_message",
    "relay_typing",
]
