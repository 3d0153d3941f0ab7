"""Domain entities exposed by the application."""

from .conversation import ConversationSummary
from .message import (
    MESSAGE_KIND_AUDIO,
    MESSAGE_KIND_FILE,
    MESSAGE_KIND_SHARED_POST,
    MESSAGE_KIND_TEXT,
    MESSAGE_KINDS,
    MESSAGE_STATUS_DELIVERED,
    MESSAGE_STATUS_SEEN,
    MESSAGE_STATUS_SENT,
    AudioPayload,
    FilePayload,
    Message,
    MessagePayload,
    SharedPostPayload,
    TextPayload,
    can_transition,
    next_status,
)
from .notification import (
    NOTIFICATION_KIND_COMMENT,
    NOTIFICATION_KIND_FOLLOW,
    NOTIFICATION_KIND_LIKE,
    NOTIFICATION_KIND_MESSAGE,
    NOTIFICATION_KINDS,
    Notification,
)
from .push_subscription import PushSubscription
from .user import User

__all__ = [
    "ConversationSummary",
    "Message",
    "MessagePayload",
    "TextPayload",
    "AudioPayload",
    "FilePayload",
    "SharedPostPayload",
    "MESSAGE_KIND_TEXT",
    "MESSAGE_KIND_AUDIO",
    "MESSAGE_KIND_FILE",
    "MESSAGE_KIND_SHARED_POST",
    "MESSAGE_KINDS",
    "MESSAGE_STATUS_SENT",
    "MESSAGE_STATUS_DELIVERED",
    "MESSAGE_STATUS_SEEN",
    "can_transition",
    "next_status",
    "Notification",
    "NOTIFICATION_KIND_LIKE",
    "NOTIFICATION_KIND_COMMENT",
    "NOTIFICATION_KIND_FOLLOW",
    "NOTIFICATION_KIND_MESSAGE",
    "NOTIFICATION_KINDS",
    "PushSubscription",
    "User",
]
