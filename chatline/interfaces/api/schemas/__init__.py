from .message import (
    ClearConversationResponse,
    MessageRead,
    RecentConversationRead,
    SeenResponse,
    SharePostCreate,
    TextMessageCreate,
)
from .notification import MarkAllReadResponse, NotificationCreate, NotificationRead, UnreadCount
from .push import DetailResponse, PushKeys, PushSubscriptionCreate
from .user import UserSummary

__all__ = [
    "ClearConversationResponse",
    "DetailResponse",
    "MarkAllReadResponse",
    "MessageRead",
    "NotificationCreate",
    "NotificationRead",
    "PushKeys",
    "PushSubscriptionCreate",
    "RecentConversationRead",
    "SeenResponse",
    "SharePostCreate",
    "TextMessageCreate",
    "UnreadCount",
    "UserSummary",
]
