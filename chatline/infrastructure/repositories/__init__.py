"""Repository implementations for infrastructure layer."""

from .errors import translate_store_errors
from .message_repository import MessageRepository
from .notification_repository import NotificationRepository
from .push_subscription_repository import PushSubscriptionRepository
from .user_repository import UserRepository

__all__ = [
    "MessageRepository",
    "NotificationRepository",
    "PushSubscriptionRepository",
    "UserRepository",
    "translate_store_errors",
]
