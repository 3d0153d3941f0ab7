"""ORM models used by the application infrastructure."""

from .user import UserModel
from .message import MessageHiddenModel, MessageModel
from .notification import NotificationModel
from .push_subscription import PushSubscriptionModel

__all__ = [
    "UserModel",
    "MessageModel",
    "MessageHiddenModel",
    "NotificationModel",
    "PushSubscriptionModel",
]
