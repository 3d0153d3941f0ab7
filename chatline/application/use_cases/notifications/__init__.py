"""Use cases for creating and managing notifications."""

from .manage import (
    acknowledge,
    count_unread,
    delete_notification,
    list_notifications,
    mark_all_read,
    mark_read,
)
from .notify import notify_if_needed

__all__ = [
    "acknowledge",
    "count_unread",
    "delete_notification",
    "list_notifications",
    "mark_all_read",
    "mark_read",
    "notify_if_needed",
]
