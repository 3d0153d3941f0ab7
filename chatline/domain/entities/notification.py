"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

NOTIFICATION_KIND_LIKE = "like"
NOTIFICATION_KIND_COMMENT = "comment"
NOTIFICATION_KIND_FOLLOW = "follow"
NOTIFICATION_KIND_MESSAGE = "message"

NOTIFICATION_KINDS = (
    NOTIFICATION_KIND_LIKE,
    NOTIFICATION_KIND_COMMENT,
    NOTIFICATION_KIND_FOLLOW,
    NOTIFICATION_KIND_MESSAGE,
)


@dataclass
class Notification:
    """Activity alert addressed to ``target_id`` on behalf of ``source_id``."""

    id: int | None
    kind: str
    source_id: int
    target_id: int
    text: str | None = None
    message_id: int | None = None
    post_id: str | None = None
    read: bool = False
    created_at: datetime | None = None


__all__ = [
    "Notification",
    "NOTIFICATION_KIND_LIKE",
    "NOTIFICATION_KIND_COMMENT",
    "NOTIFICATION_KIND_FOLLOW",
    "NOTIFICATION_KIND_MESSAGE",
    "NOTIFICATION_KINDS",
]
