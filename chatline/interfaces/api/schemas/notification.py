"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import AliasChoices, BaseModel, Field

from .user import UserSummary


class NotificationCreate(BaseModel):
    """Activity alert raised by the authenticated user for ``target_id``."""

    kind: Literal["like", "comment", "follow"]
    target_id: int = Field(..., validation_alias=AliasChoices("target_id", "targetId"))
    post_id: str | None = Field(default=None, validation_alias=AliasChoices("post_id", "postId"))
    text: str | None = None


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    id: int
    kind: str
    source_id: int
    source: UserSummary | None = None
    target_id: int
    message_id: int | None = None
    post_id: str | None = None
    text: str | None = None
    read: bool = False
    created_at: datetime | None = None


class UnreadCount(BaseModel):
    count: int


class MarkAllReadResponse(BaseModel):
    updated: int


__all__ = [
    "MarkAllReadResponse",
    "NotificationCreate",
    "NotificationRead",
    "UnreadCount",
]
