"""Pydantic models for chat message endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from .user import UserSummary


class TextMessageCreate(BaseModel):
    text: str


class SharePostCreate(BaseModel):
    """Reference to a post shared into a conversation."""

    post_id: str = Field(..., validation_alias=AliasChoices("post_id", "postId"))


class MessageRead(BaseModel):
    """Message as returned to either participant."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    sender_id: int
    receiver_id: int
    kind: str
    status: str
    text: str | None = None
    audio_url: str | None = None
    audio_duration: float | None = None
    file_url: str | None = None
    file_name: str | None = None
    file_type: str | None = None
    shared_post_id: str | None = None
    seen_at: datetime | None = None
    created_at: datetime | None = None


class RecentConversationRead(BaseModel):
    """Latest visible message exchanged with one counterpart."""

    counterpart_id: int
    user: UserSummary | None = None
    message_id: int
    last_message: str
    last_time: datetime | None = None


class SeenResponse(BaseModel):
    message_ids: list[int] = Field(default_factory=list)


class ClearConversationResponse(BaseModel):
    message: str
    hidden: list[int] = Field(default_factory=list)
    deleted: list[int] = Field(default_factory=list)


__all__ = [
    "ClearConversationResponse",
    "MessageRead",
    "RecentConversationRead",
    "SeenResponse",
    "SharePostCreate",
    "TextMessageCreate",
]
