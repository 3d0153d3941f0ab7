"""Pydantic models describing chat participants."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class UserSummary(BaseModel):
    """Public profile fields shown next to a conversation or notification."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    avatar: str | None = None
    last_active: datetime | None = None


__all__ = ["UserSummary"]
