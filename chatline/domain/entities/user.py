"""Domain entity representing a chat participant."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class User:
    """Display attributes of a user resolved by the identity provider."""

    id: int | None
    username: str
    avatar: str | None = None
    last_active: datetime | None = None
    created_at: datetime | None = None


__all__ = ["User"]
