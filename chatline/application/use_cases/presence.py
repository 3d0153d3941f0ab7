"""Use case persisting when a user was last connected."""

from datetime import datetime

from sqlalchemy.orm import Session

from chatline.infrastructure.repositories import UserRepository
from chatline.utils import now_utc


def record_last_seen(session: Session, *, user_id: int, when: datetime | None = None) -> datetime:
    seen_at = when or now_utc()
    UserRepository(session).touch_last_active(user_id, seen_at)
    return seen_at


__all__ = ["record_last_seen"]
