"""Recipient-side operations on stored notifications."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy.orm import Session

from chatline.application.retry import retry_transient_read
from chatline.domain.entities import Notification
from chatline.domain.errors import AuthorizationError, NotFoundError
from chatline.infrastructure.repositories import NotificationRepository


def _get_owned(repository: NotificationRepository, notification_id: int, actor_id: int) -> Notification:
    notification = repository.get(notification_id)
    if notification is None:
        raise NotFoundError("Notification not found")
    if notification.target_id != actor_id:
        raise AuthorizationError("Only the recipient can change this notification")
    return notification


def list_notifications(
    session: Session, *, target_id: int, limit: int = 50, unread_only: bool = False
) -> Sequence[Notification]:
    """Return ``target_id``'s notifications, newest first."""

    repository = NotificationRepository(session)
    return retry_transient_read(
        lambda: repository.list_for_target(target_id, limit=limit, unread_only=unread_only)
    )


def count_unread(session: Session, *, target_id: int) -> int:
    repository = NotificationRepository(session)
    return retry_transient_read(lambda: repository.count_unread(target_id))


def mark_read(session: Session, *, notification_id: int, actor_id: int) -> Notification:
    """Mark one notification read on behalf of its recipient."""

    repository = NotificationRepository(session)
    notification = _get_owned(repository, notification_id, actor_id)
    if not notification.read:
        repository.mark_read(notification_id)
        notification.read = True
    return notification


def mark_all_read(session: Session, *, actor_id: int) -> int:
    """Mark every unread notification of ``actor_id`` read; returns how many."""

    return NotificationRepository(session).mark_all_read(actor_id)


def acknowledge(session: Session, *, actor_id: int, notification_ids: Iterable[int]) -> int:
    """Mark the listed notifications read, ignoring ids owned by someone else."""

    ids = [
        value
        for value in notification_ids
        if isinstance(value, int) and not isinstance(value, bool)
    ]
    return NotificationRepository(session).mark_many_read(ids, target_id=actor_id)


def delete_notification(session: Session, *, notification_id: int, actor_id: int) -> None:
    repository = NotificationRepository(session)
    _get_owned(repository, notification_id, actor_id)
    repository.delete(notification_id)


__all__ = [
    "acknowledge",
    "count_unread",
    "delete_notification",
    "list_notifications",
    "mark_all_read",
    "mark_read",
]
