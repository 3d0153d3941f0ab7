"""Tests for the unread message-notification index behind the repository."""

from __future__ import annotations

from chatline.domain.entities import (
    NOTIFICATION_KIND_LIKE,
    NOTIFICATION_KIND_MESSAGE,
    Notification,
)
from chatline.infrastructure.repositories import NotificationRepository
from chatline.utils import now_utc


def _notification(kind: str, source_id: int, target_id: int, **extra) -> Notification:
    return Notification(
        id=None,
        kind=kind,
        source_id=source_id,
        target_id=target_id,
        text=extra.pop("text", "hi"),
        message_id=extra.pop("message_id", None),
        post_id=extra.pop("post_id", None),
        read=False,
        created_at=now_utc(),
    )


def test_second_unread_message_notification_is_rejected(db_session, make_user):
    alice, bob = make_user("alice"), make_user("bob")
    repository = NotificationRepository(db_session)

    first = repository.create(_notification(NOTIFICATION_KIND_MESSAGE, alice.id, bob.id))
    second = repository.create(_notification(NOTIFICATION_KIND_MESSAGE, alice.id, bob.id))

    assert first is not None and first.id is not None
    assert second is None
    assert repository.count_unread(bob.id) == 1
    assert repository.find_unread_message(source_id=alice.id, target_id=bob.id).id == first.id


def test_index_only_covers_unread_message_notifications(db_session, make_user):
    alice, bob = make_user("alice"), make_user("bob")
    repository = NotificationRepository(db_session)

    first = repository.create(_notification(NOTIFICATION_KIND_MESSAGE, alice.id, bob.id))
    repository.mark_read(first.id)
    again = repository.create(_notification(NOTIFICATION_KIND_MESSAGE, alice.id, bob.id))

    likes = [
        repository.create(_notification(NOTIFICATION_KIND_LIKE, alice.id, bob.id, post_id="p1"))
        for _ in range(2)
    ]

    assert again is not None and again.id != first.id
    assert all(like is not None for like in likes)
    assert likes[0].id != likes[1].id
    assert repository.count_unread(bob.id) == 3
