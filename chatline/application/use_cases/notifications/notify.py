"""Create notifications while keeping at most one unread per message sender."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from chatline.domain.entities import (
    NOTIFICATION_KIND_MESSAGE,
    NOTIFICATION_KINDS,
    Message,
    Notification,
    User,
)
from chatline.domain.errors import ChatError, ValidationError
from chatline.domain.visibility import preview_for
from chatline.infrastructure.push import WebPushSender
from chatline.infrastructure.realtime import (
    EVENT_NEW_MESSAGE_NOTIFICATION,
    EVENT_NOTIFICATION,
    RealtimeFanout,
    serialize_notification,
)
from chatline.infrastructure.repositories import (
    NotificationRepository,
    PushSubscriptionRepository,
    UserRepository,
)
from chatline.utils import now_utc

logger = logging.getLogger(__name__)

_SNIPPET_LENGTH = 140


def _snippet(text: str | None, message: Message | None) -> str | None:
    value = text or (preview_for(message) if message is not None else None)
    if value and len(value) > _SNIPPET_LENGTH:
        return value[: _SNIPPET_LENGTH - 1] + "…"
    return value


def notify_if_needed(
    session: Session,
    fanout: RealtimeFanout,
    *,
    kind: str,
    source_id: int,
    target_id: int,
    message: Message | None = None,
    post_id: str | None = None,
    text: str | None = None,
    source: User | None = None,
    push_sender: WebPushSender | None = None,
) -> Notification | None:
    """Persist and announce a notification unless an unread one already covers it.

    Message notifications are deduplicated per (source, target) while unread;
    likes, comments and follows always produce a record. Returns the created
    notification or ``None`` when creation was suppressed.
    """

    if kind not in NOTIFICATION_KINDS:
        raise ValidationError(f"Unknown notification kind '{kind}'")
    if source_id == target_id:
        return None

    repository = NotificationRepository(session)
    if kind == NOTIFICATION_KIND_MESSAGE:
        existing = repository.find_unread_message(source_id=source_id, target_id=target_id)
        if existing is not None:
            logger.debug(
                "Unread message notification %s already covers %s -> %s",
                existing.id,
                source_id,
                target_id,
            )
            return None

    snippet = _snippet(text, message)
    created = repository.create(
        Notification(
            id=None,
            kind=kind,
            source_id=source_id,
            target_id=target_id,
            text=snippet,
            message_id=message.id if message is not None else None,
            post_id=post_id,
            read=False,
            created_at=now_utc(),
        )
    )
    if created is None:
        logger.debug("Concurrent unread notification for %s -> %s kept", source_id, target_id)
        return None

    if source is None:
        source = UserRepository(session).get(source_id)
    sender_name = source.username if source else "Someone"

    if kind == NOTIFICATION_KIND_MESSAGE:
        fanout.route(
            target_id,
            EVENT_NEW_MESSAGE_NOTIFICATION,
            {"senderName": sender_name, "text": snippet},
        )
    else:
        fanout.route(target_id, EVENT_NOTIFICATION, serialize_notification(created, source))

    if push_sender is not None:
        _push(session, push_sender, created, sender_name)
    return created


def _push(
    session: Session,
    push_sender: WebPushSender,
    notification: Notification,
    sender_name: str,
) -> None:
    repository = PushSubscriptionRepository(session)
    try:
        subscription = repository.get_for_user(notification.target_id)
        if subscription is None:
            return
        payload = {
            "title": sender_name,
            "body": notification.text or "",
            "kind": notification.kind,
            "notificationId": notification.id,
        }
        if not push_sender.send(subscription, payload):
            repository.delete_for_user(notification.target_id)
    except ChatError as exc:
        logger.warning("Skipping push for notification %s: %s", notification.id, exc)


__all__ = ["notify_if_needed"]
