"""JSON representations of domain entities sent over the websocket."""

from __future__ import annotations

from typing import Any

from chatline.domain.entities import Message, Notification, User
from chatline.utils import isoformat_or_none


def serialize_message(message: Message) -> dict[str, Any]:
    """Return the record broadcast with ``new_message``.

    Per-user hide entries are private to each participant and never leave
    the server.
    """

    return {
        "id": message.id,
        "sender_id": message.sender_id,
        "receiver_id": message.receiver_id,
        "kind": message.kind,
        "status": message.status,
        "text": message.text,
        "audio_url": message.audio_url,
        "audio_duration": message.audio_duration,
        "file_url": message.file_url,
        "file_name": message.file_name,
        "file_type": message.file_type,
        "shared_post_id": message.shared_post_id,
        "seen_at": isoformat_or_none(message.seen_at),
        "created_at": isoformat_or_none(message.created_at),
    }


def serialize_notification(
    notification: Notification, source: User | None = None
) -> dict[str, Any]:
    return {
        "id": notification.id,
        "kind": notification.kind,
        "source_id": notification.source_id,
        "source_name": source.username if source else None,
        "target_id": notification.target_id,
        "message_id": notification.message_id,
        "post_id": notification.post_id,
        "text": notification.text,
        "read": notification.read,
        "created_at": isoformat_or_none(notification.created_at),
    }


__all__ = ["serialize_message", "serialize_notification"]
