"""Use case for sending a message and walking it from sent to delivered."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from chatline.application.use_cases.notifications import notify_if_needed
from chatline.domain.entities import (
    MESSAGE_STATUS_DELIVERED,
    MESSAGE_STATUS_SENT,
    NOTIFICATION_KIND_MESSAGE,
    Message,
    MessagePayload,
)
from chatline.domain.errors import NotFoundError, TransientStoreError, ValidationError
from chatline.infrastructure.push import WebPushSender
from chatline.infrastructure.realtime import (
    EVENT_MESSAGE_DELIVERED,
    EVENT_NEW_MESSAGE,
    RealtimeFanout,
    serialize_message,
)
from chatline.infrastructure.repositories import MessageRepository, UserRepository
from chatline.utils import now_utc

logger = logging.getLogger(__name__)


def send_message(
    session: Session,
    fanout: RealtimeFanout,
    *,
    sender_id: int,
    receiver_id: int,
    payload: MessagePayload,
    push_sender: WebPushSender | None = None,
) -> Message:
    """Persist a message from ``sender_id`` to ``receiver_id`` and announce it.

    The steps run strictly in order: store the message as ``sent``, emit
    ``new_message`` to both participants, store ``delivered``, emit
    ``message_delivered``, then let the deduplicator decide on a
    notification. Nothing is emitted before the write it describes has been
    committed. The send itself is never retried.
    """

    if sender_id == receiver_id:
        raise ValidationError("Cannot send a message to yourself")

    users = UserRepository(session).get_map_by_ids([sender_id, receiver_id])
    if receiver_id not in users:
        raise NotFoundError("Recipient not found")

    message = Message.from_payload(sender_id=sender_id, receiver_id=receiver_id, payload=payload)
    message.created_at = now_utc()

    repository = MessageRepository(session)
    saved = repository.create(message)
    participants = (sender_id, receiver_id)
    fanout.route_many(participants, EVENT_NEW_MESSAGE, serialize_message(saved))

    _mark_delivered(repository, fanout, saved, participants)

    try:
        notify_if_needed(
            session,
            fanout,
            kind=NOTIFICATION_KIND_MESSAGE,
            source_id=sender_id,
            target_id=receiver_id,
            message=saved,
            source=users.get(sender_id),
            push_sender=push_sender,
        )
    except TransientStoreError:
        logger.warning("Message %s stored but its notification could not be recorded", saved.id)

    return saved


def _mark_delivered(
    repository: MessageRepository,
    fanout: RealtimeFanout,
    message: Message,
    participants: tuple[int, int],
) -> None:
    try:
        advanced = repository.advance_status(
            message.id, current=MESSAGE_STATUS_SENT, target=MESSAGE_STATUS_DELIVERED
        )
    except TransientStoreError:
        logger.warning("Message %s stored but left in state sent", message.id)
        return
    if not advanced:
        # Deleted for everyone or already moved on by a concurrent seen receipt.
        return
    message.status = MESSAGE_STATUS_DELIVERED
    fanout.route_many(participants, EVENT_MESSAGE_DELIVERED, {"messageId": message.id})


__all__ = ["send_message"]
