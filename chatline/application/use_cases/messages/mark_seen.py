"""Use case for acknowledging that a viewer read a conversation."""

from __future__ import annotations

from sqlalchemy.orm import Session

from chatline.domain.entities import (
    MESSAGE_STATUS_DELIVERED,
    MESSAGE_STATUS_SEEN,
    MESSAGE_STATUS_SENT,
)
from chatline.infrastructure.realtime import (
    EVENT_MESSAGE_DELIVERED,
    EVENT_MESSAGES_SEEN,
    RealtimeFanout,
)
from chatline.infrastructure.repositories import MessageRepository
from chatline.utils import now_utc


def mark_seen(
    session: Session,
    fanout: RealtimeFanout,
    *,
    viewer_id: int,
    counterpart_id: int,
) -> list[int]:
    """Advance every pending message from ``counterpart_id`` to ``seen``.

    Messages still in ``sent`` pass through ``delivered`` first so no state
    is skipped. A single ``messages_seen`` event carrying the affected ids
    goes to the counterpart. Returns those ids; an empty list means nothing
    was pending and no event was emitted.
    """

    repository = MessageRepository(session)
    pending = repository.list_unseen_from(sender_id=counterpart_id, receiver_id=viewer_id)
    if not pending:
        return []

    participants = (counterpart_id, viewer_id)
    undelivered = [message.id for message in pending if message.status == MESSAGE_STATUS_SENT]
    delivered = repository.advance_many(
        undelivered, current=MESSAGE_STATUS_SENT, target=MESSAGE_STATUS_DELIVERED
    )
    for message_id in undelivered:
        if message_id in delivered:
            fanout.route_many(participants, EVENT_MESSAGE_DELIVERED, {"messageId": message_id})

    seen = repository.advance_many(
        [message.id for message in pending],
        current=MESSAGE_STATUS_DELIVERED,
        target=MESSAGE_STATUS_SEEN,
        seen_at=now_utc(),
    )
    # Messages deleted for everyone meanwhile are skipped by the store.
    message_ids = [message.id for message in pending if message.id in seen]
    if message_ids:
        fanout.route(counterpart_id, EVENT_MESSAGES_SEEN, message_ids)
    return message_ids


__all__ = ["mark_seen"]
