"""Use cases for hiding a message for one user or deleting it for both."""

from __future__ import annotations

from sqlalchemy.orm import Session

from chatline.domain.entities import Message
from chatline.domain.errors import AuthorizationError, NotFoundError, ValidationError
from chatline.infrastructure.realtime import EVENT_MESSAGE_DELETED, RealtimeFanout
from chatline.infrastructure.repositories import MessageRepository

DELETE_MODE_ME = "me"
DELETE_MODE_EVERYONE = "everyone"


def get_live_message(repository: MessageRepository, message_id: int) -> Message:
    """Return ``message_id`` unless it is missing or deleted for everyone."""

    message = repository.get(message_id)
    if message is None or message.deleted_for_everyone:
        raise NotFoundError("Message not found")
    return message


def delete_for_me(session: Session, *, actor_id: int, message_id: int) -> bool:
    """Hide the message from ``actor_id`` only.

    Idempotent: returns ``False`` when the message was already hidden.
    """

    repository = MessageRepository(session)
    message = get_live_message(repository, message_id)
    if not message.involves(actor_id):
        raise AuthorizationError("Only a participant can delete this message")
    return repository.hide(message_id, actor_id)


def delete_for_everyone(
    session: Session, fanout: RealtimeFanout, *, actor_id: int, message_id: int
) -> Message:
    """Remove the message for both participants; only its sender may do so."""

    repository = MessageRepository(session)
    message = get_live_message(repository, message_id)
    if message.sender_id != actor_id:
        raise AuthorizationError("Only sender can delete for everyone")
    if not repository.mark_deleted_for_everyone(message_id, sender_id=actor_id):
        raise NotFoundError("Message not found")
    message.deleted_for_everyone = True
    fanout.route_many(
        (message.sender_id, message.receiver_id),
        EVENT_MESSAGE_DELETED,
        {"messageId": message_id},
    )
    return message


def delete_message(
    session: Session,
    fanout: RealtimeFanout,
    *,
    actor_id: int,
    message_id: int,
    mode: str,
) -> None:
    if mode == DELETE_MODE_ME:
        delete_for_me(session, actor_id=actor_id, message_id=message_id)
    elif mode == DELETE_MODE_EVERYONE:
        delete_for_everyone(session, fanout, actor_id=actor_id, message_id=message_id)
    else:
        raise ValidationError("Invalid mode")


__all__ = [
    "DELETE_MODE_ME",
    "DELETE_MODE_EVERYONE",
    "delete_for_everyone",
    "delete_for_me",
    "delete_message",
    "get_live_message",
]
