"""Use case for clearing a conversation from one participant's view."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from chatline.domain.errors import NotFoundError, ValidationError
from chatline.domain.visibility import visible_history
from chatline.infrastructure.realtime import EVENT_CHAT_CLEARED, RealtimeFanout
from chatline.infrastructure.repositories import MessageRepository

from .delete_message import DELETE_MODE_EVERYONE, DELETE_MODE_ME, delete_for_everyone

logger = logging.getLogger(__name__)


@dataclass
class ClearResult:
    """Ids affected by a clear: hidden for the actor or deleted for both."""

    hidden: list[int] = field(default_factory=list)
    deleted: list[int] = field(default_factory=list)


def clear_conversation(
    session: Session,
    fanout: RealtimeFanout,
    *,
    actor_id: int,
    counterpart_id: int,
    scope: str,
) -> ClearResult:
    """Hide every message ``actor_id`` can currently see with ``counterpart_id``.

    Scope ``me`` hides them for the actor only. Scope ``everyone`` also
    deletes for both participants each message the actor sent, one
    authorized deletion at a time; the counterpart's own messages are only
    hidden for the actor and stay in the counterpart's history.
    """

    if scope not in (DELETE_MODE_ME, DELETE_MODE_EVERYONE):
        raise ValidationError("Invalid mode")

    repository = MessageRepository(session)
    visible = visible_history(
        repository.list_conversation(actor_id, counterpart_id), actor_id, counterpart_id
    )

    result = ClearResult()
    to_hide = []
    for message in visible:
        if scope == DELETE_MODE_EVERYONE and message.sender_id == actor_id:
            try:
                delete_for_everyone(session, fanout, actor_id=actor_id, message_id=message.id)
            except NotFoundError:
                logger.debug("Message %s was deleted concurrently", message.id)
                continue
            result.deleted.append(message.id)
        else:
            to_hide.append(message.id)

    result.hidden = repository.hide_many(to_hide, actor_id)
    fanout.route(actor_id, EVENT_CHAT_CLEARED)
    return result


__all__ = ["ClearResult", "clear_conversation"]
