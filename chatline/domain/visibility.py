"""Rules deciding which messages a viewer can see.

Every function here is pure: it receives messages already loaded from the
store and never touches persistence. Global deletion and per-user hiding are
independent, so a message hidden for one participant stays visible to the
other until its sender deletes it for everyone.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable

from .entities import (
    MESSAGE_KIND_AUDIO,
    MESSAGE_KIND_FILE,
    MESSAGE_KIND_SHARED_POST,
    ConversationSummary,
    Message,
)

PREVIEW_AUDIO = "voice message"
PREVIEW_FILE = "file"
PREVIEW_SHARED_POST = "shared post"
PREVIEW_FALLBACK = "new message"

_EPOCH = datetime.min


def _chronological_key(message: Message) -> tuple[datetime, int]:
    created_at = message.created_at.replace(tzinfo=None) if message.created_at else _EPOCH
    return created_at, message.id or 0


def is_in_conversation(message: Message, viewer_id: int, counterpart_id: int) -> bool:
    return (message.sender_id, message.receiver_id) in (
        (viewer_id, counterpart_id),
        (counterpart_id, viewer_id),
    )


def visible_history(
    messages: Iterable[Message], viewer_id: int, counterpart_id: int
) -> list[Message]:
    """Return the conversation as ``viewer_id`` sees it, oldest first."""

    visible = [
        message
        for message in messages
        if is_in_conversation(message, viewer_id, counterpart_id)
        and message.is_visible_to(viewer_id)
    ]
    return sorted(visible, key=_chronological_key)


def preview_for(message: Message) -> str:
    """Return the text shown for ``message`` in a conversation listing."""

    if message.text:
        return message.text
    if message.kind == MESSAGE_KIND_AUDIO:
        return PREVIEW_AUDIO
    if message.kind == MESSAGE_KIND_FILE:
        return PREVIEW_FILE
    if message.kind == MESSAGE_KIND_SHARED_POST:
        return PREVIEW_SHARED_POST
    return PREVIEW_FALLBACK


def recent_conversations(
    messages: Iterable[Message], viewer_id: int
) -> list[ConversationSummary]:
    """Return one summary per counterpart, most recent conversation first.

    Messages are walked newest first (ties broken by the higher id) and the
    first visible message found for a counterpart wins.
    """

    ordered = sorted(
        (
            message
            for message in messages
            if message.involves(viewer_id) and message.is_visible_to(viewer_id)
        ),
        key=_chronological_key,
        reverse=True,
    )

    summaries: dict[int, ConversationSummary] = {}
    for message in ordered:
        counterpart_id = message.counterpart_of(viewer_id)
        if counterpart_id in summaries:
            continue
        summaries[counterpart_id] = ConversationSummary(
            counterpart_id=counterpart_id,
            last_message=message,
            preview=preview_for(message),
            last_time=message.created_at,
        )
    return list(summaries.values())


__all__ = [
    "PREVIEW_AUDIO",
    "PREVIEW_FILE",
    "PREVIEW_SHARED_POST",
    "is_in_conversation",
    "preview_for",
    "recent_conversations",
    "visible_history",
]
