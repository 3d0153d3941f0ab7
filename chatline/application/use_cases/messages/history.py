"""Read-side use cases applying the visibility rules to stored messages."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session

from chatline.application.retry import retry_transient_read
from chatline.domain.entities import ConversationSummary, Message, User
from chatline.domain.visibility import recent_conversations, visible_history
from chatline.infrastructure.repositories import MessageRepository, UserRepository


@dataclass(frozen=True)
class RecentConversation:
    summary: ConversationSummary
    counterpart: User | None


def get_visible_history(session: Session, *, viewer_id: int, counterpart_id: int) -> list[Message]:
    """Return the conversation with ``counterpart_id`` as ``viewer_id`` sees it."""

    repository = MessageRepository(session)

    def _read() -> list[Message]:
        messages = repository.list_conversation(viewer_id, counterpart_id)
        return visible_history(messages, viewer_id, counterpart_id)

    return retry_transient_read(_read)


def list_recent_conversations(session: Session, *, viewer_id: int) -> list[RecentConversation]:
    """Return the latest visible message per counterpart, newest first."""

    def _read() -> list[RecentConversation]:
        messages = MessageRepository(session).list_for_user(viewer_id)
        summaries = recent_conversations(messages, viewer_id)
        users = UserRepository(session).get_map_by_ids(s.counterpart_id for s in summaries)
        return [
            RecentConversation(summary=summary, counterpart=users.get(summary.counterpart_id))
            for summary in summaries
        ]

    return retry_transient_read(_read)


__all__ = ["RecentConversation", "get_visible_history", "list_recent_conversations"]
