"""Persistence helpers for message entities."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime

from sqlalchemy import and_, or_, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from chatline.domain.entities import Message, can_transition
from chatline.infrastructure.models import MessageHiddenModel, MessageModel
from chatline.utils import ensure_naive_utc, ensure_utc, now_naive_utc

from .errors import translate_store_errors


class MessageRepository:
    """Provide storage operations for :class:`Message` objects.

    State changes are issued as conditional ``UPDATE`` statements keyed on
    the expected current value, so two writers racing on the same message
    cannot move it backwards or apply the same transition twice.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    @translate_store_errors
    def get(self, message_id: int) -> Message | None:
        model = self.session.get(MessageModel, message_id)
        return self._to_entity(model) if model else None

    @translate_store_errors
    def create(self, message: Message) -> Message:
        model = MessageModel()
        self._apply_entity_to_model(model, message)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @translate_store_errors
    def advance_status(
        self,
        message_id: int,
        *,
        current: str,
        target: str,
        seen_at: datetime | None = None,
    ) -> bool:
        """Move ``message_id`` from ``current`` to ``target`` if it is still there."""

        if not can_transition(current, target):
            raise ValueError(f"Invalid message status transition {current} -> {target}")
        values: dict = {MessageModel.status: target}
        if seen_at is not None:
            values[MessageModel.seen_at] = ensure_naive_utc(seen_at)
        updated = (
            self.session.query(MessageModel)
            .filter(
                MessageModel.id == message_id,
                MessageModel.status == current,
                MessageModel.deleted_for_everyone.is_(False),
            )
            .update(values, synchronize_session=False)
        )
        self.session.commit()
        return updated == 1

    @translate_store_errors
    def advance_many(
        self,
        message_ids: Iterable[int],
        *,
        current: str,
        target: str,
        seen_at: datetime | None = None,
    ) -> set[int]:
        """Advance every listed message still in ``current``; return the ids moved.

        Messages deleted for everyone, or already moved on by another
        request, are skipped.
        """

        ids = [message_id for message_id in message_ids if message_id is not None]
        if not ids:
            return set()
        if not can_transition(current, target):
            raise ValueError(f"Invalid message status transition {current} -> {target}")
        values: dict = {MessageModel.status: target}
        if seen_at is not None:
            values[MessageModel.seen_at] = ensure_naive_utc(seen_at)
        conditions = (
            MessageModel.id.in_(ids),
            MessageModel.status == current,
            MessageModel.deleted_for_everyone.is_(False),
        )

        if self.session.get_bind().dialect.update_returning:
            statement = (
                update(MessageModel)
                .where(*conditions)
                .values(values)
                .returning(MessageModel.id)
                .execution_options(synchronize_session=False)
            )
            updated = set(self.session.execute(statement).scalars())
        else:
            updated = {
                row.id
                for row in self.session.query(MessageModel.id)
                .filter(*conditions)
                .with_for_update()
            }
            if updated:
                self.session.query(MessageModel).filter(
                    MessageModel.id.in_(updated), *conditions[1:]
                ).update(values, synchronize_session=False)
        self.session.commit()
        return updated

    @translate_store_errors
    def list_unseen_from(self, *, sender_id: int, receiver_id: int) -> Sequence[Message]:
        query = (
            self.session.query(MessageModel)
            .filter(
                MessageModel.sender_id == sender_id,
                MessageModel.receiver_id == receiver_id,
                MessageModel.status != "seen",
                MessageModel.deleted_for_everyone.is_(False),
            )
            .order_by(MessageModel.created_at.asc(), MessageModel.id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    @translate_store_errors
    def list_conversation(self, user_id: int, other_id: int) -> Sequence[Message]:
        """Return every message between the two users not deleted for everyone."""

        query = (
            self.session.query(MessageModel)
            .filter(
                or_(
                    and_(
                        MessageModel.sender_id == user_id,
                        MessageModel.receiver_id == other_id,
                    ),
                    and_(
                        MessageModel.sender_id == other_id,
                        MessageModel.receiver_id == user_id,
                    ),
                )
            )
            .filter(MessageModel.deleted_for_everyone.is_(False))
            .order_by(MessageModel.created_at.asc(), MessageModel.id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    @translate_store_errors
    def list_for_user(self, user_id: int) -> Sequence[Message]:
        """Return messages sent or received by ``user_id``, newest first."""

        query = (
            self.session.query(MessageModel)
            .filter(
                or_(
                    MessageModel.sender_id == user_id,
                    MessageModel.receiver_id == user_id,
                )
            )
            .filter(MessageModel.deleted_for_everyone.is_(False))
            .order_by(MessageModel.created_at.desc(), MessageModel.id.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    @translate_store_errors
    def hide(self, message_id: int, user_id: int) -> bool:
        """Hide ``message_id`` for ``user_id``; return ``False`` if already hidden."""

        return bool(self.hide_many([message_id], user_id))

    @translate_store_errors
    def hide_many(self, message_ids: Iterable[int], user_id: int) -> list[int]:
        """Hide each message for ``user_id`` and return the ids newly hidden."""

        ids = list(dict.fromkeys(i for i in message_ids if i is not None))
        if not ids:
            return []
        already_hidden = {
            row.message_id
            for row in self.session.query(MessageHiddenModel.message_id).filter(
                MessageHiddenModel.user_id == user_id,
                MessageHiddenModel.message_id.in_(ids),
            )
        }
        pending = [message_id for message_id in ids if message_id not in already_hidden]
        if not pending:
            return []
        hidden_at = now_naive_utc()
        for message_id in pending:
            self.session.add(
                MessageHiddenModel(message_id=message_id, user_id=user_id, hidden_at=hidden_at)
            )
        try:
            self.session.commit()
        except IntegrityError:
            # A concurrent request hid one of them first; fall back to one at a time.
            self.session.rollback()
            return [
                message_id for message_id in pending if self._hide_single(message_id, user_id)
            ]
        return pending

    def _hide_single(self, message_id: int, user_id: int) -> bool:
        self.session.add(MessageHiddenModel(message_id=message_id, user_id=user_id))
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            return False
        return True

    @translate_store_errors
    def mark_deleted_for_everyone(self, message_id: int, *, sender_id: int) -> bool:
        updated = (
            self.session.query(MessageModel)
            .filter(
                MessageModel.id == message_id,
                MessageModel.sender_id == sender_id,
                MessageModel.deleted_for_everyone.is_(False),
            )
            .update({MessageModel.deleted_for_everyone: True}, synchronize_session=False)
        )
        self.session.commit()
        return updated == 1

    @staticmethod
    def _apply_entity_to_model(model: MessageModel, message: Message) -> None:
        model.sender_id = message.sender_id
        model.receiver_id = message.receiver_id
        model.kind = message.kind
        model.status = message.status
        model.text = message.text
        model.audio_url = message.audio_url
        model.audio_duration = message.audio_duration
        model.file_url = message.file_url
        model.file_name = message.file_name
        model.file_type = message.file_type
        model.shared_post_id = message.shared_post_id
        model.deleted_for_everyone = message.deleted_for_everyone
        model.seen_at = ensure_naive_utc(message.seen_at)
        model.created_at = ensure_naive_utc(message.created_at) or now_naive_utc()

    @staticmethod
    def _to_entity(model: MessageModel) -> Message:
        return Message(
            id=model.id,
            sender_id=model.sender_id,
            receiver_id=model.receiver_id,
            kind=model.kind,
            status=model.status,
            text=model.text,
            audio_url=model.audio_url,
            audio_duration=model.audio_duration,
            file_url=model.file_url,
            file_name=model.file_name,
            file_type=model.file_type,
            shared_post_id=model.shared_post_id,
            hidden_for={entry.user_id for entry in model.hidden_entries},
            deleted_for_everyone=bool(model.deleted_for_everyone),
            seen_at=ensure_utc(model.seen_at),
            created_at=ensure_utc(model.created_at),
        )


__all__ = ["MessageRepository"]
