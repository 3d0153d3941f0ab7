"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Iterable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from chatline.domain.entities import NOTIFICATION_KIND_MESSAGE, Notification
from chatline.infrastructure.models import NotificationModel
from chatline.utils import ensure_naive_utc, ensure_utc, now_naive_utc

from .errors import translate_store_errors


class NotificationRepository:
    """Provide CRUD operations for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    @translate_store_errors
    def get(self, notification_id: int) -> Notification | None:
        model = self.session.get(NotificationModel, notification_id)
        return self._to_entity(model) if model else None

    @translate_store_errors
    def list_for_target(
        self,
        target_id: int,
        *,
        limit: int | None = 50,
        unread_only: bool = False,
    ) -> Sequence[Notification]:
        query = self.session.query(NotificationModel).filter(
            NotificationModel.target_id == target_id
        )
        if unread_only:
            query = query.filter(NotificationModel.read.is_(False))
        query = query.order_by(
            NotificationModel.created_at.desc(), NotificationModel.id.desc()
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    @translate_store_errors
    def count_unread(self, target_id: int) -> int:
        return (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.target_id == target_id,
                NotificationModel.read.is_(False),
            )
            .count()
        )

    @translate_store_errors
    def find_unread_message(self, *, source_id: int, target_id: int) -> Notification | None:
        model = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.kind == NOTIFICATION_KIND_MESSAGE,
                NotificationModel.source_id == source_id,
                NotificationModel.target_id == target_id,
                NotificationModel.read.is_(False),
            )
            .order_by(NotificationModel.id.desc())
            .first()
        )
        return self._to_entity(model) if model else None

    @translate_store_errors
    def create(self, notification: Notification) -> Notification | None:
        """Persist ``notification``.

        Returns ``None`` when the unread message-notification index rejects
        the row because another request created the same one first.
        """

        model = NotificationModel(
            kind=notification.kind,
            source_id=notification.source_id,
            target_id=notification.target_id,
            message_id=notification.message_id,
            post_id=notification.post_id,
            text=notification.text,
            read=notification.read,
            created_at=ensure_naive_utc(notification.created_at) or now_naive_utc(),
        )
        self.session.add(model)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            if notification.kind == NOTIFICATION_KIND_MESSAGE and self.find_unread_message(
                source_id=notification.source_id, target_id=notification.target_id
            ):
                return None
            raise
        self.session.refresh(model)
        return self._to_entity(model)

    @translate_store_errors
    def mark_read(self, notification_id: int) -> None:
        self.session.query(NotificationModel).filter(
            NotificationModel.id == notification_id
        ).update({NotificationModel.read: True}, synchronize_session=False)
        self.session.commit()

    @translate_store_errors
    def mark_many_read(self, notification_ids: Iterable[int], *, target_id: int) -> int:
        ids = [notification_id for notification_id in notification_ids if notification_id is not None]
        if not ids:
            return 0
        updated = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.id.in_(ids),
                NotificationModel.target_id == target_id,
                NotificationModel.read.is_(False),
            )
            .update({NotificationModel.read: True}, synchronize_session=False)
        )
        self.session.commit()
        return updated

    @translate_store_errors
    def mark_all_read(self, target_id: int) -> int:
        updated = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.target_id == target_id,
                NotificationModel.read.is_(False),
            )
            .update({NotificationModel.read: True}, synchronize_session=False)
        )
        self.session.commit()
        return updated

    @translate_store_errors
    def delete(self, notification_id: int) -> None:
        self.session.query(NotificationModel).filter(
            NotificationModel.id == notification_id
        ).delete(synchronize_session=False)
        self.session.commit()

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            kind=model.kind,
            source_id=model.source_id,
            target_id=model.target_id,
            text=model.text,
            message_id=model.message_id,
            post_id=model.post_id,
            read=bool(model.read),
            created_at=ensure_utc(model.created_at),
        )


__all__ = ["NotificationRepository"]
