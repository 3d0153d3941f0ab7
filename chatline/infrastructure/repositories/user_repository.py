"""Persistence layer for user display data."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from sqlalchemy.orm import Session

from chatline.domain.entities import User
from chatline.infrastructure.models import UserModel
from chatline.utils import ensure_naive_utc, ensure_utc

from .errors import translate_store_errors


class UserRepository:
    """Provide lookups and minimal writes for :class:`User` entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    @translate_store_errors
    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    @translate_store_errors
    def get_map_by_ids(self, user_ids: Iterable[int]) -> dict[int, User]:
        ids = {user_id for user_id in user_ids if user_id is not None}
        if not ids:
            return {}
        query = self.session.query(UserModel).filter(UserModel.id.in_(ids))
        return {model.id: self._to_entity(model) for model in query.all()}

    @translate_store_errors
    def create(self, user: User) -> User:
        model = UserModel(
            username=user.username,
            avatar=user.avatar,
            last_active=ensure_naive_utc(user.last_active),
        )
        if user.id is not None:
            model.id = user.id
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @translate_store_errors
    def touch_last_active(self, user_id: int, when: datetime) -> None:
        self.session.query(UserModel).filter(UserModel.id == user_id).update(
            {UserModel.last_active: ensure_naive_utc(when)},
            synchronize_session=False,
        )
        self.session.commit()

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            username=model.username,
            avatar=model.avatar,
            last_active=ensure_utc(model.last_active),
            created_at=ensure_utc(model.created_at),
        )


__all__ = ["UserRepository"]
