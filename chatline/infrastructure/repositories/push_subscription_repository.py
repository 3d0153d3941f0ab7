"""Persistence helpers for web push subscriptions."""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from chatline.domain.entities import PushSubscription
from chatline.infrastructure.models import PushSubscriptionModel

from .errors import translate_store_errors


class PushSubscriptionRepository:
    """Store at most one subscription per user."""

    def __init__(self, session: Session) -> None:
        self.session = session

    @translate_store_errors
    def get_for_user(self, user_id: int) -> PushSubscription | None:
        model = (
            self.session.query(PushSubscriptionModel)
            .filter(PushSubscriptionModel.user_id == user_id)
            .first()
        )
        return self._to_entity(model) if model else None

    @translate_store_errors
    def upsert(self, user_id: int, subscription: dict[str, Any]) -> PushSubscription:
        model = (
            self.session.query(PushSubscriptionModel)
            .filter(PushSubscriptionModel.user_id == user_id)
            .first()
        )
        if model is None:
            model = PushSubscriptionModel(user_id=user_id)
        model.subscription = dict(subscription)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @translate_store_errors
    def delete_for_user(self, user_id: int) -> None:
        self.session.query(PushSubscriptionModel).filter(
            PushSubscriptionModel.user_id == user_id
        ).delete(synchronize_session=False)
        self.session.commit()

    @staticmethod
    def _to_entity(model: PushSubscriptionModel) -> PushSubscription:
        return PushSubscription(
            id=model.id,
            user_id=model.user_id,
            subscription=dict(model.subscription or {}),
        )


__all__ = ["PushSubscriptionRepository"]
