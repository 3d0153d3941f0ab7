"""Use case for registering a browser push subscription."""

from typing import Any

from sqlalchemy.orm import Session

from chatline.domain.entities import PushSubscription
from chatline.domain.errors import ValidationError
from chatline.infrastructure.repositories import PushSubscriptionRepository


def subscribe_push(session: Session, *, user_id: int, subscription: dict[str, Any]) -> PushSubscription:
    """Store ``subscription`` as ``user_id``'s only push target."""

    endpoint = subscription.get("endpoint")
    keys = subscription.get("keys")
    if not isinstance(endpoint, str) or not endpoint.startswith("https://"):
        raise ValidationError("Subscription endpoint must be an https URL")
    if not isinstance(keys, dict) or not keys.get("p256dh") or not keys.get("auth"):
        raise ValidationError("Subscription keys p256dh and auth are required")
    return PushSubscriptionRepository(session).upsert(user_id, subscription)


__all__ = ["subscribe_push"]
