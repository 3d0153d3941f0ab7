"""Domain entity describing a stored web push subscription."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class PushSubscription:
    """Subscription descriptor a browser handed to the user's client."""

    id: int | None
    user_id: int
    subscription: dict[str, Any] = field(default_factory=dict)


__all__ = ["PushSubscription"]
