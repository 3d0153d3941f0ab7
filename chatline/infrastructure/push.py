"""Best-effort web push delivery for users who are not looking at the app."""

from __future__ import annotations

import json
import logging
from typing import Any

from pywebpush import WebPushException, webpush

from chatline.config import Settings, get_settings
from chatline.domain.entities import PushSubscription

logger = logging.getLogger(__name__)

# Push services answer 404/410 once a browser revoked the subscription.
_EXPIRED_STATUSES = {404, 410}


class WebPushSender:
    """Send VAPID-signed payloads to stored browser subscriptions."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()

    @property
    def enabled(self) -> bool:
        return self._settings.push_enabled

    def send(self, subscription: PushSubscription, payload: dict[str, Any]) -> bool:
        """Deliver ``payload``; returns ``False`` when the subscription expired.

        Transport failures are logged and never raised to the caller.
        """

        if not self.enabled:
            logger.debug("Push disabled, skipping delivery to user %s", subscription.user_id)
            return True
        try:
            webpush(
                subscription_info=subscription.subscription,
                data=json.dumps(payload),
                vapid_private_key=self._settings.vapid_private_key,
                vapid_claims={"sub": self._settings.vapid_subject},
            )
        except WebPushException as exc:
            status_code = getattr(exc.response, "status_code", None)
            if status_code in _EXPIRED_STATUSES:
                logger.info("Push subscription for user %s expired", subscription.user_id)
                return False
            logger.warning("Push delivery to user %s failed: %s", subscription.user_id, exc)
        except Exception as exc:  # malformed descriptor or network
            logger.warning("Push delivery to user %s failed: %s", subscription.user_id, exc)
        return True


__all__ = ["WebPushSender"]
