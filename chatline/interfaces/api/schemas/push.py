"""Pydantic models for browser push subscriptions."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class PushKeys(BaseModel):
    p256dh: str
    auth: str


class PushSubscriptionCreate(BaseModel):
    """Subscription object produced by ``PushManager.subscribe`` in the browser."""

    model_config = ConfigDict(populate_by_name=True)

    endpoint: str
    keys: PushKeys
    expiration_time: float | None = Field(
        default=None,
        validation_alias=AliasChoices("expiration_time", "expirationTime"),
        serialization_alias="expirationTime",
    )

    def as_subscription(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class DetailResponse(BaseModel):
    message: str


__all__ = ["DetailResponse", "PushKeys", "PushSubscriptionCreate"]
