"""SQLAlchemy model for web push subscriptions."""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer

from chatline.infrastructure.database import Base
from chatline.utils import now_naive_utc


class PushSubscriptionModel(Base):
    """Stored subscription descriptor, one per user."""

    __tablename__ = "push_subscription"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    subscription = Column(JSON, nullable=False, default=dict)
    updated_at = Column(
        DateTime(), nullable=False, default=now_naive_utc, onupdate=now_naive_utc
    )


__all__ = ["PushSubscriptionModel"]
