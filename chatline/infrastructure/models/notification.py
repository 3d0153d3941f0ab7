"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import expression

from chatline.infrastructure.database import Base
from chatline.utils import now_naive_utc


class NotificationModel(Base):
    """Database representation for user notifications."""

    __tablename__ = "notification"

    id = Column(Integer, primary_key=True, index=True)
    kind = Column(String(20), nullable=False)
    source_id = Column(Integer, ForeignKey("user.id"), nullable=False)
    target_id = Column(Integer, ForeignKey("user.id"), nullable=False)
    message_id = Column(
        Integer, ForeignKey("message.id", ondelete="SET NULL"), nullable=True
    )
    post_id = Column(String(64), nullable=True)
    text = Column(Text, nullable=True)
    read = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
    )
    created_at = Column(DateTime(), nullable=False, default=now_naive_utc)

    source = relationship("UserModel", foreign_keys=[source_id], lazy="joined")


Index("ix_notification_target_created", NotificationModel.target_id, NotificationModel.created_at)

# At most one unread message notification per (source, target).
_UNREAD_MESSAGE = (NotificationModel.kind == "message") & (
    NotificationModel.read == expression.false()
)
Index(
    "uq_notification_unread_message",
    NotificationModel.source_id,
    NotificationModel.target_id,
    unique=True,
    sqlite_where=_UNREAD_MESSAGE,
    postgresql_where=_UNREAD_MESSAGE,
)


__all__ = ["NotificationModel"]
