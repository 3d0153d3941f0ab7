"""SQLAlchemy models for direct messages and their per-user hide entries."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import expression

from chatline.infrastructure.database import Base
from chatline.utils import now_naive_utc


class MessageModel(Base):
    """Database representation of a message exchanged by two users."""

    __tablename__ = "message"

    id = Column(Integer, primary_key=True, index=True)
    sender_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    receiver_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    kind = Column(String(20), nullable=False, default="text")
    status = Column(String(20), nullable=False, default="sent")
    text = Column(Text, nullable=True)
    audio_url = Column(String(1000), nullable=True)
    audio_duration = Column(Float, nullable=True)
    file_url = Column(String(1000), nullable=True)
    file_name = Column(String(255), nullable=True)
    file_type = Column(String(255), nullable=True)
    shared_post_id = Column(String(64), nullable=True)
    deleted_for_everyone = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
    )
    seen_at = Column(DateTime(), nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_naive_utc, index=True)

    hidden_entries = relationship(
        "MessageHiddenModel",
        lazy="selectin",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class MessageHiddenModel(Base):
    """Marks ``message_id`` as invisible for ``user_id`` only."""

    __tablename__ = "message_hidden"

    message_id = Column(
        Integer, ForeignKey("message.id", ondelete="CASCADE"), primary_key=True
    )
    user_id = Column(Integer, ForeignKey("user.id", ondelete="CASCADE"), primary_key=True)
    hidden_at = Column(DateTime(), nullable=False, default=now_naive_utc)


Index(
    "ix_message_conversation",
    MessageModel.sender_id,
    MessageModel.receiver_id,
    MessageModel.created_at,
)
Index("ix_message_hidden_user", MessageHiddenModel.user_id)


__all__ = ["MessageModel", "MessageHiddenModel"]
