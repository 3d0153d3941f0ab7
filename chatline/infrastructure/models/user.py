"""SQLAlchemy model for the user table."""

from sqlalchemy import Column, DateTime, Integer, String

from chatline.infrastructure.database import Base
from chatline.utils import now_naive_utc


class UserModel(Base):
    """Display data kept for every chat participant."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), nullable=False, index=True)
    avatar = Column(String(500), nullable=True)
    last_active = Column(DateTime(), nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_naive_utc)


__all__ = ["UserModel"]
