"""FastAPI dependency utilities."""

import logging

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from chatline.application.use_cases.presence import record_last_seen
from chatline.domain.entities import User
from chatline.domain.errors import AuthenticationError, ChatError
from chatline.infrastructure.database import get_db
from chatline.infrastructure.push import WebPushSender
from chatline.infrastructure.realtime import RealtimeFanout
from chatline.infrastructure.repositories import UserRepository
from chatline.infrastructure.security import user_id_from_token
from chatline.infrastructure.storage import BlobObjectStorage

logger = logging.getLogger(__name__)

# Tokens are issued by the identity provider, not by this service.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")


def resolve_current_user(token: str, db: Session) -> User:
    """Resolve the authenticated user for the provided token."""

    try:
        user_id = user_id_from_token(token)
    except ValueError as exc:
        raise AuthenticationError("Invalid credentials") from exc

    user = UserRepository(db).get(user_id)
    if user is None:
        raise AuthenticationError("User not found")
    return user


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Return the authenticated user from the provided token."""

    try:
        return resolve_current_user(token, db)
    except AuthenticationError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=exc.detail,
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc


def get_active_user(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> User:
    """Return the authenticated user after stamping their last activity."""

    try:
        record_last_seen(db, user_id=current_user.id)
    except ChatError as exc:
        logger.warning("Could not record activity for user %s: %s", current_user.id, exc)
    return current_user


def get_fanout(request: Request) -> RealtimeFanout:
    """Return the fan-out owned by the running application."""

    return request.app.state.fanout


def get_push_sender(request: Request) -> WebPushSender | None:
    return request.app.state.push_sender


def get_object_storage() -> BlobObjectStorage:
    return BlobObjectStorage()
