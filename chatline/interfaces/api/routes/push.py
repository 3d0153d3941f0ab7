"""Endpoint for registering browser push subscriptions."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from chatline.application.use_cases.push import subscribe_push
from chatline.domain.entities import User
from chatline.domain.errors import ChatError
from chatline.infrastructure.database import get_db
from chatline.interfaces.api.dependencies import get_current_user
from chatline.interfaces.api.routes_helpers import to_http_exception
from chatline.interfaces.api.schemas import DetailResponse, PushSubscriptionCreate

router = APIRouter(prefix="/push", tags=["push"])


@router.post("/subscribe", response_model=DetailResponse, status_code=status.HTTP_201_CREATED)
def subscribe(
    body: PushSubscriptionCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> DetailResponse:
    """Replace the current user's push subscription."""

    try:
        subscribe_push(db, user_id=current_user.id, subscription=body.as_subscription())
    except ChatError as exc:
        raise to_http_exception(exc) from exc
    return DetailResponse(message="Subscribed")


__all__ = ["router"]
