"""Endpoints for reading and managing notifications."""

from __future__ import annotations

from collections.abc import Iterable

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from chatline.application.use_cases.notifications import (
    count_unread,
    delete_notification,
    list_notifications,
    mark_all_read,
    mark_read,
    notify_if_needed,
)
from chatline.config import get_settings
from chatline.domain.entities import Notification, User
from chatline.domain.errors import ChatError, NotFoundError
from chatline.infrastructure.database import get_db
from chatline.infrastructure.push import WebPushSender
from chatline.infrastructure.realtime import RealtimeFanout
from chatline.infrastructure.repositories import UserRepository
from chatline.interfaces.api.dependencies import (
    get_active_user,
    get_current_user,
    get_fanout,
    get_push_sender,
)
from chatline.interfaces.api.routes_helpers import to_http_exception
from chatline.interfaces.api.schemas import (
    MarkAllReadResponse,
    NotificationCreate,
    NotificationRead,
    UnreadCount,
    UserSummary,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _notification_to_schema(notification: Notification, source: User | None) -> NotificationRead:
    return NotificationRead(
        id=notification.id or 0,
        kind=notification.kind,
        source_id=notification.source_id,
        source=UserSummary.model_validate(source) if source else None,
        target_id=notification.target_id,
        message_id=notification.message_id,
        post_id=notification.post_id,
        text=notification.text,
        read=notification.read,
        created_at=notification.created_at,
    )


def _with_sources(db: Session, notifications: Iterable[Notification]) -> list[NotificationRead]:
    notifications = list(notifications)
    sources = UserRepository(db).get_map_by_ids({n.source_id for n in notifications})
    return [_notification_to_schema(n, sources.get(n.source_id)) for n in notifications]


@router.get("/", response_model=list[NotificationRead])
def read_notifications(
    unread_only: bool = Query(False),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_active_user),
) -> list[NotificationRead]:
    """Return the most recent notifications for the authenticated user."""

    try:
        notifications = list_notifications(
            db,
            target_id=current_user.id,
            limit=get_settings().notification_list_limit,
            unread_only=unread_only,
        )
        return _with_sources(db, notifications)
    except ChatError as exc:
        raise to_http_exception(exc) from exc


@router.get("/unread-count", response_model=UnreadCount)
def read_unread_count(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> UnreadCount:
    try:
        return UnreadCount(count=count_unread(db, target_id=current_user.id))
    except ChatError as exc:
        raise to_http_exception(exc) from exc


@router.post("/", response_model=NotificationRead | None, status_code=status.HTTP_201_CREATED)
def create_notification(
    body: NotificationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    fanout: RealtimeFanout = Depends(get_fanout),
    push_sender: WebPushSender | None = Depends(get_push_sender),
) -> NotificationRead | None:
    """Raise a like, comment or follow alert from the current user.

    Returns ``null`` when the alert targets its own author.
    """

    try:
        if UserRepository(db).get(body.target_id) is None:
            raise NotFoundError("Target user not found")
        notification = notify_if_needed(
            db,
            fanout,
            kind=body.kind,
            source_id=current_user.id,
            target_id=body.target_id,
            post_id=body.post_id,
            text=body.text,
            source=current_user,
            push_sender=push_sender,
        )
    except ChatError as exc:
        raise to_http_exception(exc) from exc
    if notification is None:
        return None
    return _notification_to_schema(notification, current_user)


@router.put("/read-all", response_model=MarkAllReadResponse)
def read_all_notifications(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_active_user),
) -> MarkAllReadResponse:
    try:
        return MarkAllReadResponse(updated=mark_all_read(db, actor_id=current_user.id))
    except ChatError as exc:
        raise to_http_exception(exc) from exc


@router.put("/{notification_id}/read", response_model=NotificationRead)
def read_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_active_user),
) -> NotificationRead:
    """Mark a single notification as read."""

    try:
        notification = mark_read(db, notification_id=notification_id, actor_id=current_user.id)
        return _with_sources(db, [notification])[0]
    except ChatError as exc:
        raise to_http_exception(exc) from exc


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Response:
    try:
        delete_notification(db, notification_id=notification_id, actor_id=current_user.id)
    except ChatError as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
