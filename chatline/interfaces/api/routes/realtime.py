"""Websocket endpoint carrying chat traffic and presence."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable
from functools import partial
from typing import Any, TypeVar

import anyio
from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from chatline.application.use_cases.messages import mark_seen, relay_typing, send_message
from chatline.application.use_cases.messages.validators import (
    build_shared_post_payload,
    build_text_payload,
)
from chatline.application.use_cases.notifications import acknowledge, list_notifications
from chatline.application.use_cases.presence import record_last_seen
from chatline.config import get_settings
from chatline.domain.entities import User
from chatline.domain.errors import AuthenticationError, ChatError, ValidationError
from chatline.infrastructure.database import SessionLocal
from chatline.infrastructure.realtime import ChatSession, RealtimeFanout, serialize_notification
from chatline.infrastructure.repositories import UserRepository
from chatline.interfaces.api.dependencies import resolve_current_user
from chatline.interfaces.api.routes_helpers import parse_user_id
from chatline.utils import now_utc

logger = logging.getLogger(__name__)

router = APIRouter(tags=["realtime"])

T = TypeVar("T")

POLICY_VIOLATION = 1008
INTERNAL_ERROR = 1011


def _with_session(operation: Callable[..., T], /, **kwargs: Any) -> T:
    """Run ``operation`` with a short-lived database session."""

    session = SessionLocal()
    try:
        return operation(session, **kwargs)
    finally:
        session.close()


async def _in_worker(operation: Callable[..., T], /, **kwargs: Any) -> T:
    return await anyio.to_thread.run_sync(partial(_with_session, operation, **kwargs))


def _authenticate(session, *, token: str) -> tuple[User, list[dict[str, Any]]]:
    user = resolve_current_user(token, session)
    pending = list_notifications(
        session,
        target_id=user.id,
        limit=get_settings().notification_list_limit,
        unread_only=True,
    )
    sources = UserRepository(session).get_map_by_ids({n.source_id for n in pending})
    return user, [serialize_notification(n, sources.get(n.source_id)) for n in pending]


async def _handle_frame(
    websocket: WebSocket,
    session: ChatSession,
    fanout: RealtimeFanout,
    frame: dict[str, Any],
) -> None:
    frame_type = frame.get("type")
    user_id = session.user_id
    push_sender = websocket.app.state.push_sender

    if frame_type == "ping":
        session.enqueue({"type": "pong", "data": None})
    elif frame_type in ("typing", "stop_typing"):
        relay_typing(
            fanout,
            from_id=user_id,
            to_id=parse_user_id(frame.get("to")),
            typing=frame_type == "typing",
        )
    elif frame_type == "send_message":
        payload = build_text_payload(frame.get("text"), max_length=get_settings().max_text_length)
        await _in_worker(
            send_message,
            fanout=fanout,
            sender_id=user_id,
            receiver_id=parse_user_id(frame.get("to")),
            payload=payload,
            push_sender=push_sender,
        )
    elif frame_type == "share_post":
        payload = build_shared_post_payload(frame.get("postId"))
        await _in_worker(
            send_message,
            fanout=fanout,
            sender_id=user_id,
            receiver_id=parse_user_id(frame.get("to")),
            payload=payload,
            push_sender=push_sender,
        )
    elif frame_type == "seen_chat":
        await _in_worker(
            mark_seen,
            fanout=fanout,
            viewer_id=user_id,
            counterpart_id=parse_user_id(frame.get("from")),
        )
    elif frame_type == "ack":
        ids = frame.get("ids")
        if isinstance(ids, list) and ids:
            await _in_worker(acknowledge, actor_id=user_id, notification_ids=ids)
    else:
        raise ValidationError(f"Unsupported event '{frame_type}'")


@router.websocket("/ws")
async def chat_websocket(websocket: WebSocket) -> None:
    """Websocket endpoint for one authenticated chat client."""

    token = websocket.query_params.get("token")
    if not token:
        await websocket.close(code=POLICY_VIOLATION)
        return

    try:
        user, pending_notifications = await _in_worker(_authenticate, token=token)
    except AuthenticationError:
        await websocket.close(code=POLICY_VIOLATION)
        return
    except ChatError:
        logger.exception("Could not open a chat session")
        await websocket.close(code=INTERNAL_ERROR)
        return

    fanout: RealtimeFanout = websocket.app.state.fanout
    await websocket.accept()

    session = ChatSession(user.id, websocket)
    online = set(fanout.online_user_ids())
    online.add(user.id)
    session.enqueue(
        {
            "type": "init",
            "data": {"notifications": pending_notifications, "onlineUsers": sorted(online)},
        }
    )
    writer = asyncio.create_task(session.run_writer())
    fanout.connect(session)

    try:
        while True:
            try:
                frame = await websocket.receive_json()
            except WebSocketDisconnect:
                raise
            except ValueError:
                session.enqueue(
                    {"type": "error", "data": {"kind": "validation", "detail": "Invalid JSON"}}
                )
                continue

            if not isinstance(frame, dict):
                continue

            try:
                await _handle_frame(websocket, session, fanout, frame)
            except ChatError as exc:
                logger.info(
                    "Rejected %s frame from user %s: %s", frame.get("type"), user.id, exc.detail
                )
                session.enqueue(
                    {
                        "type": "error",
                        "data": {
                            "kind": exc.kind,
                            "detail": exc.detail,
                            "event": frame.get("type"),
                        },
                    }
                )
    except WebSocketDisconnect:
        pass
    finally:
        last_seen = now_utc()
        try:
            await _in_worker(record_last_seen, user_id=user.id, when=last_seen)
        except ChatError:
            logger.warning("Could not record last activity for user %s", user.id)
        fanout.disconnect(session, last_seen=last_seen)
        writer.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await writer


__all__ = ["router"]
