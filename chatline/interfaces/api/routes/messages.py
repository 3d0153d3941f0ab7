"""Endpoints for sending, reading and removing chat messages."""

from __future__ import annotations

import logging

from azure.core.exceptions import AzureError
from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status
from sqlalchemy.orm import Session

from chatline.application.use_cases.messages import (
    DELETE_MODE_ME,
    RecentConversation,
    clear_conversation,
    delete_message,
    get_visible_history,
    list_recent_conversations,
    mark_seen,
    send_message,
)
from chatline.application.use_cases.messages.validators import (
    AUDIO_EXTENSIONS,
    FILE_EXTENSIONS,
    build_audio_payload,
    build_file_payload,
    build_shared_post_payload,
    build_text_payload,
    ensure_upload,
    parse_duration,
)
from chatline.config import get_settings
from chatline.domain.entities import Message, MessagePayload, User
from chatline.domain.errors import ChatError
from chatline.infrastructure.database import get_db
from chatline.infrastructure.push import WebPushSender
from chatline.infrastructure.realtime import RealtimeFanout
from chatline.infrastructure.storage import (
    AUDIO_FOLDER,
    FILE_FOLDER,
    BlobObjectStorage,
    StoredObject,
)
from chatline.interfaces.api.dependencies import (
    get_current_user,
    get_fanout,
    get_object_storage,
    get_push_sender,
)
from chatline.interfaces.api.routes_helpers import to_http_exception
from chatline.interfaces.api.schemas import (
    ClearConversationResponse,
    DetailResponse,
    MessageRead,
    RecentConversationRead,
    SeenResponse,
    SharePostCreate,
    TextMessageCreate,
    UserSummary,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/messages", tags=["messages"])


def _message_to_schema(message: Message) -> MessageRead:
    return MessageRead.model_validate(message)


def _recent_to_schema(entry: RecentConversation) -> RecentConversationRead:
    summary = entry.summary
    return RecentConversationRead(
        counterpart_id=summary.counterpart_id,
        user=UserSummary.model_validate(entry.counterpart) if entry.counterpart else None,
        message_id=summary.last_message.id or 0,
        last_message=summary.preview,
        last_time=summary.last_time,
    )


def _send(
    db: Session,
    fanout: RealtimeFanout,
    push_sender: WebPushSender | None,
    *,
    sender: User,
    receiver_id: int,
    payload: MessagePayload,
) -> MessageRead:
    try:
        message = send_message(
            db,
            fanout,
            sender_id=sender.id,
            receiver_id=receiver_id,
            payload=payload,
            push_sender=push_sender,
        )
    except ChatError as exc:
        raise to_http_exception(exc) from exc
    return _message_to_schema(message)


def _store_upload(
    storage: BlobObjectStorage,
    upload: UploadFile | None,
    *,
    folder: str,
    allowed: frozenset[str],
) -> StoredObject:
    filename = upload.filename if upload is not None else None
    data = upload.file.read() if upload is not None else None
    try:
        ensure_upload(filename, data, allowed=allowed)
    except ChatError as exc:
        raise to_http_exception(exc) from exc

    try:
        return storage.store(folder, filename, data, content_type=upload.content_type)
    except RuntimeError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Attachment storage is not configured",
        ) from exc
    except AzureError as exc:
        logger.exception("Could not upload %s to %s", filename, folder)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Attachment upload failed",
        ) from exc


@router.post("/{receiver_id}", response_model=MessageRead, status_code=status.HTTP_201_CREATED)
def send_text_message(
    receiver_id: int,
    body: TextMessageCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    fanout: RealtimeFanout = Depends(get_fanout),
    push_sender: WebPushSender | None = Depends(get_push_sender),
) -> MessageRead:
    """Send a text message to ``receiver_id``."""

    try:
        payload = build_text_payload(body.text, max_length=get_settings().max_text_length)
    except ChatError as exc:
        raise to_http_exception(exc) from exc
    return _send(
        db, fanout, push_sender, sender=current_user, receiver_id=receiver_id, payload=payload
    )


@router.post(
    "/file/{receiver_id}", response_model=MessageRead, status_code=status.HTTP_201_CREATED
)
def send_file_message(
    receiver_id: int,
    file: UploadFile | None = File(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    fanout: RealtimeFanout = Depends(get_fanout),
    push_sender: WebPushSender | None = Depends(get_push_sender),
    storage: BlobObjectStorage = Depends(get_object_storage),
) -> MessageRead:
    """Upload an attachment and send it to ``receiver_id``."""

    stored = _store_upload(storage, file, folder=FILE_FOLDER, allowed=FILE_EXTENSIONS)
    try:
        payload = build_file_payload(stored.url, stored.original_name, stored.content_type)
    except ChatError as exc:
        raise to_http_exception(exc) from exc
    return _send(
        db, fanout, push_sender, sender=current_user, receiver_id=receiver_id, payload=payload
    )


@router.post(
    "/voice/{receiver_id}", response_model=MessageRead, status_code=status.HTTP_201_CREATED
)
def send_voice_message(
    receiver_id: int,
    audio: UploadFile | None = File(None),
    duration: str | None = Form(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    fanout: RealtimeFanout = Depends(get_fanout),
    push_sender: WebPushSender | None = Depends(get_push_sender),
    storage: BlobObjectStorage = Depends(get_object_storage),
) -> MessageRead:
    """Upload a voice recording and send it to ``receiver_id``."""

    try:
        seconds = parse_duration(duration)
    except ChatError as exc:
        raise to_http_exception(exc) from exc
    stored = _store_upload(storage, audio, folder=AUDIO_FOLDER, allowed=AUDIO_EXTENSIONS)
    try:
        payload = build_audio_payload(stored.url, seconds)
    except ChatError as exc:
        raise to_http_exception(exc) from exc
    return _send(
        db, fanout, push_sender, sender=current_user, receiver_id=receiver_id, payload=payload
    )


@router.post(
    "/share/{receiver_id}", response_model=MessageRead, status_code=status.HTTP_201_CREATED
)
def share_post(
    receiver_id: int,
    body: SharePostCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    fanout: RealtimeFanout = Depends(get_fanout),
    push_sender: WebPushSender | None = Depends(get_push_sender),
) -> MessageRead:
    try:
        payload = build_shared_post_payload(body.post_id)
    except ChatError as exc:
        raise to_http_exception(exc) from exc
    return _send(
        db, fanout, push_sender, sender=current_user, receiver_id=receiver_id, payload=payload
    )


@router.get("/history/{other_id}", response_model=list[MessageRead])
def read_history(
    other_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[MessageRead]:
    """Return the conversation with ``other_id`` as the current user sees it."""

    try:
        messages = get_visible_history(db, viewer_id=current_user.id, counterpart_id=other_id)
    except ChatError as exc:
        raise to_http_exception(exc) from exc
    return [_message_to_schema(message) for message in messages]


@router.get("/recent", response_model=list[RecentConversationRead])
def read_recent_conversations(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[RecentConversationRead]:
    try:
        entries = list_recent_conversations(db, viewer_id=current_user.id)
    except ChatError as exc:
        raise to_http_exception(exc) from exc
    return [_recent_to_schema(entry) for entry in entries]


@router.post("/seen/{other_id}", response_model=SeenResponse)
def mark_conversation_seen(
    other_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    fanout: RealtimeFanout = Depends(get_fanout),
) -> SeenResponse:
    """Mark every pending message from ``other_id`` as seen."""

    try:
        ids = mark_seen(db, fanout, viewer_id=current_user.id, counterpart_id=other_id)
    except ChatError as exc:
        raise to_http_exception(exc) from exc
    return SeenResponse(message_ids=ids)


@router.delete("/clear/{other_id}", response_model=ClearConversationResponse)
def clear_chat(
    other_id: int,
    mode: str = Query(DELETE_MODE_ME),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    fanout: RealtimeFanout = Depends(get_fanout),
) -> ClearConversationResponse:
    """Hide the conversation with ``other_id`` for the current user."""

    try:
        result = clear_conversation(
            db, fanout, actor_id=current_user.id, counterpart_id=other_id, scope=mode
        )
    except ChatError as exc:
        raise to_http_exception(exc) from exc
    return ClearConversationResponse(
        message="Chat cleared", hidden=result.hidden, deleted=result.deleted
    )


@router.delete("/{message_id}", response_model=DetailResponse)
def remove_message(
    message_id: int,
    mode: str = Query(DELETE_MODE_ME),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    fanout: RealtimeFanout = Depends(get_fanout),
) -> DetailResponse:
    """Delete a message for the current user or, for its sender, for everyone."""

    try:
        delete_message(db, fanout, actor_id=current_user.id, message_id=message_id, mode=mode)
    except ChatError as exc:
        raise to_http_exception(exc) from exc
    label = "me" if mode == DELETE_MODE_ME else "everyone"
    return DetailResponse(message=f"Deleted for {label}")


__all__ = ["router"]
