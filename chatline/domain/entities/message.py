"""Domain entity representing a direct message between two users."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

MESSAGE_KIND_TEXT = "text"
MESSAGE_KIND_AUDIO = "audio"
MESSAGE_KIND_FILE = "file"
MESSAGE_KIND_SHARED_POST = "shared_post"

MESSAGE_KINDS = (
    MESSAGE_KIND_TEXT,
    MESSAGE_KIND_AUDIO,
    MESSAGE_KIND_FILE,
    MESSAGE_KIND_SHARED_POST,
)

MESSAGE_STATUS_SENT = "sent"
MESSAGE_STATUS_DELIVERED = "delivered"
MESSAGE_STATUS_SEEN = "seen"

# Each status may only move to the one that follows it.
_NEXT_STATUS = {
    MESSAGE_STATUS_SENT: MESSAGE_STATUS_DELIVERED,
    MESSAGE_STATUS_DELIVERED: MESSAGE_STATUS_SEEN,
}


def next_status(status: str) -> str | None:
    """Return the status that follows ``status`` or ``None`` when terminal."""

    return _NEXT_STATUS.get(status)


def can_transition(current: str, target: str) -> bool:
    """Return ``True`` when ``current`` may advance directly to ``target``."""

    return next_status(current) == target


@dataclass(frozen=True)
class TextPayload:
    text: str


@dataclass(frozen=True)
class AudioPayload:
    audio_url: str
    duration: float | None = None


@dataclass(frozen=True)
class FilePayload:
    file_url: str
    file_name: str
    file_type: str


@dataclass(frozen=True)
class SharedPostPayload:
    post_id: str


MessagePayload = TextPayload | AudioPayload | FilePayload | SharedPostPayload


@dataclass
class Message:
    """A message exchanged between ``sender_id`` and ``receiver_id``."""

    id: int | None
    sender_id: int
    receiver_id: int
    kind: str
    status: str = MESSAGE_STATUS_SENT
    text: str | None = None
    audio_url: str | None = None
    audio_duration: float | None = None
    file_url: str | None = None
    file_name: str | None = None
    file_type: str | None = None
    shared_post_id: str | None = None
    hidden_for: set[int] = field(default_factory=set)
    deleted_for_everyone: bool = False
    seen_at: datetime | None = None
    created_at: datetime | None = None

    @classmethod
    def from_payload(
        cls, *, sender_id: int, receiver_id: int, payload: MessagePayload
    ) -> "Message":
        """Build an unsaved message in state ``sent`` carrying ``payload``."""

        message = cls(id=None, sender_id=sender_id, receiver_id=receiver_id, kind="")
        if isinstance(payload, TextPayload):
            message.kind = MESSAGE_KIND_TEXT
            message.text = payload.text
        elif isinstance(payload, AudioPayload):
            message.kind = MESSAGE_KIND_AUDIO
            message.audio_url = payload.audio_url
            message.audio_duration = payload.duration
        elif isinstance(payload, FilePayload):
            message.kind = MESSAGE_KIND_FILE
            message.file_url = payload.file_url
            message.file_name = payload.file_name
            message.file_type = payload.file_type
        elif isinstance(payload, SharedPostPayload):
            message.kind = MESSAGE_KIND_SHARED_POST
            message.shared_post_id = payload.post_id
        else:
            raise TypeError(f"Unsupported message payload: {payload!r}")
        return message

    def involves(self, user_id: int) -> bool:
        return user_id in (self.sender_id, self.receiver_id)

    def counterpart_of(self, user_id: int) -> int:
        """Return the other participant from ``user_id``'s point of view."""

        return self.receiver_id if self.sender_id == user_id else self.sender_id

    def is_visible_to(self, viewer_id: int) -> bool:
        return not self.deleted_for_everyone and viewer_id not in self.hidden_for


__all__ = [
    "Message",
    "MessagePayload",
    "TextPayload",
    "AudioPayload",
    "FilePayload",
    "SharedPostPayload",
    "MESSAGE_KIND_TEXT",
    "MESSAGE_KIND_AUDIO",
    "MESSAGE_KIND_FILE",
    "MESSAGE_KIND_SHARED_POST",
    "MESSAGE_KINDS",
    "MESSAGE_STATUS_SENT",
    "MESSAGE_STATUS_DELIVERED",
    "MESSAGE_STATUS_SEEN",
    "can_transition",
    "next_status",
]
