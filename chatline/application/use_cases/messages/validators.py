"""Validation helpers turning raw request values into message payloads."""

from __future__ import annotations

import math
from pathlib import PurePosixPath

from chatline.domain.entities import (
    AudioPayload,
    FilePayload,
    SharedPostPayload,
    TextPayload,
)
from chatline.domain.errors import ValidationError

AUDIO_EXTENSIONS = frozenset({".mp3", ".wav", ".webm", ".ogg"})
FILE_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".pdf", ".docx", ".zip", ".mp4"})


def build_text_payload(text: str | None, *, max_length: int) -> TextPayload:
    if text is None or not text.strip():
        raise ValidationError("Message text is required")
    if len(text) > max_length:
        raise ValidationError(f"Message text cannot exceed {max_length} characters")
    return TextPayload(text=text)


def build_shared_post_payload(post_id: str | None) -> SharedPostPayload:
    cleaned = str(post_id).strip() if post_id is not None else ""
    if not cleaned:
        raise ValidationError("postId required")
    return SharedPostPayload(post_id=cleaned)


def build_audio_payload(audio_url: str | None, duration: object = None) -> AudioPayload:
    if not audio_url:
        raise ValidationError("No audio uploaded")
    return AudioPayload(audio_url=audio_url, duration=parse_duration(duration))


def build_file_payload(
    file_url: str | None, file_name: str | None, file_type: str | None
) -> FilePayload:
    if not file_url or not file_name:
        raise ValidationError("No file uploaded")
    return FilePayload(
        file_url=file_url,
        file_name=file_name,
        file_type=file_type or "application/octet-stream",
    )


def parse_duration(raw: object) -> float | None:
    """Return the voice note length in seconds, ``None`` when not supplied."""

    if raw is None or raw == "":
        return None
    try:
        duration = float(raw)
    except (TypeError, ValueError) as exc:
        raise ValidationError("Audio duration must be a number of seconds") from exc
    if math.isnan(duration) or math.isinf(duration) or duration < 0:
        raise ValidationError("Audio duration must be a non-negative number of seconds")
    return duration


def ensure_upload(filename: str | None, data: bytes | None, *, allowed: frozenset[str]) -> str:
    """Check an upload is present and has an accepted extension."""

    if not filename or not data:
        raise ValidationError("No file uploaded")
    extension = PurePosixPath(filename).suffix.lower()
    if extension not in allowed:
        accepted = ", ".join(sorted(ext.lstrip(".") for ext in allowed))
        raise ValidationError(f"Unsupported file type '{extension or filename}'. Allowed: {accepted}")
    return extension


__all__ = [
    "AUDIO_EXTENSIONS",
    "FILE_EXTENSIONS",
    "build_audio_payload",
    "build_file_payload",
    "build_shared_post_payload",
    "build_text_payload",
    "ensure_upload",
    "parse_duration",
]
