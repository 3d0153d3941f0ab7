"""Read models produced by the visibility rules."""

from dataclasses import dataclass
from datetime import datetime

from .message import Message


@dataclass(frozen=True)
class ConversationSummary:
    """Latest visible message exchanged with ``counterpart_id``."""

    counterpart_id: int
    last_message: Message
    preview: str
    last_time: datetime | None


__all__ = ["ConversationSummary"]
