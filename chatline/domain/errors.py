"""Error taxonomy shared by the application and interface layers."""

from __future__ import annotations


class ChatError(Exception):
    """Base class for failures surfaced to the caller of a use case."""

    kind = "error"

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class ValidationError(ChatError, ValueError):
    """The request payload is missing or malformed."""

    kind = "validation"


class AuthenticationError(ChatError):
    """No credential was supplied or it could not be verified."""

    kind = "authentication"


class AuthorizationError(ChatError):
    """The actor is not allowed to perform this mutation."""

    kind = "authorization"


class NotFoundError(ChatError, LookupError):
    """The referenced record does not exist or was deleted for everyone."""

    kind = "not_found"


class TransientStoreError(ChatError):
    """The persistence layer is temporarily unavailable."""

    kind = "transient_store"


__all__ = [
    "ChatError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "TransientStoreError",
]
