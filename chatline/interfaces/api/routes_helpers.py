"""Helper utilities shared across API route handlers."""

from fastapi import HTTPException, status

from chatline.domain.errors import (
    AuthenticationError,
    AuthorizationError,
    ChatError,
    NotFoundError,
    TransientStoreError,
    ValidationError,
)

_STATUS_BY_ERROR: dict[type[ChatError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    AuthenticationError: status.HTTP_401_UNAUTHORIZED,
    AuthorizationError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    TransientStoreError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def status_code_for(exc: ChatError) -> int:
    for error_type, status_code in _STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def to_http_exception(exc: ChatError) -> HTTPException:
    """Return the HTTP rejection matching the kind of ``exc``."""

    headers = None
    if isinstance(exc, AuthenticationError):
        headers = {"WWW-Authenticate": "Bearer"}
    return HTTPException(status_code=status_code_for(exc), detail=exc.detail, headers=headers)


def parse_user_id(value: object) -> int:
    """Coerce a user reference sent by a client into an id."""

    if isinstance(value, bool):
        raise ValidationError("A valid user id is required")
    try:
        user_id = int(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError("A valid user id is required") from exc
    if user_id <= 0:
        raise ValidationError("A valid user id is required")
    return user_id


__all__ = ["parse_user_id", "status_code_for", "to_http_exception"]
