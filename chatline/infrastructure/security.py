"""Access token helpers backed by the identity provider's shared secret."""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from chatline.config import get_settings


def create_access_token(user_id: int, expires_delta: timedelta | None = None) -> str:
    """Issue a token for ``user_id``; used by seeding scripts and tests."""

    settings = get_settings()
    expire = datetime.now(tz=timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    return jwt.encode(
        {"sub": str(user_id), "exp": expire},
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )


def decode_access_token(token: str) -> dict:
    settings = get_settings()
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc


def user_id_from_token(token: str) -> int:
    """Return the stable user id carried by ``token``'s subject claim."""

    payload = decode_access_token(token)
    subject = payload.get("sub")
    try:
        return int(subject)
    except (TypeError, ValueError) as exc:
        raise ValueError("Token subject is not a user id") from exc


__all__ = ["create_access_token", "decode_access_token", "user_id_from_token"]
