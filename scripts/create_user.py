"""Utility script to seed a chat user and print an access token for it."""

from __future__ import annotations

import argparse
from datetime import timedelta

from chatline.domain.entities import User
from chatline.domain.errors import ChatError
from chatline.infrastructure.database import SessionLocal, initialize_database
from chatline.infrastructure.repositories import UserRepository
from chatline.infrastructure.security import create_access_token


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for user creation."""

    parser = argparse.ArgumentParser(
        description="Create a chat user and print a bearer token for local testing.",
    )
    parser.add_argument("username", help="Display name of the user")
    parser.add_argument("--avatar", default=None, help="Avatar URL (optional)")
    parser.add_argument(
        "--expires-minutes",
        type=int,
        default=None,
        help="Token lifetime in minutes (defaults to ACCESS_TOKEN_EXPIRE_MINUTES)",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    initialize_database()

    session = SessionLocal()
    try:
        user = UserRepository(session).create(User(id=None, username=args.username, avatar=args.avatar))
    except ChatError as exc:
        raise SystemExit(f"Could not create the user: {exc.detail}") from exc
    finally:
        session.close()

    expires = timedelta(minutes=args.expires_minutes) if args.expires_minutes else None
    print(
        "User created:\n"
        f"  ID: {user.id}\n"
        f"  Username: {user.username}\n"
        f"  Token: {create_access_token(user.id, expires)}"
    )


if __name__ == "__main__":
    main()
