"""Shared fixtures: a throwaway SQLite store and recording chat sessions."""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

_TEST_DB_DIR = Path(tempfile.mkdtemp(prefix="chatline-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_TEST_DB_DIR / 'chatline.db'}"
os.environ["SECRET_KEY"] = "test-secret-key"
for _name in (
    "VAPID_PUBLIC_KEY",
    "VAPID_PRIVATE_KEY",
    "AZURE_STORAGE_CONNECTION_STRING",
    "AZURE_STORAGE_CONTAINER_NAME",
):
    os.environ.pop(_name, None)

from chatline.domain.entities import User  # noqa: E402
from chatline.infrastructure import database, models  # noqa: E402,F401
from chatline.infrastructure.realtime import RealtimeFanout  # noqa: E402
from chatline.infrastructure.repositories import UserRepository  # noqa: E402


class RecordingSession:
    """Stand-in for a websocket session that keeps every event it receives."""

    def __init__(self, user_id: int) -> None:
        self.user_id = user_id
        self.events: list[dict] = []
        self.closed = False

    def enqueue(self, message: dict) -> None:
        if not self.closed:
            self.events.append(message)

    def close(self) -> None:
        self.closed = True

    def types(self) -> list[str]:
        return [event["type"] for event in self.events]

    def of_type(self, event_type: str) -> list[dict]:
        return [event for event in self.events if event["type"] == event_type]


@pytest.fixture(autouse=True)
def clean_database():
    """Recreate every table before each test."""

    database.Base.metadata.drop_all(bind=database.engine, checkfirst=True)
    database.initialize_database()
    yield


@pytest.fixture()
def db_session():
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def fanout() -> RealtimeFanout:
    return RealtimeFanout()


@pytest.fixture()
def make_user(db_session):
    def _make(username: str) -> User:
        return UserRepository(db_session).create(User(id=None, username=username))

    return _make


@pytest.fixture()
def listen(fanout):
    """Register a recording session for a user in the fan-out registry."""

    def _listen(user_id: int) -> RecordingSession:
        session = RecordingSession(user_id)
        fanout.registry.add(session)
        return session

    return _listen


@pytest.fixture()
def recording_session():
    """Return the recording session class for tests that build their own registry."""

    return RecordingSession
