"""Fixtures for exercising the HTTP and websocket surface."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from chatline.infrastructure.security import create_access_token
from chatline.infrastructure.storage import StoredObject


class InMemoryStorage:
    """Object storage double that records uploads instead of sending them to Azure."""

    def __init__(self) -> None:
        self.uploads: list[tuple[str, str, bytes]] = []

    def store(self, folder, filename, data, *, content_type=None) -> StoredObject:
        self.uploads.append((folder, filename, data))
        return StoredObject(
            url=f"https://blobs.example/{folder}/{len(self.uploads)}-{filename}",
            content_type=content_type or "application/octet-stream",
            original_name=filename,
        )


@pytest.fixture()
def app():
    from main import create_app

    return create_app()


@pytest.fixture()
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def storage(app):
    from chatline.interfaces.api.dependencies import get_object_storage

    fake = InMemoryStorage()
    app.dependency_overrides[get_object_storage] = lambda: fake
    yield fake
    app.dependency_overrides.pop(get_object_storage, None)


@pytest.fixture()
def auth_headers():
    def _headers(user) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}

    return _headers


@pytest.fixture()
def token_for():
    def _token(user) -> str:
        return create_access_token(user.id)

    return _token
