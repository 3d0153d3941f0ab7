"""Tests for helper utilities shared by the API routes."""

import pytest

from chatline.domain.errors import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    TransientStoreError,
    ValidationError,
)
from chatline.interfaces.api.routes_helpers import parse_user_id, to_http_exception


@pytest.mark.parametrize(
    ("error", "expected_status"),
    [
        (ValidationError("bad"), 400),
        (AuthenticationError("who"), 401),
        (AuthorizationError("no"), 403),
        (NotFoundError("gone"), 404),
        (TransientStoreError("later"), 503),
    ],
)
def test_errors_map_to_http_status(error, expected_status):
    exc = to_http_exception(error)

    assert exc.status_code == expected_status
    assert exc.detail == error.detail


def test_authentication_errors_ask_for_a_bearer_token():
    assert to_http_exception(AuthenticationError("who")).headers == {"WWW-Authenticate": "Bearer"}


@pytest.mark.parametrize(("raw", "expected"), [(7, 7), ("12", 12)])
def test_parse_user_id_accepts_numeric_values(raw, expected):
    assert parse_user_id(raw) == expected


@pytest.mark.parametrize("raw", [None, "abc", 0, -3, True])
def test_parse_user_id_rejects_everything_else(raw):
    with pytest.raises(ValidationError):
        parse_user_id(raw)
