"""Tests for settings validation."""

import pytest
from pydantic import ValidationError

from chatline.config import Settings


def _settings(**overrides):
    values = {"database_url": "sqlite://", "secret_key": "s", **overrides}
    return Settings(_env_file=None, **values)


def test_push_is_disabled_without_vapid_keys(monkeypatch):
    monkeypatch.delenv("VAPID_PUBLIC_KEY", raising=False)
    monkeypatch.delenv("VAPID_PRIVATE_KEY", raising=False)

    settings = _settings()

    assert settings.push_enabled is False
    assert settings.max_text_length == 4000


def test_vapid_keys_must_be_given_together():
    with pytest.raises(ValidationError):
        _settings(vapid_public_key="public-only")


def test_vapid_subject_must_be_a_contact_uri():
    with pytest.raises(ValidationError):
        _settings(vapid_public_key="pub", vapid_private_key="priv", vapid_subject="support")


def test_push_is_enabled_with_both_keys():
    assert _settings(vapid_public_key="pub", vapid_private_key="priv").push_enabled is True
