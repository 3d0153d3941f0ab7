"""Tests for the translation of driver failures into domain errors."""

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from chatline.domain.errors import TransientStoreError
from chatline.infrastructure.repositories.errors import translate_store_errors


class _Session:
    def __init__(self) -> None:
        self.rolled_back = False

    def rollback(self) -> None:
        self.rolled_back = True


class _Repository:
    def __init__(self, error: Exception) -> None:
        self.session = _Session()
        self.error = error

    @translate_store_errors
    def run(self):
        raise self.error


def test_operational_errors_become_transient():
    repository = _Repository(OperationalError("SELECT 1", {}, Exception("connection refused")))

    with pytest.raises(TransientStoreError):
        repository.run()
    assert repository.session.rolled_back


def test_integrity_errors_propagate_unchanged():
    repository = _Repository(IntegrityError("INSERT", {}, Exception("duplicate")))

    with pytest.raises(IntegrityError):
        repository.run()
    assert not repository.session.rolled_back
