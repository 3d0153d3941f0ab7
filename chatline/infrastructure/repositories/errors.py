"""Translation of driver failures into the domain error taxonomy."""

from __future__ import annotations

import functools
import logging
from typing import Any, Callable, TypeVar

from sqlalchemy.exc import DBAPIError, OperationalError

from chatline.domain.errors import TransientStoreError

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def translate_store_errors(method: F) -> F:
    """Raise :class:`TransientStoreError` when the database is unreachable.

    Only connectivity failures are translated. Integrity and programming
    errors keep propagating unchanged. The repository session is rolled back
    so it can be reused by the caller.
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except DBAPIError as exc:
            if not isinstance(exc, OperationalError) and not exc.connection_invalidated:
                raise
            self.session.rollback()
            logger.warning(
                "Store unavailable during %s.%s: %s",
                type(self).__name__,
                method.__name__,
                exc.orig,
            )
            raise TransientStoreError("The message store is temporarily unavailable") from exc

    return wrapper  # type: ignore[return-value]


__all__ = ["translate_store_errors"]
