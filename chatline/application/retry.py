"""Retry policy applied at the use-case boundary."""

from __future__ import annotations

import logging
from typing import Callable, TypeVar

from chatline.domain.errors import TransientStoreError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def retry_transient_read(operation: Callable[[], T]) -> T:
    """Run the idempotent read ``operation``, retrying it once on a store outage.

    Never wrap a mutating call with this helper: resubmitting a send could
    create the same message twice.
    """

    try:
        return operation()
    except TransientStoreError:
        logger.warning("Retrying read after a transient store error")
        return operation()


__all__ = ["retry_transient_read"]
