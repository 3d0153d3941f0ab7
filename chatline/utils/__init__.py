"""Utility helpers for reusable functionality."""

from .datetime import (
    ensure_naive_utc,
    ensure_utc,
    isoformat_or_none,
    now_naive_utc,
    now_utc,
)

__all__ = [
    "ensure_naive_utc",
    "ensure_utc",
    "isoformat_or_none",
    "now_naive_utc",
    "now_utc",
]
