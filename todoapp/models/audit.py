"""Audit timestamp columns shared by persisted entities.

Timestamps are naive UTC so that values read back from SQLite compare and
render identically to the values that were written.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import Column, DateTime


def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def next_modified(previous: Optional[datetime]) -> datetime:
    """Return a modification time strictly later than ``previous``."""
    now = utc_now()
    if previous is not None and now <= previous:
        return previous + timedelta(microseconds=1)
    return now


class AuditMixin:
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    def stamp_created(self) -> None:
        self.created_at = utc_now()
        self.updated_at = self.created_at

    def stamp_modified(self) -> None:
        self.updated_at = next_modified(self.updated_at)


__all__ = ["AuditMixin", "utc_now", "next_modified"]
