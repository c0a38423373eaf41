"""ORM model for a to-do item."""

from __future__ import annotations

import uuid

from sqlalchemy import Boolean, Column, String

from todoapp.db.base import Base
from todoapp.models.audit import AuditMixin

TITLE_COLUMN_LENGTH = 100


class TodoEntity(AuditMixin, Base):  # type: ignore[valid-type,misc]
    __tablename__ = "todos"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(TITLE_COLUMN_LENGTH), nullable=False)
    completed = Column(Boolean, nullable=False, default=False)

    def etag_base(self) -> str:
        # Base of the ETag: identity plus last modification time
        return f"{self.id}:{self.updated_at.isoformat()}"

    def __repr__(self) -> str:
        return f"TodoEntity(id={self.id!r}, title={self.title!r})"


__all__ = ["TodoEntity", "TITLE_COLUMN_LENGTH"]
