"""To-do data access.

Keeps route handlers and command logic free of session handling. Writes
are compare-and-set on ``updated_at``: an update or delete only affects the
row when it is still at the modification time the caller loaded, so a
writer that lost a race sees zero affected rows instead of overwriting.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import delete, func, select, update
from sqlalchemy.orm import sessionmaker

from todoapp.db.base import get_sessionmaker
from todoapp.models.todo import TodoEntity

logger = logging.getLogger(__name__)


class TodoRepository:
    def __init__(self, session_factory: sessionmaker | None = None) -> None:
        self._session_factory = session_factory or get_sessionmaker()

    def get(self, todo_id: str) -> Optional[TodoEntity]:
        """Return a detached copy of the current row, or None."""
        with self._session_factory() as session:
            todo = session.get(TodoEntity, str(todo_id))
            if todo is not None:
                session.expunge(todo)
            return todo

    def add(self, todo: TodoEntity) -> TodoEntity:
        with self._session_factory.begin() as session:
            session.add(todo)
        return todo

    def update_if_unmodified(self, todo: TodoEntity, loaded_updated_at: datetime) -> bool:
        """Persist ``todo`` if the row is still at ``loaded_updated_at``."""
        with self._session_factory.begin() as session:
            result = session.execute(
                update(TodoEntity)
                .where(TodoEntity.id == todo.id, TodoEntity.updated_at == loaded_updated_at)
                .values(title=todo.title, completed=todo.completed, updated_at=todo.updated_at)
                .execution_options(synchronize_session=False)
            )
            applied = result.rowcount == 1
        if not applied:
            logger.info("todo.update.conflict todo_id=%s", todo.id)
        return applied

    def delete_if_unmodified(self, todo_id: str, loaded_updated_at: datetime) -> bool:
        with self._session_factory.begin() as session:
            result = session.execute(
                delete(TodoEntity)
                .where(TodoEntity.id == str(todo_id), TodoEntity.updated_at == loaded_updated_at)
                .execution_options(synchronize_session=False)
            )
            applied = result.rowcount == 1
        if not applied:
            logger.info("todo.delete.conflict todo_id=%s", todo_id)
        return applied

    def find_page(self, page: int, size: int) -> Tuple[List[TodoEntity], int]:
        """Return one page ordered by newest modification first, plus total count."""
        with self._session_factory() as session:
            total = int(session.execute(select(func.count()).select_from(TodoEntity)).scalar_one())
            rows = (
                session.execute(
                    select(TodoEntity)
                    .order_by(TodoEntity.updated_at.desc(), TodoEntity.id.asc())
                    .offset(page * size)
                    .limit(size)
                )
                .scalars()
                .all()
            )
            for row in rows:
                session.expunge(row)
        return list(rows), total


__all__ = ["TodoRepository"]
