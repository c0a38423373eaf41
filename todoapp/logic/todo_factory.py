"""Build and mutate TodoEntity instances from request payloads."""

from __future__ import annotations

import uuid

from todoapp.logic.todo_validation import normalize_title
from todoapp.models.todo import TodoEntity
from todoapp.models.todo_schemas import TodoRequest


def create_new(request: TodoRequest, title_max_length: int) -> TodoEntity:
    todo = TodoEntity(
        id=str(uuid.uuid4()),
        title=normalize_title(request.title, title_max_length),
        completed=bool(request.completed),
    )
    todo.stamp_created()
    return todo


def apply_update(existing: TodoEntity, request: TodoRequest, title_max_length: int) -> TodoEntity:
    """Apply ``request`` to ``existing``; ``completed`` is kept when omitted."""
    existing.title = normalize_title(request.title, title_max_length)
    if request.completed is not None:
        existing.completed = request.completed
    existing.stamp_modified()
    return existing


__all__ = ["create_new", "apply_update"]
