"""Read-side logic: single lookups and paged listing, each with ETags."""

from __future__ import annotations

import math
import uuid
from typing import Optional

from todoapp.config.settings import TodoConfig
from todoapp.logic.etag import ETagGenerator
from todoapp.logic.failures import ApplicationError
from todoapp.logic.repository_todos import TodoRepository
from todoapp.models.todo import TodoEntity
from todoapp.models.todo_schemas import ETagResponse, TodoPage, TodoPageItem, TodoResponse

# Largest OFFSET the database drivers accept (signed 64-bit)
MAX_OFFSET = 2**63 - 1


def find_todo_or_raise(repository: TodoRepository, todo_id: uuid.UUID | str, context: str) -> TodoEntity:
    """Load the current state of ``todo_id`` or raise ENTITY_NOT_FOUND."""
    todo = repository.get(str(todo_id))
    if todo is None:
        raise ApplicationError.not_found(context, todo_id)
    return todo


class TodoQueryService:
    def __init__(self, repository: TodoRepository, generator: ETagGenerator, config: TodoConfig) -> None:
        self.repository = repository
        self.generator = generator
        self.config = config

    def get_todo(self, todo_id: uuid.UUID) -> ETagResponse[TodoResponse]:
        todo = find_todo_or_raise(self.repository, todo_id, "TodoQueryService.get_todo")
        return ETagResponse(
            TodoResponse.from_entity(todo),
            self.generator.generate(todo, "TodoQueryService.get_todo"),
        )

    def get_todo_page(self, page: int, size: Optional[int]) -> TodoPage:
        size = size if size is not None else self.config.page_default_size
        if size > self.config.page_max_size:
            raise ApplicationError.request_validation(
                "size", reason=f"size must not exceed {self.config.page_max_size}"
            )
        if page * size > MAX_OFFSET:
            raise ApplicationError.request_validation("page", reason=f"page offset must not exceed {MAX_OFFSET}")
        rows, total = self.repository.find_page(page, size)
        content = [
            TodoPageItem(
                data=TodoResponse.from_entity(todo),
                etag=self.generator.generate(todo, "TodoQueryService.get_todo_page"),
            )
            for todo in rows
        ]
        return TodoPage(
            content=content,
            page=page,
            size=size,
            total_elements=total,
            total_pages=math.ceil(total / size) if total else 0,
        )


__all__ = ["TodoQueryService", "find_todo_or_raise"]
