"""Write-side logic with optimistic concurrency.

Update and delete run the same sequence against freshly loaded state:

    load -> compare If-Match with the tag of that state -> mutate -> persist

The If-Match presence check happens earlier, in the route guard, so that a
request without a tag never reaches the repository. Persisting is a
compare-and-set on the loaded ``updated_at``; losing that race is reported
as an ETag mismatch, never as a silent overwrite. Nothing here retries.
"""

from __future__ import annotations

import logging
import uuid

from todoapp.config.settings import TodoConfig
from todoapp.logic.etag import ETagGenerator
from todoapp.logic.etag_validation import assert_etag_matches
from todoapp.logic.failures import ApplicationError
from todoapp.logic.repository_todos import TodoRepository
from todoapp.logic.todo_factory import apply_update, create_new
from todoapp.logic.todo_queries import find_todo_or_raise
from todoapp.models.todo_schemas import ETagResponse, TodoRequest, TodoResponse

logger = logging.getLogger(__name__)


class TodoCommandService:
    def __init__(self, repository: TodoRepository, generator: ETagGenerator, config: TodoConfig) -> None:
        self.repository = repository
        self.generator = generator
        self.config = config

    def create_todo(self, request: TodoRequest) -> ETagResponse[TodoResponse]:
        created = create_new(request, self.config.title_max_length)
        saved = self.repository.add(created)
        logger.info("todo.created todo_id=%s", saved.id)
        return ETagResponse(
            TodoResponse.from_entity(saved),
            self.generator.generate(saved, "TodoCommandService.create_todo"),
        )

    def update_todo(self, todo_id: uuid.UUID, request: TodoRequest, if_match: str) -> ETagResponse[TodoResponse]:
        context = "TodoCommandService.update_todo"
        existing = find_todo_or_raise(self.repository, todo_id, context)
        current = self.generator.generate(existing, context)
        assert_etag_matches(if_match, current, context)

        loaded_updated_at = existing.updated_at
        updated = apply_update(existing, request, self.config.title_max_length)
        if not self.repository.update_if_unmodified(updated, loaded_updated_at):
            raise ApplicationError.etag_mismatch(context, if_match, None)
        logger.info("todo.updated todo_id=%s", updated.id)
        return ETagResponse(
            TodoResponse.from_entity(updated),
            self.generator.generate(updated, context),
        )

    def delete_todo(self, todo_id: uuid.UUID, if_match: str) -> None:
        context = "TodoCommandService.delete_todo"
        existing = find_todo_or_raise(self.repository, todo_id, context)
        assert_etag_matches(if_match, self.generator.generate(existing, context), context)
        if not self.repository.delete_if_unmodified(existing.id, existing.updated_at):
            raise ApplicationError.etag_mismatch(context, if_match, None)
        logger.info("todo.deleted todo_id=%s", existing.id)


__all__ = ["TodoCommandService"]
