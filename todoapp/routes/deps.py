"""FastAPI dependencies resolving services from application state."""

from __future__ import annotations

from fastapi import Request

from todoapp.logic.todo_commands import TodoCommandService
from todoapp.logic.todo_queries import TodoQueryService


def get_command_service(request: Request) -> TodoCommandService:
    state = request.app.state
    return TodoCommandService(state.todo_repository, state.etag_generator, state.config.todo)


def get_query_service(request: Request) -> TodoQueryService:
    state = request.app.state
    return TodoQueryService(state.todo_repository, state.etag_generator, state.config.todo)


__all__ = ["get_command_service", "get_query_service"]
