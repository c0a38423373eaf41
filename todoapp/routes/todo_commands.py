"""Write routes for to-dos: create, conditional update, conditional delete."""

from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response

from todoapp.guards.precondition import require_if_match
from todoapp.logic.header_emitter import emit_etag_header
from todoapp.logic.todo_commands import TodoCommandService
from todoapp.models.todo_schemas import TodoRequest
from todoapp.routes.deps import get_command_service

router = APIRouter()


@router.post("/todos", status_code=201, summary="Create a to-do")
def create_todo(
    payload: TodoRequest,
    request: Request,
    service: Annotated[TodoCommandService, Depends(get_command_service)],
) -> JSONResponse:
    """Create a to-do; returns 201 with ``Location`` and ``ETag`` headers."""
    result = service.create_todo(payload)
    resp = JSONResponse(result.data.model_dump(by_alias=True), status_code=201)
    resp.headers["Location"] = str(request.url_for("get_todo", todo_id=result.data.id))
    emit_etag_header(resp, result.etag)
    return resp


@router.put("/todos/{todo_id}", summary="Update a to-do (If-Match required)")
def update_todo(
    todo_id: uuid.UUID,
    if_match: Annotated[str, Depends(require_if_match)],
    payload: TodoRequest,
    service: Annotated[TodoCommandService, Depends(get_command_service)],
) -> JSONResponse:
    result = service.update_todo(todo_id, payload, if_match)
    resp = JSONResponse(result.data.model_dump(by_alias=True), status_code=200)
    emit_etag_header(resp, result.etag)
    return resp


@router.delete("/todos/{todo_id}", status_code=204, summary="Delete a to-do (If-Match required)")
def delete_todo(
    todo_id: uuid.UUID,
    if_match: Annotated[str, Depends(require_if_match)],
    service: Annotated[TodoCommandService, Depends(get_command_service)],
) -> Response:
    service.delete_todo(todo_id, if_match)
    return Response(status_code=204)


__all__ = ["router", "create_todo", "update_todo", "delete_todo"]
