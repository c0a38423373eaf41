"""Read routes for to-dos."""

from __future__ import annotations

import uuid
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from todoapp.logic.header_emitter import emit_etag_header
from todoapp.logic.todo_queries import TodoQueryService
from todoapp.routes.deps import get_query_service

router = APIRouter()


@router.get("/todos/{todo_id}", name="get_todo", summary="Get a to-do")
def get_todo(
    todo_id: uuid.UUID,
    service: Annotated[TodoQueryService, Depends(get_query_service)],
) -> JSONResponse:
    result = service.get_todo(todo_id)
    resp = JSONResponse(result.data.model_dump(by_alias=True), status_code=200)
    emit_etag_header(resp, result.etag)
    return resp


@router.get("/todos", summary="List to-dos, newest modification first")
def get_todos(
    service: Annotated[TodoQueryService, Depends(get_query_service)],
    page: Annotated[int, Query(ge=0)] = 0,
    size: Annotated[Optional[int], Query(ge=1)] = None,
) -> JSONResponse:
    body = service.get_todo_page(page, size)
    return JSONResponse(body.model_dump(by_alias=True), status_code=200)


__all__ = ["router", "get_todo", "get_todos"]
