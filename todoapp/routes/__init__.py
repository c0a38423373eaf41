"""APIRouter registration for the To-do service."""

from __future__ import annotations

from fastapi import APIRouter

from todoapp.routes.todo_commands import router as todo_commands_router
from todoapp.routes.todo_queries import router as todo_queries_router

api_router = APIRouter()
api_router.include_router(todo_queries_router, tags=["Todos"])
api_router.include_router(todo_commands_router, tags=["Todos"])

__all__ = ["api_router"]
