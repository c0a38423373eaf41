"""Request and response models for the to-do API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from todoapp.models.todo import TodoEntity

T = TypeVar("T")

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"


class TodoRequest(BaseModel):
    """Create/update payload. ``completed`` is optional on update."""

    title: str
    completed: Optional[bool] = None

    @field_validator("title")
    @classmethod
    def title_must_not_be_whitespace(cls, v: str) -> str:
        if v and not v.strip():
            raise ValueError("title must not consist of whitespace only")
        return v


class TodoResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    completed: bool
    created_at: str = Field(serialization_alias="createdAt")
    updated_at: str = Field(serialization_alias="updatedAt")

    @classmethod
    def from_entity(cls, todo: TodoEntity) -> "TodoResponse":
        return cls(
            id=str(todo.id),
            title=todo.title,
            completed=bool(todo.completed),
            created_at=todo.created_at.strftime(TIMESTAMP_FORMAT),
            updated_at=todo.updated_at.strftime(TIMESTAMP_FORMAT),
        )


@dataclass(frozen=True)
class ETagResponse(Generic[T]):
    """Response data paired with the ETag of the state it was built from."""

    data: T
    etag: str


class TodoPageItem(BaseModel):
    data: TodoResponse
    etag: str


class TodoPage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    content: List[TodoPageItem]
    page: int
    size: int
    total_elements: int = Field(serialization_alias="totalElements")
    total_pages: int = Field(serialization_alias="totalPages")


__all__ = ["TodoRequest", "TodoResponse", "ETagResponse", "TodoPageItem", "TodoPage"]
