"""Extract the offending field from request validation errors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from todoapp.logic.failures import ApplicationError


@dataclass(frozen=True)
class FieldInfo:
    field: str
    log_message: str


def _field_name(loc: Iterable[Any]) -> str:
    # loc looks like ("body", "title"), ("path", "todo_id") or ("body",)
    names = [str(part) for part in loc if isinstance(part, str)]
    if not names:
        raise ApplicationError.validation_handling("error location has no named component.")
    return names[-1]


def extract_field_info(errors: Iterable[Mapping[str, Any]]) -> FieldInfo:
    """Return the first error's field name and message.

    Raises ApplicationError(VALIDATION_HANDLING_FAILURE) when there is no
    error to report or it carries no usable location.
    """
    first = next(iter(errors), None)
    if first is None:
        raise ApplicationError.validation_handling("validation error list is empty.")
    loc = first.get("loc")
    if not loc:
        raise ApplicationError.validation_handling("validation error has no location.")
    return FieldInfo(field=_field_name(loc), log_message=str(first.get("msg", "")))


__all__ = ["FieldInfo", "extract_field_info"]
