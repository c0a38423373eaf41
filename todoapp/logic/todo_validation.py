"""Field validation and normalisation for to-do payloads.

Violations raise ApplicationError(FIELD_VALIDATION_FAILURE) naming the field,
the rejected value and the reason.
"""

from __future__ import annotations

from typing import Optional

from todoapp.logic.failures import ApplicationError

TITLE_FIELD = "title"


def assert_not_null(field: str, value: Optional[str]) -> None:
    if value is None:
        raise ApplicationError.field_validation(field, value, f"Field '{field}' must not be null.")


def assert_not_blank(field: str, value: str) -> None:
    if not value.strip():
        raise ApplicationError.field_validation(field, value, f"Field '{field}' must not be blank.")


def assert_max_length(field: str, value: str, max_length: int) -> None:
    if len(value) > max_length:
        raise ApplicationError.field_validation(
            field, value, f"Field '{field}' must not exceed {max_length} characters."
        )


def normalize_title(title: Optional[str], max_length: int) -> str:
    """Return ``title`` stripped of surrounding whitespace, validated."""
    assert_not_null(TITLE_FIELD, title)
    trimmed = title.strip()  # type: ignore[union-attr]
    assert_not_blank(TITLE_FIELD, trimmed)
    assert_max_length(TITLE_FIELD, trimmed, max_length)
    return trimmed


__all__ = ["assert_not_null", "assert_not_blank", "assert_max_length", "normalize_title"]
