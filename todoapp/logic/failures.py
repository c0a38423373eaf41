"""Typed failures raised by the To-do service.

Every failure the service can report is one :class:`ApplicationError`
carrying a frozen :class:`FailureContext`. The context's ``kind`` selects the
catalog entry; the remaining fields hold whatever the dispatcher needs to log
and render the failure. Construct failures through the classmethods below so
each kind always carries its required context.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
import uuid

from todoapp.config.error_catalog import CatalogEntry, ErrorKind, resolve


@dataclass(frozen=True)
class FailureContext:
    kind: ErrorKind
    context: str = ""
    field: Optional[str] = None
    field_value: Optional[str] = None
    etag: Optional[str] = None
    expected: Optional[str] = None
    entity_id: Optional[str] = None
    reason: Optional[str] = None

    def describe(self) -> str:
        """Return a log-friendly ``key=value`` rendering of the set fields."""
        parts = [f"context={self.context}"] if self.context else []
        for name in ("field", "field_value", "entity_id", "etag", "expected", "reason"):
            value = getattr(self, name)
            if value is not None:
                parts.append(f"{name}={value}")
        return "[" + ", ".join(parts) + "]"


class ApplicationError(Exception):
    """Single failure type for every catalogued error kind."""

    def __init__(self, failure: FailureContext, cause: Optional[BaseException] = None) -> None:
        super().__init__(resolve(failure.kind).title_template)
        self.failure = failure
        if cause is not None:
            self.__cause__ = cause

    @property
    def kind(self) -> ErrorKind:
        return self.failure.kind

    @property
    def entry(self) -> CatalogEntry:
        return resolve(self.failure.kind)

    def __str__(self) -> str:
        text = f"{type(self).__name__}: {self.entry.code} {self.failure.describe()}"
        if self.__cause__ is not None:
            text += f" (Caused by: {self.__cause__!r})"
        return text

    # -- constructors -------------------------------------------------------

    @classmethod
    def request_validation(cls, field: str, reason: Optional[str] = None) -> "ApplicationError":
        return cls(FailureContext(ErrorKind.REQUEST_VALIDATION_FAILURE, field=field, reason=reason))

    @classmethod
    def field_validation(cls, field: str, field_value: Optional[str], reason: str) -> "ApplicationError":
        return cls(
            FailureContext(
                ErrorKind.FIELD_VALIDATION_FAILURE,
                field=field,
                field_value=field_value,
                reason=reason,
            )
        )

    @classmethod
    def etag_missing(cls, context: str, etag: Optional[str]) -> "ApplicationError":
        return cls(FailureContext(ErrorKind.ETAG_MISSING, context=context, etag=etag))

    @classmethod
    def etag_mismatch(cls, context: str, etag: Optional[str], expected: Optional[str]) -> "ApplicationError":
        return cls(FailureContext(ErrorKind.ETAG_MISMATCH, context=context, etag=etag, expected=expected))

    @classmethod
    def etag_generation(
        cls, context: str, reason: str, cause: Optional[BaseException] = None
    ) -> "ApplicationError":
        return cls(FailureContext(ErrorKind.ETAG_GENERATION_FAILURE, context=context, reason=reason), cause)

    @classmethod
    def not_found(cls, context: str, entity_id: uuid.UUID | str) -> "ApplicationError":
        return cls(FailureContext(ErrorKind.ENTITY_NOT_FOUND, context=context, entity_id=str(entity_id)))

    @classmethod
    def validation_handling(cls, reason: str) -> "ApplicationError":
        return cls(FailureContext(ErrorKind.VALIDATION_HANDLING_FAILURE, reason=reason))


__all__ = ["FailureContext", "ApplicationError"]
