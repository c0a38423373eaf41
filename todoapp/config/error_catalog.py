"""Central error catalog for the To-do service.

Single source of truth for every externally visible failure: the stable
``errorCode`` string, the HTTP status, the problem ``title`` template and the
``detail`` message template. Handlers and factories must resolve entries
from here instead of hardcoding codes or numbers.

Templates use positional ``%s`` placeholders. The argument order per kind is
part of the contract:

- REQUEST_VALIDATION_FAILURE: detail(field)
- FIELD_VALIDATION_FAILURE: title(field), detail(field, reason)
- all other kinds take no arguments
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping


class ErrorKind(str, enum.Enum):
    """Closed set of failure kinds surfaced to clients."""

    REQUEST_VALIDATION_FAILURE = "request_validation_failure"
    FIELD_VALIDATION_FAILURE = "field_validation_failure"
    ETAG_MISSING = "etag_missing"
    ETAG_MISMATCH = "etag_mismatch"
    ETAG_GENERATION_FAILURE = "etag_generation_failure"
    ENTITY_NOT_FOUND = "entity_not_found"
    VALIDATION_HANDLING_FAILURE = "validation_handling_failure"
    INTERNAL_SERVER_ERROR = "internal_server_error"


@dataclass(frozen=True)
class CatalogEntry:
    code: str
    status: int
    title_template: str
    message_template: str

    @property
    def client_error(self) -> bool:
        return self.status < 500

    def title(self, *args: object) -> str:
        return self.title_template % args if args else self.title_template

    def message(self, *args: object) -> str:
        return self.message_template % args if args else self.message_template


_ENTRIES: dict[ErrorKind, CatalogEntry] = {
    ErrorKind.REQUEST_VALIDATION_FAILURE: CatalogEntry(
        code="REQUEST-400",
        status=400,
        title_template="Request Validation Failure",
        message_template="Request validation failed for field: %s",
    ),
    ErrorKind.FIELD_VALIDATION_FAILURE: CatalogEntry(
        code="TODO-400-FIELD",
        status=400,
        title_template="Invalid To-do Field '%s'",
        message_template="Invalid value for field '%s': %s",
    ),
    ErrorKind.ETAG_MISSING: CatalogEntry(
        code="ETAG-400-MISSING",
        status=400,
        title_template="ETag Missing",
        message_template="The If-Match header is required for this operation.",
    ),
    ErrorKind.ENTITY_NOT_FOUND: CatalogEntry(
        code="TODO-404",
        status=404,
        title_template="To-do Not Found",
        message_template="To-do with the specified ID does not exist.",
    ),
    ErrorKind.ETAG_MISMATCH: CatalogEntry(
        code="ETAG-412",
        status=412,
        title_template="ETag Mismatch",
        message_template=(
            "The ETag does not match the current state of the resource. "
            "Fetch the latest version and retry."
        ),
    ),
    ErrorKind.ETAG_GENERATION_FAILURE: CatalogEntry(
        code="ETAG-500-GENERATION",
        status=500,
        title_template="ETag Generation Failure",
        message_template="An unexpected error occurred while generating the ETag.",
    ),
    ErrorKind.VALIDATION_HANDLING_FAILURE: CatalogEntry(
        code="VALIDATION-500-HANDLING",
        status=500,
        title_template="Request Validation Handling Failure",
        message_template="An unexpected error occurred while handling request validation.",
    ),
    ErrorKind.INTERNAL_SERVER_ERROR: CatalogEntry(
        code="SYS-500",
        status=500,
        title_template="Internal Server Error",
        message_template="An unexpected internal server error occurred.",
    ),
}

_missing = [kind.name for kind in ErrorKind if kind not in _ENTRIES]
if _missing:  # pragma: no cover - import-time contract check
    raise RuntimeError(f"error catalog has no entry for: {', '.join(_missing)}")

ERROR_CATALOG: Mapping[ErrorKind, CatalogEntry] = MappingProxyType(_ENTRIES)


def resolve(kind: ErrorKind) -> CatalogEntry:
    """Return the catalog entry for ``kind``. Total over :class:`ErrorKind`."""
    return ERROR_CATALOG[kind]


__all__ = ["ErrorKind", "CatalogEntry", "ERROR_CATALOG", "resolve"]
