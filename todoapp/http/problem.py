"""Problem+JSON dispatcher and global exception handlers.

:class:`FailureDispatcher` is the only place that turns a failure into an
HTTP status and problem body. It classifies on the failure kind carried by
:class:`~todoapp.logic.failures.ApplicationError`; anything else is an
internal error rendered with a fixed message. Each handled failure emits a
single log line prefixed with its catalog code: WARNING for client errors,
ERROR for server errors.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Sequence, Tuple

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from todoapp.config.error_catalog import ErrorKind, resolve
from todoapp.logic.failures import ApplicationError, FailureContext
from todoapp.logic.field_extractor import extract_field_info
from todoapp.logic.problem_factory import PROBLEM_MEDIA_TYPE, ProblemResponse, build_problem

logger = logging.getLogger(__name__)

# (title_args, message_args) per kind, in catalog template order
_Args = Tuple[Sequence[object], Sequence[object]]
_NO_ARGS: _Args = ((), ())


def _request_validation_args(f: FailureContext) -> _Args:
    return (), (f.field,)


def _field_validation_args(f: FailureContext) -> _Args:
    return (f.field,), (f.field, f.reason)


_TEMPLATE_ARGS: Dict[ErrorKind, Callable[[FailureContext], _Args]] = {
    ErrorKind.REQUEST_VALIDATION_FAILURE: _request_validation_args,
    ErrorKind.FIELD_VALIDATION_FAILURE: _field_validation_args,
    ErrorKind.ETAG_MISSING: lambda f: _NO_ARGS,
    ErrorKind.ETAG_MISMATCH: lambda f: _NO_ARGS,
    ErrorKind.ETAG_GENERATION_FAILURE: lambda f: _NO_ARGS,
    ErrorKind.ENTITY_NOT_FOUND: lambda f: _NO_ARGS,
    ErrorKind.VALIDATION_HANDLING_FAILURE: lambda f: _NO_ARGS,
    ErrorKind.INTERNAL_SERVER_ERROR: lambda f: _NO_ARGS,
}

_unhandled = [kind.name for kind in ErrorKind if kind not in _TEMPLATE_ARGS]
if _unhandled:  # pragma: no cover - import-time coverage check
    raise RuntimeError(f"FailureDispatcher does not handle: {', '.join(_unhandled)}")


class FailureDispatcher:
    """Classify failures, log them once and render the problem payload."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self.log = log or logger

    def handle(self, failure: BaseException, instance: str) -> ProblemResponse:
        if not isinstance(failure, ApplicationError):
            return self._handle_unexpected(failure, instance)
        ctx = failure.failure
        entry = resolve(ctx.kind)
        level = logging.WARNING if entry.client_error else logging.ERROR
        self.log.log(
            level,
            "[%s] %s",
            entry.code,
            failure,
            extra={"error_code": entry.code, "status": entry.status, "instance": instance},
        )
        title_args, message_args = _TEMPLATE_ARGS[ctx.kind](ctx)
        return build_problem(ctx.kind, instance, title_args=title_args, message_args=message_args)

    def _handle_unexpected(self, failure: BaseException, instance: str) -> ProblemResponse:
        entry = resolve(ErrorKind.INTERNAL_SERVER_ERROR)
        self.log.error(
            "[%s] unexpected_error type=%s",
            entry.code,
            type(failure).__name__,
            exc_info=(type(failure), failure, failure.__traceback__),
            extra={"error_code": entry.code, "status": entry.status, "instance": instance},
        )
        return build_problem(ErrorKind.INTERNAL_SERVER_ERROR, instance)


dispatcher = FailureDispatcher()


def problem_json_response(problem: ProblemResponse) -> JSONResponse:
    return JSONResponse(problem.to_dict(), status_code=problem.status, media_type=PROBLEM_MEDIA_TYPE)


async def handle_application_error(request: Request, exc: ApplicationError) -> JSONResponse:  # noqa: D401
    return problem_json_response(dispatcher.handle(exc, request.url.path))


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:  # noqa: D401
    try:
        info = extract_field_info(exc.errors())
    except ApplicationError as handling_failure:
        return problem_json_response(dispatcher.handle(handling_failure, request.url.path))
    failure = ApplicationError.request_validation(info.field, reason=info.log_message)
    return problem_json_response(dispatcher.handle(failure, request.url.path))


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:  # noqa: D401
    return problem_json_response(dispatcher.handle(exc, request.url.path))


__all__ = [
    "PROBLEM_MEDIA_TYPE",
    "FailureDispatcher",
    "dispatcher",
    "problem_json_response",
    "handle_application_error",
    "handle_request_validation_error",
    "handle_unexpected_error",
]
