"""Centralised construction of problem+json payloads.

Builds RFC 7807 bodies from a catalog entry plus message arguments so that
no route or handler embeds status codes, error codes or message strings.
The extension member ``errorCode`` carries the stable catalog code.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Sequence

from todoapp.config.error_catalog import ErrorKind, resolve

PROBLEM_MEDIA_TYPE = "application/problem+json"
PROBLEM_TYPE_DEFAULT = "about:blank"


@dataclass(frozen=True)
class ProblemResponse:
    status: int
    error_code: str
    title: str
    detail: str
    instance: str
    type: str = PROBLEM_TYPE_DEFAULT

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "title": self.title,
            "status": self.status,
            "detail": self.detail,
            "instance": self.instance,
            "errorCode": self.error_code,
        }


def build_problem(
    kind: ErrorKind,
    instance: str,
    *,
    title_args: Sequence[object] = (),
    message_args: Sequence[object] = (),
) -> ProblemResponse:
    """Render ``kind`` into a ProblemResponse for the request path ``instance``."""
    entry = resolve(kind)
    return ProblemResponse(
        status=entry.status,
        error_code=entry.code,
        title=entry.title(*title_args),
        detail=entry.message(*message_args),
        instance=instance,
    )


__all__ = ["PROBLEM_MEDIA_TYPE", "ProblemResponse", "build_problem"]
