"""Precondition guard dependency for If-Match enforcement.

Conditional write routes depend on :func:`require_if_match`. FastAPI
resolves it before the handler body runs, so a request without a usable
If-Match header fails with ETAG-400-MISSING before any entity is loaded.
Equality is checked later, by the command logic, against fresh state.
"""

from __future__ import annotations

from typing import Annotated, Optional
import logging

from fastapi import Header, Request

from todoapp.logic.etag_validation import assert_etag_present

logger = logging.getLogger(__name__)


def require_if_match(
    request: Request,
    if_match: Annotated[Optional[str], Header(alias="If-Match")] = None,
) -> str:
    """Return the raw If-Match value or raise ETAG_MISSING."""
    assert_etag_present(if_match, context=f"{request.method} {request.url.path}")
    return if_match  # type: ignore[return-value]


__all__ = ["require_if_match"]
