"""Centralised ETag header emitter.

Route handlers set the ``ETag`` header only through :func:`emit_etag_header`
so that an empty tag is never emitted and browsers can read it through
``Access-Control-Expose-Headers``.
"""

from __future__ import annotations

import logging
from fastapi import Response

logger = logging.getLogger(__name__)

ETAG_HEADER = "ETag"


def emit_etag_header(response: Response, token: str) -> None:
    if not token or not token.strip():
        raise ValueError("refusing to emit an empty ETag header")
    response.headers[ETAG_HEADER] = token
    existing = response.headers.get("Access-Control-Expose-Headers", "")
    exposed = [t.strip() for t in existing.split(",") if t.strip()]
    if ETAG_HEADER not in exposed:
        exposed.append(ETAG_HEADER)
    response.headers["Access-Control-Expose-Headers"] = ", ".join(exposed)
    logger.debug("etag.emit", extra={"etag": token})


__all__ = ["emit_etag_header", "ETAG_HEADER"]
