"""ETag computation helpers.

Provides the single place where resource tags are hashed. A tag is derived
from an :class:`ETagSource` base string (``"<id>:<updated_at>"``) as a
base64-encoded digest wrapped in double quotes, e.g. ``"q1w2e3...="``.
Tags are never stored; callers compute them from current entity state.
The application builds one generator at start-up and keeps it on
``app.state.etag_generator``.
"""

from __future__ import annotations

import base64
import hashlib
import logging
from typing import Optional, Protocol, runtime_checkable

from todoapp.logic.failures import ApplicationError

__all__ = [
    "ETagSource",
    "ETagGenerator",
    "DEFAULT_ALGORITHM",
]

logger = logging.getLogger(__name__)

DEFAULT_ALGORITHM = "sha256"


@runtime_checkable
class ETagSource(Protocol):
    """Anything that can produce a deterministic ETag base string."""

    def etag_base(self) -> str:  # pragma: no cover - protocol
        ...


class ETagGenerator:
    """Strong ETag generator over a configurable hashlib algorithm."""

    def __init__(self, algorithm: str = DEFAULT_ALGORITHM) -> None:
        self.algorithm = algorithm

    def generate(self, source: Optional[ETagSource], context: str = "ETagGenerator.generate") -> str:
        """Return the quoted ETag for ``source``.

        Raises ApplicationError(ETAG_GENERATION_FAILURE) when ``source`` is
        None or the digest algorithm is unavailable.
        """
        if source is None:
            raise ApplicationError.etag_generation(context, "Argument 'source' is None")
        base = source.etag_base()
        try:
            digest = hashlib.new(self.algorithm)
        except (ValueError, TypeError) as exc:
            logger.error("etag.generate algorithm unavailable algorithm=%s context=%s", self.algorithm, context)
            raise ApplicationError.etag_generation(context, str(exc), cause=exc) from exc
        digest.update(base.encode("utf-8"))
        token = base64.b64encode(digest.digest()).decode("ascii")
        return f'"{token}"'

