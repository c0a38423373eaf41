"""If-Match assertions for conditional writes.

Write routes call :func:`assert_etag_present` before touching the repository
and the command logic calls :func:`assert_etag_matches` against the tag of
freshly loaded state. Comparison is exact string equality: no weak-validator
stripping, no wildcard, no list parsing.
"""

from __future__ import annotations

from typing import Optional

from todoapp.logic.failures import ApplicationError


def assert_etag_present(etag: Optional[str], context: str = "assert_etag_present") -> None:
    """Raise ETAG_MISSING when ``etag`` is None, empty or whitespace only."""
    if etag is None or not etag.strip():
        raise ApplicationError.etag_missing(context, etag)


def assert_etag_matches(
    etag: Optional[str], expected: Optional[str], context: str = "assert_etag_matches"
) -> None:
    """Raise ETAG_MISMATCH unless ``etag`` equals ``expected`` exactly."""
    if etag != expected:
        raise ApplicationError.etag_mismatch(context, etag, expected)


__all__ = ["assert_etag_present", "assert_etag_matches"]
