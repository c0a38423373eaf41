"""Request ID middleware.

Uses the inbound X-Request-Id header when present, otherwise generates one,
echoes it on the response and exposes it to log records through
:data:`request_id_var`.
"""

from __future__ import annotations

import contextvars
import logging
import uuid

request_id_var: contextvars.ContextVar[str] = contextvars.ContextVar("request_id", default="-")


class RequestIdLogFilter(logging.Filter):
    """Attach the current request id to every record as ``request_id``."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        return True


class RequestIdMiddleware:
    def __init__(self, app, header_name: str = "X-Request-Id") -> None:  # type: ignore[no-untyped-def]
        self.app = app
        self.header_name = header_name

    async def __call__(self, scope, receive, send):  # type: ignore[no-untyped-def]
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        header_key = self.header_name.lower().encode("latin-1")
        inbound = None
        for k, v in scope.get("headers") or []:
            if k.lower() == header_key and v.strip():
                inbound = v.decode("latin-1").strip()
                break
        request_id = inbound or str(uuid.uuid4())
        token = request_id_var.set(request_id)

        async def send_wrapper(message):  # type: ignore[no-untyped-def]
            if message.get("type") == "http.response.start":
                headers = list(message.get("headers") or [])
                if header_key not in [k.lower() for k, _ in headers]:
                    headers.append((self.header_name.encode("latin-1"), request_id.encode("latin-1")))
                message = {**message, "headers": headers}
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            request_id_var.reset(token)


__all__ = ["RequestIdMiddleware", "RequestIdLogFilter", "request_id_var"]
