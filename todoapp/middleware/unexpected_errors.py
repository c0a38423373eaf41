"""Inner ASGI middleware rendering unexpected exceptions as SYS-500 problems.

Installed inside the CORS and request-id middleware, so the problem
response still carries ``X-Request-Id`` and CORS headers and the dispatcher's
ERROR line is logged with the request id of the failing request. Starlette's
own ``Exception`` handler only runs in the outermost error middleware, after
both of those have unwound.
"""

from __future__ import annotations

from fastapi import FastAPI

from todoapp.http.problem import dispatcher, problem_json_response


class UnexpectedErrorMiddleware:
    def __init__(self, app: FastAPI) -> None:
        self.app = app

    async def __call__(self, scope, receive, send):  # type: ignore[no-untyped-def]
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message):  # type: ignore[no-untyped-def]
            nonlocal response_started
            if message.get("type") == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as exc:
            # Headers already went out; nothing left to replace
            if response_started:
                raise
            problem = dispatcher.handle(exc, str(scope.get("path") or ""))
            await problem_json_response(problem)(scope, receive, send)


__all__ = ["UnexpectedErrorMiddleware"]
