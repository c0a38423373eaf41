from __future__ import annotations

"""Functional test bootstrap.

Each test gets an application bound to a fresh in-memory SQLite database.
The cached engine is dropped before and after the test so no rows leak
between tests.
"""

import typing as t

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from todoapp.config.settings import AppConfig, CorsConfig, DatabaseConfig, EtagConfig, TodoConfig
from todoapp.db.base import dispose_engine
from todoapp.main import create_app


class ResponseEnvelope(t.TypedDict, total=False):
    status: int
    content_type: t.Optional[str]
    headers: dict[str, str]
    body: t.Any


def make_config(**todo_overrides: int) -> AppConfig:
    return AppConfig(
        database=DatabaseConfig(url="sqlite+pysqlite:///:memory:"),
        todo=TodoConfig(**todo_overrides),
        etag=EtagConfig(),
        cors=CorsConfig(),
    )


@pytest.fixture()
def app_factory() -> t.Iterator[t.Callable[..., FastAPI]]:
    """Build apps with TodoConfig overrides, e.g. ``app_factory(title_max_length=5)``."""

    def _build(**todo_overrides: int) -> FastAPI:
        dispose_engine()
        return create_app(make_config(**todo_overrides))

    yield _build
    dispose_engine()


@pytest.fixture()
def app(app_factory: t.Callable[..., FastAPI]) -> FastAPI:
    return app_factory()


@pytest.fixture()
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture()
def invoke(client: TestClient) -> t.Callable[..., ResponseEnvelope]:
    """Return a helper that performs a request and flattens the response."""

    def _invoke(
        method: str,
        path: str,
        *,
        headers: t.Optional[dict[str, str]] = None,
        body: t.Optional[dict] = None,
    ) -> ResponseEnvelope:
        kwargs: dict = {"headers": dict(headers or {})}
        if body is not None:
            kwargs["json"] = body
        resp = client.request(method.upper(), path, **kwargs)
        ctype = resp.headers.get("content-type")
        parsed: t.Any = None
        if ctype and ctype.split(";", 1)[0].strip().endswith("json"):
            parsed = resp.json()
        return ResponseEnvelope(
            status=resp.status_code,
            content_type=ctype,
            headers={k.lower(): v for k, v in resp.headers.items()},
            body=parsed,
        )

    return _invoke
