"""Behave environment hooks for To-do service integration tests.

When ``TEST_BASE_URL`` is set the scenarios run against that live API over
httpx. Otherwise each scenario gets an in-process application bound to a
fresh in-memory SQLite database, driven through FastAPI's TestClient (an
httpx client as well, so steps are agnostic of the mode).
"""

from __future__ import annotations

import os
from typing import Any

import httpx
from fastapi.testclient import TestClient

from todoapp.config.settings import AppConfig, CorsConfig, DatabaseConfig, EtagConfig, TodoConfig
from todoapp.db.base import dispose_engine
from todoapp.main import create_app


def _in_process_client() -> httpx.Client:
    dispose_engine()
    config = AppConfig(
        database=DatabaseConfig(url="sqlite+pysqlite:///:memory:"),
        todo=TodoConfig(),
        etag=EtagConfig(),
        cors=CorsConfig(),
    )
    return TestClient(create_app(config))


def before_all(context: Any) -> None:  # pragma: no cover - executed by Behave
    base_url = os.environ.get("TEST_BASE_URL", "").strip().rstrip("/")
    context.base_url = base_url or None
    if context.base_url:
        with httpx.Client(timeout=5.0) as probe:
            resp = probe.get(context.base_url + "/health")
        assert resp.status_code == 200, f"API at {context.base_url} is not healthy: {resp.status_code}"


def before_scenario(context: Any, scenario: Any) -> None:  # pragma: no cover - executed by Behave
    context.vars = {}
    context.last_response = None
    if context.base_url:
        context.client = httpx.Client(base_url=context.base_url, timeout=10.0)
    else:
        context.client = _in_process_client()


def after_scenario(context: Any, scenario: Any) -> None:  # pragma: no cover - executed by Behave
    client = getattr(context, "client", None)
    if client is not None:
        client.close()
    if not context.base_url:
        dispose_engine()
