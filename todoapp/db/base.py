"""SQLAlchemy engine, declarative base and session factory.

Any SQLAlchemy URL works; the default is an in-memory SQLite database and
PostgreSQL is available through the ``postgres`` extra. Only connection
lifecycle lives here; ORM models are under ``todoapp.models``.
"""

from __future__ import annotations

import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from todoapp.config.settings import DEFAULT_DATABASE_URL

logger = logging.getLogger(__name__)

Base = declarative_base()

# One engine per process, replaced when a different URL is requested
_ENGINE: Engine | None = None
_ENGINE_URL: str | None = None


def _engine_options(url: str) -> dict:
    options: dict = {"future": True, "pool_pre_ping": True}
    if url.startswith("sqlite"):
        # Sync routes run in a threadpool
        options["connect_args"] = {"check_same_thread": False}
        if ":memory:" in url:
            # A single shared connection, otherwise every checkout sees an empty database
            options["poolclass"] = StaticPool
    return options


def get_engine(url: str | None = None) -> Engine:
    """Return the process engine for ``url``, creating it on first use."""
    global _ENGINE, _ENGINE_URL
    resolved_url = url or _ENGINE_URL or DEFAULT_DATABASE_URL

    if _ENGINE is not None and _ENGINE_URL == resolved_url:
        return _ENGINE
    if _ENGINE is not None:
        _ENGINE.dispose()
    _ENGINE = create_engine(resolved_url, **_engine_options(resolved_url))
    _ENGINE_URL = resolved_url
    logger.info("db.engine.created dialect=%s", _ENGINE.dialect.name)
    return _ENGINE


def dispose_engine() -> None:
    """Drop the cached engine so the next get_engine() starts fresh."""
    global _ENGINE, _ENGINE_URL
    if _ENGINE is not None:
        _ENGINE.dispose()
    _ENGINE = None
    _ENGINE_URL = None


def init_schema(engine: Engine | None = None) -> None:
    """Create tables for all mapped models if they do not exist."""
    import todoapp.models.todo  # noqa: F401  registers TodoEntity on Base.metadata

    Base.metadata.create_all(engine or get_engine())


def get_sessionmaker(engine: Engine | None = None) -> sessionmaker:
    return sessionmaker(bind=engine or get_engine(), future=True, expire_on_commit=False)


__all__ = ["Base", "get_engine", "dispose_engine", "init_schema", "get_sessionmaker"]
