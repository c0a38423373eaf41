from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from todoapp.config.settings import AppConfig, load_config
from todoapp.db.base import get_engine, get_sessionmaker, init_schema
from todoapp.http.problem import (
    handle_application_error,
    handle_request_validation_error,
    handle_unexpected_error,
)
from todoapp.http.request_id import RequestIdMiddleware
from todoapp.logging_setup import configure_logging
from todoapp.logic.etag import ETagGenerator
from todoapp.logic.failures import ApplicationError
from todoapp.logic.repository_todos import TodoRepository
from todoapp.middleware.cors import apply_cors
from todoapp.middleware.unexpected_errors import UnexpectedErrorMiddleware
from todoapp.routes import api_router

logger = logging.getLogger(__name__)


def create_app(config: AppConfig | None = None) -> FastAPI:
    """Build the FastAPI application.

    Wires logging, the ETag generator, the repository, problem+json handlers
    for every failure path, CORS and request-id middleware, and the API
    routes under ``/api``.
    """
    configure_logging()
    cfg = config or load_config()

    app = FastAPI(title="To-do Service", version="1.0.0")

    engine = get_engine(cfg.database.url)
    init_schema(engine)
    app.state.config = cfg
    app.state.etag_generator = ETagGenerator(cfg.etag.algorithm)
    app.state.todo_repository = TodoRepository(get_sessionmaker(engine))

    app.add_exception_handler(ApplicationError, handle_application_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)  # type: ignore[arg-type]
    # Only reached by failures outside UnexpectedErrorMiddleware
    app.add_exception_handler(Exception, handle_unexpected_error)

    # Middleware added later wraps earlier ones: errors -> CORS -> request id
    app.add_middleware(UnexpectedErrorMiddleware)
    apply_cors(app, origins=cfg.cors.allow_origins)
    # Added last so it is outermost and tags every response, including CORS preflights
    app.add_middleware(RequestIdMiddleware)

    app.include_router(api_router, prefix="/api")

    @app.get("/health", include_in_schema=False)
    def health() -> dict:  # pragma: no cover - trivial
        return {"status": "ok"}

    logger.info(
        "app.created database=%s etag_algorithm=%s",
        engine.dialect.name,
        cfg.etag.algorithm,
    )
    return app


__all__ = ["create_app"]
