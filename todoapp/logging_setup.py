"""Process-wide logging configuration.

One stdout handler on the root logger; module loggers propagate to it.
Every record is stamped with the id of the request being served (``-``
outside a request). ``LOG_LEVEL`` sets the root level, INFO by default.
"""
from __future__ import annotations

import logging
import os
from logging.config import dictConfig

LOG_FORMAT = "%(asctime)s %(levelname)s:%(name)s:[rid=%(request_id)s] %(message)s"


def _build_config(level: str) -> dict:
    handler = {
        "class": "logging.StreamHandler",
        "formatter": "default",
        "filters": ["request_id"],
        "stream": "ext://sys.stdout",
    }
    # uvicorn attaches its own handlers; route them through ours instead
    server_loggers = {
        name: {"level": level, "handlers": ["stdout"], "propagate": False}
        for name in ("uvicorn", "uvicorn.error", "uvicorn.access")
    }
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {"request_id": {"()": "todoapp.http.request_id.RequestIdLogFilter"}},
        "formatters": {"default": {"format": LOG_FORMAT}},
        "handlers": {"stdout": handler},
        "root": {"level": level, "handlers": ["stdout"]},
        "loggers": server_loggers,
    }


def configure_logging() -> None:
    """Install the logging config unless the root logger is already set up.

    Test runners and reloaders install their own root handlers first; those
    are left alone.
    """
    if logging.getLogger().handlers:
        return
    level = os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"
    dictConfig(_build_config(level))
