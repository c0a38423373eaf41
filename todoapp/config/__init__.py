"""Configuration package: settings loader and the error catalog."""

from __future__ import annotations

from todoapp.config.error_catalog import ERROR_CATALOG, CatalogEntry, ErrorKind, resolve
from todoapp.config.settings import AppConfig, load_config

__all__ = [
    "AppConfig",
    "load_config",
    "ErrorKind",
    "CatalogEntry",
    "ERROR_CATALOG",
    "resolve",
]
