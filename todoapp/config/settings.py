"""Configuration loading for the To-do service.

Each setting is looked up in this order, first hit wins:

1. an environment variable (``TODO_PAGE_MAX_SIZE``)
2. a text file under ``config/`` named after the dotted key (``config/todo.page_max_size``)
3. the nested key in ``todoapp_config.json`` at the project root
4. the built-in default

The collected values are validated by the Pydantic models below; invalid
configuration fails application start-up.
"""

from __future__ import annotations

import hashlib
import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator, model_validator


CONFIG_DIR = Path("config")
ROOT_CONFIG = Path("todoapp_config.json")
DEFAULT_DATABASE_URL = "sqlite+pysqlite:///:memory:"
logger = logging.getLogger(__name__)


class DatabaseConfig(BaseModel):
    url: str

    @field_validator("url")
    @classmethod
    def url_must_be_non_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("database.url must be a non-empty string")
        return v


class TodoConfig(BaseModel):
    title_max_length: int = Field(default=100, ge=1, le=100)
    page_default_size: int = Field(default=10, ge=1)
    page_max_size: int = Field(default=100, ge=1)

    @model_validator(mode="after")
    def default_size_within_max(self) -> "TodoConfig":
        if self.page_default_size > self.page_max_size:
            raise ValueError(
                f"todo.page_default_size ({self.page_default_size}) must not exceed "
                f"todo.page_max_size ({self.page_max_size})"
            )
        return self


class EtagConfig(BaseModel):
    algorithm: str = "sha256"

    @field_validator("algorithm")
    @classmethod
    def algorithm_must_be_available(cls, v: str) -> str:
        name = v.strip().lower()
        if name not in hashlib.algorithms_available:
            raise ValueError(f"etag.algorithm '{v}' is not available in hashlib")
        return name


class CorsConfig(BaseModel):
    allow_origins: list[str] = Field(default_factory=lambda: ["*"])


class AppConfig(BaseModel):
    database: DatabaseConfig
    todo: TodoConfig
    etag: EtagConfig
    cors: CorsConfig


class _Sources:
    """Layered lookup over env, ``config/`` files and the root JSON file."""

    def __init__(self, config_dir: Path, root_config: Path) -> None:
        self.config_dir = config_dir
        self.document = self._read_json(root_config)

    @staticmethod
    def _read_json(path: Path) -> dict:
        if not path.exists():
            return {}
        try:
            loaded = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.error("config.json.unreadable path=%s error=%s", path, e)
            raise
        return loaded if isinstance(loaded, dict) else {}

    def _from_file(self, key: str) -> Optional[str]:
        path = self.config_dir / key
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8").strip() or None
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("config.override.unreadable path=%s error=%s", path, e)
            return None

    def _from_document(self, key: str) -> Optional[Any]:
        cur: Any = self.document
        for part in key.split("."):
            if not isinstance(cur, dict) or part not in cur:
                return None
            cur = cur[part]
        return cur

    def get(self, key: str, *env_names: str, default: Any = None) -> Any:
        for name in env_names:
            value = os.environ.get(name)
            if value:
                return value
        value = self._from_file(key)
        if value is not None:
            return value
        value = self._from_document(key)
        return default if value is None else value


def _origins(value: Any) -> list[str]:
    if isinstance(value, list):
        items = [str(v) for v in value]
    else:
        items = str(value).split(",")
    return [o.strip() for o in items if o.strip()] or ["*"]


def load_config() -> AppConfig:
    """Collect and validate the application configuration."""
    src = _Sources(CONFIG_DIR, ROOT_CONFIG)
    try:
        return AppConfig(
            database=DatabaseConfig(
                url=src.get("database.url", "TEST_DATABASE_URL", "DATABASE_URL", default=DEFAULT_DATABASE_URL)
            ),
            todo=TodoConfig(
                title_max_length=src.get("todo.title_max_length", "TODO_TITLE_MAX_LENGTH", default=100),
                page_default_size=src.get("todo.page_default_size", "TODO_PAGE_DEFAULT_SIZE", default=10),
                page_max_size=src.get("todo.page_max_size", "TODO_PAGE_MAX_SIZE", default=100),
            ),
            etag=EtagConfig(algorithm=src.get("etag.algorithm", "ETAG_ALGORITHM", default="sha256")),
            cors=CorsConfig(allow_origins=_origins(src.get("cors.allow_origins", "CORS_ALLOW_ORIGINS", default="*"))),
        )
    except PydanticValidationError as e:
        logger.error("config.invalid %s", e)
        raise


__all__ = [
    "AppConfig",
    "DatabaseConfig",
    "TodoConfig",
    "EtagConfig",
    "CorsConfig",
    "DEFAULT_DATABASE_URL",
    "load_config",
]
