"""Database package exposing engine and session helpers."""

from __future__ import annotations

from todoapp.db.base import Base, dispose_engine, get_engine, get_sessionmaker, init_schema

__all__ = ["Base", "get_engine", "dispose_engine", "init_schema", "get_sessionmaker"]
