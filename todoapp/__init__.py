"""FastAPI application package for the To-do service.

Exposes the application factory. Request handling lives in
`todoapp/routes/`, business logic and the ETag / failure machinery in
`todoapp/logic/`, and the error catalog in `todoapp/config/`.
"""

from __future__ import annotations

from todoapp.main import create_app

__all__ = ["create_app"]
