"""Run the service with uvicorn: ``python -m todoapp`` or the ``todoapp`` script.

Binds to ``TODO_HOST``/``TODO_PORT`` (default ``127.0.0.1:8000``).
"""

from __future__ import annotations

import os

import uvicorn


def main() -> None:
    uvicorn.run(
        "todoapp.main:create_app",
        factory=True,
        host=os.environ.get("TODO_HOST", "127.0.0.1"),
        port=int(os.environ.get("TODO_PORT", "8000")),
        log_config=None,
    )


if __name__ == "__main__":
    main()
