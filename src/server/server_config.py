"""Configuration for the server."""

from __future__ import annotations

import os

MAX_SEARCH_RESULTS: int = int(os.getenv("DOCSITE_SERVER_MAX_SEARCH_RESULTS", "100"))
DEFAULT_HOST: str = "0.0.0.0"  # noqa: S104
DEFAULT_PORT: int = 8000

# Bind address and autoreload for ``python -m server``.
HOST: str = os.getenv("HOST", DEFAULT_HOST)
PORT: int = int(os.getenv("PORT", str(DEFAULT_PORT)))
RELOAD: bool = os.getenv("RELOAD", "false").strip().lower() in {"1", "true", "yes", "on"}
