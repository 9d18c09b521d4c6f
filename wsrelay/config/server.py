"""Listener and HTTP policy configuration."""

from __future__ import annotations

import os

ENV_HOST = "HOST"
ENV_PORT = "PORT"
ENV_ALLOWED_ORIGINS = "ALLOWED_ORIGINS"

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3001
DEFAULT_ALLOWED_ORIGINS = ("*",)

ANY_ORIGIN = "*"

# Middleware is installed at import time, so the HTTP CORS list is resolved here.
_ALLOWED_ORIGINS_RAW = (os.getenv(ENV_ALLOWED_ORIGINS) or "").strip()
CORS_ALLOWED_ORIGINS: tuple[str, ...] = (
    tuple(part.strip() for part in _ALLOWED_ORIGINS_RAW.split(",") if part.strip()) or DEFAULT_ALLOWED_ORIGINS
)

__all__ = [
    "ENV_HOST",
    "ENV_PORT",
    "ENV_ALLOWED_ORIGINS",
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "DEFAULT_ALLOWED_ORIGINS",
    "ANY_ORIGIN",
    "CORS_ALLOWED_ORIGINS",
]
