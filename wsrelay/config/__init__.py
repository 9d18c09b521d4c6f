"""Configuration module exports (env names, defaults and protocol constants)."""

from .websocket import (
    WS_CLOSE_MISSING_TOKEN_CODE,
    WS_CLOSE_TARGET_ERROR_CODE,
)

__all__ = [
    "WS_CLOSE_MISSING_TOKEN_CODE",
    "WS_CLOSE_TARGET_ERROR_CODE",
]
