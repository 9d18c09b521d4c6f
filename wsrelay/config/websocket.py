"""WebSocket protocol configuration and constants."""

from __future__ import annotations

import os

ENV_WS_ENDPOINT_PATH = "WS_ENDPOINT_PATH"
ENV_WS_TOKEN_PARAM = "WS_TOKEN_PARAM"

DEFAULT_WS_ENDPOINT_PATH = "/"
DEFAULT_WS_TOKEN_PARAM = "token"

# Routes are registered at import time, so the endpoint path is resolved here.
_WS_ENDPOINT_PATH_RAW = (os.getenv(ENV_WS_ENDPOINT_PATH) or "").strip() or DEFAULT_WS_ENDPOINT_PATH
WS_ENDPOINT_PATH: str = _WS_ENDPOINT_PATH_RAW if _WS_ENDPOINT_PATH_RAW.startswith("/") else f"/{_WS_ENDPOINT_PATH_RAW}"

# Close codes
WS_CLOSE_NORMAL_CODE = 1000
WS_CLOSE_GOING_AWAY_CODE = 1001
WS_CLOSE_NO_STATUS_CODE = 1005
WS_CLOSE_POLICY_VIOLATION_CODE = 1008
WS_CLOSE_INTERNAL_ERROR_CODE = 1011
WS_CLOSE_TRY_AGAIN_LATER_CODE = 1013
WS_CLOSE_MISSING_TOKEN_CODE = 4001
WS_CLOSE_TARGET_ERROR_CODE = 4002
WS_CLOSE_PENDING_OVERFLOW_CODE = 4003

WS_CLOSE_MISSING_TOKEN_REASON = "Missing token parameter"
WS_CLOSE_TARGET_ERROR_REASON = "Target server error"
WS_CLOSE_PENDING_OVERFLOW_REASON = "Pending queue overflow"
WS_CLOSE_ORIGIN_REASON = "Origin not allowed"
WS_CLOSE_BUSY_REASON = "Server at capacity"
WS_CLOSE_SHUTDOWN_REASON = "Server shutting down"
WS_CLOSE_INTERNAL_ERROR_REASON = "Internal relay error"

# RFC 6455: control frame payload is 125 bytes, 2 of which carry the code.
WS_CLOSE_REASON_MAX_BYTES = 123

__all__ = [
    "ENV_WS_ENDPOINT_PATH",
    "ENV_WS_TOKEN_PARAM",
    "DEFAULT_WS_ENDPOINT_PATH",
    "DEFAULT_WS_TOKEN_PARAM",
    "WS_ENDPOINT_PATH",
    "WS_CLOSE_NORMAL_CODE",
    "WS_CLOSE_GOING_AWAY_CODE",
    "WS_CLOSE_NO_STATUS_CODE",
    "WS_CLOSE_POLICY_VIOLATION_CODE",
    "WS_CLOSE_INTERNAL_ERROR_CODE",
    "WS_CLOSE_TRY_AGAIN_LATER_CODE",
    "WS_CLOSE_MISSING_TOKEN_CODE",
    "WS_CLOSE_TARGET_ERROR_CODE",
    "WS_CLOSE_PENDING_OVERFLOW_CODE",
    "WS_CLOSE_MISSING_TOKEN_REASON",
    "WS_CLOSE_TARGET_ERROR_REASON",
    "WS_CLOSE_PENDING_OVERFLOW_REASON",
    "WS_CLOSE_ORIGIN_REASON",
    "WS_CLOSE_BUSY_REASON",
    "WS_CLOSE_SHUTDOWN_REASON",
    "WS_CLOSE_INTERNAL_ERROR_REASON",
    "WS_CLOSE_REASON_MAX_BYTES",
]
