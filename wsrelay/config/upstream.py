"""Upstream endpoint configuration (env names and defaults only)."""

from __future__ import annotations

ENV_RELAY_TARGET_URL = "RELAY_TARGET_URL"
ENV_RELAY_HEADER_MODE = "RELAY_HEADER_MODE"
ENV_RELAY_USER_AGENT = "RELAY_USER_AGENT"
ENV_RELAY_ORIGIN_OVERRIDE = "RELAY_ORIGIN_OVERRIDE"
ENV_RELAY_OPEN_TIMEOUT_S = "RELAY_OPEN_TIMEOUT_S"
ENV_RELAY_PING_INTERVAL_S = "RELAY_PING_INTERVAL_S"
ENV_RELAY_MAX_MESSAGE_BYTES = "RELAY_MAX_MESSAGE_BYTES"

HEADER_MODE_BEARER = "bearer"
HEADER_MODE_IMPERSONATE = "impersonate"
HEADER_MODES = frozenset({HEADER_MODE_BEARER, HEADER_MODE_IMPERSONATE})

DEFAULT_RELAY_TARGET_URL = ""
DEFAULT_RELAY_HEADER_MODE = HEADER_MODE_BEARER
DEFAULT_RELAY_USER_AGENT = "WhiteWeb/1.0.0"
DEFAULT_RELAY_ORIGIN_OVERRIDE = ""

# Without a bound a dial that never resolves keeps the session (and its
# pending queue) alive forever.
DEFAULT_RELAY_OPEN_TIMEOUT_S = 10.0
DEFAULT_RELAY_PING_INTERVAL_S = 20.0
DEFAULT_RELAY_MAX_MESSAGE_BYTES = 16 * 1024 * 1024

__all__ = [
    "ENV_RELAY_TARGET_URL",
    "ENV_RELAY_HEADER_MODE",
    "ENV_RELAY_USER_AGENT",
    "ENV_RELAY_ORIGIN_OVERRIDE",
    "ENV_RELAY_OPEN_TIMEOUT_S",
    "ENV_RELAY_PING_INTERVAL_S",
    "ENV_RELAY_MAX_MESSAGE_BYTES",
    "HEADER_MODE_BEARER",
    "HEADER_MODE_IMPERSONATE",
    "HEADER_MODES",
    "DEFAULT_RELAY_TARGET_URL",
    "DEFAULT_RELAY_HEADER_MODE",
    "DEFAULT_RELAY_USER_AGENT",
    "DEFAULT_RELAY_ORIGIN_OVERRIDE",
    "DEFAULT_RELAY_OPEN_TIMEOUT_S",
    "DEFAULT_RELAY_PING_INTERVAL_S",
    "DEFAULT_RELAY_MAX_MESSAGE_BYTES",
]
