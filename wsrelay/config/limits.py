"""Admission control and pending-queue limits (env names and defaults only)."""

from __future__ import annotations

ENV_MAX_CONCURRENT_CONNECTIONS = "MAX_CONCURRENT_CONNECTIONS"
ENV_RELAY_PENDING_MAX_MESSAGES = "RELAY_PENDING_MAX_MESSAGES"
ENV_RELAY_PENDING_MAX_BYTES = "RELAY_PENDING_MAX_BYTES"
ENV_RELAY_PENDING_OVERFLOW = "RELAY_PENDING_OVERFLOW"

OVERFLOW_CLOSE = "close"
OVERFLOW_REJECT = "reject"
OVERFLOW_POLICIES = frozenset({OVERFLOW_CLOSE, OVERFLOW_REJECT})

DEFAULT_MAX_CONCURRENT_CONNECTIONS = 1000

# 0 disables the corresponding bound.
DEFAULT_RELAY_PENDING_MAX_MESSAGES = 1024
DEFAULT_RELAY_PENDING_MAX_BYTES = 8 * 1024 * 1024
DEFAULT_RELAY_PENDING_OVERFLOW = OVERFLOW_CLOSE

__all__ = [
    "ENV_MAX_CONCURRENT_CONNECTIONS",
    "ENV_RELAY_PENDING_MAX_MESSAGES",
    "ENV_RELAY_PENDING_MAX_BYTES",
    "ENV_RELAY_PENDING_OVERFLOW",
    "OVERFLOW_CLOSE",
    "OVERFLOW_REJECT",
    "OVERFLOW_POLICIES",
    "DEFAULT_MAX_CONCURRENT_CONNECTIONS",
    "DEFAULT_RELAY_PENDING_MAX_MESSAGES",
    "DEFAULT_RELAY_PENDING_MAX_BYTES",
    "DEFAULT_RELAY_PENDING_OVERFLOW",
]
